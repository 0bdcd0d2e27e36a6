"""Plain-text report rendering."""

from headeraudit.modules.rules import INFO

from .grouping import group_by_severity
from .models import Report


def render_finding_line(finding) -> str:
    line = f"  - [{finding.check}] {finding.message}"
    if finding.evidence:
        line += f" (evidence: {finding.evidence})"
    if finding.severity != INFO and finding.remediation:
        line += f" -> fix: {finding.remediation}"
    return line


def render_human(report: Report) -> str:
    """One section per severity tier, fail first, one line per finding."""
    summary = report.summary
    lines = [
        f"Security header audit: {report.url}",
        f"Generated: {report.timestamp.isoformat()}",
        f"Summary: {summary['fail']} fail, {summary['warn']} warn, {summary['info']} info",
    ]
    for severity, findings in group_by_severity(report.findings).items():
        lines.append("")
        lines.append(f"{severity.upper()} ({len(findings)})")
        if not findings:
            lines.append("  none")
        lines.extend(render_finding_line(finding) for finding in findings)
    return "\n".join(lines) + "\n"
