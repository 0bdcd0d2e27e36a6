"""JSON report rendering and parsing."""

import json
from datetime import datetime
from typing import Any

from headeraudit.modules.rules import CHECK_IDS, Finding

from .models import Report


def report_to_dict(report: Report) -> dict[str, Any]:
    """Serialize a report; optional finding fields are omitted when empty."""
    findings = []
    for finding in report.findings:
        item: dict[str, Any] = {
            "check": finding.check,
            "severity": finding.severity,
            "message": finding.message,
        }
        if finding.evidence is not None:
            item["evidence"] = finding.evidence
        if finding.remediation is not None:
            item["remediation"] = finding.remediation
        findings.append(item)

    return {
        "url": report.url,
        "timestamp": report.timestamp.isoformat(),
        "findings": findings,
        "summary": report.summary,
    }


def render_json(report: Report) -> str:
    return json.dumps(report_to_dict(report), indent=2)


def render_json_many(reports: list[Report]) -> str:
    return json.dumps([report_to_dict(report) for report in reports], indent=2)


def report_from_dict(data: dict[str, Any]) -> Report:
    """Rebuild a Report from :func:`report_to_dict` output."""
    try:
        findings = tuple(
            Finding(
                check=item["check"],
                severity=item["severity"],
                message=item["message"],
                remediation=item.get("remediation"),
                evidence=item.get("evidence"),
            )
            for item in data["findings"]
        )
        report = Report(
            url=data["url"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
            findings=findings,
        )
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Malformed report document: {exc}") from exc

    unknown = sorted({finding.check for finding in findings if finding.check not in CHECK_IDS})
    if unknown:
        raise ValueError(f"Findings reference unknown check(s): {', '.join(unknown)}")

    summary = data.get("summary")
    if summary is not None and summary != report.summary:
        raise ValueError(f"Report summary {summary} does not match its findings")
    return report


def parse_json(text: str) -> Report:
    return report_from_dict(json.loads(text))
