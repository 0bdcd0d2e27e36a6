"""Helpers for grouping findings."""

from headeraudit.modules.rules import SEVERITIES, Finding


def group_by_severity(findings: list[Finding] | tuple[Finding, ...]) -> dict[str, list[Finding]]:
    """Group findings by severity, highest tier first, preserving order within a tier."""
    grouped: dict[str, list[Finding]] = {severity: [] for severity in SEVERITIES}
    for finding in findings:
        grouped[finding.severity].append(finding)
    return grouped
