"""Report construction."""

from collections.abc import Iterable
from datetime import UTC, datetime

from headeraudit.modules.rules import CATALOG, CHECK_IDS, Finding

from .models import Report

_CATALOG_POSITION = {check.id: index for index, check in enumerate(CATALOG)}


def build(url: str, findings: Iterable[Finding], timestamp: datetime | None = None) -> Report:
    """Assemble a Report, ordering findings by catalog position (stable)."""
    findings = list(findings)
    unknown = sorted({finding.check for finding in findings if finding.check not in CHECK_IDS})
    if unknown:
        raise ValueError(f"Findings reference unknown check(s): {', '.join(unknown)}")

    ordered = sorted(findings, key=lambda finding: _CATALOG_POSITION[finding.check])
    return Report(
        url=url,
        timestamp=timestamp or datetime.now(UTC),
        findings=tuple(ordered),
    )
