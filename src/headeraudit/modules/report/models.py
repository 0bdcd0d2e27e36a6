"""Report data models."""

from dataclasses import dataclass
from datetime import datetime

from headeraudit.modules.rules import SEVERITIES, Finding

FORMATS = ("json", "human")


@dataclass(frozen=True)
class Report:
    """Findings for one target, in catalog order."""

    url: str
    timestamp: datetime
    findings: tuple[Finding, ...] = ()

    @property
    def summary(self) -> dict[str, int]:
        counts = {severity: 0 for severity in SEVERITIES}
        for finding in self.findings:
            counts[finding.severity] += 1
        return counts

    @property
    def has_failures(self) -> bool:
        return self.summary["fail"] > 0

    @property
    def exit_code(self) -> int:
        return 1 if self.has_failures else 0
