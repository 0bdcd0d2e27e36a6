"""Data models for checks and their findings."""

from collections.abc import Callable
from dataclasses import dataclass, field

from headeraudit.tools.http import FetchResult

FAIL = "fail"
WARN = "warn"
INFO = "info"

# Highest first.
SEVERITIES = (FAIL, WARN, INFO)

HSTS_MIN_MAX_AGE = 15768000


@dataclass(frozen=True)
class Finding:
    """One check's outcome against a fetched response."""

    check: str
    severity: str
    message: str
    remediation: str | None = None
    evidence: str | None = None

    def __post_init__(self) -> None:
        if self.severity not in SEVERITIES:
            raise ValueError(f"Unknown severity: {self.severity!r}")


@dataclass(frozen=True)
class RuleSettings:
    """Inputs a check may read besides the fetch result."""

    non_session_cookies: frozenset[str] = field(default_factory=frozenset)
    hsts_min_max_age: int = HSTS_MIN_MAX_AGE
    cert_expiry_warning_days: int = 30


CheckFunc = Callable[[FetchResult, RuleSettings], list[Finding]]


@dataclass(frozen=True)
class Check:
    """A named, pure function over a FetchResult."""

    id: str
    title: str
    evaluate: CheckFunc
