"""Runs the check catalog against one fetch result."""

import logging
from collections.abc import Iterable, Sequence

from headeraudit.errors import ParseError
from headeraudit.tools.http import FetchResult

from .catalog import CATALOG
from .models import WARN, Check, Finding, RuleSettings

logger = logging.getLogger(__name__)


class RuleEngine:
    """Evaluate a fixed, ordered set of checks and collect their findings."""

    def __init__(
        self,
        catalog: Iterable[Check] | None = None,
        settings: RuleSettings | None = None,
    ):
        self._checks: dict[str, Check] = {}
        for check in CATALOG if catalog is None else catalog:
            if check.id in self._checks:
                raise ValueError(f"Duplicate check id: {check.id}")
            self._checks[check.id] = check
        self.settings = settings or RuleSettings()

    @property
    def checks(self) -> list[Check]:
        """Checks in catalog order."""
        return list(self._checks.values())

    def available_checks(self) -> list[str]:
        return list(self._checks.keys())

    def evaluate(self, result: FetchResult, only: Sequence[str] | None = None) -> list[Finding]:
        """Run every selected check; findings come back in catalog order."""
        findings: list[Finding] = []
        for check in self._select(only):
            findings.extend(self._run_check(check, result))
        return findings

    def _select(self, only: Sequence[str] | None) -> list[Check]:
        if not only:
            return self.checks
        missing = sorted({check_id for check_id in only if check_id not in self._checks})
        if missing:
            raise ValueError(
                f"Unknown check(s): {', '.join(missing)}. "
                f"Available checks: {', '.join(self.available_checks())}"
            )
        wanted = set(only)
        return [check for check in self.checks if check.id in wanted]

    def _run_check(self, check: Check, result: FetchResult) -> list[Finding]:
        try:
            findings = list(check.evaluate(result, self.settings))
            for finding in findings:
                if finding.check != check.id:
                    raise ValueError(f"produced a finding for unknown check {finding.check!r}")
        except ParseError as exc:
            logger.info("[%s] %s", check.id, exc)
            return [
                Finding(
                    check=check.id,
                    severity=WARN,
                    message=str(exc),
                    remediation=f"Fix the syntax of the {exc.header} header.",
                    evidence=f"{exc.header}: {exc.value}",
                )
            ]
        except Exception as exc:
            logger.warning("[%s] check could not be evaluated", check.id, exc_info=True)
            return [
                Finding(
                    check=check.id,
                    severity=WARN,
                    message=f"{check.title} check could not be evaluated: {exc}",
                    remediation="Re-run with --verbose and inspect the response manually.",
                )
            ]

        return findings


def evaluate(result: FetchResult, settings: RuleSettings | None = None) -> list[Finding]:
    """Run the default catalog against ``result``."""
    return RuleEngine(settings=settings).evaluate(result)
