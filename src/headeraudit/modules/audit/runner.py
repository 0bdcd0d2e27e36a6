"""Fetch, evaluate and report, for one target or a bounded batch."""

import asyncio
import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from headeraudit.config import AuditSettings
from headeraudit.errors import FetchError
from headeraudit.modules.report import Report, build
from headeraudit.modules.rules import RuleEngine
from headeraudit.tools.http import fetch

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAIL_FINDINGS = 1
EXIT_FATAL = 2


@dataclass
class AuditOutcome:
    """Result of auditing one URL: a report, or the fatal error that prevented one."""

    url: str
    report: Report | None = None
    error: FetchError | None = None

    @property
    def exit_code(self) -> int:
        if self.error is not None or self.report is None:
            return EXIT_FATAL
        return self.report.exit_code


async def audit_url(url: str, settings: AuditSettings | None = None) -> Report:
    """Run the full pipeline for one URL. Fetch errors propagate."""
    settings = settings or AuditSettings()
    result = await fetch(url, settings.fetch_options())
    logger.debug(
        "Fetched %s: status %s after %d redirect(s)",
        result.final_url,
        result.status_code,
        len(result.redirects),
    )
    findings = RuleEngine(settings=settings.rule_settings()).evaluate(result)
    return build(result.requested_url, findings)


async def audit_many(
    urls: Sequence[str],
    settings: AuditSettings | None = None,
    progress: Callable[[str], None] | None = None,
) -> list[AuditOutcome]:
    """Audit URLs concurrently, at most ``settings.concurrency`` at a time.

    Outcomes keep the input order. A fetch error only affects its own URL.
    """
    settings = settings or AuditSettings()
    semaphore = asyncio.Semaphore(settings.concurrency)

    async def run_one(url: str) -> AuditOutcome:
        async with semaphore:
            started = time.perf_counter()
            if progress:
                progress(f"● [{url}] started")
            try:
                report = await audit_url(url, settings)
            except FetchError as exc:
                logger.warning("Audit of %s failed: %s", url, exc.message)
                if progress:
                    elapsed = time.perf_counter() - started
                    progress(f"! [{url}] failed after {elapsed:.1f}s: {exc.message}")
                return AuditOutcome(url=url, error=exc)
            if progress:
                elapsed = time.perf_counter() - started
                progress(
                    f"✓ [{url}] completed: {len(report.findings)} findings ({elapsed:.1f}s)"
                )
            return AuditOutcome(url=url, report=report)

    return list(await asyncio.gather(*(run_one(url) for url in urls)))


def overall_exit_code(outcomes: Sequence[AuditOutcome]) -> int:
    """Highest exit code across outcomes: fatal > failing findings > clean."""
    return max((outcome.exit_code for outcome in outcomes), default=EXIT_OK)
