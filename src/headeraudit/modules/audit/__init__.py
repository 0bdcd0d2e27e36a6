"""Audit pipeline: Fetcher -> Rule Engine -> Report Builder."""

from .runner import (
    EXIT_FAIL_FINDINGS,
    EXIT_FATAL,
    EXIT_OK,
    AuditOutcome,
    audit_many,
    audit_url,
    overall_exit_code,
)

__all__ = [
    "EXIT_FAIL_FINDINGS",
    "EXIT_FATAL",
    "EXIT_OK",
    "AuditOutcome",
    "audit_many",
    "audit_url",
    "overall_exit_code",
]
