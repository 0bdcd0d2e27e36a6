"""Checks over the transport: HSTS, the redirect chain and TLS metadata."""

from datetime import UTC, datetime, timedelta

from headeraudit.tools.http import FetchResult

from .models import FAIL, INFO, WARN, Finding, RuleSettings
from .parsing import header_evidence, parse_hsts

HSTS = "Strict-Transport-Security"

_WEAK_TLS = {"SSLv2", "SSLv3", "TLSv1", "TLSv1.1"}


def describe_chain(result: FetchResult) -> str:
    """Render the redirect chain as ``url (status) -> ... -> final (status)``."""
    hops = [f"{hop.url} ({hop.status_code})" for hop in result.redirects]
    hops.append(f"{result.final_url} ({result.status_code})")
    return " -> ".join(hops)


def check_hsts(result: FetchResult, settings: RuleSettings) -> list[Finding]:
    if result.final_scheme != "https":
        if result.upgraded:
            return [
                Finding(
                    check="hsts",
                    severity=INFO,
                    message="HSTS not evaluated: the final response came back over plain HTTP",
                    evidence=describe_chain(result),
                )
            ]
        return [
            Finding(
                check="hsts",
                severity=FAIL,
                message="Site is served over plain HTTP and never redirects to HTTPS",
                remediation=(
                    "Redirect all HTTP requests to HTTPS and send Strict-Transport-Security "
                    "on the HTTPS responses."
                ),
                evidence=describe_chain(result),
            )
        ]

    value = result.headers.get(HSTS)
    if value is None:
        return [
            Finding(
                check="hsts",
                severity=FAIL,
                message="Strict-Transport-Security header is missing",
                remediation=(
                    f"Send \"Strict-Transport-Security: max-age={settings.hsts_min_max_age * 2}; "
                    "includeSubDomains\"."
                ),
            )
        ]

    policy = parse_hsts(value)
    if policy.max_age >= settings.hsts_min_max_age:
        return []
    return [
        Finding(
            check="hsts",
            severity=FAIL,
            message=(
                f"Strict-Transport-Security max-age={policy.max_age} is below "
                f"{settings.hsts_min_max_age}"
            ),
            remediation=f"Raise max-age to at least {settings.hsts_min_max_age} seconds.",
            evidence=header_evidence(result, HSTS),
        )
    ]


def check_mixed_content(result: FetchResult, settings: RuleSettings) -> list[Finding]:
    if not result.downgraded:
        return []
    return [
        Finding(
            check="mixed-content",
            severity=FAIL,
            message="Redirect chain downgrades from HTTPS to plain HTTP",
            remediation="Make every redirect target an https:// URL.",
            evidence=describe_chain(result),
        )
    ]


def check_tls_certificate(result: FetchResult, settings: RuleSettings) -> list[Finding]:
    tls = result.tls
    if tls is None:
        return []

    findings: list[Finding] = []
    if tls.protocol in _WEAK_TLS:
        findings.append(
            Finding(
                check="tls-certificate",
                severity=WARN,
                message=f"Connection negotiated {tls.protocol}",
                remediation="Disable protocols older than TLSv1.2 on the server.",
                evidence=tls.protocol,
            )
        )

    now = result.fetched_at or datetime.now(UTC)
    if tls.not_before is not None and tls.not_before > now:
        findings.append(
            Finding(
                check="tls-certificate",
                severity=FAIL,
                message="TLS certificate is not valid yet",
                remediation="Check the certificate's issue date and the server clock.",
                evidence=f"notBefore={tls.not_before.isoformat()}",
            )
        )

    if tls.not_after is not None:
        evidence = f"notAfter={tls.not_after.isoformat()}"
        if tls.not_after <= now:
            findings.append(
                Finding(
                    check="tls-certificate",
                    severity=FAIL,
                    message="TLS certificate has expired",
                    remediation="Renew the certificate.",
                    evidence=evidence,
                )
            )
        elif tls.not_after - now <= timedelta(days=settings.cert_expiry_warning_days):
            findings.append(
                Finding(
                    check="tls-certificate",
                    severity=WARN,
                    message=(
                        "TLS certificate expires within "
                        f"{settings.cert_expiry_warning_days} days"
                    ),
                    remediation="Renew the certificate before it expires.",
                    evidence=evidence,
                )
            )
    return findings
