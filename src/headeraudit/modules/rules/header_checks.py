"""Checks over individual response headers."""

import re

from headeraudit.tools.http import FetchResult

from .models import FAIL, INFO, WARN, Finding, RuleSettings
from .parsing import (
    header_evidence,
    parse_csp,
    parse_permissions_policy,
    parse_referrer_policy,
)

CSP = "Content-Security-Policy"

ALLOWED_REFERRER_POLICIES = (
    "no-referrer",
    "same-origin",
    "strict-origin",
    "strict-origin-when-cross-origin",
)

_NONCE_OR_HASH = re.compile(r"^'(nonce-|sha256-|sha384-|sha512-)", re.IGNORECASE)
_VERSION = re.compile(r"\d+(\.\d+)+|/\d")


def check_csp_presence(result: FetchResult, settings: RuleSettings) -> list[Finding]:
    if CSP in result.headers:
        return []
    return [
        Finding(
            check="csp-presence",
            severity=FAIL,
            message="Content-Security-Policy header is missing",
            remediation=(
                "Send a Content-Security-Policy header, starting from \"default-src 'self'\"."
            ),
        )
    ]


def check_csp_strictness(result: FetchResult, settings: RuleSettings) -> list[Finding]:
    value = result.headers.get(CSP)
    if value is None:
        # Absence is reported by csp-presence only.
        return []

    directives = parse_csp(value)
    evidence = header_evidence(result, CSP)
    findings: list[Finding] = []

    if "default-src" not in directives and "script-src" not in directives:
        findings.append(
            Finding(
                check="csp-strictness",
                severity=WARN,
                message="Content-Security-Policy has no default-src or script-src fallback",
                remediation="Add \"default-src 'self'\" so unlisted resource types are restricted.",
                evidence=evidence,
            )
        )

    for directive in ("script-src", "default-src"):
        sources = [source.lower() for source in directives.get(directive, [])]
        has_nonce_or_hash = any(_NONCE_OR_HASH.match(source) for source in sources)
        if "'unsafe-inline'" in sources and not has_nonce_or_hash:
            findings.append(
                Finding(
                    check="csp-strictness",
                    severity=WARN,
                    message=f"Content-Security-Policy {directive} allows 'unsafe-inline'",
                    remediation=(
                        f"Remove 'unsafe-inline' from {directive}; use nonces or hashes "
                        "for the inline scripts that must run."
                    ),
                    evidence=evidence,
                )
            )
        if "'unsafe-eval'" in sources:
            findings.append(
                Finding(
                    check="csp-strictness",
                    severity=WARN,
                    message=f"Content-Security-Policy {directive} allows 'unsafe-eval'",
                    remediation=f"Remove 'unsafe-eval' from {directive} and stop using eval().",
                    evidence=evidence,
                )
            )
    return findings


def check_frame_options(result: FetchResult, settings: RuleSettings) -> list[Finding]:
    xfo = result.headers.get("X-Frame-Options")
    if xfo is not None and xfo.strip().upper() in {"DENY", "SAMEORIGIN"}:
        return []

    csp = result.headers.get(CSP)
    if csp is not None and "frame-ancestors" in parse_csp(csp):
        return []

    if xfo is None:
        message = "Neither X-Frame-Options nor CSP frame-ancestors restricts framing"
    else:
        message = f"X-Frame-Options has unsupported value {xfo.strip()!r}"
    return [
        Finding(
            check="frame-options",
            severity=WARN,
            message=message,
            remediation="Send \"X-Frame-Options: DENY\" or a CSP frame-ancestors directive.",
            evidence=header_evidence(result, "X-Frame-Options"),
        )
    ]


def check_content_type_options(result: FetchResult, settings: RuleSettings) -> list[Finding]:
    value = result.headers.get("X-Content-Type-Options")
    if value is not None and value.strip().lower() == "nosniff":
        return []
    message = (
        "X-Content-Type-Options header is missing"
        if value is None
        else f"X-Content-Type-Options is {value.strip()!r}, expected 'nosniff'"
    )
    return [
        Finding(
            check="content-type-options",
            severity=FAIL,
            message=message,
            remediation="Send \"X-Content-Type-Options: nosniff\".",
            evidence=header_evidence(result, "X-Content-Type-Options"),
        )
    ]


def check_referrer_policy(result: FetchResult, settings: RuleSettings) -> list[Finding]:
    remediation = "Send \"Referrer-Policy: strict-origin-when-cross-origin\" or stricter."
    value = result.headers.get("Referrer-Policy")
    if value is None:
        return [
            Finding(
                check="referrer-policy",
                severity=WARN,
                message="Referrer-Policy header is missing",
                remediation=remediation,
            )
        ]

    policy = parse_referrer_policy(value)
    if policy in ALLOWED_REFERRER_POLICIES:
        return []
    return [
        Finding(
            check="referrer-policy",
            severity=WARN,
            message=f"Referrer-Policy {policy!r} can leak full URLs to other origins",
            remediation=remediation,
            evidence=header_evidence(result, "Referrer-Policy"),
        )
    ]


def check_permissions_policy(result: FetchResult, settings: RuleSettings) -> list[Finding]:
    value = result.headers.get("Permissions-Policy")
    if value is None:
        return [
            Finding(
                check="permissions-policy",
                severity=INFO,
                message="Permissions-Policy header is missing",
                remediation="Disable unused browser features, e.g. \"camera=(), geolocation=()\".",
            )
        ]
    parse_permissions_policy(value)
    return []


def check_cors(result: FetchResult, settings: RuleSettings) -> list[Finding]:
    origin = result.headers.get("Access-Control-Allow-Origin")
    credentials = result.headers.get("Access-Control-Allow-Credentials")
    if origin is None or credentials is None:
        return []
    if origin.strip() != "*" or credentials.strip().lower() != "true":
        return []

    evidence = " | ".join(
        item
        for item in (
            header_evidence(result, "Access-Control-Allow-Origin"),
            header_evidence(result, "Access-Control-Allow-Credentials"),
        )
        if item
    )
    return [
        Finding(
            check="cors",
            severity=FAIL,
            message="CORS allows any origin together with credentials",
            remediation=(
                "Echo only trusted origins in Access-Control-Allow-Origin, or drop "
                "Access-Control-Allow-Credentials."
            ),
            evidence=evidence,
        )
    ]


def check_server_disclosure(result: FetchResult, settings: RuleSettings) -> list[Finding]:
    findings: list[Finding] = []
    for header in ("Server", "X-Powered-By"):
        value = result.headers.get(header)
        if value and _VERSION.search(value):
            findings.append(
                Finding(
                    check="server-disclosure",
                    severity=INFO,
                    message=f"{header} header reveals version information",
                    remediation=f"Strip version details from the {header} header.",
                    evidence=header_evidence(result, header),
                )
            )
    return findings
