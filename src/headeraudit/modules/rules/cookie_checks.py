"""Set-Cookie attribute checks."""

from headeraudit.errors import ParseError
from headeraudit.tools.http import FetchResult

from .models import FAIL, WARN, Finding, RuleSettings
from .parsing import parse_set_cookie, redact_cookie

SAMESITE_VALUES = {"strict": "Strict", "lax": "Lax", "none": "None"}


def cookie_problems(cookie, non_session: frozenset[str]) -> list[str]:
    """Return the attribute problems of one parsed cookie, in a fixed order."""
    problems: list[str] = []
    secure = cookie.has("secure")
    if not secure:
        problems.append("missing Secure")
    if not cookie.has("httponly") and cookie.name not in non_session:
        problems.append("missing HttpOnly")

    samesite = cookie.get("samesite")
    if not cookie.has("samesite"):
        problems.append("missing SameSite")
    elif (samesite or "").lower() not in SAMESITE_VALUES:
        problems.append(f"invalid SameSite value {samesite!r}")
    elif samesite.lower() == "none" and not secure:
        problems.append("SameSite=None requires Secure")
    return problems


def check_cookie_attributes(result: FetchResult, settings: RuleSettings) -> list[Finding]:
    findings: list[Finding] = []
    for raw in result.headers.get_all("Set-Cookie"):
        try:
            cookie = parse_set_cookie(raw)
        except ParseError as exc:
            findings.append(
                Finding(
                    check="cookie-attributes",
                    severity=WARN,
                    message=str(exc),
                    remediation="Emit Set-Cookie headers in name=value; attribute form.",
                    evidence=f"Set-Cookie: {redact_cookie(raw)}",
                )
            )
            continue

        problems = cookie_problems(cookie, settings.non_session_cookies)
        if not problems:
            continue
        findings.append(
            Finding(
                check="cookie-attributes",
                severity=FAIL,
                message=f"Cookie '{cookie.name}': {', '.join(problems)}",
                remediation=(
                    "Set Secure, HttpOnly and SameSite=Lax (or Strict) on the cookie; "
                    "SameSite=None is only valid together with Secure."
                ),
                evidence=f"Set-Cookie: {redact_cookie(raw)}",
            )
        )
    return findings
