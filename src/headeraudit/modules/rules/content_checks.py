"""Checks over the response body."""

from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from headeraudit.tools.http import FetchResult

from .models import WARN, Finding, RuleSettings


def _is_html(result: FetchResult) -> bool:
    content_type = result.content_type.lower()
    return not content_type or "html" in content_type


def _rel_values(tag) -> list[str]:
    rel = tag.get("rel")
    if isinstance(rel, str):
        rel = rel.split()
    return [str(item).lower() for item in rel or []]


_DEFAULT_PORTS = {"http": 80, "https": 443}


def origin(url: str) -> tuple[str, str, int] | None:
    """Return (scheme, host, port) of an http(s) URL, or None if it has no usable origin."""
    try:
        parsed = urlparse(url)
        port = parsed.port
    except ValueError:
        return None
    scheme = parsed.scheme.lower()
    if scheme not in _DEFAULT_PORTS or not parsed.hostname:
        return None
    return scheme, parsed.hostname.lower(), port or _DEFAULT_PORTS[scheme]


def external_subresources(result: FetchResult) -> list[tuple[str, str, bool]]:
    """Return ``(tag, absolute_url, has_integrity)`` for cross-origin scripts and stylesheets."""
    if not result.body or not _is_html(result):
        return []

    page_origin = origin(result.final_url)
    soup = BeautifulSoup(result.body, "html.parser")
    resources: list[tuple[str, str, bool]] = []

    candidates = [("script", tag, tag.get("src")) for tag in soup.find_all("script", src=True)]
    candidates += [
        ("link", tag, tag.get("href"))
        for tag in soup.find_all("link", href=True)
        if "stylesheet" in _rel_values(tag)
    ]
    for name, tag, ref in candidates:
        ref = str(ref or "").strip()
        if not ref:
            continue
        try:
            absolute = urljoin(result.final_url, ref)
        except ValueError:
            continue
        resource_origin = origin(absolute)
        if resource_origin is None or resource_origin == page_origin:
            continue
        resources.append((name, absolute, bool(str(tag.get("integrity") or "").strip())))
    return resources


def check_subresource_integrity(result: FetchResult, settings: RuleSettings) -> list[Finding]:
    findings: list[Finding] = []
    for name, url, has_integrity in external_subresources(result):
        if has_integrity:
            continue
        kind = "script" if name == "script" else "stylesheet"
        findings.append(
            Finding(
                check="subresource-integrity",
                severity=WARN,
                message=f"Cross-origin {kind} loaded without integrity attribute: {url}",
                remediation=(
                    "Add integrity=\"sha384-...\" and crossorigin=\"anonymous\" "
                    f"to the <{name}> tag, or self-host the file."
                ),
                evidence=url,
            )
        )
    return findings
