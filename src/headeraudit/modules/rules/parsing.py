"""Parsers for the security header grammars the checks inspect.

Every parser raises ParseError on malformed input. A missing header is not
malformed input; callers handle absence before parsing.
"""

import re
from dataclasses import dataclass, field

from headeraudit.errors import ParseError
from headeraudit.tools.http import FetchResult

_DIRECTIVE_NAME = re.compile(r"^[a-z0-9-]+$")
_PERMISSIONS_MEMBER = re.compile(r"^([a-z][a-z0-9_.*-]*)(?:=(.*))?$")

REFERRER_POLICY_TOKENS = frozenset(
    {
        "no-referrer",
        "no-referrer-when-downgrade",
        "origin",
        "origin-when-cross-origin",
        "same-origin",
        "strict-origin",
        "strict-origin-when-cross-origin",
        "unsafe-url",
    }
)


def header_evidence(result: FetchResult, name: str) -> str | None:
    """Render every occurrence of a header for use as finding evidence."""
    values = result.headers.get_all(name)
    if not values:
        return None
    return " | ".join(f"{name}: {value}" for value in values)


def parse_csp(value: str) -> dict[str, list[str]]:
    """Parse a Content-Security-Policy into ``{directive: [sources]}``.

    Directive names are lower-cased. A repeated directive is ignored after its
    first occurrence, the way browsers treat it.
    """
    directives: dict[str, list[str]] = {}
    for segment in value.split(";"):
        tokens = segment.strip().split()
        if not tokens:
            continue
        name = tokens[0].lower()
        if not _DIRECTIVE_NAME.match(name):
            raise ParseError("Content-Security-Policy", value, f"invalid directive {tokens[0]!r}")
        directives.setdefault(name, tokens[1:])
    if not directives:
        raise ParseError("Content-Security-Policy", value, "policy has no directives")
    return directives


@dataclass(frozen=True)
class HSTSPolicy:
    max_age: int
    include_subdomains: bool = False
    preload: bool = False


def parse_hsts(value: str) -> HSTSPolicy:
    """Parse a Strict-Transport-Security value."""
    seen: dict[str, str | None] = {}
    for segment in value.split(";"):
        segment = segment.strip()
        if not segment:
            continue
        name, sep, raw = segment.partition("=")
        name = name.strip().lower()
        if name in seen:
            raise ParseError("Strict-Transport-Security", value, f"duplicate directive {name!r}")
        seen[name] = raw.strip().strip('"') if sep else None

    if "max-age" not in seen:
        raise ParseError("Strict-Transport-Security", value, "missing max-age")
    max_age = seen["max-age"]
    if not max_age or not max_age.isdigit():
        raise ParseError("Strict-Transport-Security", value, f"max-age {max_age!r} is not a number")
    return HSTSPolicy(
        max_age=int(max_age),
        include_subdomains="includesubdomains" in seen,
        preload="preload" in seen,
    )


@dataclass(frozen=True)
class SetCookie:
    """Name and attributes of one Set-Cookie header. Attribute keys are lower-case."""

    name: str
    attributes: dict[str, str | None] = field(default_factory=dict)

    def has(self, attribute: str) -> bool:
        return attribute.lower() in self.attributes

    def get(self, attribute: str) -> str | None:
        return self.attributes.get(attribute.lower())


def parse_set_cookie(value: str) -> SetCookie:
    """Parse one Set-Cookie header value."""
    pair, *attrs = value.split(";")
    name, sep, _ = pair.partition("=")
    name = name.strip()
    if not sep or not name:
        raise ParseError("Set-Cookie", value, "missing cookie name")

    attributes: dict[str, str | None] = {}
    for attr in attrs:
        key, sep, raw = attr.strip().partition("=")
        key = key.strip().lower()
        if key:
            attributes[key] = raw.strip() if sep else None
    return SetCookie(name=name, attributes=attributes)


def redact_cookie(value: str) -> str:
    """Replace the cookie value with ``***`` so evidence never carries secrets."""
    pair, sep, rest = value.partition(";")
    name, eq, _ = pair.partition("=")
    redacted = f"{name.strip()}=***" if eq else pair
    return f"{redacted}{sep}{rest}"


def parse_referrer_policy(value: str) -> str:
    """Return the effective policy token: the last one a browser recognises."""
    recognised = [
        token.strip().lower()
        for token in value.split(",")
        if token.strip().lower() in REFERRER_POLICY_TOKENS
    ]
    if not recognised:
        raise ParseError("Referrer-Policy", value, "no recognised policy token")
    return recognised[-1]


def parse_permissions_policy(value: str) -> dict[str, str]:
    """Syntactic parse of a Permissions-Policy structured-field dictionary."""
    features: dict[str, str] = {}
    for member in value.split(","):
        member = member.strip()
        if not member:
            continue
        match = _PERMISSIONS_MEMBER.match(member)
        if not match:
            raise ParseError("Permissions-Policy", value, f"invalid member {member!r}")
        allowlist = (match.group(2) or "").strip()
        if allowlist.startswith("(") != allowlist.endswith(")"):
            raise ParseError("Permissions-Policy", value, f"unbalanced allowlist in {member!r}")
        features[match.group(1)] = allowlist
    if not features:
        raise ParseError("Permissions-Policy", value, "no features declared")
    return features
