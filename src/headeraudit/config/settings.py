"""Resolved, validated audit settings."""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from headeraudit.errors import ConfigError
from headeraudit.modules.rules import RuleSettings
from headeraudit.tools.http.models import (
    DEFAULT_MAX_BODY_BYTES,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_TIMEOUT,
    FetchOptions,
)

from .getters import get_config

OUTPUT_FORMATS = ("json", "human")

ENV_KEYS = {
    "timeout": "HEADERAUDIT_TIMEOUT",
    "max_redirects": "HEADERAUDIT_MAX_REDIRECTS",
    "max_body_bytes": "HEADERAUDIT_MAX_BODY_BYTES",
    "output_format": "HEADERAUDIT_FORMAT",
    "non_session_cookies": "HEADERAUDIT_NON_SESSION_COOKIES",
    "concurrency": "HEADERAUDIT_CONCURRENCY",
    "verify_tls": "HEADERAUDIT_VERIFY_TLS",
    "user_agent": "HEADERAUDIT_USER_AGENT",
}


def default_user_agent() -> str:
    from headeraudit import __version__

    return f"headeraudit/{__version__}"


def _positive_float(key: str, value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be a number, got {value!r}") from exc
    if number <= 0:
        raise ConfigError(f"{key} must be greater than 0, got {value!r}")
    return number


def _int_at_least(minimum: int) -> Callable[[str, Any], int]:
    def coerce(key: str, value: Any) -> int:
        if isinstance(value, bool):
            raise ConfigError(f"{key} must be an integer, got {value!r}")
        try:
            number = int(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"{key} must be an integer, got {value!r}") from exc
        if number < minimum:
            raise ConfigError(f"{key} must be at least {minimum}, got {value!r}")
        return number

    return coerce


def _output_format(key: str, value: Any) -> str:
    name = str(value).strip().lower()
    if name not in OUTPUT_FORMATS:
        raise ConfigError(f"{key} must be one of {', '.join(OUTPUT_FORMATS)}, got {value!r}")
    return name


def _bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"1", "true", "yes", "on"}:
        return True
    if text in {"0", "false", "no", "off"}:
        return False
    raise ConfigError(f"{key} must be true or false, got {value!r}")


def _names(key: str, value: Any) -> frozenset[str]:
    if value is None:
        return frozenset()
    items = value.split(",") if isinstance(value, str) else value
    try:
        return frozenset(str(item).strip() for item in items if str(item).strip())
    except TypeError as exc:
        raise ConfigError(f"{key} must be a list of cookie names, got {value!r}") from exc


def _text(key: str, value: Any) -> str:
    text = str(value).strip()
    if not text:
        raise ConfigError(f"{key} must not be empty")
    return text


_COERCE: dict[str, Callable[[str, Any], Any]] = {
    "timeout": _positive_float,
    "max_redirects": _int_at_least(0),
    "max_body_bytes": _int_at_least(1),
    "output_format": _output_format,
    "non_session_cookies": _names,
    "concurrency": _int_at_least(1),
    "verify_tls": _bool,
    "user_agent": _text,
}


@dataclass(frozen=True)
class AuditSettings:
    """Every knob of one audit run."""

    timeout: float = DEFAULT_TIMEOUT
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    output_format: str = "human"
    non_session_cookies: frozenset[str] = field(default_factory=frozenset)
    concurrency: int = 4
    verify_tls: bool = True
    user_agent: str = field(default_factory=default_user_agent)

    def fetch_options(self) -> FetchOptions:
        return FetchOptions(
            timeout=self.timeout,
            max_redirects=self.max_redirects,
            max_body_bytes=self.max_body_bytes,
            verify_tls=self.verify_tls,
            user_agent=self.user_agent,
        )

    def rule_settings(self) -> RuleSettings:
        return RuleSettings(non_session_cookies=self.non_session_cookies)


def load_settings(directory: Path | None = None, **overrides: Any) -> AuditSettings:
    """Resolve settings: explicit override, then :func:`get_config`, then defaults.

    Overrides set to None are treated as not given.
    """
    unknown = sorted(set(overrides) - set(ENV_KEYS))
    if unknown:
        raise TypeError(f"Unknown setting(s): {', '.join(unknown)}")

    defaults = AuditSettings()
    values: dict[str, Any] = {}
    for name, key in ENV_KEYS.items():
        raw = overrides.get(name)
        if raw is None:
            raw = get_config(key, directory, default=getattr(defaults, name))
        values[name] = _COERCE[name](key, raw)
    return AuditSettings(**values)
