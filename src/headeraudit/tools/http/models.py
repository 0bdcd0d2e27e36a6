"""Data models for fetched HTTP exchanges."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from urllib.parse import urlparse

DEFAULT_TIMEOUT = 10.0
DEFAULT_MAX_REDIRECTS = 10
DEFAULT_MAX_BODY_BYTES = 1024 * 1024


class ResponseHeaders:
    """Ordered, case-insensitive, immutable multi-map of response headers."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[tuple[str, str]] = ()):
        self._items: tuple[tuple[str, str], ...] = tuple((str(k), str(v)) for k, v in items)

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the effective (last) value of a header."""
        values = self.get_all(name)
        return values[-1] if values else default

    def get_all(self, name: str) -> list[str]:
        """Return every value of a header, in received order."""
        wanted = name.lower()
        return [value for key, value in self._items if key.lower() == wanted]

    def items(self) -> tuple[tuple[str, str], ...]:
        return self._items

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return bool(self.get_all(name))

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResponseHeaders):
            return NotImplemented
        lowered = tuple((k.lower(), v) for k, v in self._items)
        return lowered == tuple((k.lower(), v) for k, v in other._items)

    def __hash__(self) -> int:
        return hash(tuple((k.lower(), v) for k, v in self._items))

    def __repr__(self) -> str:
        return f"ResponseHeaders({list(self._items)!r})"


@dataclass(frozen=True)
class RedirectHop:
    """One followed redirect response."""

    url: str
    status_code: int


@dataclass(frozen=True)
class TLSInfo:
    """Transport security details of the final connection."""

    protocol: str | None = None
    not_before: datetime | None = None
    not_after: datetime | None = None


@dataclass(frozen=True)
class FetchOptions:
    """Settings for a single fetch."""

    timeout: float = DEFAULT_TIMEOUT
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    verify_tls: bool = True
    user_agent: str = "headeraudit"


@dataclass(frozen=True)
class FetchResult:
    """Immutable record of one HTTP exchange, redirects included."""

    requested_url: str
    final_url: str
    status_code: int
    headers: ResponseHeaders = field(default_factory=ResponseHeaders)
    redirects: tuple[RedirectHop, ...] = ()
    body: str = ""
    body_truncated: bool = False
    tls: TLSInfo | None = None
    fetched_at: datetime | None = None

    @property
    def final_scheme(self) -> str:
        return urlparse(self.final_url).scheme.lower()

    @property
    def schemes(self) -> list[str]:
        """Scheme of every hop followed by the final URL's scheme."""
        urls = [hop.url for hop in self.redirects] + [self.final_url]
        return [urlparse(url).scheme.lower() for url in urls]

    @property
    def downgraded(self) -> bool:
        """True when some hop moved from https to http."""
        schemes = self.schemes
        return any(a == "https" and b == "http" for a, b in zip(schemes, schemes[1:]))

    @property
    def upgraded(self) -> bool:
        """True when some hop moved from http to https."""
        schemes = self.schemes
        return any(a == "http" and b == "https" for a, b in zip(schemes, schemes[1:]))

    @property
    def mixed_scheme(self) -> bool:
        return self.downgraded or self.upgraded

    @property
    def content_type(self) -> str:
        return self.headers.get("Content-Type", "") or ""
