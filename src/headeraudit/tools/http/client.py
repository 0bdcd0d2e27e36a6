"""HTTP fetcher that follows redirects by hand and records every hop."""

import asyncio
import logging
from datetime import UTC, datetime
from urllib.parse import urljoin, urlparse

import httpx

from headeraudit.errors import (
    FetchTimeoutError,
    InvalidTargetError,
    NetworkError,
    RedirectLoopError,
)

from .models import FetchOptions, FetchResult, RedirectHop, ResponseHeaders
from .tls import extract_tls_info

logger = logging.getLogger(__name__)


def validate_target(url: str) -> str:
    """Return the URL stripped of whitespace, or raise InvalidTargetError."""
    candidate = (url or "").strip()
    try:
        parsed = urlparse(candidate)
    except ValueError as exc:
        raise InvalidTargetError(candidate, f"target is not a valid URL: {exc}") from exc
    if parsed.scheme.lower() not in {"http", "https"} or not parsed.netloc:
        raise InvalidTargetError(candidate or repr(url), "target must be an absolute http(s) URL")
    return candidate


async def read_capped(response: httpx.Response, limit: int) -> tuple[bytes, bool]:
    """Read at most ``limit`` bytes of a streamed body. Returns (body, truncated)."""
    chunks: list[bytes] = []
    size = 0
    async for chunk in response.aiter_bytes():
        remaining = limit - size
        if len(chunk) > remaining:
            chunks.append(chunk[:remaining])
            return b"".join(chunks), True
        chunks.append(chunk)
        size += len(chunk)
    return b"".join(chunks), False


def decode_body(raw: bytes, encoding: str | None) -> str:
    try:
        return raw.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")


class HTTPClient:
    """Async HTTP client producing one FetchResult per target."""

    def __init__(self, options: FetchOptions | None = None):
        self.options = options or FetchOptions()
        self.client: httpx.AsyncClient | None = None

    async def __aenter__(self):
        self.client = httpx.AsyncClient(
            timeout=self.options.timeout,
            follow_redirects=False,
            verify=self.options.verify_tls,
            headers={"User-Agent": self.options.user_agent},
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.aclose()
            self.client = None

    async def fetch(self, url: str) -> FetchResult:
        """Fetch ``url``, following redirects within the chain-wide deadline."""
        if not self.client:
            raise RuntimeError("Client not initialized. Use async context manager.")

        target = validate_target(url)
        try:
            async with asyncio.timeout(self.options.timeout):
                return await self._follow_chain(target)
        except TimeoutError as exc:
            raise FetchTimeoutError(
                target, f"no complete response within {self.options.timeout:g}s"
            ) from exc
        except httpx.TimeoutException as exc:
            raise FetchTimeoutError(target, f"timed out: {exc}") from exc
        except httpx.InvalidURL as exc:
            raise NetworkError(target, f"invalid URL in redirect chain: {exc}") from exc
        except httpx.HTTPError as exc:
            raise NetworkError(target, str(exc) or exc.__class__.__name__) from exc

    async def _follow_chain(self, target: str) -> FetchResult:
        hops: list[RedirectHop] = []
        current = target
        while True:
            async with self.client.stream("GET", current) as response:
                if response.is_redirect:
                    hops.append(RedirectHop(url=current, status_code=response.status_code))
                    location = response.headers["Location"]
                    logger.debug("%s %s -> %s", response.status_code, current, location)
                    if len(hops) > self.options.max_redirects:
                        raise RedirectLoopError(
                            target,
                            f"more than {self.options.max_redirects} redirects",
                        )
                    try:
                        current = urljoin(current, location)
                        scheme = urlparse(current).scheme
                    except ValueError as exc:
                        raise NetworkError(
                            target, f"invalid redirect location {location!r}"
                        ) from exc
                    if scheme not in {"http", "https"}:
                        raise NetworkError(target, f"redirect to unsupported URL {current}")
                    continue

                tls = extract_tls_info(response) if urlparse(current).scheme == "https" else None
                raw, truncated = await read_capped(response, self.options.max_body_bytes)
                if truncated:
                    logger.info(
                        "Body of %s truncated at %d bytes", current, self.options.max_body_bytes
                    )
                return FetchResult(
                    requested_url=target,
                    final_url=current,
                    status_code=response.status_code,
                    headers=ResponseHeaders(response.headers.multi_items()),
                    redirects=tuple(hops),
                    body=decode_body(raw, response.encoding),
                    body_truncated=truncated,
                    tls=tls,
                    fetched_at=datetime.now(UTC),
                )


async def fetch(url: str, options: FetchOptions | None = None) -> FetchResult:
    """Fetch one target with a client that lives only for this call."""
    async with HTTPClient(options) as client:
        return await client.fetch(url)
