"""Test configuration and fixtures for headeraudit."""

import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from headeraudit.config import ENV_KEYS
from headeraudit.tools.http import FetchResult, RedirectHop, ResponseHeaders, TLSInfo

# Headers of concrete scenario 1: a clean response.
HARDENED_HEADERS = [
    ("Content-Security-Policy", "default-src 'self'"),
    ("X-Content-Type-Options", "nosniff"),
    ("Strict-Transport-Security", "max-age=31536000; includeSubDomains"),
]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> Path:
    """Keep the user's environment, .env and ~/.headeraudit out of every test."""
    for key in ENV_KEYS.values():
        monkeypatch.delenv(key, raising=False)
    home = temp_dir / "home"
    home.mkdir()
    workdir = temp_dir / "work"
    workdir.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.chdir(workdir)
    return workdir


@pytest.fixture
def make_result() -> Callable[..., FetchResult]:
    """Factory for FetchResult objects without any network."""

    def _make(
        headers: list[tuple[str, str]] | None = None,
        url: str = "https://example.com/",
        status_code: int = 200,
        redirects: list[tuple[str, int]] | None = None,
        body: str = "",
        tls: TLSInfo | None = None,
        requested_url: str | None = None,
    ) -> FetchResult:
        hops = tuple(RedirectHop(url=hop_url, status_code=code) for hop_url, code in redirects or [])
        return FetchResult(
            requested_url=requested_url or (hops[0].url if hops else url),
            final_url=url,
            status_code=status_code,
            headers=ResponseHeaders(headers or []),
            redirects=hops,
            body=body,
            tls=tls,
        )

    return _make


@pytest.fixture
def hardened_headers() -> list[tuple[str, str]]:
    return list(HARDENED_HEADERS)
