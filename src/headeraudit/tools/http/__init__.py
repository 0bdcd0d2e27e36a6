"""HTTP helpers for headeraudit."""

from .client import HTTPClient, fetch, validate_target
from .models import FetchOptions, FetchResult, RedirectHop, ResponseHeaders, TLSInfo

__all__ = [
    "FetchOptions",
    "FetchResult",
    "HTTPClient",
    "RedirectHop",
    "ResponseHeaders",
    "TLSInfo",
    "fetch",
    "validate_target",
]
