"""TLS metadata extraction from an open httpx response."""

import logging
from datetime import datetime

import httpx
from cryptography import x509

from .models import TLSInfo

logger = logging.getLogger(__name__)


def certificate_window(der: bytes | None) -> tuple[datetime | None, datetime | None]:
    """Return (not_before, not_after) in UTC from a DER-encoded certificate."""
    if not der:
        return None, None
    try:
        cert = x509.load_der_x509_certificate(der)
    except ValueError:
        logger.debug("Unparseable peer certificate (%d bytes)", len(der))
        return None, None
    return cert.not_valid_before_utc, cert.not_valid_after_utc


def extract_tls_info(response: httpx.Response) -> TLSInfo | None:
    """Read protocol and certificate window while the connection is still open.

    Returns None when the transport does not expose an SSL object (plain HTTP,
    mocked transports, HTTP/2 multiplexed streams without extra info).
    """
    stream = response.extensions.get("network_stream")
    if stream is None or not hasattr(stream, "get_extra_info"):
        return None
    ssl_object = stream.get_extra_info("ssl_object")
    if ssl_object is None:
        return None

    # The binary form is available even when verification is disabled.
    not_before, not_after = certificate_window(ssl_object.getpeercert(binary_form=True))
    return TLSInfo(
        protocol=ssl_object.version(),
        not_before=not_before,
        not_after=not_after,
    )
