"""The fixed catalog of checks, in report order."""

from .content_checks import check_subresource_integrity
from .cookie_checks import check_cookie_attributes
from .header_checks import (
    check_content_type_options,
    check_cors,
    check_csp_presence,
    check_csp_strictness,
    check_frame_options,
    check_permissions_policy,
    check_referrer_policy,
    check_server_disclosure,
)
from .models import Check
from .transport_checks import check_hsts, check_mixed_content, check_tls_certificate

CATALOG: tuple[Check, ...] = (
    Check("csp-presence", "Content-Security-Policy presence", check_csp_presence),
    Check("csp-strictness", "Content-Security-Policy strictness", check_csp_strictness),
    Check("frame-options", "X-Frame-Options / frame-ancestors", check_frame_options),
    Check("content-type-options", "X-Content-Type-Options", check_content_type_options),
    Check("referrer-policy", "Referrer-Policy", check_referrer_policy),
    Check("permissions-policy", "Permissions-Policy", check_permissions_policy),
    Check("hsts", "Strict-Transport-Security", check_hsts),
    Check("mixed-content", "HTTPS to HTTP downgrade", check_mixed_content),
    Check("cookie-attributes", "Cookie attributes", check_cookie_attributes),
    Check("subresource-integrity", "Subresource Integrity", check_subresource_integrity),
    Check("cors", "CORS exposure", check_cors),
    Check("server-disclosure", "Server version disclosure", check_server_disclosure),
    Check("tls-certificate", "TLS protocol and certificate", check_tls_certificate),
)

CHECK_IDS: frozenset[str] = frozenset(check.id for check in CATALOG)


def get_check(check_id: str) -> Check:
    """Return a catalog entry by id."""
    for check in CATALOG:
        if check.id == check_id:
            return check
    raise KeyError(check_id)
