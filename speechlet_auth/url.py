"""Trust-anchor policy for certificate URLs.

A certificate URL is only fetched when it points at the official Alexa
certificate location:

- scheme is https (case-insensitive)
- host is s3.amazonaws.com (case-insensitive)
- path contains /echo.api/echo-api-cert
- port, when given explicitly, is 443
"""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from .constants import (
    CERT_URL_HOST,
    CERT_URL_PATH_SEGMENT,
    CERT_URL_PORT,
    CERT_URL_SCHEME,
)

logger = logging.getLogger(__name__)


def _rejection_reason(url: str | None) -> str | None:
    """Return why ``url`` fails the policy, or None when it passes."""
    if not url:
        return "empty url"
    try:
        parsed = urlparse(url)
    except ValueError:
        return "malformed url"
    if parsed.scheme.lower() != CERT_URL_SCHEME:
        return f"scheme {parsed.scheme!r} is not {CERT_URL_SCHEME}"
    # hostname is already lowercased by urlparse and excludes any userinfo
    if parsed.hostname != CERT_URL_HOST:
        return f"host {parsed.hostname!r} is not {CERT_URL_HOST}"
    if CERT_URL_PATH_SEGMENT not in parsed.path:
        return f"path {parsed.path!r} does not contain {CERT_URL_PATH_SEGMENT}"
    try:
        port = parsed.port
    except ValueError:
        return "malformed port"
    if port is not None and port != CERT_URL_PORT:
        return f"port {port} is not {CERT_URL_PORT}"
    return None


def is_valid_certificate_url(url: str | None) -> bool:
    """Check a certificate URL against the trust-anchor policy.

    Evaluated before any network access so that caller-supplied URLs can
    never turn the certificate fetch into an open proxy.

    Returns True if the URL may be fetched, False otherwise.
    """
    reason = _rejection_reason(url)
    if reason is not None:
        logger.debug("Rejected certificate url %r: %s", url, reason)
        return False
    return True
