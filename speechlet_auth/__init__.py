"""Alexa Skills Kit request signature verification.

Verify that inbound speechlet requests were signed by Alexa, using the
signing certificate named in the request and a short-lived certificate
cache.
"""

from .verifier import RequestVerifier
from .fetcher import CertificateFetcher
from .cache import CertificateCache, cache_key
from .certificate import Certificate
from .url import is_valid_certificate_url
from .crypto import check_signature
from .constants import (
    SIGNATURE_REQUEST_HEADER,
    SIGNATURE_CERT_URL_REQUEST_HEADER,
    ECHO_API_DOMAIN_NAME,
    SIGNATURE_ALGORITHM,
)
from .errors import (
    VerificationError,
    UntrustedCertificateUrlError,
    CertificateFetchError,
    CertificateParseError,
    CertificateTrustError,
)

__all__ = [
    "RequestVerifier",
    "CertificateFetcher",
    "CertificateCache",
    "cache_key",
    "Certificate",
    "is_valid_certificate_url",
    "check_signature",
    "SIGNATURE_REQUEST_HEADER",
    "SIGNATURE_CERT_URL_REQUEST_HEADER",
    "ECHO_API_DOMAIN_NAME",
    "SIGNATURE_ALGORITHM",
    "VerificationError",
    "UntrustedCertificateUrlError",
    "CertificateFetchError",
    "CertificateParseError",
    "CertificateTrustError",
]
__version__ = "0.1.0"
