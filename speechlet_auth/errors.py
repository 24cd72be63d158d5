"""Failure kinds raised inside the verification pipeline.

These never reach callers of RequestVerifier: the public entry points
collapse every one of them into a plain False / None result.
"""


class VerificationError(Exception):
    """Base class for all signature verification failures."""


class UntrustedCertificateUrlError(VerificationError):
    """Raised when a certificate URL fails the trust-anchor policy."""


class CertificateFetchError(VerificationError):
    """Raised when the certificate cannot be downloaded."""


class CertificateParseError(VerificationError):
    """Raised when the downloaded body is not a usable PEM certificate."""


class CertificateTrustError(VerificationError):
    """Raised when a certificate is outside its validity window or lacks the trusted identity."""
