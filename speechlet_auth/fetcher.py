"""Download and leaf-validate Alexa signing certificates.

The fetch is a single HTTPS GET against a URL that has passed the
trust-anchor policy.  The body must be exactly one PEM certificate that
is currently valid and names echo-api.amazon.com among its subject
alternative names.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable

import httpx

from .certificate import Certificate
from .constants import DEFAULT_FETCH_TIMEOUT, ECHO_API_DOMAIN_NAME
from .errors import (
    CertificateFetchError,
    CertificateTrustError,
    UntrustedCertificateUrlError,
    VerificationError,
)
from .url import is_valid_certificate_url

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CertificateFetcher:
    """Retrieves signing certificates and performs leaf trust checks.

    Nothing is cached here; callers decide what to do with a validated
    certificate.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport
        self._clock = clock or _utcnow

    # ------------------------------------------------------------------
    # Internals (raise VerificationError subclasses)
    # ------------------------------------------------------------------

    async def _download(self, url: str) -> bytes:
        """GET the certificate body.  Redirects are not followed."""
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                follow_redirects=False,
            ) as client:
                resp = await client.get(url)
                resp.raise_for_status()
                return resp.content
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise CertificateFetchError(f"Cannot download {url}: {exc}") from exc

    def validate(self, certificate: Certificate) -> None:
        """Check the validity window and the trusted subject identity.

        Raises:
            CertificateTrustError: If either check fails.
        """
        now = self._clock()
        if not certificate.is_valid_at(now):
            if now < certificate.not_valid_before:
                raise CertificateTrustError(
                    f"Certificate not valid before {certificate.not_valid_before.isoformat()}"
                )
            raise CertificateTrustError(
                f"Certificate expired at {certificate.not_valid_after.isoformat()}"
            )
        if not certificate.has_subject_name(ECHO_API_DOMAIN_NAME):
            raise CertificateTrustError(
                f"Certificate does not name {ECHO_API_DOMAIN_NAME}"
            )

    async def retrieve(self, url: str) -> Certificate:
        """Fetch, parse and validate the certificate at ``url``.

        Raises:
            UntrustedCertificateUrlError: URL fails the trust-anchor policy.
            CertificateFetchError: Download failed.
            CertificateParseError: Body is not a single PEM RSA certificate.
            CertificateTrustError: Certificate failed leaf validation.
        """
        # Never rely on the caller having checked the URL already
        if not is_valid_certificate_url(url):
            raise UntrustedCertificateUrlError(f"Untrusted certificate url: {url!r}")
        body = await self._download(url)
        certificate = Certificate.from_pem(body)
        self.validate(certificate)
        return certificate

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def fetch_and_validate_async(self, url: str) -> Certificate | None:
        """Fetch and validate a certificate without blocking the event loop.

        Returns:
            The validated Certificate, or None on any failure.
        """
        try:
            certificate = await self.retrieve(url)
        except VerificationError as exc:
            logger.warning("Certificate rejected url=%r: %s", url, exc)
            return None
        logger.info(
            "Fetched signing certificate url=%s fingerprint=%s",
            url, certificate.fingerprint,
        )
        return certificate

    def fetch_and_validate(self, url: str) -> Certificate | None:
        """Blocking version of fetch_and_validate_async.

        Must not be called from a thread that is running an event loop.
        """
        return asyncio.run(self.fetch_and_validate_async(url))
