"""Request signature verification with certificate caching.

The signing certificate is looked up in the cache first.  It is only
downloaded again when it is missing, or when the request does not verify
against the cached copy: the latter means either tampering or that Alexa
has rotated to a newer certificate at the same URL.  After a refresh the
signature is checked exactly once more and that answer is final.
"""

from __future__ import annotations

import asyncio
import logging

from . import crypto
from .cache import CertificateCache, cache_key
from .fetcher import CertificateFetcher
from .url import is_valid_certificate_url

logger = logging.getLogger(__name__)


class RequestVerifier:
    """Verifies signed Alexa requests.

    The outward contract is a single boolean: callers cannot tell an
    invalid signature from an expired certificate or a network failure.
    """

    def __init__(
        self,
        cache: CertificateCache | None = None,
        fetcher: CertificateFetcher | None = None,
    ) -> None:
        self._cache = cache if cache is not None else CertificateCache()
        self._fetcher = fetcher if fetcher is not None else CertificateFetcher()

    @property
    def cache(self) -> CertificateCache:
        return self._cache

    async def verify_request_signature_async(
        self,
        payload: bytes,
        signature: str,
        cert_url: str,
    ) -> bool:
        """Verify a request body against its signature headers.

        Args:
            payload: The raw request body bytes, exactly as received.
            signature: Base64-encoded value of the Signature header.
            cert_url: Value of the SignatureCertChainUrl header.

        Returns:
            True if the signature is valid, False otherwise.
        """
        if not is_valid_certificate_url(cert_url):
            return False

        key = cache_key(cert_url)
        cert = self._cache.get(key)
        if cert is not None and crypto.check_signature(payload, signature, cert):
            logger.debug("Signature verified with cached certificate key=%s", key)
            return True

        if cert is None:
            logger.debug("Certificate cache miss key=%s", key)
        else:
            logger.debug("Signature mismatch with cached certificate, refreshing key=%s", key)

        cert = await self._fetcher.fetch_and_validate_async(cert_url)
        if cert is None:
            return False
        self._cache.set(key, cert)

        return crypto.check_signature(payload, signature, cert)

    def verify_request_signature(
        self,
        payload: bytes,
        signature: str,
        cert_url: str,
    ) -> bool:
        """Blocking version of verify_request_signature_async.

        Must not be called from a thread that is running an event loop.
        """
        return asyncio.run(
            self.verify_request_signature_async(payload, signature, cert_url)
        )
