"""In-memory certificate cache with a fixed absolute expiry."""

from __future__ import annotations

import logging
import time
from typing import Callable

from .certificate import Certificate
from .constants import CERT_CACHE_KEY_PREFIX, CERT_CACHE_TTL

logger = logging.getLogger(__name__)


def cache_key(cert_url: str | None) -> str:
    """Return the cache key for a certificate URL.

    The URL is appended verbatim, so distinct URLs never share an entry.
    """
    return CERT_CACHE_KEY_PREFIX + (cert_url or "")


class CertificateCache:
    """Thread-safe in-memory cache of validated signing certificates.

    Each entry expires a fixed 24 hours after it was stored; reads do not
    extend its lifetime.  Expired entries are dropped lazily on lookup.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or time.time
        self._store: dict[str, tuple[Certificate, float]] = {}

    def get(self, key: str) -> Certificate | None:
        """Get a cached certificate.

        Returns the certificate, or None if not found or expired.
        """
        entry = self._store.get(key)
        if entry is None:
            return None
        certificate, expires_at = entry
        if self._clock() >= expires_at:
            # Another writer may have replaced the entry meanwhile; only drop ours
            if self._store.get(key) is entry:
                self._store.pop(key, None)
            logger.debug("Certificate cache entry expired key=%s", key)
            return None
        return certificate

    def set(self, key: str, certificate: Certificate) -> None:
        """Store a validated certificate, superseding any previous entry."""
        self._store[key] = (certificate, self._clock() + CERT_CACHE_TTL)

    def __len__(self) -> int:
        return len(self._store)
