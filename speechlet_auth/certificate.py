"""Read-only view of a leaf X.509 signing certificate."""

from __future__ import annotations

from datetime import datetime

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import rsa

from .errors import CertificateParseError

_PEM_HEADER = b"-----BEGIN CERTIFICATE-----"


class Certificate:
    """A parsed signing certificate.

    Exposes only what leaf validation and signature checks need: the
    validity window, the DNS subject alternative names and the RSA
    public key.  No chain validation is performed.
    """

    def __init__(self, cert: x509.Certificate) -> None:
        public_key = cert.public_key()
        if not isinstance(public_key, rsa.RSAPublicKey):
            raise CertificateParseError(
                f"Unsupported public key type: {type(public_key).__name__}"
            )
        self._cert = cert
        self._public_key = public_key
        self._subject_alternative_names = _dns_names(cert)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_pem(cls, data: str | bytes) -> "Certificate":
        """Parse a single PEM-encoded certificate.

        Raises:
            CertificateParseError: If the data is empty, not a PEM
                certificate, carries a non-RSA key or has undecodable extensions.
        """
        if isinstance(data, str):
            data = data.encode("utf-8")
        if not data.strip():
            raise CertificateParseError("Empty certificate body")
        if data.count(_PEM_HEADER) != 1:
            raise CertificateParseError("Expected exactly one PEM certificate")
        try:
            cert = x509.load_pem_x509_certificate(data)
        except ValueError as exc:
            raise CertificateParseError(f"Malformed PEM certificate: {exc}") from exc
        # Extensions and the key are decoded lazily by cryptography
        try:
            return cls(cert)
        except (ValueError, x509.DuplicateExtension) as exc:
            raise CertificateParseError(f"Malformed certificate contents: {exc}") from exc

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def not_valid_before(self) -> datetime:
        """Start of the validity window (aware UTC)."""
        return self._cert.not_valid_before_utc

    @property
    def not_valid_after(self) -> datetime:
        """End of the validity window (aware UTC)."""
        return self._cert.not_valid_after_utc

    @property
    def subject_alternative_names(self) -> tuple[str, ...]:
        """DNS subject alternative names in certificate order."""
        return self._subject_alternative_names

    @property
    def public_key(self) -> rsa.RSAPublicKey:
        return self._public_key

    @property
    def fingerprint(self) -> str:
        """SHA-256 fingerprint as lowercase hex."""
        return self._cert.fingerprint(hashes.SHA256()).hex()

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def is_valid_at(self, moment: datetime) -> bool:
        return self.not_valid_before <= moment <= self.not_valid_after

    def has_subject_name(self, name: str) -> bool:
        """Exact, case-sensitive membership test on the DNS SAN entries."""
        return name in self._subject_alternative_names

    def __repr__(self) -> str:
        return f"Certificate(fingerprint={self.fingerprint[:16]}..., sans={list(self._subject_alternative_names)})"


def _dns_names(cert: x509.Certificate) -> tuple[str, ...]:
    try:
        ext = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName)
    except x509.ExtensionNotFound:
        return ()
    return tuple(ext.value.get_values_for_type(x509.DNSName))
