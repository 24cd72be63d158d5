"""Shared fixtures: throw-away RSA keys, self-signed certificates and a
mock certificate host so no test touches the network."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import httpx
import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import ExtensionOID, NameOID

from speechlet_auth.constants import ECHO_API_DOMAIN_NAME
from speechlet_auth.crypto import generate_keypair

CERT_URL = "https://s3.amazonaws.com/echo.api/echo-api-cert-4.pem"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_certificate_pem(
    private_key: rsa.RSAPrivateKey,
    sans: tuple[str, ...] | None = (ECHO_API_DOMAIN_NAME,),
    not_before: datetime | None = None,
    not_after: datetime | None = None,
) -> bytes:
    """Build a self-signed PEM certificate for ``private_key``.

    Pass ``sans=None`` to omit the subjectAltName extension entirely.
    """
    now = datetime.now(timezone.utc)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, ECHO_API_DOMAIN_NAME)])
    builder = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(not_before or now - timedelta(days=1))
        .not_valid_after(not_after or now + timedelta(days=30))
    )
    if sans is not None:
        builder = builder.add_extension(
            x509.SubjectAlternativeName([x509.DNSName(s) for s in sans]),
            critical=False,
        )
    cert = builder.sign(private_key, hashes.SHA256())
    return cert.public_bytes(serialization.Encoding.PEM)


def make_malformed_san_pem(private_key: rsa.RSAPrivateKey) -> bytes:
    """Build a certificate whose subjectAltName extension is not valid DER."""
    now = datetime.now(timezone.utc)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, ECHO_API_DOMAIN_NAME)])
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=30))
        .add_extension(
            x509.UnrecognizedExtension(ExtensionOID.SUBJECT_ALTERNATIVE_NAME, b"garbage"),
            critical=False,
        )
        .sign(private_key, hashes.SHA256())
    )
    return cert.public_bytes(serialization.Encoding.PEM)


class CertificateHost:
    """Serves a single PEM body from any URL and counts requests."""

    def __init__(self, body: bytes, status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.body)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def signing_key() -> rsa.RSAPrivateKey:
    return generate_keypair()


@pytest.fixture(scope="session")
def rotated_key() -> rsa.RSAPrivateKey:
    return generate_keypair()


@pytest.fixture()
def cert_pem(signing_key: rsa.RSAPrivateKey) -> bytes:
    return make_certificate_pem(signing_key)


@pytest.fixture()
def cert_host(cert_pem: bytes) -> CertificateHost:
    return CertificateHost(cert_pem)
