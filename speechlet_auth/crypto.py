"""RSA signature and encoding utilities for SHA1withRSA request signatures."""

from __future__ import annotations

import base64
import binascii
from typing import TYPE_CHECKING

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

if TYPE_CHECKING:
    from .certificate import Certificate


def generate_keypair(key_size: int = 2048) -> rsa.RSAPrivateKey:
    """Generate an RSA private key suitable for SHA1withRSA signing."""
    return rsa.generate_private_key(public_exponent=65537, key_size=key_size)


def sign(payload: bytes, private_key: rsa.RSAPrivateKey) -> bytes:
    """Sign a payload with SHA1withRSA (PKCS#1 v1.5 padding).

    Args:
        payload: The raw bytes to sign.
        private_key: RSA private key.

    Returns:
        Raw signature bytes.
    """
    return private_key.sign(payload, padding.PKCS1v15(), hashes.SHA1())


def verify(payload: bytes, signature: bytes, public_key: rsa.RSAPublicKey) -> bool:
    """Verify a SHA1withRSA signature.

    Returns:
        True if valid, False otherwise.
    """
    try:
        public_key.verify(signature, payload, padding.PKCS1v15(), hashes.SHA1())
    except InvalidSignature:
        return False
    return True


def check_signature(
    payload: bytes,
    signature_b64: str | None,
    certificate: "Certificate",
) -> bool:
    """Check a base64-encoded request signature against a certificate.

    Never touches the network or the certificate cache.

    Args:
        payload: The raw request body bytes that were signed.
        signature_b64: Base64-encoded signature from the request header.
        certificate: Validated signing certificate.

    Returns:
        True if the signature matches, False otherwise (including when
        ``signature_b64`` is not valid base64).
    """
    if signature_b64 is None:
        return False
    try:
        signature = base64_decode(signature_b64)
    except ValueError:
        return False
    return verify(payload, signature, certificate.public_key)


def base64_encode(data: bytes) -> str:
    """Encode bytes to standard padded base64."""
    return base64.b64encode(data).decode("ascii")


def base64_decode(s: str) -> bytes:
    """Decode standard base64, rejecting non-alphabet characters.

    Raises:
        ValueError: If ``s`` is not valid base64.
    """
    try:
        return base64.b64decode(s, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64 signature: {exc}") from exc
