"""
This module converts certificates and keys to and from PEM text.
"""
from dataclasses import dataclass
from typing import Optional, Union

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

from .exceptions import MalformedPemError

PemInput = Union[str, bytes]


@dataclass(frozen=True)
class PemBundle:
    """
    The PEM text of a certificate, its private key and optionally its public key.
    """
    certificate: str
    private_key: str
    public_key: Optional[str] = None


def _as_bytes(text: PemInput, kind: str) -> bytes:
    if isinstance(text, bytes):
        return text
    if isinstance(text, str):
        return text.encode("ascii", errors="replace")
    raise MalformedPemError(kind, f"expected str or bytes, got {type(text).__name__}")


def encode_certificate(cert: x509.Certificate) -> str:
    """
    Converts a certificate object to PEM text.
    """
    return cert.public_bytes(encoding=serialization.Encoding.PEM).decode("ascii")


def encode_private_key(private_key) -> str:
    """
    Converts a private key to unencrypted PKCS#1 PEM text ("RSA PRIVATE KEY").
    """
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


def encode_public_key(public_key) -> str:
    """
    Converts a public key to SubjectPublicKeyInfo PEM text ("PUBLIC KEY").
    """
    return public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")


def decode_certificate(text: PemInput) -> x509.Certificate:
    """
    Parses PEM text into a certificate object.

    Raises:
        MalformedPemError: If the text is not a PEM certificate.
    """
    data = _as_bytes(text, "certificate")
    try:
        return x509.load_pem_x509_certificate(data)
    except ValueError as e:
        raise MalformedPemError("certificate", str(e)) from e


def decode_private_key(text: PemInput):
    """
    Parses unencrypted PEM text into a private key object.

    Raises:
        MalformedPemError: If the text is not an unencrypted PEM private key.
    """
    data = _as_bytes(text, "private key")
    try:
        return serialization.load_pem_private_key(data, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise MalformedPemError("private key", str(e)) from e


def decode_public_key(text: PemInput):
    """
    Parses PEM text into a public key object.

    Raises:
        MalformedPemError: If the text is not a PEM public key.
    """
    data = _as_bytes(text, "public key")
    try:
        return serialization.load_pem_public_key(data)
    except (ValueError, UnsupportedAlgorithm) as e:
        raise MalformedPemError("public key", str(e)) from e
