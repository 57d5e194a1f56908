"""
This module signs assembled certificates and verifies issuer signatures.
"""
import logging

from cryptography import x509
from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .exceptions import SigningError


logger = logging.getLogger(__name__)


def sign_certificate(builder: x509.CertificateBuilder, private_key) -> x509.Certificate:
    """
    Signs an assembled certificate with an issuer's RSA private key using
    PKCS#1 v1.5 over SHA-256.

    Args:
        builder: The unsigned certificate.
        private_key: The issuer's private key. For a root this is its own key.

    Returns:
        The signed certificate.

    Raises:
        SigningError: If the key is not an RSA private key or signing fails.
    """
    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise SigningError(
            f"Signing key must be an RSA private key, got {type(private_key).__name__}"
        )

    try:
        cert = builder.sign(private_key, hashes.SHA256())
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise SigningError(f"Failed to sign certificate: {e}") from e

    logger.debug("Signed certificate serial=%d", cert.serial_number)
    return cert


def verify_signature(cert: x509.Certificate, issuer_public_key) -> bool:
    """
    Verifies that cert was signed by the private half of issuer_public_key.

    Args:
        cert: The certificate to check.
        issuer_public_key: The issuer's RSA public key.

    Returns:
        True if the signature is valid, False otherwise.
    """
    if not isinstance(issuer_public_key, rsa.RSAPublicKey):
        return False

    try:
        issuer_public_key.verify(
            cert.signature,
            cert.tbs_certificate_bytes,
            padding.PKCS1v15(),
            cert.signature_hash_algorithm,
        )
    except InvalidSignature:
        return False
    return True
