"""
This module provides RSA key pair generation for root and client certificates.
"""
import logging
from dataclasses import dataclass

from cryptography.hazmat.primitives.asymmetric import rsa

from .constants import PUBLIC_EXPONENT, SUPPORTED_KEY_SIZES
from .exceptions import InvalidKeySizeError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyPair:
    """
    An RSA key pair owned by exactly one certificate.
    """
    public_key: rsa.RSAPublicKey
    private_key: rsa.RSAPrivateKey

    @property
    def bits(self) -> int:
        return self.private_key.key_size


def validate_key_size(bits: int) -> int:
    """
    Checks that bits is one of the supported RSA modulus sizes.

    Raises:
        InvalidKeySizeError: If bits is not supported.
    """
    # bool is an int subclass; True must not pass as a key size.
    if isinstance(bits, bool) or bits not in SUPPORTED_KEY_SIZES:
        raise InvalidKeySizeError(bits, SUPPORTED_KEY_SIZES)
    return bits


def generate_key_pair(bits: int) -> KeyPair:
    """
    Generates a fresh RSA key pair.

    Args:
        bits: The modulus size, 2048 or 4096.

    Returns:
        A KeyPair holding the private key and its public half.

    Raises:
        InvalidKeySizeError: If bits is not supported. Raised before any key
            material is generated.
    """
    validate_key_size(bits)
    logger.debug("Generating %d-bit RSA key pair", bits)
    private_key = rsa.generate_private_key(public_exponent=PUBLIC_EXPONENT, key_size=bits)
    return KeyPair(public_key=private_key.public_key(), private_key=private_key)
