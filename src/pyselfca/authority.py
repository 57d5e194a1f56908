"""
This module provides the self-signed root certificate authority.

A RootAuthority is either generated fresh with RootAuthority.generate() or
reconstructed from PEM text with RootAuthority.load(). Both produce the same
immutable object whose certificate has issuer == subject and cA == true.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from .certificate import (
    CertificateInfo,
    CertificateOptions,
    ExtensionProfile,
    Validity,
    build_certificate,
)
from .exceptions import InvalidAuthorityError, MissingPublicKeyError
from .keys import generate_key_pair, validate_key_size
from .names import AUTHORITY_DEFAULTS, build_name
from .pem import (
    PemBundle,
    decode_certificate,
    decode_private_key,
    decode_public_key,
    encode_certificate,
    encode_private_key,
    encode_public_key,
)
from .signing import sign_certificate, verify_signature
from .store import FilePemStore, read_bundle, write_bundle


logger = logging.getLogger(__name__)


def _spki(public_key) -> bytes:
    return public_key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


@dataclass(frozen=True, eq=False)
class RootAuthority:
    """
    A self-signed root certificate authority and its key material.

    Attributes:
        certificate: The self-signed CA certificate.
        private_key: The CA private key used to sign issued certificates.
        public_key: The CA public key, or None when loaded without one.
        created_on: The start of the validity window.
        expiry_on: The end of the validity window.
    """
    certificate: x509.Certificate
    private_key: object = field(repr=False)
    public_key: Optional[object]
    created_on: datetime
    expiry_on: datetime

    @classmethod
    def generate(cls, options: Optional[CertificateOptions] = None) -> "RootAuthority":
        """
        Generates a new key pair and a self-signed CA certificate.

        Args:
            options: Expiry, key size, subject and serial. Missing subject
                fields fall back to AUTHORITY_DEFAULTS.

        Raises:
            InvalidKeySizeError: If options.bits is not supported.
            InvalidValidityWindowError: If options.expiry_on falls before the
                creation timestamp (truncated to whole seconds).
            SigningError: If the certificate cannot be signed.
        """
        options = options or CertificateOptions()
        validate_key_size(options.bits)
        validity = Validity.starting_at(datetime.now(timezone.utc), options.expiry_on)

        key_pair = generate_key_pair(options.bits)
        subject = build_name(options.subject, AUTHORITY_DEFAULTS)
        builder = build_certificate(
            serial_number=options.serial_number,
            validity=validity,
            subject=subject,
            issuer=subject,
            public_key=key_pair.public_key,
            profile=ExtensionProfile.CA,
        )
        cert = sign_certificate(builder, key_pair.private_key)

        logger.info(
            "Generated root authority %s valid until %s",
            subject.rfc4514_string(),
            validity.not_after.isoformat(),
        )
        return cls(
            certificate=cert,
            private_key=key_pair.private_key,
            public_key=key_pair.public_key,
            created_on=validity.not_before,
            expiry_on=validity.not_after,
        )

    @classmethod
    def load(cls, bundle: PemBundle) -> "RootAuthority":
        """
        Reconstructs a root authority from previously persisted PEM text.

        The public key is only set when bundle.public_key is present.

        Raises:
            MalformedPemError: If any PEM text cannot be parsed.
            InvalidAuthorityError: If the certificate is not a self-signed CA,
                the private key is not RSA, or the keys do not belong to it.
        """
        cert = decode_certificate(bundle.certificate)
        private_key = decode_private_key(bundle.private_key)
        public_key = decode_public_key(bundle.public_key) if bundle.public_key else None

        if cert.issuer != cert.subject:
            raise InvalidAuthorityError(
                f"Certificate issuer {cert.issuer.rfc4514_string()} does not match "
                f"subject {cert.subject.rfc4514_string()}"
            )
        if not CertificateInfo.from_cryptography(cert).is_ca:
            raise InvalidAuthorityError("Certificate does not carry basicConstraints cA=true")
        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise InvalidAuthorityError(
                f"Authority private key must be RSA, got {type(private_key).__name__}"
            )

        cert_spki = _spki(cert.public_key())
        if _spki(private_key.public_key()) != cert_spki:
            raise InvalidAuthorityError("Private key does not match the certificate")
        if public_key is not None and _spki(public_key) != cert_spki:
            raise InvalidAuthorityError("Public key does not match the certificate")

        logger.info("Loaded root authority %s", cert.subject.rfc4514_string())
        return cls(
            certificate=cert,
            private_key=private_key,
            public_key=public_key,
            created_on=cert.not_valid_before_utc,
            expiry_on=cert.not_valid_after_utc,
        )

    @property
    def subject(self) -> x509.Name:
        return self.certificate.subject

    @property
    def info(self) -> CertificateInfo:
        return CertificateInfo.from_cryptography(self.certificate)

    def require_public_key(self):
        """
        Returns the public key.

        Raises:
            MissingPublicKeyError: If the authority was loaded without one.
        """
        if self.public_key is None:
            raise MissingPublicKeyError(
                f"Root authority {self.subject.rfc4514_string()} was loaded without a public key"
            )
        return self.public_key

    def has_issued(self, cert: x509.Certificate) -> bool:
        """
        Checks that cert names this authority as issuer and carries its signature.
        """
        if cert.issuer != self.subject:
            return False
        return verify_signature(cert, self.certificate.public_key())

    def to_pem_bundle(self) -> PemBundle:
        return PemBundle(
            certificate=encode_certificate(self.certificate),
            private_key=encode_private_key(self.private_key),
            public_key=encode_public_key(self.public_key) if self.public_key is not None else None,
        )

    def persist(self, folder, name: str, store: Optional[FilePemStore] = None):
        """
        Writes <name>.cert, <name>.key and, if a public key is set, <name>.pub.key
        into folder.
        """
        return write_bundle(self.to_pem_bundle(), folder, name, store)


def load_root_authority_from_pem_files(
    cert_path,
    private_key_path,
    public_key_path=None,
    store: Optional[FilePemStore] = None,
) -> RootAuthority:
    """
    Reads PEM files and loads the root authority they describe.

    Raises:
        NotFoundError: If a requested file does not exist.
        MalformedPemError: If a file does not hold valid PEM.
        InvalidAuthorityError: If the material is not a self-signed CA.
    """
    bundle = read_bundle(cert_path, private_key_path, public_key_path, store)
    return RootAuthority.load(bundle)
