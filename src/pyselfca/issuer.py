"""
This module issues client (leaf) certificates signed by a RootAuthority.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from cryptography import x509

from .authority import RootAuthority
from .certificate import (
    CertificateInfo,
    CertificateOptions,
    ExtensionProfile,
    Validity,
    build_certificate,
)
from .keys import KeyPair, generate_key_pair, validate_key_size
from .names import CLIENT_DEFAULTS, SubjectDefaults, build_name
from .pem import PemBundle, encode_certificate, encode_private_key, encode_public_key
from .signing import sign_certificate
from .store import FilePemStore, write_bundle


logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class IssuedCertificate:
    """
    A client certificate, its own key pair and the authority that signed it.
    """
    certificate: x509.Certificate
    key_pair: KeyPair = field(repr=False)
    authority: RootAuthority = field(repr=False)
    created_on: datetime
    expiry_on: datetime

    @property
    def info(self) -> CertificateInfo:
        return CertificateInfo.from_cryptography(self.certificate)

    def to_pem_bundle(self) -> PemBundle:
        return PemBundle(
            certificate=encode_certificate(self.certificate),
            private_key=encode_private_key(self.key_pair.private_key),
            public_key=encode_public_key(self.key_pair.public_key),
        )

    def persist(self, folder, name: str, store: Optional[FilePemStore] = None):
        """Writes <name>.cert, <name>.key and <name>.pub.key into folder."""
        return write_bundle(self.to_pem_bundle(), folder, name, store)


class ClientCertificateIssuer:
    """
    Issues client certificates. The issuer holds no mutable state, so one
    instance and one RootAuthority may serve concurrent issue() calls.
    """

    def __init__(self, defaults: SubjectDefaults = CLIENT_DEFAULTS):
        """
        Args:
            defaults: Fallback subject fields for client certificates. Callers
                that want the local host name as commonName resolve it and pass
                CLIENT_DEFAULTS.with_common_name(...).
        """
        self.defaults = defaults

    def issue(self, options: Optional[CertificateOptions], authority: RootAuthority) -> IssuedCertificate:
        """
        Generates a key pair and a certificate signed by authority.

        Args:
            options: Expiry, key size, subject and serial for the client certificate.
            authority: The root authority whose private key signs the certificate.

        Returns:
            The IssuedCertificate.

        Raises:
            InvalidKeySizeError: If options.bits is not supported.
            InvalidValidityWindowError: If options.expiry_on falls before the
                creation timestamp (truncated to whole seconds).
            SigningError: If the authority's private key cannot sign.
        """
        options = options or CertificateOptions()
        validate_key_size(options.bits)
        validity = Validity.starting_at(datetime.now(timezone.utc), options.expiry_on)

        key_pair = generate_key_pair(options.bits)
        subject = build_name(options.subject, self.defaults)
        builder = build_certificate(
            serial_number=options.serial_number,
            validity=validity,
            subject=subject,
            issuer=authority.subject,
            public_key=key_pair.public_key,
            profile=ExtensionProfile.LEAF,
        )
        cert = sign_certificate(builder, authority.private_key)

        logger.info(
            "Issued certificate for %s signed by %s",
            subject.rfc4514_string(),
            authority.subject.rfc4514_string(),
        )
        return IssuedCertificate(
            certificate=cert,
            key_pair=key_pair,
            authority=authority,
            created_on=validity.not_before,
            expiry_on=validity.not_after,
        )
