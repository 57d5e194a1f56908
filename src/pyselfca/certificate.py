"""
This module assembles unsigned X.509 certificates and defines data structures
for holding parsed certificate information.
"""
import enum
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Dict, FrozenSet, Optional, Union

from cryptography import x509
from cryptography.hazmat.primitives.asymmetric import rsa

from .constants import DEFAULT_KEY_SIZE, DEFAULT_SERIAL_NUMBER, DEFAULT_VALIDITY_YEARS
from .exceptions import InvalidValidityWindowError
from .names import SubjectOptions, name_to_dict


logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]

# KeyUsage attribute name -> name reported in CertificateInfo.key_usage
KEY_USAGE_NAMES = {
    "digital_signature": "digitalSignature",
    "content_commitment": "nonRepudiation",
    "key_encipherment": "keyEncipherment",
    "data_encipherment": "dataEncipherment",
    "key_agreement": "keyAgreement",
    "key_cert_sign": "keyCertSign",
    "crl_sign": "cRLSign",
}


def to_utc(value: DateLike) -> datetime:
    """
    Normalizes a date or datetime to an aware UTC datetime with whole seconds.

    Naive datetimes are taken to be UTC; a bare date means midnight UTC.
    """
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    # X.509 times carry no fractional seconds.
    return value.replace(microsecond=0)


def add_years(value: datetime, years: int) -> datetime:
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        # Feb 29 in a non-leap target year
        return value.replace(year=value.year + years, day=28)


@dataclass(frozen=True)
class Validity:
    """
    A certificate validity window. Both ends are aware UTC datetimes.
    """
    not_before: datetime
    not_after: datetime

    def __post_init__(self):
        if self.not_before > self.not_after:
            raise InvalidValidityWindowError(self.not_before, self.not_after)

    @classmethod
    def starting_at(cls, created_on: DateLike, expiry_on: Optional[DateLike] = None) -> "Validity":
        """
        Creates a window opening at created_on and closing at expiry_on, or
        DEFAULT_VALIDITY_YEARS after created_on when no expiry is given.

        Raises:
            InvalidValidityWindowError: If expiry_on precedes created_on.
        """
        not_before = to_utc(created_on)
        if expiry_on is None:
            not_after = add_years(not_before, DEFAULT_VALIDITY_YEARS)
        else:
            not_after = to_utc(expiry_on)
        return cls(not_before=not_before, not_after=not_after)


class ExtensionProfile(enum.Enum):
    CA = "ca"
    LEAF = "leaf"


def extensions_for(profile: ExtensionProfile, public_key: rsa.RSAPublicKey):
    """
    Returns the (extension, critical) pairs for a profile.

    Leaf certificates currently carry the same extension set as the CA:
    basicConstraints cA=true, the full keyUsage set and a subjectKeyIdentifier.
    """
    if profile not in (ExtensionProfile.CA, ExtensionProfile.LEAF):
        raise ValueError(f"Invalid extension profile: {profile}")

    return [
        (x509.BasicConstraints(ca=True, path_length=None), True),
        (
            x509.KeyUsage(
                digital_signature=True,
                content_commitment=True,
                key_encipherment=True,
                data_encipherment=True,
                key_agreement=False,
                key_cert_sign=True,
                crl_sign=False,
                encipher_only=False,
                decipher_only=False,
            ),
            True,
        ),
        (x509.SubjectKeyIdentifier.from_public_key(public_key), False),
    ]


def build_certificate(
    serial_number: int,
    validity: Validity,
    subject: x509.Name,
    issuer: x509.Name,
    public_key: rsa.RSAPublicKey,
    profile: ExtensionProfile,
) -> x509.CertificateBuilder:
    """
    Assembles an unsigned certificate.

    Args:
        serial_number: The certificate serial number.
        validity: The validity window.
        subject: The subject distinguished name.
        issuer: The issuer distinguished name (equal to subject when self-signed).
        public_key: The subject's public key.
        profile: Which extension profile to attach.

    Returns:
        A cryptography CertificateBuilder ready to be signed.

    Raises:
        InvalidValidityWindowError: If validity.not_before is after validity.not_after.
    """
    if validity.not_before > validity.not_after:
        raise InvalidValidityWindowError(validity.not_before, validity.not_after)

    builder = (
        x509.CertificateBuilder()
        .serial_number(serial_number)
        .not_valid_before(validity.not_before)
        .not_valid_after(validity.not_after)
        .subject_name(subject)
        .issuer_name(issuer)
        .public_key(public_key)
    )
    for extension, critical in extensions_for(profile, public_key):
        builder = builder.add_extension(extension, critical=critical)

    logger.debug(
        "Assembled %s certificate serial=%d for %s",
        profile.value,
        serial_number,
        subject.rfc4514_string(),
    )
    return builder


@dataclass
class CertificateInfo:
    """
    A dataclass to hold the fields of a certificate that pyselfca consumes.
    """
    subject: Dict[str, str]
    issuer: Dict[str, str]
    serial_number: int
    not_valid_before: datetime
    not_valid_after: datetime
    is_ca: bool
    key_usage: FrozenSet[str]
    has_subject_key_identifier: bool
    signature: bytes

    @classmethod
    def from_cryptography(cls, cert: x509.Certificate):
        """
        Creates a CertificateInfo instance from a cryptography Certificate object.
        """
        try:
            is_ca = cert.extensions.get_extension_for_class(x509.BasicConstraints).value.ca
        except x509.ExtensionNotFound:
            is_ca = False

        try:
            usage = cert.extensions.get_extension_for_class(x509.KeyUsage).value
            key_usage = frozenset(
                label for attr, label in KEY_USAGE_NAMES.items() if getattr(usage, attr)
            )
        except x509.ExtensionNotFound:
            key_usage = frozenset()

        try:
            cert.extensions.get_extension_for_class(x509.SubjectKeyIdentifier)
            has_ski = True
        except x509.ExtensionNotFound:
            has_ski = False

        return cls(
            subject=name_to_dict(cert.subject),
            issuer=name_to_dict(cert.issuer),
            serial_number=cert.serial_number,
            not_valid_before=cert.not_valid_before_utc,
            not_valid_after=cert.not_valid_after_utc,
            is_ca=is_ca,
            key_usage=key_usage,
            has_subject_key_identifier=has_ski,
            signature=cert.signature,
        )


@dataclass
class CertificateOptions:
    """
    Caller options for creating a root or client certificate.

    Attributes:
        expiry_on: When the certificate expires. Defaults to five years after creation.
        bits: RSA modulus size, 2048 or 4096.
        subject: Subject fields; missing ones come from the issuer's default set.
        serial_number: The certificate serial number.
    """
    expiry_on: Optional[DateLike] = None
    bits: int = DEFAULT_KEY_SIZE
    subject: Optional[SubjectOptions] = None
    serial_number: int = DEFAULT_SERIAL_NUMBER
