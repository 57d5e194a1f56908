"""
This module builds X.509 distinguished names from subject options.

Attributes are always emitted in the same order (CN, C, ST, L, O, OU) so that
a self-signed certificate's issuer and subject encode identically.
"""
import logging
from dataclasses import dataclass, replace
from typing import Dict, Optional

from cryptography import x509
from cryptography.x509.oid import NameOID

from .constants import (
    CLIENT_COMMON_NAME,
    CLIENT_COUNTRY,
    CLIENT_LOCALITY,
    CLIENT_ORGANIZATION,
    CLIENT_ORGANIZATIONAL_UNIT,
    CLIENT_STATE,
    UNSET_COUNTRY,
    UNSET_VALUE,
)


logger = logging.getLogger(__name__)

# (field name, OID) in encoding order.
NAME_FIELDS = (
    ("common_name", NameOID.COMMON_NAME),
    ("country_name", NameOID.COUNTRY_NAME),
    ("state_or_province_name", NameOID.STATE_OR_PROVINCE_NAME),
    ("locality_name", NameOID.LOCALITY_NAME),
    ("organization_name", NameOID.ORGANIZATION_NAME),
    ("organizational_unit_name", NameOID.ORGANIZATIONAL_UNIT_NAME),
)


@dataclass
class SubjectOptions:
    """
    Subject fields supplied by the caller. Any field left as None (or empty)
    is filled from a SubjectDefaults set.
    """
    common_name: Optional[str] = None
    country_name: Optional[str] = None
    state_or_province_name: Optional[str] = None
    locality_name: Optional[str] = None
    organization_name: Optional[str] = None
    organizational_unit_name: Optional[str] = None


@dataclass(frozen=True)
class SubjectDefaults:
    """
    Fallback values for every distinguished name field.
    """
    common_name: str
    country_name: str
    state_or_province_name: str
    locality_name: str
    organization_name: str
    organizational_unit_name: str

    def with_common_name(self, common_name: str) -> "SubjectDefaults":
        """Returns a copy whose commonName fallback is common_name."""
        return replace(self, common_name=common_name)


AUTHORITY_DEFAULTS = SubjectDefaults(
    common_name=UNSET_VALUE,
    country_name=UNSET_COUNTRY,
    state_or_province_name=UNSET_VALUE,
    locality_name=UNSET_VALUE,
    organization_name=UNSET_VALUE,
    organizational_unit_name=UNSET_VALUE,
)

CLIENT_DEFAULTS = SubjectDefaults(
    common_name=CLIENT_COMMON_NAME,
    country_name=CLIENT_COUNTRY,
    state_or_province_name=CLIENT_STATE,
    locality_name=CLIENT_LOCALITY,
    organization_name=CLIENT_ORGANIZATION,
    organizational_unit_name=CLIENT_ORGANIZATIONAL_UNIT,
)


def build_name(options: Optional[SubjectOptions], defaults: SubjectDefaults) -> x509.Name:
    """
    Builds a distinguished name, taking each field from options when present
    and from defaults otherwise.

    Args:
        options: Caller supplied subject fields, or None to use only defaults.
        defaults: The fallback set for missing fields.

    Returns:
        An x509.Name with the six attributes in fixed order.

    Raises:
        ValueError: Propagated from cryptography when a value cannot be
            encoded (for example a country code that is not two characters).
    """
    attributes = []
    for field_name, oid in NAME_FIELDS:
        value = getattr(options, field_name, None) if options is not None else None
        if not value:
            value = getattr(defaults, field_name)
        attributes.append(x509.NameAttribute(oid, value))

    name = x509.Name(attributes)
    logger.debug("Built distinguished name %s", name.rfc4514_string())
    return name


def name_to_dict(name: x509.Name) -> Dict[str, str]:
    """
    Returns the attributes of name as an ordered {short name: value} mapping.
    """
    return {attr.rfc4514_attribute_name: attr.value for attr in name}
