# This file initializes the pyselfca package.
__version__ = "0.1.0"

from .authority import RootAuthority, load_root_authority_from_pem_files
from .certificate import CertificateInfo, CertificateOptions, ExtensionProfile, Validity
from .exceptions import (
    PKIError,
    InvalidKeySizeError,
    InvalidValidityWindowError,
    SigningError,
    MalformedPemError,
    MissingPublicKeyError,
    InvalidAuthorityError,
    NotFoundError,
)
from .issuer import ClientCertificateIssuer, IssuedCertificate
from .keys import KeyPair, generate_key_pair
from .names import AUTHORITY_DEFAULTS, CLIENT_DEFAULTS, SubjectDefaults, SubjectOptions
from .pem import PemBundle
from .store import FilePemStore
