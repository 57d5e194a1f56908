"""
This module contains constants used throughout the pyselfca library,
including key parameters, validity defaults, and the artifact file layout.
"""

# RSA key generation
SUPPORTED_KEY_SIZES = (2048, 4096)
DEFAULT_KEY_SIZE = 4096
PUBLIC_EXPONENT = 65537

# Certificate defaults
DEFAULT_VALIDITY_YEARS = 5
DEFAULT_SERIAL_NUMBER = 0x01

# Persisted artifact suffixes: <name>.cert, <name>.key, <name>.pub.key
CERT_SUFFIX = ".cert"
PRIVATE_KEY_SUFFIX = ".key"
PUBLIC_KEY_SUFFIX = ".pub.key"

# Fallback subject values
UNSET_VALUE = "None"
# X.509 requires a two letter country code, so "None" cannot be encoded here.
UNSET_COUNTRY = "XX"

CLIENT_COMMON_NAME = "localhost"
CLIENT_COUNTRY = "US"
CLIENT_STATE = "Georgia"
CLIENT_LOCALITY = "Atlanta"
CLIENT_ORGANIZATION = UNSET_VALUE
CLIENT_ORGANIZATIONAL_UNIT = "example"
