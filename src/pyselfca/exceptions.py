"""
Custom exceptions for the pyselfca library.
"""

class PKIError(Exception):
    """Base exception class for all pyselfca errors."""
    pass

class InvalidKeySizeError(PKIError, ValueError):
    """
    Raised when an RSA modulus size outside the supported set is requested.
    """
    def __init__(self, bits, supported):
        self.bits = bits
        self.supported = tuple(supported)
        sizes = ", ".join(str(size) for size in self.supported)
        super().__init__(f"Unsupported key size: {bits} (supported: {sizes})")

class InvalidValidityWindowError(PKIError, ValueError):
    """
    Raised when a certificate's notBefore falls after its notAfter.
    """
    def __init__(self, not_before, not_after):
        self.not_before = not_before
        self.not_after = not_after
        super().__init__(
            f"Invalid validity window: notBefore {not_before.isoformat()} "
            f"is after notAfter {not_after.isoformat()}"
        )

class SigningError(PKIError):
    """Raised when a certificate cannot be signed with the given key."""
    pass

class MalformedPemError(PKIError, ValueError):
    """
    Raised when PEM text cannot be parsed into the expected object.
    """
    def __init__(self, kind, reason=None):
        self.kind = kind
        message = f"Malformed PEM {kind}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

class MissingPublicKeyError(PKIError):
    """
    Raised when an operation needs a public key that was never loaded.
    """
    pass

class InvalidAuthorityError(PKIError):
    """
    Raised when loaded material does not describe a self-signed root authority.
    """
    pass

class NotFoundError(PKIError, FileNotFoundError):
    """
    Raised by a PEM store when the requested artifact does not exist.
    """
    def __init__(self, path):
        self.path = path
        super().__init__(f"PEM artifact not found: {path}")
