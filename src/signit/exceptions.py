from __future__ import annotations

from enum import Enum


class SignitError(Exception):
    """Base class for every signit fault."""


class MalformedEnvelope(SignitError):
    pass


class InvalidSignatureEncoding(SignitError):
    pass


class KeyLoadError(SignitError):
    pass


class UnsupportedKeyAlgorithm(KeyLoadError):
    """A key was loaded but it is not Ed25519."""


class NoDefaultKeyLocation(SignitError):
    pass


class KeyFetchError(SignitError):
    pass


class ConfigurationError(SignitError):
    pass


class SignatureInvalid(Exception):
    """Verification ran and no candidate key matched.

    Not a :class:`SignitError`: a negative result is an outcome, not a fault.
    """


class ReasonCode(str, Enum):
    MALFORMED_ENVELOPE = "malformed_envelope"
    INVALID_SIGNATURE_ENCODING = "invalid_signature_encoding"
    UNSUPPORTED_KEY_ALGORITHM = "unsupported_key_algorithm"
    KEY_LOAD_ERROR = "key_load_error"
    NO_DEFAULT_KEY_LOCATION = "no_default_key_location"
    KEY_FETCH_ERROR = "key_fetch_error"
    CONFIGURATION_ERROR = "configuration_error"
    SIGNATURE_INVALID = "signature_invalid"
    INTERNAL_ERROR = "internal_error"


# Subclasses first so UnsupportedKeyAlgorithm is not reported as KeyLoadError.
_REASON_BY_TYPE: list[tuple[type[BaseException], ReasonCode]] = [
    (MalformedEnvelope, ReasonCode.MALFORMED_ENVELOPE),
    (InvalidSignatureEncoding, ReasonCode.INVALID_SIGNATURE_ENCODING),
    (UnsupportedKeyAlgorithm, ReasonCode.UNSUPPORTED_KEY_ALGORITHM),
    (KeyLoadError, ReasonCode.KEY_LOAD_ERROR),
    (NoDefaultKeyLocation, ReasonCode.NO_DEFAULT_KEY_LOCATION),
    (KeyFetchError, ReasonCode.KEY_FETCH_ERROR),
    (ConfigurationError, ReasonCode.CONFIGURATION_ERROR),
    (SignatureInvalid, ReasonCode.SIGNATURE_INVALID),
]


def reason_code_for_exception(exc: BaseException) -> str:
    """Map an exception to its short reason string."""
    for exc_type, code in _REASON_BY_TYPE:
        if isinstance(exc, exc_type):
            return code.value
    return ReasonCode.INTERNAL_ERROR.value
