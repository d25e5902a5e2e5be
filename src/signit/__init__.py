from .constants import IDENTITY_FIELD, SIGNATURE_LENGTH
from .envelope import build_envelope, decode_envelope, encode, encode_envelope
from .exceptions import (
    ConfigurationError,
    InvalidSignatureEncoding,
    KeyFetchError,
    KeyLoadError,
    MalformedEnvelope,
    NoDefaultKeyLocation,
    ReasonCode,
    SignatureInvalid,
    SignitError,
    UnsupportedKeyAlgorithm,
    reason_code_for_exception,
)
from .keys import (
    fetch_published_keys,
    load_private_key,
    load_public_key,
    parse_published_keys,
    resolve_private_key,
    resolve_public_keys,
)
from .models import SignedEnvelope
from .signers import BaseSigner, Ed25519Signer, sign_message
from .verify import verify, verify_envelope, verify_or_raise

__all__ = [
    "SignedEnvelope",
    "build_envelope",
    "encode",
    "encode_envelope",
    "decode_envelope",
    "BaseSigner",
    "Ed25519Signer",
    "sign_message",
    "load_private_key",
    "load_public_key",
    "parse_published_keys",
    "fetch_published_keys",
    "resolve_private_key",
    "resolve_public_keys",
    "verify",
    "verify_or_raise",
    "verify_envelope",
    # exceptions
    "SignitError",
    "MalformedEnvelope",
    "InvalidSignatureEncoding",
    "UnsupportedKeyAlgorithm",
    "KeyLoadError",
    "NoDefaultKeyLocation",
    "KeyFetchError",
    "ConfigurationError",
    "SignatureInvalid",
    "ReasonCode",
    "reason_code_for_exception",
    "IDENTITY_FIELD",
    "SIGNATURE_LENGTH",
    "__version__",
]
try:  # prefer single source of truth from installed metadata
    from importlib.metadata import version as _pkg_version

    __version__ = _pkg_version("signit")
except Exception:  # pragma: no cover
    __version__ = "0.0.0"
