from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from .envelope import decode_envelope
from .exceptions import (
    SignatureInvalid,
    SignitError,
    UnsupportedKeyAlgorithm,
    reason_code_for_exception,
)
from .models import SignedEnvelope

logger = logging.getLogger(__name__)


def _verify_sig_ed25519(key: Any, message: bytes, sig: bytes) -> bool:
    if not isinstance(key, Ed25519PublicKey):
        raise UnsupportedKeyAlgorithm(
            f"expected an Ed25519 public key, got {type(key).__name__}"
        )
    try:
        key.verify(sig, message)
        return True
    except InvalidSignature:
        return False


def verify(envelope: SignedEnvelope, candidate_keys: Iterable[Any]) -> bool:
    """True iff at least one candidate key validates the envelope's signature.

    A bad signature encoding raises; a non-matching key set returns False.
    """
    sig = envelope.signature_bytes()
    message = envelope.message_bytes
    for idx, key in enumerate(candidate_keys):
        if _verify_sig_ed25519(key, message, sig):
            logger.debug("signature validated by candidate key %d", idx)
            return True
    logger.debug("no candidate key validated the signature")
    return False


def verify_or_raise(envelope: SignedEnvelope, candidate_keys: Iterable[Any]) -> None:
    if not verify(envelope, candidate_keys):
        raise SignatureInvalid("no candidate key validated the signature")


def verify_envelope(
    envelope: SignedEnvelope | str | bytes,
    candidate_keys: Iterable[Any],
) -> tuple[bool, str | None]:
    """Non-raising API.

    Returns (ok, reason) where reason is a short string when not ok:
    ``signature_invalid`` for a negative result, otherwise the reason code
    of the error that stopped verification.
    """
    try:
        if not isinstance(envelope, SignedEnvelope):
            envelope = decode_envelope(envelope)
        verify_or_raise(envelope, candidate_keys)
        return True, None
    except (SignitError, SignatureInvalid) as e:
        return False, reason_code_for_exception(e)
