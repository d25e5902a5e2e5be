from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from . import config
from .constants import (
    ENVELOPE_FIELDS,
    IDENTITY_FIELD,
    MESSAGE_FIELD,
    SIGNATURE_FIELD,
    SIGNATURE_LENGTH,
)
from .exceptions import InvalidSignatureEncoding, MalformedEnvelope
from .models import SignedEnvelope
from .utils import b64_encode, ensure_text

logger = logging.getLogger(__name__)


def build_envelope(
    message: str | bytes, signature: bytes, identity: str | None = None
) -> SignedEnvelope:
    """Assemble an envelope from the signed text and the raw signature bytes."""
    try:
        text = ensure_text(message, "message")
    except ValueError as e:
        raise MalformedEnvelope(str(e)) from e
    if not isinstance(signature, bytes | bytearray):
        raise InvalidSignatureEncoding("signature must be bytes")
    if len(signature) != SIGNATURE_LENGTH:
        raise InvalidSignatureEncoding(
            f"signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}"
        )
    if identity is not None and not isinstance(identity, str):
        raise MalformedEnvelope("identity must be str or None")
    return SignedEnvelope.model_validate(
        {
            MESSAGE_FIELD: text,
            SIGNATURE_FIELD: b64_encode(bytes(signature)),
            IDENTITY_FIELD: identity,
        }
    )


def encode_envelope(envelope: SignedEnvelope, *, pretty: bool = False) -> str:
    """Serialize to JSON; compact by default, 2-space indented when ``pretty``.

    An absent identity is omitted entirely; an empty one is kept.
    """
    return envelope.model_dump_json(
        by_alias=True, exclude_none=True, indent=2 if pretty else None
    )


def encode(
    message: str | bytes,
    signature: bytes,
    identity: str | None = None,
    *,
    pretty: bool = False,
) -> str:
    return encode_envelope(build_envelope(message, signature, identity), pretty=pretty)


def _enforce_schema(obj: dict[str, Any], *, strict: bool) -> None:
    if strict or config.strict_envelopes():
        unknown = set(obj) - ENVELOPE_FIELDS
        if unknown:
            raise MalformedEnvelope(f"unknown envelope keys: {sorted(unknown)}")


def decode_envelope(raw: str | bytes, *, strict: bool = False) -> SignedEnvelope:
    """Parse a serialized envelope.

    Raises :class:`MalformedEnvelope` for structural problems and
    :class:`InvalidSignatureEncoding` when the signature is not base64 of
    exactly 64 bytes.
    """
    try:
        text = ensure_text(raw, "envelope")
        obj = json.loads(text)
    except ValueError as e:
        raise MalformedEnvelope(f"envelope is not valid JSON: {e}") from e
    if not isinstance(obj, dict):
        raise MalformedEnvelope(f"envelope must be a JSON object, got {type(obj).__name__}")
    _enforce_schema(obj, strict=strict)
    try:
        envelope = SignedEnvelope.model_validate(obj)
    except ValidationError as e:
        locs = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise MalformedEnvelope(f"invalid envelope fields {locs}: {e}") from e
    envelope.signature_bytes()
    logger.debug(
        "decoded envelope: %d message bytes, identity=%r",
        len(envelope.message_bytes),
        envelope.identity,
    )
    return envelope
