from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from .constants import IDENTITY_FIELD, SIGNATURE_LENGTH
from .exceptions import InvalidSignatureEncoding
from .utils import b64_decode


class SignedEnvelope(BaseModel):
    """A message, its detached Ed25519 signature and an optional identity hint.

    Only ``message`` is covered by the signature. ``identity`` selects which
    published keys to try and is never proof of who signed.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    message: StrictStr = Field(..., description="Signed text, carried verbatim.")
    signature: StrictStr = Field(..., description="Base64 of the 64-byte signature.")
    identity: StrictStr | None = Field(
        default=None,
        alias=IDENTITY_FIELD,
        description="Opaque label used to look up candidate public keys.",
    )

    @field_validator("message")
    @classmethod
    def _message_is_utf8(cls, v: str) -> str:
        # JSON can carry lone surrogates that have no UTF-8 form.
        try:
            v.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ValueError(f"message is not encodable as UTF-8: {e}") from e
        return v

    @property
    def message_bytes(self) -> bytes:
        return self.message.encode("utf-8")

    def signature_bytes(self) -> bytes:
        try:
            raw = b64_decode(self.signature)
        except ValueError as e:
            raise InvalidSignatureEncoding(f"signature is not valid base64: {e}") from e
        if len(raw) != SIGNATURE_LENGTH:
            raise InvalidSignatureEncoding(
                f"signature must decode to {SIGNATURE_LENGTH} bytes, got {len(raw)}"
            )
        return raw
