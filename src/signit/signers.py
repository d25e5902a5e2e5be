"""Detached Ed25519 signing.

The signature covers the UTF-8 message bytes exactly as given, with no
pre-hash beyond Ed25519's own and no normalization. The identity attached to
an envelope is not part of the signed bytes.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Any

from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from .envelope import build_envelope
from .exceptions import MalformedEnvelope, UnsupportedKeyAlgorithm
from .keys import resolve_private_key
from .models import SignedEnvelope
from .utils import ensure_text


class BaseSigner(ABC):
    @abstractmethod
    def sign(self, msg: bytes) -> bytes: ...

    def sign_envelope(self, message: str | bytes, identity: str | None = None) -> SignedEnvelope:
        try:
            text = ensure_text(message, "message")
        except ValueError as e:
            raise MalformedEnvelope(str(e)) from e
        return build_envelope(text, self.sign(text.encode("utf-8")), identity)


class Ed25519Signer(BaseSigner):
    """Signer backed by an in-memory Ed25519 private key."""

    def __init__(self, private_key: Any) -> None:
        if not isinstance(private_key, Ed25519PrivateKey):
            raise UnsupportedKeyAlgorithm(
                f"expected an Ed25519 private key, got {type(private_key).__name__}"
            )
        self._sk = private_key

    @classmethod
    def from_file(
        cls, path: str | os.PathLike[str] | None = None, *, password: bytes | None = None
    ) -> Ed25519Signer:
        return cls(resolve_private_key(path, password=password))

    def public_key(self) -> Ed25519PublicKey:
        return self._sk.public_key()

    def sign(self, msg: bytes) -> bytes:
        if not isinstance(msg, bytes):
            raise ValueError("message must be bytes")
        return self._sk.sign(msg)


def sign_message(
    private_key: Any, message: str | bytes, identity: str | None = None
) -> SignedEnvelope:
    """Sign ``message`` and wrap it in an envelope carrying ``identity`` verbatim."""
    return Ed25519Signer(private_key).sign_envelope(message, identity)
