from __future__ import annotations

import base64
import json

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from pydantic import ValidationError
from signit.envelope import build_envelope, decode_envelope, encode, encode_envelope
from signit.exceptions import InvalidSignatureEncoding, MalformedEnvelope
from signit.models import SignedEnvelope
from signit.signers import sign_message

SIG = bytes(range(64))
SIG_B64 = base64.b64encode(SIG).decode("ascii")


# --- Round trip ---


@pytest.mark.parametrize(
    "message",
    [
        "hello",
        "",
        "line one\nline two\n",
        "tab\tbell\x07nul\x00esc\x1b",
        "héllo wörld ✓ 署名",
        "  leading and trailing  \n\n",
    ],
)
@pytest.mark.parametrize("identity", [None, "alice", ""])
@pytest.mark.parametrize("pretty", [False, True])
def test_round_trip(message: str, identity: str | None, pretty: bool) -> None:
    out = encode(message, SIG, identity, pretty=pretty)
    env = decode_envelope(out)
    assert env.message == message
    assert env.signature_bytes() == SIG
    assert env.identity == identity


def test_round_trip_with_real_signature(sk: Ed25519PrivateKey) -> None:
    env = sign_message(sk, "multi\nline ✓")
    assert decode_envelope(encode_envelope(env)) == env
    assert decode_envelope(encode_envelope(env, pretty=True)) == env


def test_compact_has_no_insignificant_whitespace() -> None:
    out = encode("hello", SIG)
    assert "\n" not in out
    assert ": " not in out and ", " not in out
    assert json.loads(out) == {"message": "hello", "signature": SIG_B64}


def test_pretty_is_indented() -> None:
    out = encode("hello", SIG, "alice", pretty=True)
    assert out.startswith("{\n  ")
    assert json.loads(out) == {"message": "hello", "signature": SIG_B64, "github_user": "alice"}


def test_absent_identity_is_omitted_empty_is_kept() -> None:
    assert "github_user" not in json.loads(encode("m", SIG))
    assert json.loads(encode("m", SIG, ""))["github_user"] == ""


def test_field_order() -> None:
    out = encode("m", SIG, "alice")
    assert list(json.loads(out)) == ["message", "signature", "github_user"]


def test_decode_accepts_bytes() -> None:
    env = decode_envelope(encode("bytes ✓", SIG).encode("utf-8"))
    assert env.message == "bytes ✓"


def test_decode_null_identity_is_absent() -> None:
    raw = json.dumps({"message": "m", "signature": SIG_B64, "github_user": None})
    assert decode_envelope(raw).identity is None


def test_envelope_is_immutable() -> None:
    env = build_envelope("m", SIG)
    with pytest.raises(ValidationError):
        env.message = "changed"  # type: ignore[misc]


# --- Malformed input ---


def test_decode_missing_message() -> None:
    with pytest.raises(MalformedEnvelope):
        decode_envelope(json.dumps({"signature": SIG_B64}))


def test_decode_missing_signature() -> None:
    with pytest.raises(MalformedEnvelope):
        decode_envelope(json.dumps({"message": "m"}))


@pytest.mark.parametrize("raw", ["", "not json", "{", "[1, 2]", '"string"', "null"])
def test_decode_not_an_object(raw: str) -> None:
    with pytest.raises(MalformedEnvelope):
        decode_envelope(raw)


def test_decode_wrong_field_types() -> None:
    with pytest.raises(MalformedEnvelope):
        decode_envelope(json.dumps({"message": 42, "signature": SIG_B64}))
    with pytest.raises(MalformedEnvelope):
        decode_envelope(json.dumps({"message": "m", "signature": SIG_B64, "github_user": 7}))


def test_decode_invalid_utf8_bytes() -> None:
    with pytest.raises(MalformedEnvelope):
        decode_envelope(b'{"message": "\xff", "signature": ""}')


def test_decode_signature_not_base64() -> None:
    with pytest.raises(InvalidSignatureEncoding):
        decode_envelope(json.dumps({"message": "m", "signature": "not-base64!!"}))


@pytest.mark.parametrize("length", [0, 32, 63, 65, 128])
def test_decode_signature_wrong_length(length: int) -> None:
    sig = base64.b64encode(bytes(length)).decode("ascii")
    with pytest.raises(InvalidSignatureEncoding):
        decode_envelope(json.dumps({"message": "m", "signature": sig}))


def test_decode_unknown_keys_ignored_by_default() -> None:
    raw = json.dumps({"message": "m", "signature": SIG_B64, "extra": 1})
    assert decode_envelope(raw).message == "m"


def test_decode_unknown_keys_strict() -> None:
    raw = json.dumps({"message": "m", "signature": SIG_B64, "extra": 1})
    with pytest.raises(MalformedEnvelope):
        decode_envelope(raw, strict=True)


def test_decode_unknown_keys_strict_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIGNIT_STRICT", "1")
    raw = json.dumps({"message": "m", "signature": SIG_B64, "extra": 1})
    with pytest.raises(MalformedEnvelope):
        decode_envelope(raw)


# --- build_envelope validation ---


def test_build_envelope_rejects_short_signature() -> None:
    with pytest.raises(InvalidSignatureEncoding):
        build_envelope("m", bytes(10))


def test_build_envelope_rejects_non_utf8_message() -> None:
    with pytest.raises(MalformedEnvelope):
        build_envelope(b"\xff\xfe", SIG)


def test_signature_bytes_checks_direct_construction() -> None:
    env = SignedEnvelope(message="m", signature="not-base64!!")
    with pytest.raises(InvalidSignatureEncoding):
        env.signature_bytes()


# --- Text that has no UTF-8 form ---

LONE_SURROGATE = '{"message": "\\ud800", "signature": "' + SIG_B64 + '"}'


def test_decode_lone_surrogate_message() -> None:
    with pytest.raises(MalformedEnvelope):
        decode_envelope(LONE_SURROGATE)


def test_build_envelope_rejects_lone_surrogate() -> None:
    with pytest.raises(MalformedEnvelope):
        build_envelope("\ud800", SIG)


# --- Wire field names ---


def test_decode_bare_identity_key_is_ignored() -> None:
    raw = json.dumps({"message": "m", "signature": SIG_B64, "identity": "mallory"})
    assert decode_envelope(raw).identity is None
    with pytest.raises(MalformedEnvelope):
        decode_envelope(raw, strict=True)


def test_build_envelope_identity_uses_wire_name() -> None:
    env = build_envelope("m", SIG, "alice")
    assert env.identity == "alice"
    assert json.loads(encode_envelope(env))["github_user"] == "alice"
