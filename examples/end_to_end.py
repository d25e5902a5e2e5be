"""
End-to-end example: sign a message, encode it, verify it against a key set

This script demonstrates:
- Signing a message with an Ed25519 key
- Encoding the envelope (compact and pretty)
- Decoding and verifying against a set of candidate keys
- Treating the identity as a lookup hint, not as proof

All steps are documented inline.
"""

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from signit.envelope import decode_envelope, encode_envelope
from signit.signers import Ed25519Signer
from signit.verify import verify, verify_envelope

# 1. Create a signer (Ed25519, deterministic seed for demo)
signer = Ed25519Signer(Ed25519PrivateKey.from_private_bytes(bytes(32)))

# 2. Sign a message and attach an identity hint
envelope = signer.sign_envelope("hello\nworld", identity="alice")
print("Envelope:", envelope)

# 3. Encode in both modes
compact = encode_envelope(envelope)
print("Compact:", compact)
print("Pretty:\n" + encode_envelope(envelope, pretty=True))

# 4. Decode and verify against a set that holds a stale key and the right one
stale = Ed25519PrivateKey.generate().public_key()
decoded = decode_envelope(compact)
print("Verified:", verify(decoded, [stale, signer.public_key()]))

# 5. The identity is unsigned: rewriting it changes nothing about the result
relabeled = decoded.model_copy(update={"identity": "mallory"})
print("Relabeled verified:", verify_envelope(relabeled, [signer.public_key()]))
print("Wrong keys only:", verify_envelope(decoded, [stale]))
