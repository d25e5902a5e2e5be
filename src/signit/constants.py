from __future__ import annotations

MESSAGE_FIELD = "message"
SIGNATURE_FIELD = "signature"
# Wire name kept compatible with envelopes produced by earlier signit releases.
IDENTITY_FIELD = "github_user"

ENVELOPE_FIELDS = frozenset({MESSAGE_FIELD, SIGNATURE_FIELD, IDENTITY_FIELD})

SIGNATURE_LENGTH = 64
ED25519_KEY_TYPE = "ssh-ed25519"

SSH_DIR_NAME = ".ssh"
DEFAULT_PRIVATE_KEY_NAME = "id_ed25519"
DEFAULT_PUBLIC_KEY_NAME = "id_ed25519.pub"

DEFAULT_KEYS_HOST = "github.com"
