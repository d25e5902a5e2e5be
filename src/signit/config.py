"""Environment-driven settings.

Values are read at call time so that a process (or a test) can change the
environment between invocations.
"""

from __future__ import annotations

import os

from .constants import DEFAULT_KEYS_HOST
from .exceptions import ConfigurationError

KEYS_HOST_ENV = "SIGNIT_KEYS_HOST"
FETCH_TIMEOUT_ENV = "SIGNIT_FETCH_TIMEOUT"
STRICT_ENV = "SIGNIT_STRICT"
PASSPHRASE_ENV = "SIGNIT_KEY_PASSPHRASE"


def keys_host() -> str:
    return os.getenv(KEYS_HOST_ENV) or DEFAULT_KEYS_HOST


def fetch_timeout() -> float | None:
    """Seconds to wait on the remote key fetch; ``None`` means wait forever."""
    raw = os.getenv(FETCH_TIMEOUT_ENV)
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{FETCH_TIMEOUT_ENV} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigurationError(f"{FETCH_TIMEOUT_ENV} must be positive, got {raw!r}")
    return value


def strict_envelopes() -> bool:
    return os.getenv(STRICT_ENV) == "1"


def key_passphrase() -> bytes | None:
    raw = os.getenv(PASSPHRASE_ENV)
    return raw.encode("utf-8") if raw else None
