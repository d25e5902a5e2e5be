from __future__ import annotations

import pathlib

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

SEED = bytes(32)  # fixed test key: 32 zero bytes


def ssh_public_line(pk: Ed25519PublicKey, comment: str = "") -> str:
    line = pk.public_bytes(
        encoding=serialization.Encoding.OpenSSH, format=serialization.PublicFormat.OpenSSH
    ).decode("ascii")
    return f"{line} {comment}".rstrip()


def write_openssh_keypair(sk: Ed25519PrivateKey, directory: pathlib.Path) -> pathlib.Path:
    """Write ``id_ed25519`` and ``id_ed25519.pub`` into ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    sk_path = directory / "id_ed25519"
    sk_path.write_bytes(
        sk.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.OpenSSH,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )
    (directory / "id_ed25519.pub").write_text(
        ssh_public_line(sk.public_key(), "test@signit") + "\n", encoding="utf-8"
    )
    return sk_path


@pytest.fixture
def sk() -> Ed25519PrivateKey:
    return Ed25519PrivateKey.from_private_bytes(SEED)


@pytest.fixture
def pk(sk: Ed25519PrivateKey) -> Ed25519PublicKey:
    return sk.public_key()


@pytest.fixture
def other_pk() -> Ed25519PublicKey:
    return Ed25519PrivateKey.generate().public_key()


@pytest.fixture
def key_dir(tmp_path: pathlib.Path, sk: Ed25519PrivateKey) -> pathlib.Path:
    d = tmp_path / "keys"
    write_openssh_keypair(sk, d)
    return d
