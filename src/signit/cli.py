from __future__ import annotations

import argparse
import logging
import pathlib
import sys

from . import __version__, config
from .envelope import decode_envelope, encode_envelope
from .exceptions import SignitError
from .keys import identity_for_lookup, resolve_public_keys
from .signers import Ed25519Signer
from .verify import verify

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_VERIFICATION_FAILED = 1
EXIT_ERROR = 2


def _read_input(message: str | None, input_path: str | None) -> bytes:
    """Explicit string first, then file, then stdin."""
    if message is not None:
        # argparse hands undecodable bytes over as surrogate escapes.
        return message.encode("utf-8", "surrogateescape")
    if input_path is not None:
        return pathlib.Path(input_path).read_bytes()
    return sys.stdin.buffer.read()


def _write_or_print(output: str | None, data: str) -> None:
    if output is not None:
        pathlib.Path(output).write_text(data, encoding="utf-8")
    else:
        print(data)


def _cmd_sign(args: argparse.Namespace) -> int:
    signer = Ed25519Signer.from_file(args.private_key, password=config.key_passphrase())
    message = _read_input(args.message, args.input)
    envelope = signer.sign_envelope(message, identity=args.github)
    _write_or_print(args.output, encode_envelope(envelope, pretty=args.pretty))
    return EXIT_OK


def _cmd_verify(args: argparse.Namespace) -> int:
    envelope = decode_envelope(_read_input(args.message, args.input))
    identity = identity_for_lookup(envelope.identity, args.identity) if args.github else None
    keys = resolve_public_keys(args.public_key, identity, remote=args.github)
    if not verify(envelope, keys):
        print("Verification failed!", file=sys.stderr)
        return EXIT_VERIFICATION_FAILED
    print("Verified!")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="signit", description="Sign and verify messages with Ed25519 SSH keys"
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    sub = ap.add_subparsers(dest="command", required=True)

    sp = sub.add_parser("sign", help="Sign a message using an ed25519 private key")
    sp.add_argument("-i", dest="input", help="File to sign (defaults to stdin)")
    sp.add_argument("-o", dest="output", help="Output file (defaults to stdout)")
    sp.add_argument("-m", dest="message", help="Message to sign (overrides -i and stdin)")
    sp.add_argument(
        "-k", dest="private_key", help="Private key path (defaults to ~/.ssh/id_ed25519)"
    )
    sp.add_argument("-g", dest="github", help="Identity to attach to the envelope")
    sp.add_argument("-p", dest="pretty", action="store_true", help="Pretty print the JSON")
    sp.set_defaults(func=_cmd_sign)

    vp = sub.add_parser("verify", help="Verify a signed envelope")
    vp.add_argument("-i", dest="input", help="Envelope file (defaults to stdin)")
    vp.add_argument("-m", dest="message", help="Envelope JSON (overrides -i and stdin)")
    vp.add_argument(
        "-k",
        dest="public_key",
        help="Public key path (defaults to ~/.ssh/id_ed25519.pub, overrides -g)",
    )
    vp.add_argument(
        "-g", dest="github", action="store_true", help="Fetch the identity's published keys"
    )
    vp.add_argument(
        "--identity", help="Identity to look up with -g (overrides the envelope's)"
    )
    vp.set_defaults(func=_cmd_verify)
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        return args.func(args)
    except SignitError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
