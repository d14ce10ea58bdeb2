#!/usr/bin/env python3
"""
wopi-proof command line

Usage:
    python -m wopi_proof generate-key [--path PATH] [--bits 2048] [--force]
    python -m wopi_proof discovery
    python -m wopi_proof headers --access-token TOKEN --uri URI
    python -m wopi_proof verify --access-token TOKEN --uri URI --timestamp TICKS --proof PROOF
    python -m wopi_proof serve

The key location comes from settings (CONFIG_DIR / PROOF_KEY_PATH) unless
--key is given.
"""
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from wopi_proof.api.schemas import ProofHeadersRequest
from wopi_proof.core.config import get_settings
from wopi_proof.core.log import configure_logging
from wopi_proof.core.proof.canonical import build_proof, check_ticks
from wopi_proof.core.proof.keys import KeyStore, generate_private_key, save_private_key
from wopi_proof.core.proof.service import ProofService
from wopi_proof.core.proof.signer import verify_proof
from wopi_proof.core.proof.ticks import current_ticks, ticks_to_datetime


def _key_path(args) -> Path:
    return Path(args.key) if args.key else get_settings().resolved_proof_key_path


def _ticks(value: str) -> int:
    try:
        return check_ticks(int(value))
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _validated_request(parser: argparse.ArgumentParser, args) -> ProofHeadersRequest:
    try:
        return ProofHeadersRequest(access_token=args.access_token, uri=args.uri)
    except ValidationError as e:
        parser.error(str(e))


def cmd_generate_key(parser, args) -> int:
    path = Path(args.path) if args.path else _key_path(args)
    if path.exists() and not args.force:
        print(f"{path} already exists (use --force to overwrite)", file=sys.stderr)
        return 1

    save_private_key(generate_private_key(args.bits), path)
    print(f"Wrote {args.bits}-bit RSA proof key to {path}")
    return 0


def cmd_discovery(parser, args) -> int:
    service = ProofService(KeyStore(_key_path(args)))
    attributes = service.get_discovery_attributes()
    if not attributes:
        print("No proof key available", file=sys.stderr)
        return 1
    print(json.dumps(dict(attributes), indent=2))
    return 0


def cmd_headers(parser, args) -> int:
    request = _validated_request(parser, args)
    service = ProofService(KeyStore(_key_path(args)))
    headers = service.get_proof_headers(request.access_token, request.uri)
    if not headers:
        print("No proof key available", file=sys.stderr)
        return 1
    for name, value in headers:
        print(f"{name}: {value}")
    return 0


def cmd_verify(parser, args) -> int:
    request = _validated_request(parser, args)
    material = KeyStore(_key_path(args)).material
    if material is None:
        print("No proof key available", file=sys.stderr)
        return 1

    data = build_proof(request.access_token, request.uri, args.timestamp)
    valid = verify_proof(material.public_key, data, args.proof)
    try:
        when = ticks_to_datetime(args.timestamp).isoformat()
    except OverflowError:
        when = "out of range"
    age = (current_ticks() - args.timestamp) // 10_000_000
    print(f"{'valid' if valid else 'INVALID'} (timestamp {when}, {age}s old)")
    return 0 if valid else 1


def cmd_serve(parser, args) -> int:
    from wopi_proof.api.main import run

    run(get_settings())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wopi-proof",
        description="WOPI proof key tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Create the proof key in the configured location
    wopi-proof generate-key

    # Print the <proof-key> attributes for discovery
    wopi-proof discovery

    # Sign one request
    wopi-proof headers --access-token 'tok%20en' --uri 'https://host/wopi/files/1?access_token=tok%20en'
        """,
    )
    parser.add_argument("--key", help="Proof key file (default: <CONFIG_DIR>/proof_key)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: from settings)")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate-key", help="Generate a new RSA proof key")
    gen.add_argument("--path", help="Where to write the key (default: --key or settings)")
    gen.add_argument("--bits", type=int, default=2048, help="Key size in bits (default: 2048)")
    gen.add_argument("--force", action="store_true", help="Overwrite an existing key")
    gen.set_defaults(func=cmd_generate_key)

    disc = sub.add_parser("discovery", help="Print discovery proof-key attributes as JSON")
    disc.set_defaults(func=cmd_discovery)

    hdr = sub.add_parser("headers", help="Print proof headers for one request")
    hdr.add_argument("--access-token", required=True, help="Access token, percent-encoded as in the URI")
    hdr.add_argument("--uri", required=True, help="Full request URI")
    hdr.set_defaults(func=cmd_headers)

    ver = sub.add_parser("verify", help="Check a proof header against the key")
    ver.add_argument("--access-token", required=True, help="Access token, percent-encoded as in the URI")
    ver.add_argument("--uri", required=True, help="Full request URI")
    ver.add_argument("--timestamp", required=True, type=_ticks, help="X-WOPI-TimeStamp value")
    ver.add_argument("--proof", required=True, help="X-WOPI-Proof value")
    ver.set_defaults(func=cmd_verify)

    srv = sub.add_parser("serve", help="Run the HTTP API")
    srv.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(args.log_level or settings.log_level, settings.log_format)
    return args.func(parser, args)


if __name__ == "__main__":
    sys.exit(main())
