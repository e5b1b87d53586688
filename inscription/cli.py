"""CLI for encoding, decoding, resolving and inspecting inscriptions."""

import argparse
import asyncio
import json
import sys
from typing import List, Optional, TextIO

from inscription.codec.metadata import (
    ImageDecodeError,
    build_metadata,
    decode_image_data_uri,
    encode_metadata_to_data_uri,
)
from inscription.codec.text import InvalidBase64Error, utf8_from_base64
from inscription.codec.token_uri import DataJsonUtf8, parse_token_uri
from inscription.config import Config
from inscription.eth.client import ContractReadError, InscriptionContractClient
from inscription.log import get_logger, setup_logging
from inscription.services.gateway import GatewayClient
from inscription.services.metadata_resolver import MetadataResolver

logger = get_logger(__name__)

PROMPT = "Paste tokenURI (data:application/json;base64,...) and press Enter:"


def _dump(value) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def inspect_token_uri(raw: str, out: TextIO, err: TextIO) -> int:
    """Decode a pasted tokenURI and print its metadata and SVG image.

    Args:
        raw: Input line, optionally wrapped in double quotes
        out: Stream for decoded output
        err: Stream for error messages

    Returns:
        Process exit code
    """
    uri = raw.strip()
    if not uri:
        print("No input provided.", file=err)
        return 1

    if uri.startswith('"') and uri.endswith('"'):
        uri = uri[1:-1].strip()

    comma_index = uri.find(",")
    if comma_index == -1:
        print("Invalid tokenURI format. Missing comma separator.", file=err)
        return 1

    payload = uri[comma_index + 1:].strip()
    if isinstance(parse_token_uri(uri), DataJsonUtf8):
        decoded = payload
    else:
        try:
            decoded = utf8_from_base64(payload)
        except (InvalidBase64Error, UnicodeDecodeError) as e:
            print("Failed to decode base64 JSON payload.", file=err)
            print(e, file=err)
            return 1

    try:
        metadata = json.loads(decoded)
    except json.JSONDecodeError as e:
        print("Decoded payload is not valid JSON.", file=err)
        print(e, file=err)
        return 1

    print("Metadata JSON:", file=out)
    print(_dump(metadata), file=out)

    image = metadata.get("image") if isinstance(metadata, dict) else None
    if not isinstance(image, str):
        print("No image field found in metadata.", file=out)
        return 0

    try:
        svg = decode_image_data_uri(image)
    except ImageDecodeError as e:
        print("Failed to decode base64 SVG image.", file=err)
        print(e, file=err)
        return 1

    if svg is None:
        print("Image is not an SVG data URI.", file=out)
        return 0

    print("SVG Image:", file=out)
    print(svg, file=out)
    return 0


def decode_command(args: argparse.Namespace, config: Config) -> int:
    """Read one tokenURI line from stdin and decode it."""
    if sys.stdin.isatty():
        print(PROMPT, file=sys.stderr)
    return inspect_token_uri(sys.stdin.readline(), sys.stdout, sys.stderr)


def encode_command(args: argparse.Namespace, config: Config) -> int:
    """Build metadata from arguments and print the data URI."""
    try:
        metadata = build_metadata(
            name=args.name,
            description=args.description,
            image_file=args.image_file,
            image_url=args.image_url,
            external_url=args.external_url,
            created_by=args.created_by,
            timestamp=args.timestamp,
        )
    except OSError as e:
        print(f"Failed to read image file: {e}", file=sys.stderr)
        return 1

    print(encode_metadata_to_data_uri(metadata))
    return 0


def resolve_command(args: argparse.Namespace, config: Config) -> int:
    """Resolve a tokenURI (data:, ipfs://, http(s)://) and print its metadata."""
    resolver = MetadataResolver(GatewayClient(gateway_url=config.ipfs_gateway_url))
    metadata = asyncio.run(resolver.resolve(args.uri))

    if metadata is None:
        print(f"No metadata found for {args.uri}", file=sys.stderr)
        return 1

    print(_dump(metadata))
    return 0


def inspect_command(args: argparse.Namespace, config: Config) -> int:
    """Read a token's owner, tokenURI and embedded metadata from the contract."""
    try:
        client = InscriptionContractClient(config)
        inspection = client.inspect(args.token_id)
    except (ValueError, ConnectionError, ContractReadError) as e:
        print(f"Lookup failed: {e}", file=sys.stderr)
        return 1

    print(f"Token ID: {inspection.token_id}")
    print(f"Owner: {inspection.owner}")
    print(f"Token URI: {inspection.uri}")
    if inspection.metadata is not None:
        print("Metadata JSON:")
        print(_dump(inspection.metadata))
    else:
        print("No embedded metadata.")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        description="Mint helper and inspector for on-chain ERC-721 inscriptions",
        prog="inscription",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    decode_parser = subparsers.add_parser("decode", help="Decode a tokenURI read from stdin")
    decode_parser.set_defaults(handler=decode_command)

    encode_parser = subparsers.add_parser("encode", help="Build an on-chain tokenURI from metadata")
    encode_parser.add_argument("--name", help="Token title")
    encode_parser.add_argument("--description", help="Token description")
    encode_parser.add_argument("--image-file", help="Image file to embed on-chain")
    encode_parser.add_argument("--image-url", help="Remote image URL (https:// or ipfs://)")
    encode_parser.add_argument("--external-url", help="External link")
    encode_parser.add_argument("--created-by", help="Minter wallet address")
    encode_parser.add_argument("--timestamp", help="ISO-8601 creation time (default: now)")
    encode_parser.set_defaults(handler=encode_command)

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a data:, ipfs:// or http(s):// tokenURI")
    resolve_parser.add_argument("uri", help="Token URI")
    resolve_parser.set_defaults(handler=resolve_command)

    inspect_parser = subparsers.add_parser("inspect", help="Read a token from the contract")
    inspect_parser.add_argument("token_id", type=int, help="Token ID")
    inspect_parser.set_defaults(handler=inspect_command)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Load config
    try:
        config = Config.from_env()
        config.validate()
    except Exception as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(config)

    try:
        code = args.handler(args, config)
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)

    sys.exit(code)


if __name__ == "__main__":
    main()
