"""Command-line front end for generating and inspecting ids.

Usage:
    flexid generate -n 5 --key customer:1001
    flexid decode 0x5a5a5a5a5a5a0000 --json
    flexid shard customer:1001
    flexid checksum encode 0x7ffffff0
    flexid checksum validate 0x7ffffff7
    flexid --sequence-bits 10 --shard-bits 6 layout

Layout options fall back to FLEXID_* environment variables (see
GeneratorSettings), then to the defaults.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from pydantic import ValidationError

from flexid.config import GeneratorSettings
from flexid.core.checksum import checksum_encode, checksum_validate
from flexid.core.errors import FlexIdError
from flexid.diagnostics.models import LayoutDiagnostic
from flexid.generator import FlexId, FlexIdBuilder

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2

# CLI option name -> GeneratorSettings field
_LAYOUT_OPTIONS = {
    "epoch": "epoch",
    "sequence_bits": "sequence_bits",
    "shard_bits": "shard_bits",
    "constant_bits": "constant_bits",
    "check_bits": "check_bits",
    "default_shard": "shard",
    "constant": "constant",
    "hash_width_bits": "hash_width_bits",
    "hash_offset": "hash_offset",
}


def parse_int(text: str) -> int:
    """Parse decimal or 0x-prefixed hex (argparse ``type``)."""
    try:
        return int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None


def load_settings(args: argparse.Namespace) -> GeneratorSettings:
    """Environment settings overridden by any layout options given on the command line."""
    overrides: dict[str, Any] = {}
    for option, setting in _LAYOUT_OPTIONS.items():
        value = getattr(args, option)
        if value is not None:
            overrides[setting] = value
    return GeneratorSettings(**overrides)


def build_generator(args: argparse.Namespace) -> FlexId:
    return FlexIdBuilder.from_settings(load_settings(args)).build()


def _format_id(value: int, as_hex: bool) -> str:
    return f"0x{value:016x}" if as_hex else str(value)


def cmd_generate(args: argparse.Namespace) -> int:
    generator = build_generator(args)
    for _ in range(args.count):
        new_id = generator.generate(args.shard, key=args.key)
        print(_format_id(new_id, args.hex))
    return EXIT_OK


def cmd_decode(args: argparse.Namespace) -> int:
    decoded = build_generator(args).decode(args.id)
    if args.json:
        print(json.dumps(decoded.to_dict(), indent=2))
        return EXIT_OK
    for name, value in decoded.to_dict().items():
        print(f"{name:>15}: {value}")
    return EXIT_OK


def cmd_shard(args: argparse.Namespace) -> int:
    generator = build_generator(args)
    if args.raw:
        print(generator.shard_from_key(args.key, generator.hash_window))
    else:
        print(generator.shard_for(args.key))
    return EXIT_OK


def cmd_checksum(args: argparse.Namespace) -> int:
    if args.action == "encode":
        print(f"0x{checksum_encode(args.value):x}")
        return EXIT_OK
    valid = checksum_validate(args.value)
    print("valid" if valid else "invalid")
    return EXIT_OK if valid else EXIT_INVALID


def cmd_layout(args: argparse.Namespace) -> int:
    generator = build_generator(args)
    diagnostic = LayoutDiagnostic.from_layout(generator.layout, generator.epoch)
    if args.json:
        print(json.dumps(diagnostic.to_dict(), indent=2))
    else:
        print(diagnostic.message())
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flexid",
        description="Generate and decode 64-bit time-ordered ids",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    layout = parser.add_argument_group("layout", "Override FLEXID_* settings")
    layout.add_argument("--epoch", type=parse_int, help="Epoch in Unix milliseconds")
    layout.add_argument("--sequence-bits", type=parse_int, help="Sequence field width")
    layout.add_argument("--shard-bits", type=parse_int, help="Shard field width")
    layout.add_argument("--constant-bits", type=parse_int, help="Constant field width")
    layout.add_argument("--check-bits", type=parse_int, help="Checksum width (0 or 4)")
    layout.add_argument("--default-shard", type=parse_int, help="Shard when none is given")
    layout.add_argument("--constant", type=parse_int, help="Constant for every id")
    layout.add_argument("--hash-width-bits", type=parse_int, help="Digest window (16 or 32)")
    layout.add_argument("--hash-offset", type=parse_int, help="Digest window byte offset")

    commands = parser.add_subparsers(dest="command", required=True)

    generate = commands.add_parser("generate", help="Generate new ids")
    generate.add_argument("-n", "--count", type=int, default=1, help="Number of ids")
    target = generate.add_mutually_exclusive_group()
    target.add_argument("--shard", type=parse_int, help="Shard for the ids")
    target.add_argument("--key", help="Derive the shard from this key")
    generate.add_argument("--hex", action="store_true", help="Print ids as hex")
    generate.set_defaults(handler=cmd_generate)

    decode = commands.add_parser("decode", help="Show the fields of an id")
    decode.add_argument("id", type=parse_int, help="Id in decimal or 0x hex")
    decode.add_argument("--json", action="store_true", help="Print JSON")
    decode.set_defaults(handler=cmd_decode)

    shard = commands.add_parser("shard", help="Shard value for a key")
    shard.add_argument("key", help="Key to hash")
    shard.add_argument("--raw", action="store_true", help="Print the unmasked digest window")
    shard.set_defaults(handler=cmd_shard)

    checksum = commands.add_parser("checksum", help="Luhn-16 checksum tools")
    checksum.add_argument("action", choices=("encode", "validate"))
    checksum.add_argument("value", type=parse_int, help="Value in decimal or 0x hex")
    checksum.set_defaults(handler=cmd_checksum)

    layout_cmd = commands.add_parser("layout", help="Describe the configured layout")
    layout_cmd.add_argument("--json", action="store_true", help="Print JSON")
    layout_cmd.set_defaults(handler=cmd_layout)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.handler(args)
    except (FlexIdError, ValidationError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"flexid: error: {e}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
