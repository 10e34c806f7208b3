"""
Module 07 - CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m shield_cli convert <value> --from {bin,dec,hex} --to {bin,dec,hex} [--json]
    python -m shield_cli pack <value> [--packing-size N] [--count N] [--hex] [--json]
    python -m shield_cli unpack <element>... [--packing-size N] [--hex] [--json]
    python -m shield_cli hash <hex>... [--json]
    python -m shield_cli leaf-index <count> [--depth N] [--json]
    python -m shield_cli verify --fields <hex>... --commitment <hex> --count N [--leaves FILE]
    python -m shield_cli config --show

Environment Variables:
    SHIELD_FIELD_MODULUS        Field modulus, decimal
    SHIELD_PACKING_SIZE         Bits per field element (default: 128)
    SHIELD_HASH_CHUNK_BITS      Bits per hash invocation (default: 432)
    SHIELD_DIGEST_LENGTH_BYTES  Commitment length in bytes (default: 27)
    SHIELD_TREE_DEPTH           Commitment tree depth (default: 33)
    SHIELD_LEDGER_ENDPOINT      Leaf-lookup service base URL
    SHIELD_LEDGER_TIMEOUT       Leaf-lookup timeout in seconds (default: 30)
    SHIELD_LOG_LEVEL            Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.config.runtime import load_runtime_config
from core.schemas.errors import ShieldException
from shield_cli.commands import encode, hashing, verify


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="shield",
        description="Shield CLI - Encode values as field elements, hash commitments and check them.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./shield.json or ~/.config/shield/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- convert command ---
    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert a digit string between bases",
        description="Convert between binary, decimal and hex. Hex output carries a 0x marker.",
    )
    convert_parser.add_argument("value", type=str, help="Digit string to convert")
    convert_parser.add_argument(
        "--from",
        dest="from_base",
        choices=["bin", "dec", "hex"],
        required=True,
        help="Base of the input",
    )
    convert_parser.add_argument(
        "--to",
        dest="to_base",
        choices=["bin", "dec", "hex"],
        required=True,
        help="Base of the output",
    )
    _add_json_flag(convert_parser)
    convert_parser.set_defaults(func=encode.convert_cmd)

    # --- pack command ---
    pack_parser = subparsers.add_parser(
        "pack",
        help="Encode a magnitude as field elements",
        description="Split a magnitude into packing-size chunks, most significant first.",
    )
    pack_parser.add_argument(
        "value",
        type=str,
        help="0x-prefixed hex or decimal magnitude",
    )
    pack_parser.add_argument(
        "--packing-size", "-p",
        type=int,
        default=None,
        help="Bits per element (default: from config, 128)",
    )
    pack_parser.add_argument(
        "--count", "-n",
        type=int,
        default=None,
        help="Exact number of elements to emit (left-padded with zeros)",
    )
    pack_parser.add_argument(
        "--hex",
        action="store_true",
        default=False,
        help="Read the value as hex even without a 0x marker",
    )
    _add_json_flag(pack_parser)
    pack_parser.set_defaults(func=encode.pack_cmd)

    # --- unpack command ---
    unpack_parser = subparsers.add_parser(
        "unpack",
        help="Reassemble a magnitude from field elements",
    )
    unpack_parser.add_argument(
        "elements",
        nargs="+",
        help="Decimal field elements, most significant first",
    )
    unpack_parser.add_argument(
        "--packing-size", "-p",
        type=int,
        default=None,
        help="Bits per element (default: from config, 128)",
    )
    unpack_parser.add_argument(
        "--hex",
        action="store_true",
        default=False,
        help="Print the magnitude as 0x hex",
    )
    _add_json_flag(unpack_parser)
    unpack_parser.set_defaults(func=encode.unpack_cmd)

    # --- hash command ---
    hash_parser = subparsers.add_parser(
        "hash",
        help="Commitment hash of concatenated hex items",
    )
    hash_parser.add_argument("items", nargs="+", help="Hex items, in hashing order")
    _add_json_flag(hash_parser)
    hash_parser.set_defaults(func=hashing.hash_cmd)

    # --- leaf-index command ---
    leaf_parser = subparsers.add_parser(
        "leaf-index",
        help="Tree node index of the count-th commitment",
    )
    leaf_parser.add_argument("count", type=int, help="Insertion position (0-based)")
    leaf_parser.add_argument(
        "--depth",
        type=int,
        default=None,
        help="Tree depth (default: from config, 33)",
    )
    _add_json_flag(leaf_parser)
    leaf_parser.set_defaults(func=hashing.leaf_index_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Check a received commitment",
        description="Recompute the commitment from its fields and compare it with the ledger leaf.",
    )
    verify_parser.add_argument(
        "--fields",
        nargs="+",
        required=True,
        help="Hex fields hashed into the commitment, in order",
    )
    verify_parser.add_argument(
        "--commitment", "-z",
        type=str,
        required=True,
        help="Claimed commitment",
    )
    verify_parser.add_argument(
        "--count",
        type=int,
        required=True,
        help="Insertion position of the commitment",
    )
    verify_parser.add_argument(
        "--nf",
        action="store_true",
        default=False,
        help="Fields are a non-fungible token A PK S (A is truncated before hashing)",
    )
    verify_parser.add_argument(
        "--leaves",
        type=str,
        default=None,
        help="JSON file mapping leaf index to value (offline check)",
    )
    verify_parser.add_argument(
        "--ledger",
        type=str,
        default=None,
        help="Leaf-lookup service base URL (overrides config)",
    )
    _add_json_flag(verify_parser)
    verify_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Include detailed checks in output",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Display configuration",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: shield config --show")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_runtime_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    setup_logging(level=args.log_level or config.log_level)

    # Attach config to args for commands to use
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ShieldException as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
