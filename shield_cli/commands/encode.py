"""
Module 07 - CLI Encoding Commands

Base conversion and field-element packing:
- convert: digit string between bin, dec and hex
- pack: magnitude into decimal field elements
- unpack: field elements back into a magnitude

Usage:
    shield convert ff --from hex --to dec
    shield pack 0x1234 --packing-size 8 --count 3
    shield unpack 18 52 --packing-size 8 --hex
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace

from core.encoding.base import convert_named, dec_to_hex
from core.encoding.packing import (
    decode_field_elements_to_magnitude,
    encode_magnitude_as_field_elements,
)


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0


def _packing_size(args: Namespace) -> int:
    if args.packing_size is not None:
        return args.packing_size
    return args.runtime_config.shield.packing_size


def convert_cmd(args: Namespace) -> int:
    """Execute the convert command."""
    value = convert_named(args.value, args.from_base, args.to_base)
    if args.json:
        print(json.dumps({"value": value, "from": args.from_base, "to": args.to_base}))
    else:
        print(value)
    return EXIT_SUCCESS


def pack_cmd(args: Namespace) -> int:
    """Execute the pack command."""
    packing_size = _packing_size(args)
    value = args.value
    if args.hex and value[:2] not in ("0x", "0X"):
        value = "0x" + value

    elements = encode_magnitude_as_field_elements(value, packing_size, args.count)
    logger.debug(f"Packed {args.value} into {len(elements)} elements")

    if args.json:
        print(json.dumps({"elements": elements, "packing_size": packing_size}))
    else:
        for element in elements:
            print(element)
    return EXIT_SUCCESS


def unpack_cmd(args: Namespace) -> int:
    """Execute the unpack command."""
    packing_size = _packing_size(args)
    decimal = decode_field_elements_to_magnitude(args.elements, packing_size)

    if args.json:
        print(json.dumps({"decimal": decimal, "hex": dec_to_hex(decimal)}))
    elif args.hex:
        print(dec_to_hex(decimal))
    else:
        print(decimal)
    return EXIT_SUCCESS
