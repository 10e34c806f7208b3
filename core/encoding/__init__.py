"""
Core encoding utilities.

Module 03 converts digit strings between bases.
Module 04 packs magnitudes into field elements and back.

Usage:
    from core.encoding import convert_base, encode_magnitude_as_field_elements

    convert_base("ff", 16, 10)                               # '255'
    encode_magnitude_as_field_elements("0x0", 128, 3)        # ['0', '0', '0']
"""
from .base import (
    BASE_BY_NAME,
    add_digits,
    bin_to_dec,
    bin_to_hex,
    bit_length_dec,
    bit_length_hex,
    convert_base,
    convert_named,
    dec_to_bin,
    dec_to_hex,
    ensure_0x,
    hex_less_than,
    hex_to_bin,
    hex_to_dec,
    hex_to_field,
    hex_to_utf8_string,
    is_hex,
    multiply_by_number,
    pad_hex,
    parse_to_digits,
    slice_right_bits_hex,
    strip_0x,
    utf8_string_to_hex,
)
from .packing import (
    FieldEncoder,
    dec_to_field_preserve,
    decode_field_elements_to_magnitude,
    encode_magnitude_as_field_elements,
    fields_to_hex,
    hex_to_field_preserve,
    left_pad_bits,
    split_and_pad_bits,
    split_bin_to_bits,
    split_dec_to_bits,
    split_hex_to_bits,
)

__all__ = [
    # Base conversion
    "BASE_BY_NAME",
    "add_digits",
    "bin_to_dec",
    "bin_to_hex",
    "bit_length_dec",
    "bit_length_hex",
    "convert_base",
    "convert_named",
    "dec_to_bin",
    "dec_to_hex",
    "ensure_0x",
    "hex_less_than",
    "hex_to_bin",
    "hex_to_dec",
    "hex_to_field",
    "hex_to_utf8_string",
    "is_hex",
    "multiply_by_number",
    "pad_hex",
    "parse_to_digits",
    "slice_right_bits_hex",
    "strip_0x",
    "utf8_string_to_hex",
    # Packing
    "FieldEncoder",
    "dec_to_field_preserve",
    "decode_field_elements_to_magnitude",
    "encode_magnitude_as_field_elements",
    "fields_to_hex",
    "hex_to_field_preserve",
    "left_pad_bits",
    "split_and_pad_bits",
    "split_bin_to_bits",
    "split_dec_to_bits",
    "split_hex_to_bits",
]
