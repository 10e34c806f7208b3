"""
Module 03 - Base Conversion Engine
Conversion of digit strings between numeric bases using digit-array arithmetic.

Module ID: M03

This module provides:
- Little-endian digit-array arithmetic (add-with-carry, multiply by a small integer)
- convert_base: generic base-to-base conversion of digit strings
- Checked hex/decimal/binary conversions that raise InvalidEncodingException
- Hex string helpers (0x marker handling, padding, UTF-8 packing)

Representation Rules:
- Hex strings may carry a leading 0x marker; it is stripped before arithmetic
  and reattached on hex output.
- Decimal and binary strings never carry a prefix.
- Output digits are lowercase.
- An all-zero input converts to the single digit "0", never an empty string.

Digit arrays are little-endian lists of ints, each in [0, base). Arithmetic is
done digit by digit so magnitudes of any size convert exactly.
"""
from __future__ import annotations

import re

from core.schemas.errors import CapacityExceededException, InvalidEncodingException


DIGIT_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

_DIGIT_VALUES: dict[str, int] = {}
for _i, _c in enumerate(DIGIT_ALPHABET):
    _DIGIT_VALUES[_c] = _i
    _DIGIT_VALUES[_c.upper()] = _i

_HEX_PATTERN = re.compile(r"^[0-9a-fA-F]+$")

HEX_PREFIX = "0x"


# =============================================================================
# Digit-Array Arithmetic
# =============================================================================

def _check_base(base: int) -> None:
    if not 2 <= base <= len(DIGIT_ALPHABET):
        raise ValueError(f"Unsupported base {base}; must be in [2, {len(DIGIT_ALPHABET)}]")


def parse_to_digits(digit_string: str, base: int) -> list[int] | None:
    """
    Parse a digit string into a little-endian digit array.

    Args:
        digit_string: Digits in the given base, most significant first
        base: Numeric base of the input

    Returns:
        List of digit values, least significant first, or None if any
        character is not a valid digit for the base.

    Example:
        >>> parse_to_digits("1a", 16)
        [10, 1]
    """
    _check_base(base)
    digits: list[int] = []
    for char in reversed(digit_string):
        value = _DIGIT_VALUES.get(char)
        if value is None or value >= base:
            return None
        digits.append(value)
    return digits


def add_digits(x: list[int], y: list[int], base: int) -> list[int]:
    """Add two little-endian digit arrays with carry."""
    result: list[int] = []
    carry = 0
    i = 0
    n = max(len(x), len(y))
    while i < n or carry:
        xi = x[i] if i < len(x) else 0
        yi = y[i] if i < len(y) else 0
        total = carry + xi + yi
        result.append(total % base)
        carry = total // base
        i += 1
    return result


def multiply_by_number(num: int, x: list[int], base: int) -> list[int] | None:
    """
    Multiply a digit array by a small non-negative integer.

    Uses the binary decomposition of ``num``: the array is doubled once per
    bit and accumulated where the bit is set.

    Args:
        num: Non-negative multiplier
        x: Little-endian digit array in ``base``
        base: Numeric base of ``x``

    Returns:
        The product as a digit array ([] for zero), or None if num < 0.
    """
    if num < 0:
        return None
    if num == 0:
        return []

    result: list[int] = []
    power = x
    while True:
        if num & 1:
            result = add_digits(result, power, base)
        num >>= 1
        if num == 0:
            break
        power = add_digits(power, power, base)
    return result


def convert_base(digit_string: str, from_base: int, to_base: int) -> str | None:
    """
    Convert a digit string from one base to another.

    Algorithm:
    1. Parse the input into a little-endian digit array in from_base
    2. Keep power = from_base^i as a digit array in to_base, starting at [1]
    3. For every non-zero input digit d_i, accumulate d_i * power
    4. Multiply power by from_base after each digit
    5. Emit the accumulator most significant digit first

    Args:
        digit_string: Input digits (a 0x marker is accepted when from_base is 16)
        from_base: Base of the input
        to_base: Base of the output

    Returns:
        The converted digit string, or None if the input contains a
        character that is not a valid from_base digit.

    Example:
        >>> convert_base("ff", 16, 10)
        '255'
        >>> convert_base("000", 2, 16)
        '0'
    """
    _check_base(to_base)
    if from_base == 16:
        digit_string = strip_0x(digit_string)

    digits = parse_to_digits(digit_string, from_base)
    if digits is None:
        return None

    out_digits: list[int] = []
    power = [1]
    for digit in digits:
        # invariant: power == from_base ** i, held in to_base
        if digit:
            product = multiply_by_number(digit, power, to_base)
            out_digits = add_digits(out_digits, product, to_base)
        power = multiply_by_number(from_base, power, to_base)

    out = "".join(DIGIT_ALPHABET[d] for d in reversed(out_digits))

    # An input equivalent to zero leaves the accumulator empty.
    if out == "" and sum(digits) == 0:
        out = "0"

    return out


# =============================================================================
# Hex Marker Helpers
# =============================================================================

def strip_0x(value: str) -> str:
    """Remove a leading 0x marker, if present."""
    if value[:2] in ("0x", "0X"):
        return value[2:]
    return value


def ensure_0x(value: str) -> str:
    """Add a leading 0x marker, if missing."""
    if value[:2] in ("0x", "0X"):
        return value
    return HEX_PREFIX + value


def is_hex(value: str) -> bool:
    """True if value (ignoring any 0x marker) is a non-empty hex digit string."""
    return bool(_HEX_PATTERN.match(strip_0x(value)))


# =============================================================================
# Checked Conversions
# =============================================================================

_BASE_NAMES = {2: "binary", 10: "decimal", 16: "hex"}


def _convert_checked(value: str, from_base: int, to_base: int) -> str:
    if not isinstance(value, str):
        raise InvalidEncodingException(
            f"Expected a {_BASE_NAMES[from_base]} string, got {type(value).__name__}",
            value=value,
            base=from_base,
        )
    body = strip_0x(value) if from_base == 16 else value
    result = convert_base(body, from_base, to_base) if body else None
    if result is None:
        raise InvalidEncodingException(
            f"Invalid {_BASE_NAMES[from_base]} string: {value[:40]!r}",
            value=value,
            base=from_base,
        )
    return result


def hex_to_dec(hex_string: str) -> str:
    """
    Convert a hex string (with or without 0x) to a decimal string.

    Raises:
        InvalidEncodingException: If the input is empty or not hex
    """
    return _convert_checked(hex_string, 16, 10)


def hex_to_bin(hex_string: str) -> str:
    """Convert a hex string to a binary string without leading zeros."""
    return _convert_checked(hex_string, 16, 2)


def dec_to_hex(dec_string: str) -> str:
    """Convert a decimal string to a 0x-prefixed hex string."""
    return ensure_0x(_convert_checked(dec_string, 10, 16))


def dec_to_bin(dec_string: str) -> str:
    return _convert_checked(dec_string, 10, 2)


def bin_to_dec(bin_string: str) -> str:
    return _convert_checked(bin_string, 2, 10)


def bin_to_hex(bin_string: str) -> str:
    """Convert a binary string to a 0x-prefixed hex string."""
    return ensure_0x(_convert_checked(bin_string, 2, 16))


BASE_BY_NAME = {"bin": 2, "dec": 10, "hex": 16}


def convert_named(value: str, from_name: str, to_name: str) -> str:
    """
    Checked conversion between the named bases ``bin``, ``dec`` and ``hex``.

    Hex output carries a 0x marker.

    Raises:
        ValueError: If a base name is unknown
        InvalidEncodingException: If value is not valid in from_name
    """
    try:
        from_base = BASE_BY_NAME[from_name]
        to_base = BASE_BY_NAME[to_name]
    except KeyError as e:
        raise ValueError(f"Unknown base name: {e.args[0]!r}") from None
    result = _convert_checked(value, from_base, to_base)
    return ensure_0x(result) if to_base == 16 else result


# =============================================================================
# Measurements and Field Reduction
# =============================================================================

def bit_length_hex(hex_string: str) -> int:
    """Number of significant bits encoded by a hex value (0 for zero)."""
    return len(hex_to_bin(hex_string).lstrip("0"))


def bit_length_dec(dec_string: str) -> int:
    """Number of significant bits encoded by a decimal value (0 for zero)."""
    return len(dec_to_bin(dec_string).lstrip("0"))


def slice_right_bits_hex(hex_string: str, n: int) -> str:
    """
    Keep only the rightmost n bits of a hex value.

    Args:
        hex_string: Hex value (with or without 0x)
        n: Number of low-order bits to keep

    Returns:
        0x-prefixed hex string of the low n bits
    """
    if n <= 0:
        raise ValueError(f"Bit count must be positive, got {n}")
    return bin_to_hex(hex_to_bin(hex_string)[-n:])


def hex_to_field(hex_string: str, field_modulus: str | int) -> str:
    """
    Reduce a hex value modulo the field size.

    This loses magnitude for values >= field_modulus; use the packing
    functions in core.encoding.packing to preserve it instead.

    Returns:
        Decimal string in [0, field_modulus)
    """
    return str(int(hex_to_dec(hex_string)) % int(field_modulus))


def hex_less_than(hex_string: str, field_modulus: str | int) -> bool:
    """True if the hex value is strictly smaller than field_modulus."""
    return int(hex_to_dec(hex_string)) < int(field_modulus)


# =============================================================================
# Fixed-Width Hex Helpers
# =============================================================================

def pad_hex(hex_string: str, bits: int) -> str:
    """
    Left-pad a hex value with zeros to a total width of ``bits``.

    Args:
        hex_string: Hex value (with or without 0x)
        bits: Target width; must be a whole number of bytes

    Returns:
        0x-prefixed hex string of exactly bits / 4 digits

    Raises:
        ValueError: If bits is not a multiple of 8
        CapacityExceededException: If the value is already wider than bits
    """
    if bits % 8 != 0:
        raise ValueError("cannot convert bits into a whole number of bytes")
    body = strip_0x(hex_string)
    width = bits // 4
    if len(body) > width:
        raise CapacityExceededException(
            f"Hex value of {len(body)} digits does not fit in {bits} bits",
            bit_length=len(body) * 4,
            capacity_bits=bits,
        )
    return ensure_0x(body.rjust(width, "0"))


def utf8_string_to_hex(text: str, out_length_bytes: int) -> str:
    """
    Encode a string as UTF-8 hex, left-padded to a fixed byte length.

    Raises:
        CapacityExceededException: If the encoded string is longer than
            out_length_bytes
    """
    encoded = text.encode("utf-8").hex()
    width = out_length_bytes * 2
    if len(encoded) > width:
        raise CapacityExceededException(
            "String is too long, try increasing the length of the output hex",
            bit_length=len(encoded) * 4,
            capacity_bits=out_length_bytes * 8,
        )
    return ensure_0x(encoded.rjust(width, "0"))


def hex_to_utf8_string(hex_string: str) -> str:
    """Decode UTF-8 hex produced by utf8_string_to_hex, dropping NUL padding."""
    try:
        data = bytes.fromhex(strip_0x(hex_string))
        return data.replace(b"\x00", b"").decode("utf-8")
    except ValueError as e:
        raise InvalidEncodingException(
            f"Cannot decode hex as UTF-8: {e}",
            value=hex_string,
            base=16,
        ) from e
