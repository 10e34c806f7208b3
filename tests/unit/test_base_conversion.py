"""
Module 03 - Base Conversion Unit Tests
Tests for core/encoding/base.py

Tests:
- digit-array arithmetic
- convert_base against Python's own integer formatting
- checked conversions raise InvalidEncodingException
- fixed-width hex and UTF-8 helpers
"""
import pytest

from core.config.runtime import DEFAULT_FIELD_MODULUS
from core.encoding.base import (
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
from core.schemas.errors import CapacityExceededException, InvalidEncodingException


PRIME = int(DEFAULT_FIELD_MODULUS)


class TestDigitArithmetic:
    """Tests for the little-endian digit-array helpers."""

    def test_parse_to_digits_little_endian(self):
        assert parse_to_digits("1a", 16) == [10, 1]
        assert parse_to_digits("1A", 16) == [10, 1]

    def test_parse_to_digits_rejects_out_of_range_digit(self):
        assert parse_to_digits("12", 2) is None
        assert parse_to_digits("0x1", 16) is None

    def test_add_digits_carries(self):
        assert add_digits([9], [9], 10) == [8, 1]
        assert add_digits([], [3, 2], 10) == [3, 2]

    def test_multiply_by_number(self):
        # 25 * 12 = 300
        assert multiply_by_number(12, [5, 2], 10) == [0, 0, 3]

    def test_multiply_by_zero_is_empty(self):
        assert multiply_by_number(0, [1, 2], 10) == []

    def test_multiply_by_negative_is_sentinel(self):
        assert multiply_by_number(-1, [1], 10) is None


class TestConvertBase:
    """Tests for convert_base()."""

    def test_known_values(self):
        assert convert_base("ff", 16, 10) == "255"
        assert convert_base("255", 10, 16) == "ff"
        assert convert_base("FF", 16, 2) == "11111111"

    def test_hex_marker_stripped(self):
        assert convert_base("0xff", 16, 10) == "255"

    def test_all_zero_input_gives_zero(self):
        assert convert_base("000", 2, 16) == "0"
        assert convert_base("0", 10, 2) == "0"

    def test_leading_zeros_dropped(self):
        assert convert_base("000255", 10, 16) == "ff"

    def test_invalid_digit_returns_none(self):
        assert convert_base("12", 2, 10) is None
        assert convert_base("zz", 16, 10) is None

    @pytest.mark.parametrize("n", [1, 255, 256, 2**128 - 1, 2**128, PRIME, 2**300 + 12345])
    def test_matches_int_formatting(self, n):
        assert convert_base(str(n), 10, 16) == format(n, "x")
        assert convert_base(format(n, "x"), 16, 10) == str(n)
        assert convert_base(format(n, "b"), 2, 10) == str(n)

    def test_unsupported_base_rejected(self):
        with pytest.raises(ValueError):
            convert_base("1", 10, 37)


class TestCheckedConversions:
    """Tests for the hex/dec/bin wrappers."""

    def test_hex_to_dec(self):
        assert hex_to_dec("0x" + "f" * 64) == str(2**256 - 1)

    def test_dec_to_hex_has_marker(self):
        assert dec_to_hex("255") == "0xff"
        assert dec_to_hex(DEFAULT_FIELD_MODULUS) == hex(PRIME)

    def test_binary_conversions(self):
        assert dec_to_bin("5") == "101"
        assert bin_to_dec("0") == "0"
        assert bin_to_hex("1010") == "0xa"
        assert hex_to_bin("0x1234") == "1001000110100"

    def test_empty_string_rejected(self):
        with pytest.raises(InvalidEncodingException):
            hex_to_dec("")
        with pytest.raises(InvalidEncodingException):
            hex_to_dec("0x")

    def test_invalid_digits_rejected(self):
        with pytest.raises(InvalidEncodingException) as exc_info:
            hex_to_dec("0xg1")
        assert exc_info.value.code == "INVALID_ENCODING"
        assert exc_info.value.details["base"] == 16

    def test_non_string_rejected(self):
        with pytest.raises(InvalidEncodingException):
            dec_to_hex(255)

    def test_convert_named(self):
        assert convert_named("ff", "hex", "dec") == "255"
        assert convert_named("255", "dec", "hex") == "0xff"
        assert convert_named("101", "bin", "bin") == "101"

    def test_convert_named_unknown_base(self):
        with pytest.raises(ValueError):
            convert_named("1", "oct", "dec")


class TestMarkerHelpers:

    def test_strip_and_ensure(self):
        assert strip_0x("0xab") == "ab"
        assert strip_0x("0XAB") == "AB"
        assert strip_0x("ab") == "ab"
        assert ensure_0x("ab") == "0xab"
        assert ensure_0x("0xab") == "0xab"

    def test_is_hex(self):
        assert is_hex("0xdeadBEEF")
        assert is_hex("00")
        assert not is_hex("0x")
        assert not is_hex("0xgg")


class TestMeasurements:
    """Tests for bit lengths, slicing and field reduction."""

    def test_bit_lengths(self):
        assert bit_length_hex("0x1234") == 13
        assert bit_length_hex("0x0") == 0
        assert bit_length_dec("255") == 8
        assert bit_length_dec(DEFAULT_FIELD_MODULUS) == 254

    def test_slice_right_bits(self):
        assert slice_right_bits_hex("0x1234", 8) == "0x34"

    def test_hex_to_field_reduces(self):
        value = "0x" + "f" * 64
        assert hex_to_field(value, DEFAULT_FIELD_MODULUS) == str((2**256 - 1) % PRIME)

    def test_hex_less_than_is_strict(self):
        assert hex_less_than("0x1", 2)
        assert not hex_less_than(hex(PRIME), DEFAULT_FIELD_MODULUS)
        assert hex_less_than(hex(PRIME - 1), DEFAULT_FIELD_MODULUS)


class TestFixedWidthHex:

    def test_pad_hex(self):
        assert pad_hex("0x1", 16) == "0x0001"
        assert pad_hex("abcd", 16) == "0xabcd"

    def test_pad_hex_overflow(self):
        with pytest.raises(CapacityExceededException):
            pad_hex("0x12345", 16)

    def test_pad_hex_requires_whole_bytes(self):
        with pytest.raises(ValueError):
            pad_hex("0x1", 12)

    def test_utf8_round_trip(self):
        encoded = utf8_string_to_hex("abc", 4)
        assert encoded == "0x00616263"
        assert hex_to_utf8_string(encoded) == "abc"

    def test_utf8_too_long(self):
        with pytest.raises(CapacityExceededException):
            utf8_string_to_hex("abcde", 4)

    def test_utf8_decode_invalid(self):
        with pytest.raises(InvalidEncodingException):
            hex_to_utf8_string("0xff")
