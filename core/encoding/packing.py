"""
Module 04 - Bit Packing / Field Encoder
Packs large magnitudes into fixed-size field-element chunks and back.

Module ID: M04

The proving system's field modulus is just under 254 bits, so values that
may be larger (hashes, token ids, public keys) are split into chunks of
``packing_size`` bits. Each chunk is handed to the circuit as one decimal
field element, most significant chunk first.

Packing Rules (Hard Contracts):
1. Chunks are peeled from the right: the rightmost packing_size bits form
   the last chunk, and so on. Only the leftmost chunk can be short, and it
   is left-padded with zeros.
2. Every chunk is exactly packing_size bits wide.
3. When a fixed number of elements is required, the sequence is padded on
   the left with "0" elements (not with bits).
4. A value that needs more elements than required is rejected with
   CapacityExceededException; nothing is silently truncated.
5. Decoding weights element i by (2^packing_size)^(len-1-i) and sums.
"""
from __future__ import annotations

from typing import Sequence

from core.config.runtime import ShieldConfig
from core.encoding.base import (
    bin_to_dec,
    dec_to_bin,
    dec_to_hex,
    hex_to_bin,
)
from core.schemas.commitment import FieldElementSequence
from core.schemas.errors import (
    CapacityExceededException,
    ConfigurationException,
    InvalidEncodingException,
)


MagnitudeLike = str | int


def _check_packing_size(packing_size: int) -> None:
    if packing_size <= 0 or packing_size % 8 != 0:
        raise ConfigurationException(
            f"packing size must be a positive multiple of 8, got {packing_size}",
            field_name="packing_size",
        )


# =============================================================================
# Bit Chunking
# =============================================================================

def left_pad_bits(bit_string: str, n: int) -> str:
    """
    Left-pad a binary string with zeros to exactly n bits.

    Raises:
        CapacityExceededException: If bit_string is longer than n bits
    """
    if len(bit_string) > n:
        raise CapacityExceededException(
            f"String larger than {n} bits passed to left_pad_bits",
            bit_length=len(bit_string),
            capacity_bits=n,
        )
    return bit_string.rjust(n, "0")


def split_and_pad_bits(bit_string: str, n: int) -> list[str]:
    """
    Split a binary string into n-bit chunks, most significant first.

    The rightmost n bits become the last chunk; the remainder is split the
    same way until at most n bits are left, which are left-padded to n.

    Args:
        bit_string: Binary digits, most significant first
        n: Chunk size in bits

    Returns:
        List of n-bit binary strings whose concatenation is bit_string
        left-padded to a multiple of n.

    Example:
        >>> split_and_pad_bits("1" * 10, 8)
        ['00000011', '11111111']
    """
    if n <= 0:
        raise ValueError(f"Chunk size must be positive, got {n}")
    if bit_string.strip("01"):
        raise InvalidEncodingException(
            f"Invalid binary string: {bit_string[:40]!r}",
            value=bit_string,
            base=2,
        )

    chunks: list[str] = []
    remainder = bit_string
    while len(remainder) > n:
        chunks.append(remainder[-n:])
        remainder = remainder[:-n]
    chunks.append(left_pad_bits(remainder, n))
    chunks.reverse()
    return chunks


def split_hex_to_bits(hex_string: str, n: int) -> list[str]:
    """Split the binary form of a hex value into n-bit chunks."""
    return split_and_pad_bits(hex_to_bin(hex_string), n)


def split_dec_to_bits(dec_string: str, n: int) -> list[str]:
    """Split the binary form of a decimal value into n-bit chunks."""
    return split_and_pad_bits(dec_to_bin(dec_string), n)


def split_bin_to_bits(bin_string: str, n: int) -> list[str]:
    return split_and_pad_bits(bin_string, n)


# =============================================================================
# Field Element Encoding
# =============================================================================

def _magnitude_to_bits(value: MagnitudeLike) -> str:
    """Binary digits of a 0x hex string, a decimal string or a non-negative int."""
    if isinstance(value, bool):
        raise InvalidEncodingException("Booleans are not magnitudes", value=value)
    if isinstance(value, int):
        if value < 0:
            raise InvalidEncodingException(
                f"Magnitudes must be non-negative, got {value}",
                value=value,
                base=10,
            )
        return dec_to_bin(str(value))
    if isinstance(value, str) and value[:2] in ("0x", "0X"):
        return hex_to_bin(value)
    return dec_to_bin(value)


def _chunks_to_elements(
    chunks: list[str],
    packing_size: int,
    required_count: int | None,
) -> list[str]:
    elements = [bin_to_dec(chunk) for chunk in chunks]
    if required_count is None:
        return elements

    if required_count < 1:
        raise ValueError(f"required element count must be positive, got {required_count}")
    if len(elements) > required_count:
        significant_bits = len("".join(chunks).lstrip("0"))
        raise CapacityExceededException(
            f"Value of {significant_bits} bits does not fit in "
            f"{required_count} elements of {packing_size} bits",
            bit_length=significant_bits,
            capacity_bits=required_count * packing_size,
        )
    return ["0"] * (required_count - len(elements)) + elements


def encode_magnitude_as_field_elements(
    value: MagnitudeLike,
    packing_size: int = 128,
    required_count: int | None = None,
) -> list[str]:
    """
    Encode a magnitude as a sequence of decimal field elements.

    Args:
        value: 0x-prefixed hex string, decimal string, or non-negative int
        packing_size: Bits per element (multiple of 8)
        required_count: Exact number of elements expected by the circuit;
            shorter sequences are left-padded with "0" elements

    Returns:
        Decimal strings, most significant element first

    Raises:
        InvalidEncodingException: If value is not a valid hex/decimal magnitude
        CapacityExceededException: If value needs more than required_count elements

    Example:
        >>> encode_magnitude_as_field_elements("0x0", 128, 3)
        ['0', '0', '0']
    """
    _check_packing_size(packing_size)
    chunks = split_and_pad_bits(_magnitude_to_bits(value), packing_size)
    return _chunks_to_elements(chunks, packing_size, required_count)


def hex_to_field_preserve(
    hex_string: str,
    packing_size: int = 128,
    packets: int | None = None,
) -> list[str]:
    """
    Preserve the magnitude of a hex number across several field elements.

    Unlike encode_magnitude_as_field_elements, the input is always read as
    hex, with or without a 0x marker.
    """
    _check_packing_size(packing_size)
    chunks = split_hex_to_bits(hex_string, packing_size)
    return _chunks_to_elements(chunks, packing_size, packets)


def dec_to_field_preserve(
    dec_string: str,
    packing_size: int = 128,
    packets: int | None = None,
) -> list[str]:
    """Preserve the magnitude of a decimal number across several field elements."""
    _check_packing_size(packing_size)
    chunks = split_dec_to_bits(dec_string, packing_size)
    return _chunks_to_elements(chunks, packing_size, packets)


# =============================================================================
# Field Element Decoding
# =============================================================================

def decode_field_elements_to_magnitude(
    elements: Sequence[str],
    packing_size: int = 128,
) -> str:
    """
    Reassemble the magnitude represented by a field-element sequence.

    Each element represents a number 2^packing_size times larger than the
    next one: element 0 receives the largest shift and the last element is
    not shifted at all.

    Args:
        elements: Decimal field elements, most significant first
        packing_size: Bits carried by each element

    Returns:
        The magnitude as a decimal string

    Raises:
        InvalidEncodingException: If the sequence is empty or an element is
            not a decimal string
        CapacityExceededException: If an element does not fit in packing_size bits
    """
    _check_packing_size(packing_size)
    if not elements:
        raise InvalidEncodingException("Cannot decode an empty field-element sequence")

    chunk_limit = 1 << packing_size
    weight = 1 << packing_size
    total = 0
    last = len(elements) - 1
    for i, element in enumerate(elements):
        element = str(element)
        if not (element.isascii() and element.isdigit()):
            raise InvalidEncodingException(
                f"Field element {i} is not a decimal string: {element[:40]!r}",
                value=element,
                base=10,
            )
        value = int(element)
        if value >= chunk_limit:
            raise CapacityExceededException(
                f"Field element {i} exceeds {packing_size} bits",
                bit_length=value.bit_length(),
                capacity_bits=packing_size,
            )
        total += value * weight ** (last - i)
    return str(total)


def fields_to_hex(elements: Sequence[str], packing_size: int = 128) -> str:
    """Reassemble a field-element sequence into a 0x-prefixed hex string."""
    return dec_to_hex(decode_field_elements_to_magnitude(elements, packing_size))


# =============================================================================
# Configured Encoder
# =============================================================================

class FieldEncoder:
    """
    Field encoder bound to a ShieldConfig.

    Usage:
        encoder = FieldEncoder(ShieldConfig())
        elements = encoder.encode("0x" + "ff" * 32, required_count=2)
        assert encoder.decode_hex(elements) == "0x" + "ff" * 32
    """

    def __init__(self, config: ShieldConfig | None = None) -> None:
        self.config = config or ShieldConfig()

    @property
    def packing_size(self) -> int:
        return self.config.packing_size

    def encode(
        self,
        value: MagnitudeLike,
        required_count: int | None = None,
    ) -> list[str]:
        """Encode a magnitude with the configured packing size."""
        return encode_magnitude_as_field_elements(value, self.packing_size, required_count)

    def encode_sequence(
        self,
        value: MagnitudeLike,
        required_count: int | None = None,
    ) -> FieldElementSequence:
        return FieldElementSequence(
            elements=self.encode(value, required_count),
            packing_size=self.packing_size,
        )

    def decode(self, elements: Sequence[str]) -> str:
        """Decode to a decimal string."""
        return decode_field_elements_to_magnitude(elements, self.packing_size)

    def decode_hex(self, elements: Sequence[str]) -> str:
        return fields_to_hex(elements, self.packing_size)

    def is_field_element(self, dec_string: str) -> bool:
        """True if dec_string is a decimal value in [0, field_modulus)."""
        if not (dec_string.isascii() and dec_string.isdigit()):
            return False
        return int(dec_string) < self.config.modulus
