"""
Bit-level extraction utilities for AIS payloads.

Every message decoder reads its fields through BitReader: unsigned and
signed integers and 6-bit text at any bit position. The armor decoder that
turns the payload characters of a sentence into bits lives here as well.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .exceptions import InvalidSentence


# 6-bit character set: values 0-31 are '@'..'_', values 32-63 are ' '..'?'
SIXBIT_ASCII = "@ABCDEFGHIJKLMNOPQRSTUVWXYZ[\\]^_ !\"#$%&'()*+,-./0123456789:;<=>?"


@dataclass
class BitReader:
    """
    MSB-first view of a byte string, addressed by bit.

    ``num_bits`` counts the valid bits, which need not be a multiple of 8
    (an armored payload yields 6 bits per character); the unused low bits
    of the final byte are zero.

    Example:
        >>> reader = BitReader(bytes.fromhex('DEADBEEF'))
        >>> reader.get_uint(0, 8)
        222
        >>> reader.get_uint(4, 8)
        234
    """
    data: bytes
    num_bits: Optional[int] = None

    def __post_init__(self):
        capacity = len(self.data) * 8
        if self.num_bits is None:
            self.num_bits = capacity
        elif self.num_bits > capacity:
            raise ValueError(f"{self.num_bits} bits do not fit in {len(self.data)} bytes")

    def __len__(self) -> int:
        return self.num_bits

    def get_uint(self, offset: int, width: int) -> int:
        """
        Read ``width`` bits at ``offset`` as an unsigned big-endian number.

        Raises ValueError when the range leaves the valid bits.
        """
        if width == 0:
            return 0
        end = offset + width
        if offset < 0 or end > self.num_bits:
            raise ValueError(f"Bits {offset}..{end} out of range for {self.num_bits}-bit payload")

        first = offset // 8
        last = (end - 1) // 8
        chunk = int.from_bytes(self.data[first:last + 1], "big")
        return (chunk >> ((last + 1) * 8 - end)) & ((1 << width) - 1)

    def get_int(self, offset: int, width: int) -> int:
        """Two's complement read: the first bit of the field is the sign."""
        raw = self.get_uint(offset, width)
        if width and raw >> (width - 1):
            raw -= 1 << width
        return raw

    def get_bool(self, offset: int) -> bool:
        return bool(self.get_uint(offset, 1))

    def get_string(self, offset: int, width: int) -> str:
        """
        Decode ``width // 6`` characters of 6-bit text.

        Trailing '@' (the padding character) and spaces are removed.
        """
        if width % 6:
            raise ValueError(f"Text field width {width} is not a multiple of 6")
        text = "".join(
            SIXBIT_ASCII[self.get_uint(pos, 6)] for pos in range(offset, offset + width, 6)
        )
        return text.rstrip("@ ")

    def tail_bytes(self, offset: int) -> bytes:
        """
        Copy the bits from ``offset`` to the end into a new byte string.

        The copy is MSB first; the last byte is zero padded in its low bits.
        """
        count = self.num_bits - offset
        if count <= 0:
            return b""
        value = self.get_uint(offset, count)
        padding = (-count) % 8
        return (value << padding).to_bytes((count + padding) // 8, "big")


def bits_from_ais_payload(payload: str, pad: int = 0) -> BitReader:
    """
    Decode the armored payload field of a !AIVDM sentence.

    Each character carries 6 bits: its code minus 48, minus a further 8 when
    the result exceeds 40. ``pad`` bits are dropped from the end.

    Raises:
        InvalidSentence: on a character outside the 64-symbol alphabet
    """
    value = 0
    for pos, char in enumerate(payload):
        sixbit = ord(char) - 48
        if sixbit > 40:
            sixbit -= 8
        if not 0 <= sixbit <= 63:
            raise InvalidSentence(f"Invalid payload character {char!r} at position {pos}")
        value = (value << 6) | sixbit

    num_bits = len(payload) * 6
    if pad:
        pad = min(pad, num_bits)
        value >>= pad
        num_bits -= pad

    padding = (-num_bits) % 8
    data = (value << padding).to_bytes((num_bits + padding) // 8, "big")
    return BitReader(data, num_bits)
