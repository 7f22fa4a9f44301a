"""
NMEA checksum calculation and validation.

The checksum is the XOR of every character between the start marker
('$', '!' or the tag block backslash) and the '*', written as two hex
digits after the '*'. Sentences and tag blocks share the same algorithm.
"""

from __future__ import annotations
import string
from typing import Optional

from .exceptions import CorruptedSentence


def checksum(text: str) -> int:
    """Return the XOR of the character codes of ``text``."""
    value = 0
    for char in text:
        value ^= ord(char)
    return value & 0xFF


def validate(text: str, expected_hex: Optional[str]) -> None:
    """
    Check ``text`` against the checksum given on the wire.

    An empty or missing ``expected_hex`` means the sender did not supply a
    checksum; the text is accepted unchecked.

    Raises:
        CorruptedSentence: if the computed checksum differs from the given one
    """
    if not expected_hex:
        return

    calculated = checksum(text)
    given = None
    if all(c in string.hexdigits for c in expected_hex):
        given = int(expected_hex, 16)

    if given != calculated:
        raise CorruptedSentence(
            f"Corrupted NMEA sentence: {calculated:02X} != {expected_hex.upper()}"
        )
