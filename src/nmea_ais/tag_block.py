"""
NMEA 4.10 tag block parsing.

A tag block is optional metadata placed in front of a sentence, enclosed in
backslashes and protected by its own checksum:

    \\g:1-2-73874,n:157036,s:r003669945,c:1241544035*4A\\!AIVDM,...

Supported fields:
- c: UNIX timestamp (seconds or milliseconds, not disambiguated)
- d: destination identifier (max 15 chars)
- g: sentence grouping, "sentence-total-group"
- n: line count
- r: relative time
- s: source / station identifier
- t, i: text string (max 15 chars)

Unknown fields are ignored.
"""

from __future__ import annotations
import re
import string
from dataclasses import dataclass
from typing import Optional

from .checksum import checksum
from .exceptions import CorruptedSentence, InvalidSentence


MAX_TEXT_LENGTH = 15

_UNSIGNED = re.compile(r"[0-9]+")


def _parse_unsigned(value: str, bits: int) -> Optional[int]:
    """Parse a decimal unsigned integer that fits in ``bits`` bits, else None."""
    if not _UNSIGNED.fullmatch(value):
        return None
    number = int(value)
    if number >= 1 << bits:
        return None
    return number


@dataclass
class SentenceGrouping:
    """Position of a sentence within a tag-block group."""
    sentence_number: int
    total_sentences: int
    group_id: int


@dataclass
class TagBlock:
    timestamp: Optional[int] = None
    destination: Optional[str] = None
    grouping: Optional[SentenceGrouping] = None
    line_count: Optional[int] = None
    relative_time: Optional[int] = None
    source: Optional[str] = None
    text: Optional[str] = None

    @classmethod
    def parse(cls, raw: str) -> "TagBlock":
        """
        Parse a tag block including its enclosing backslashes.

        Raises:
            InvalidSentence: bad delimiters, missing or malformed checksum,
                or a grouping field with a non-numeric part
            CorruptedSentence: checksum mismatch
        """
        if len(raw) < 2 or not raw.startswith("\\") or not raw.endswith("\\"):
            raise InvalidSentence("Tag block must start and end with backslashes")

        content = raw[1:-1]
        asterisk = content.rfind("*")
        if asterisk < 0:
            raise InvalidSentence("Missing checksum in tag block")
        if asterisk + 2 >= len(content):
            raise InvalidSentence("Invalid checksum in tag block")

        fields, checksum_hex = content[:asterisk], content[asterisk + 1:]
        if not all(c in string.hexdigits for c in checksum_hex) or int(checksum_hex, 16) > 0xFF:
            raise InvalidSentence("Invalid checksum format in tag block")

        calculated = checksum(fields)
        expected = int(checksum_hex, 16)
        if calculated != expected:
            raise CorruptedSentence(
                f"Tag block checksum mismatch: calculated {calculated:02X}, expected {expected:02X}"
            )

        block = cls()
        for field in fields.split(","):
            key, sep, value = field.partition(":")
            if not sep:
                continue

            if key == "c":
                block.timestamp = _parse_unsigned(value, 64)
            elif key == "d":
                if len(value) <= MAX_TEXT_LENGTH:
                    block.destination = value
            elif key == "g":
                block.grouping = _parse_grouping(value)
            elif key == "n":
                block.line_count = _parse_unsigned(value, 32)
            elif key == "r":
                block.relative_time = _parse_unsigned(value, 32)
            elif key == "s":
                block.source = value
            elif key in ("t", "i"):
                if len(value) <= MAX_TEXT_LENGTH:
                    block.text = value
            # Anything else is left for newer revisions of the standard

        return block


def _parse_grouping(value: str) -> Optional[SentenceGrouping]:
    """Parse "1-2-73874"; anything that is not three parts is treated as absent."""
    parts = value.split("-")
    if len(parts) != 3:
        return None

    numbers = []
    for label, part in zip(("sentence number", "total sentences", "group ID"), parts):
        number = _parse_unsigned(part, 32)
        if number is None:
            raise InvalidSentence(f"Invalid {label} in grouping: {part!r}")
        numbers.append(number)

    return SentenceGrouping(*numbers)


def split_tag_block(sentence: str):
    """
    Separate a leading tag block from the sentence that follows it.

    Returns:
        (TagBlock or None, remaining sentence text)
    """
    if not sentence.startswith("\\"):
        return None, sentence

    end = sentence.find("\\", 1)
    if end < 0:
        raise InvalidSentence("Tag block not properly closed")

    block = TagBlock.parse(sentence[:end + 1])
    return block, sentence[end + 1:].lstrip()
