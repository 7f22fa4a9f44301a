"""
Declarative field tables for fixed AIS layouts.

Every message layout is a tuple of Field entries. One small interpreter,
decode_fields(), reads them all the same way:

    raw bits -> sentinel check -> sign -> value / divisor + add

so the "not available" handling of a 35-field weather record and of a
position report is one routine instead of one if-statement per field.

Sentinels are compared against the raw, unsigned bit pattern. For a signed
field that means the all-ones sentinel of a 25-bit longitude is 0x1FFFFFF,
not -1.
"""

from __future__ import annotations
from typing import Any, Dict, NamedTuple, Optional, Sequence

from .bitreader import BitReader
from .exceptions import InvalidSentence


class Field(NamedTuple):
    """
    One packed field.

    Attributes:
        name: Attribute name in the decoded record
        offset: Bit offset relative to the table start
        width: Bit width
        signed: Two's complement field
        sentinel: Raw value meaning "not available"
        at_least: Treat every raw value >= sentinel as "not available"
        divisor: Divide the value by this (result is float)
        add: Added after division
        kind: int, float, bool or str (6-bit text)
    """
    name: str
    offset: int
    width: int
    signed: bool = False
    sentinel: Optional[int] = None
    at_least: bool = False
    divisor: Optional[float] = None
    add: float = 0
    kind: type = int


def required_bits(table: Sequence[Field]) -> int:
    """Number of bits a table needs, measured from its start."""
    return max(f.offset + f.width for f in table)


def decode_field(bits: BitReader, field: Field, start: int = 0) -> Any:
    """Decode one field, returning None for a sentinel value."""
    offset = start + field.offset

    if field.kind is str:
        return bits.get_string(offset, field.width) or None

    raw = bits.get_uint(offset, field.width)
    if field.sentinel is not None:
        if raw == field.sentinel or (field.at_least and raw > field.sentinel):
            return None

    if field.kind is bool:
        return raw != 0

    value = raw
    if field.signed and raw & (1 << (field.width - 1)):
        value -= 1 << field.width

    if field.divisor is not None:
        return value / field.divisor + field.add
    if field.kind is float:
        return float(value + field.add)
    return value + field.add


def decode_fields(bits: BitReader, table: Sequence[Field], start: int = 0) -> Dict[str, Any]:
    """
    Decode every field of ``table`` starting at bit ``start``.

    The caller checks the length first (see required_bits); reading past
    the end raises ValueError.
    """
    return {f.name: decode_field(bits, f, start) for f in table}


def require_bits(bits: BitReader, count: int, label: str) -> None:
    """Raise InvalidSentence unless ``bits`` holds at least ``count`` bits."""
    if len(bits) < count:
        raise InvalidSentence(
            f"{label} message too short: {len(bits)} bits (minimum {count} required)"
        )
