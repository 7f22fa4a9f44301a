"""
Exceptions raised while parsing NMEA sentences.

All of them derive from ParseError (itself a ValueError), so callers that
only care about "this line was bad" can catch a single type.
"""


class ParseError(ValueError):
    """Base class for every parse failure."""


class InvalidSentence(ParseError):
    """Structurally malformed input: framing, tag block, talker or length."""


class CorruptedSentence(ParseError):
    """Checksum mismatch, or a field that does not parse as its type."""


class UnsupportedSentenceType(ParseError):
    """Well-formed input whose sentence type or AIS message type is not handled."""
