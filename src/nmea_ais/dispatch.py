"""
AIS message type dispatch.

The first six bits of a reassembled payload select the handler. All
handlers take (bits, station, own_vessel); type 24 also needs the parser
for its static data cache.
"""

from __future__ import annotations
from typing import Callable, Dict

from . import binary, position, static, station as fixed
from .bitreader import BitReader
from .exceptions import InvalidSentence, UnsupportedSentenceType
from .messages import ParsedMessage, Station


Handler = Callable[[BitReader, Station, bool], ParsedMessage]

HANDLERS: Dict[int, Handler] = {
    1: position.handle_class_a,
    2: position.handle_class_a,
    3: position.handle_class_a,
    4: fixed.handle_base_station,
    5: static.handle_t5,
    6: binary.handle_t6,
    8: binary.handle_t8,
    9: position.handle_t9,
    11: fixed.handle_base_station,
    14: binary.handle_t14,
    18: position.handle_t18,
    19: position.handle_t19,
    21: fixed.handle_t21,
    27: position.handle_t27,
}


def dispatch(bits: BitReader, station: Station, own_vessel: bool, parser, sentence_type: str = "!VDM") -> ParsedMessage:
    """
    Decode a complete AIS payload.

    Raises:
        InvalidSentence: fewer than 6 bits, or the handler found the
            message too short or malformed
        UnsupportedSentenceType: no handler for the message type
    """
    if len(bits) < 6:
        raise InvalidSentence(f"AIS payload too short: {len(bits)} bits")

    message_type = bits.get_uint(0, 6)
    if message_type == 24:
        return static.handle_t24(bits, station, own_vessel, parser)

    handler = HANDLERS.get(message_type)
    if handler is None:
        raise UnsupportedSentenceType(f"Unsupported {sentence_type} message type: {message_type}")
    return handler(bits, station, own_vessel)
