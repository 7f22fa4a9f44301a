"""
Binary and text broadcast messages: AIS types 6, 8 and 14.

Type 8 carries an application payload selected by the (DAC, FID) pair:
DAC is the Designated Area Code (regional authority) and FID the
Functional ID within it. PAYLOAD_DECODERS maps each known pair to a layout
decoder; supporting a new payload means adding one entry there.

Usage:
    from nmea_ais import NmeaParser

    msg = NmeaParser().parse("!AIVDM,1,1,,A,85M:Ih1KmPAU6jAs85`03cJm,0*6A")
    if msg.parsed_payload is not None:
        print(msg.parsed_payload)
"""

from __future__ import annotations
import logging
from typing import Callable, Dict, Optional, Tuple, Union

from . import dac001
from .bitreader import BitReader
from .fields import Field, decode_fields, require_bits
from .messages import (
    BinaryAddressedMessage,
    BinaryBroadcastMessage,
    SafetyRelatedBroadcastMessage,
    Station,
    Type8Payload,
    UnsupportedPayload,
)

logger = logging.getLogger(__name__)


PayloadDecoder = Callable[[BitReader, int], Optional[Type8Payload]]

PAYLOAD_DECODERS: Dict[Tuple[int, int], PayloadDecoder] = {
    (1, fid): decoder for fid, decoder in dac001.DECODERS.items()
}


# Type 8 header, 56 bits
TYPE8_HEADER_BITS = 56
TYPE8_HEADER = (
    Field("mmsi", 8, 30),
    Field("dac", 40, 10),
    Field("fid", 50, 6),
)

# Type 6 header, 88 bits
TYPE6_HEADER_BITS = 88
TYPE6_HEADER = (
    Field("mmsi", 8, 30),
    Field("sequence_number", 38, 2),
    Field("destination_mmsi", 40, 30),
    Field("retransmit", 70, 1, kind=bool),
    Field("dac", 72, 10),
    Field("fid", 82, 6),
)

TYPE14_TEXT_OFFSET = 40


def parse_payload(dac: int, fid: int, bits: BitReader, offset: int) -> Optional[Type8Payload]:
    """
    Decode the application payload that starts at ``offset``.

    Returns:
        The typed record, None if the layout decoder declined (payload too
        short), or UnsupportedPayload for pairs without a known layout.
    """
    decoder = PAYLOAD_DECODERS.get((dac, fid))
    if decoder is None:
        logger.warning("Unsupported type 8 payload format: DAC %d FID %d", dac, fid)
        return UnsupportedPayload(dac=dac, fid=fid)
    return decoder(bits, offset)


def decode_binary_payload(
    dac: int,
    fid: int,
    data: Union[bytes, str],
    *,
    bit_length: Optional[int] = None,
) -> Optional[Type8Payload]:
    """
    Decode a binary payload that has already been split from its message.

    This is the entry point for consumers holding ``BinaryBroadcastMessage.data``
    or ``BinaryAddressedMessage.data`` rather than a full bit sequence.

    Args:
        dac: Designated Area Code (regional authority)
        fid: Functional ID (message subtype within DAC)
        data: Binary payload as bytes or hex string
        bit_length: Number of valid bits in ``data`` (default: all of them)
    """
    if isinstance(data, str):
        data = bytes.fromhex(data)
    return parse_payload(dac, fid, BitReader(data, bit_length), 0)


def handle_t6(bits: BitReader, station: Station, own_vessel: bool) -> BinaryAddressedMessage:
    """Type 6: Addressed Binary Message. The payload is kept raw."""
    require_bits(bits, TYPE6_HEADER_BITS, "Type 6")
    header = decode_fields(bits, TYPE6_HEADER)
    return BinaryAddressedMessage(
        own_vessel=own_vessel,
        station=station,
        data=bits.tail_bytes(TYPE6_HEADER_BITS),
        data_bit_length=len(bits) - TYPE6_HEADER_BITS,
        **header,
    )


def handle_t8(bits: BitReader, station: Station, own_vessel: bool) -> BinaryBroadcastMessage:
    """
    Type 8: Binary Broadcast Message.

    Bits 0-55 are the header (type, repeat, MMSI, spare, DAC, FID); the rest,
    up to 952 bits, is the application payload.
    """
    require_bits(bits, TYPE8_HEADER_BITS, "Type 8")
    header = decode_fields(bits, TYPE8_HEADER)

    data_bit_length = len(bits) - TYPE8_HEADER_BITS
    parsed_payload = None
    if data_bit_length > 0:
        parsed_payload = parse_payload(header["dac"], header["fid"], bits, TYPE8_HEADER_BITS)

    return BinaryBroadcastMessage(
        own_vessel=own_vessel,
        station=station,
        data=bits.tail_bytes(TYPE8_HEADER_BITS),
        data_bit_length=data_bit_length,
        parsed_payload=parsed_payload,
        **header,
    )


def handle_t14(bits: BitReader, station: Station, own_vessel: bool) -> SafetyRelatedBroadcastMessage:
    """Type 14: Safety Related Broadcast Message, free 6-bit text."""
    require_bits(bits, TYPE14_TEXT_OFFSET, "Type 14")
    text_bits = (len(bits) - TYPE14_TEXT_OFFSET) // 6 * 6
    return SafetyRelatedBroadcastMessage(
        own_vessel=own_vessel,
        station=station,
        mmsi=bits.get_uint(8, 30),
        text=bits.get_string(TYPE14_TEXT_OFFSET, text_bits),
    )
