"""
Static and voyage related data: AIS type 5 and type 24.

Type 24 is sent as two independent single-sentence messages, part A (name)
and part B (ship type, vendor, call sign, dimensions). The first part to
arrive is cached on the parser by MMSI; the second one completes the record.
"""

from __future__ import annotations
import logging
from typing import Union

from .bitreader import BitReader
from .exceptions import InvalidSentence
from .fields import Field, decode_fields, require_bits, required_bits
from .messages import INCOMPLETE, AisClass, Incomplete, Station, VesselStaticData

logger = logging.getLogger(__name__)


STATIC_VOYAGE = (
    Field("mmsi", 8, 30),
    Field("ais_version", 38, 2),
    Field("imo_number", 40, 30, sentinel=0),
    Field("call_sign", 70, 42, kind=str),
    Field("name", 112, 120, kind=str),
    Field("ship_type", 232, 8),
    Field("dimension_to_bow", 240, 9),
    Field("dimension_to_stern", 249, 9),
    Field("dimension_to_port", 258, 6),
    Field("dimension_to_starboard", 264, 6),
    Field("epfd", 270, 4),
    Field("eta_month", 274, 4, sentinel=0),
    Field("eta_day", 278, 5, sentinel=0),
    Field("eta_hour", 283, 5, sentinel=24, at_least=True),
    Field("eta_minute", 288, 6, sentinel=60, at_least=True),
    Field("draught", 294, 8, sentinel=0, divisor=10.0),
    Field("destination", 302, 120, kind=str),
    Field("dte", 422, 1, kind=bool),
)
STATIC_VOYAGE_BITS = required_bits(STATIC_VOYAGE)

PART_A = (
    Field("name", 40, 120, kind=str),
)
PART_A_BITS = required_bits(PART_A)

PART_B = (
    Field("ship_type", 40, 8),
    Field("vendor_id", 48, 18, kind=str),
    Field("unit_model_code", 66, 4),
    Field("serial_number", 70, 20),
    Field("call_sign", 90, 42, kind=str),
)
PART_B_DIMENSIONS = (
    Field("dimension_to_bow", 132, 9),
    Field("dimension_to_stern", 141, 9),
    Field("dimension_to_port", 150, 6),
    Field("dimension_to_starboard", 156, 6),
)
PART_B_MOTHERSHIP = (
    Field("mothership_mmsi", 132, 30),
)
PART_B_BITS = required_bits(PART_B + PART_B_DIMENSIONS)


def is_auxiliary_craft(mmsi: int) -> bool:
    """Auxiliary craft use 98MIDXXXX numbers and report a mothership MMSI."""
    return 980000000 <= mmsi <= 989999999


def handle_t5(bits: BitReader, station: Station, own_vessel: bool) -> VesselStaticData:
    """Type 5: Static and Voyage Related Data, Class A."""
    require_bits(bits, STATIC_VOYAGE_BITS, "Type 5")
    return VesselStaticData(
        own_vessel=own_vessel,
        station=station,
        ais_type=AisClass.ClassA,
        **decode_fields(bits, STATIC_VOYAGE),
    )


def handle_t24(bits: BitReader, station: Station, own_vessel: bool, parser) -> Union[VesselStaticData, Incomplete]:
    """
    Type 24: Static Data Report, Class B.

    Returns the merged record once both parts of the same MMSI have been
    seen, otherwise caches this part on ``parser`` and returns INCOMPLETE.

    Raises:
        InvalidSentence: message too short, or part number 2 or 3
    """
    require_bits(bits, 40, "Type 24")
    mmsi = bits.get_uint(8, 30)
    part_number = bits.get_uint(38, 2)

    if part_number == 0:
        require_bits(bits, PART_A_BITS, "Type 24 part A")
        values = decode_fields(bits, PART_A)
    elif part_number == 1:
        require_bits(bits, PART_B_BITS, "Type 24 part B")
        values = decode_fields(bits, PART_B)
        if is_auxiliary_craft(mmsi):
            values.update(decode_fields(bits, PART_B_MOTHERSHIP))
        else:
            values.update(decode_fields(bits, PART_B_DIMENSIONS))
    else:
        raise InvalidSentence(f"Type 24 part number {part_number} is not 0 or 1")

    record = VesselStaticData(
        own_vessel=own_vessel,
        station=station,
        ais_type=AisClass.ClassB,
        mmsi=mmsi,
        **values,
    )

    cached = parser.pull_static(mmsi)
    if cached is None:
        parser.push_static(mmsi, record)
        return INCOMPLETE

    logger.debug("Type 24 part %d completes MMSI %d", part_number, mmsi)
    return record.merge(cached)
