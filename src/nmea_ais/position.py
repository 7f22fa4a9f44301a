"""
Position reports: AIS types 1, 2, 3, 9, 18, 19 and 27.

Every layout is a Field table with absolute bit offsets, so the handlers only
check the length, decode the table and attach the station information.
"""

from __future__ import annotations
from typing import Optional

from .bitreader import BitReader
from .fields import Field, decode_fields, require_bits
from .messages import (
    AisClass,
    StandardSarAircraftPositionReport,
    Station,
    VesselDynamicData,
)


def _longitude(offset: int) -> Field:
    return Field("longitude", offset, 28, signed=True, sentinel=181 * 600000, divisor=600000.0)


def _latitude(offset: int) -> Field:
    return Field("latitude", offset, 27, signed=True, sentinel=91 * 600000, divisor=600000.0)


CLASS_A_BITS = 168
CLASS_A = (
    Field("mmsi", 8, 30),
    Field("nav_status", 38, 4),
    Field("rate_of_turn", 42, 8, signed=True, sentinel=0x80),
    Field("sog_knots", 50, 10, sentinel=1023, divisor=10.0),
    Field("high_position_accuracy", 60, 1, kind=bool),
    _longitude(61),
    _latitude(89),
    Field("cog", 116, 12, sentinel=3600, at_least=True, divisor=10.0),
    Field("heading_true", 128, 9, sentinel=511),
    Field("timestamp_seconds", 137, 6, sentinel=60, at_least=True),
    Field("special_manoeuvre", 143, 2, sentinel=0),
    Field("raim_flag", 148, 1, kind=bool),
    Field("radio_status", 149, 19),
)

SAR_AIRCRAFT_BITS = 168
SAR_AIRCRAFT = (
    Field("mmsi", 8, 30),
    Field("altitude", 38, 12, sentinel=4095),
    Field("sog_knots", 50, 10, sentinel=1023),
    Field("high_position_accuracy", 60, 1, kind=bool),
    _longitude(61),
    _latitude(89),
    Field("cog", 116, 12, sentinel=3600, at_least=True, divisor=10.0),
    Field("timestamp_seconds", 128, 6, sentinel=60, at_least=True),
    Field("regional", 134, 8),
    Field("dte", 142, 1, kind=bool),
    Field("assigned", 146, 1, kind=bool),
    Field("raim_flag", 147, 1, kind=bool),
    Field("radio_status", 148, 20),
)

# Shared by types 18 and 19
CLASS_B_POSITION = (
    Field("mmsi", 8, 30),
    Field("sog_knots", 46, 10, sentinel=1023, divisor=10.0),
    Field("high_position_accuracy", 56, 1, kind=bool),
    _longitude(57),
    _latitude(85),
    Field("cog", 112, 12, sentinel=3600, at_least=True, divisor=10.0),
    Field("heading_true", 124, 9, sentinel=511),
    Field("timestamp_seconds", 133, 6, sentinel=60, at_least=True),
)

CLASS_B_BITS = 168
CLASS_B = CLASS_B_POSITION + (
    Field("class_b_unit_flag", 141, 1, kind=bool),
    Field("class_b_display", 142, 1, kind=bool),
    Field("class_b_dsc", 143, 1, kind=bool),
    Field("class_b_band_flag", 144, 1, kind=bool),
    Field("class_b_msg22_flag", 145, 1, kind=bool),
    Field("class_b_mode_flag", 146, 1, kind=bool),
    Field("raim_flag", 147, 1, kind=bool),
    Field("radio_status", 148, 20),
)

# The static half of type 19 (name, ship type, dimensions) is not carried
# over; type 5 and type 24 report it.
EXTENDED_CLASS_B_BITS = 312
EXTENDED_CLASS_B = CLASS_B_POSITION + (
    Field("raim_flag", 305, 1, kind=bool),
    Field("class_b_mode_flag", 307, 1, kind=bool),
)

LONG_RANGE_BITS = 96
LONG_RANGE = (
    Field("mmsi", 8, 30),
    Field("high_position_accuracy", 38, 1, kind=bool),
    Field("raim_flag", 39, 1, kind=bool),
    Field("nav_status", 40, 4),
    Field("longitude", 44, 18, signed=True, sentinel=181 * 600, divisor=600.0),
    Field("latitude", 62, 17, signed=True, sentinel=91 * 600, divisor=600.0),
    Field("sog_knots", 79, 6, sentinel=63, kind=float),
    Field("cog", 85, 9, sentinel=511, kind=float),
    Field("gnss_flag", 94, 1),
)


def rate_of_turn(raw: Optional[int]) -> Optional[float]:
    """
    Convert the ROT indicator to degrees per minute.

    The indicator is 4.733 * sqrt(ROT), signed; +/-127 means "turning faster
    than 5 degrees per 30 seconds" and decodes to the limit value.
    """
    if raw is None:
        return None
    rot = (raw / 4.733) ** 2
    return -rot if raw < 0 else rot


def handle_class_a(bits: BitReader, station: Station, own_vessel: bool) -> VesselDynamicData:
    """Types 1, 2 and 3: Class A Position Report."""
    require_bits(bits, CLASS_A_BITS, "Class A position")
    values = decode_fields(bits, CLASS_A)
    values["rate_of_turn"] = rate_of_turn(values["rate_of_turn"])
    return VesselDynamicData(
        own_vessel=own_vessel,
        station=station,
        ais_type=AisClass.ClassA,
        message_type=bits.get_uint(0, 6),
        **values,
    )


def handle_t9(bits: BitReader, station: Station, own_vessel: bool) -> StandardSarAircraftPositionReport:
    """Type 9: Standard SAR Aircraft Position Report. Speed is in whole knots."""
    require_bits(bits, SAR_AIRCRAFT_BITS, "Type 9")
    return StandardSarAircraftPositionReport(
        own_vessel=own_vessel,
        station=station,
        **decode_fields(bits, SAR_AIRCRAFT),
    )


def handle_t18(bits: BitReader, station: Station, own_vessel: bool) -> VesselDynamicData:
    """Type 18: Standard Class B CS Position Report."""
    require_bits(bits, CLASS_B_BITS, "Type 18")
    return VesselDynamicData(
        own_vessel=own_vessel,
        station=station,
        ais_type=AisClass.ClassB,
        message_type=18,
        **decode_fields(bits, CLASS_B),
    )


def handle_t19(bits: BitReader, station: Station, own_vessel: bool) -> VesselDynamicData:
    """Type 19: Extended Class B CS Position Report."""
    require_bits(bits, EXTENDED_CLASS_B_BITS, "Type 19")
    return VesselDynamicData(
        own_vessel=own_vessel,
        station=station,
        ais_type=AisClass.ClassB,
        message_type=19,
        **decode_fields(bits, EXTENDED_CLASS_B),
    )


def handle_t27(bits: BitReader, station: Station, own_vessel: bool) -> VesselDynamicData:
    """
    Type 27: Long Range AIS Broadcast.

    Positions are in 1/10 minute, speed in whole knots and course in whole
    degrees. A gnss_flag of 0 means the position is current.
    """
    require_bits(bits, LONG_RANGE_BITS, "Type 27")
    values = decode_fields(bits, LONG_RANGE)
    values["current_gnss_position"] = values.pop("gnss_flag") == 0
    return VesselDynamicData(
        own_vessel=own_vessel,
        station=station,
        ais_type=AisClass.ClassA,
        message_type=27,
        **values,
    )
