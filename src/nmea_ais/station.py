"""
Fixed stations: AIS types 4 and 11 (base station report, UTC/date
response) and type 21 (aid to navigation report).
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional

from .bitreader import BitReader
from .exceptions import InvalidSentence
from .fields import Field, decode_fields, require_bits
from .messages import AidToNavigationReport, BaseStationReport, Station


BASE_STATION_BITS = 168
BASE_STATION = (
    Field("mmsi", 8, 30),
    Field("high_position_accuracy", 78, 1, kind=bool),
    Field("longitude", 79, 28, signed=True, sentinel=181 * 600000, divisor=600000.0),
    Field("latitude", 107, 27, signed=True, sentinel=91 * 600000, divisor=600000.0),
    Field("epfd", 134, 4),
    Field("raim_flag", 148, 1, kind=bool),
    Field("radio_status", 149, 19),
)

AID_TO_NAVIGATION_BITS = 272
AID_TO_NAVIGATION = (
    Field("mmsi", 8, 30),
    Field("aid_type", 38, 5, sentinel=0),
    Field("high_position_accuracy", 163, 1, kind=bool),
    Field("longitude", 164, 28, signed=True, sentinel=181 * 600000, divisor=600000.0),
    Field("latitude", 192, 27, signed=True, sentinel=91 * 600000, divisor=600000.0),
    Field("dimension_to_bow", 219, 9),
    Field("dimension_to_stern", 228, 9),
    Field("dimension_to_port", 237, 6),
    Field("dimension_to_starboard", 243, 6),
    Field("epfd", 249, 4),
    Field("timestamp_seconds", 253, 6, sentinel=60, at_least=True),
    Field("off_position", 259, 1, kind=bool),
    Field("regional", 260, 8),
    Field("raim_flag", 268, 1, kind=bool),
    Field("virtual_aid", 269, 1, kind=bool),
    Field("assigned_mode", 270, 1, kind=bool),
)


def parse_utc(bits: BitReader) -> Optional[datetime]:
    """
    Decode the UTC date and time of a type 4 or 11 message.

    The all-zero date and out of range time fields are the "not available"
    values and give None; any other impossible date raises InvalidSentence.
    """
    year = bits.get_uint(38, 14)
    month = bits.get_uint(52, 4)
    day = bits.get_uint(56, 5)
    hour = bits.get_uint(61, 5)
    minute = bits.get_uint(66, 6)
    second = bits.get_uint(72, 6)

    if year == 0 or month == 0 or day == 0 or hour >= 24 or minute >= 60 or second >= 60:
        return None
    try:
        return datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
    except ValueError:
        raise InvalidSentence(
            f"Failed to parse Utc Date from y:{year} m:{month} d:{day} "
            f"h:{hour} m:{minute} s:{second}"
        ) from None


def handle_base_station(bits: BitReader, station: Station, own_vessel: bool) -> BaseStationReport:
    """Type 4 (Base Station Report) and type 11 (UTC/Date Response)."""
    require_bits(bits, BASE_STATION_BITS, "Base station")
    return BaseStationReport(
        own_vessel=own_vessel,
        station=station,
        message_type=bits.get_uint(0, 6),
        timestamp=parse_utc(bits),
        **decode_fields(bits, BASE_STATION),
    )


def handle_t21(bits: BitReader, station: Station, own_vessel: bool) -> AidToNavigationReport:
    """
    Type 21: Aid-to-Navigation Report.

    Names longer than 20 characters continue in a name extension after
    bit 272, up to 14 more characters.
    """
    require_bits(bits, AID_TO_NAVIGATION_BITS, "Type 21")
    values = decode_fields(bits, AID_TO_NAVIGATION)

    name = bits.get_string(43, 120)
    extension_bits = (len(bits) - AID_TO_NAVIGATION_BITS) // 6 * 6
    if extension_bits > 0:
        name += bits.get_string(AID_TO_NAVIGATION_BITS, min(extension_bits, 84))
    values["name"] = name or None

    return AidToNavigationReport(own_vessel=own_vessel, station=station, **values)
