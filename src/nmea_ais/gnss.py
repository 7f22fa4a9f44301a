"""
GNSS sentences: GGA, RMC, GLL and VTG.

Handlers receive the sentence with its checksum already removed, e.g.

    $GPGGA,092750.000,5321.6802,N,00630.3372,W,1,8,1.03,61.7,M,55.2,M,,

Empty fields decode to None. A field that is present but cannot be read as
a number raises CorruptedSentence.
"""

from __future__ import annotations
import math
from datetime import datetime, time, timezone
from typing import List, Optional

from .exceptions import CorruptedSentence
from .messages import GgaData, GllData, NavigationSystem, RmcData, VtgData


def _field(fields: List[str], index: int) -> str:
    return fields[index] if index < len(fields) else ""


def parse_float(value: str, name: str) -> Optional[float]:
    if not value:
        return None
    try:
        number = float(value)
    except ValueError:
        raise CorruptedSentence(f"Failed to parse {name}: {value!r}") from None
    if not math.isfinite(number):
        raise CorruptedSentence(f"Failed to parse {name}: {value!r}")
    return number


def parse_int(value: str, name: str) -> Optional[int]:
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise CorruptedSentence(f"Failed to parse {name}: {value!r}") from None


def parse_coordinate(value: str, hemisphere: str, name: str) -> Optional[float]:
    """Convert DDMM.MMMM / DDDMM.MMMM plus N/S/E/W to signed decimal degrees."""
    number = parse_float(value, name)
    if number is None:
        return None
    degrees = int(number // 100)
    minutes = number - degrees * 100
    result = degrees + minutes / 60.0
    if hemisphere in ("S", "W"):
        result = -result
    return result


def parse_time(value: str) -> Optional[time]:
    """Parse HHMMSS or HHMMSS.sss."""
    if not value:
        return None
    try:
        seconds = float(value[4:])
        if not math.isfinite(seconds):
            raise ValueError(value)
        whole = int(seconds)
        return time(
            int(value[0:2]),
            int(value[2:4]),
            whole,
            int(round((seconds - whole) * 1000000)) % 1000000,
            tzinfo=timezone.utc,
        )
    except ValueError:
        raise CorruptedSentence(f"Failed to parse time: {value!r}") from None


def parse_date_time(date_value: str, time_value: str) -> Optional[datetime]:
    """Combine a DDMMYY date with a HHMMSS time. Years are in the 2000s."""
    clock = parse_time(time_value)
    if clock is None or not date_value:
        return None
    try:
        day = int(date_value[0:2])
        month = int(date_value[2:4])
        year = 2000 + int(date_value[4:6])
        return datetime.combine(datetime(year, month, day).date(), clock)
    except ValueError:
        raise CorruptedSentence(f"Failed to parse date: {date_value!r}") from None


def _status(value: str) -> Optional[bool]:
    if value == "A":
        return True
    if value == "V":
        return False
    return None


def handle_gga(sentence: str, source: NavigationSystem) -> GgaData:
    """GGA: Global Positioning System Fix Data."""
    f = sentence.split(",")
    return GgaData(
        source=source,
        timestamp=parse_time(_field(f, 1)),
        latitude=parse_coordinate(_field(f, 2), _field(f, 3), "latitude"),
        longitude=parse_coordinate(_field(f, 4), _field(f, 5), "longitude"),
        quality=parse_int(_field(f, 6), "fix quality"),
        satellite_count=parse_int(_field(f, 7), "satellite count"),
        hdop=parse_float(_field(f, 8), "hdop"),
        altitude=parse_float(_field(f, 9), "altitude"),
        geoid_separation=parse_float(_field(f, 11), "geoid separation"),
        age_of_dgps=parse_float(_field(f, 13), "age of DGPS data"),
        ref_station_id=_field(f, 14) or None,
    )


def handle_rmc(sentence: str, source: NavigationSystem) -> RmcData:
    """RMC: Recommended Minimum Specific GNSS Data."""
    f = sentence.split(",")
    variation = parse_float(_field(f, 10), "magnetic variation")
    if variation is not None and _field(f, 11) == "W":
        variation = -variation
    return RmcData(
        source=source,
        timestamp=parse_date_time(_field(f, 9), _field(f, 1)),
        status_active=_status(_field(f, 2)),
        latitude=parse_coordinate(_field(f, 3), _field(f, 4), "latitude"),
        longitude=parse_coordinate(_field(f, 5), _field(f, 6), "longitude"),
        sog_knots=parse_float(_field(f, 7), "speed over ground"),
        bearing=parse_float(_field(f, 8), "track angle"),
        variation=variation,
    )


def handle_gll(sentence: str, source: NavigationSystem) -> GllData:
    """GLL: Geographic Position, Latitude/Longitude."""
    f = sentence.split(",")
    return GllData(
        source=source,
        latitude=parse_coordinate(_field(f, 1), _field(f, 2), "latitude"),
        longitude=parse_coordinate(_field(f, 3), _field(f, 4), "longitude"),
        timestamp=parse_time(_field(f, 5)),
        data_valid=_status(_field(f, 6)),
        faa_mode=_field(f, 7) or None,
    )


def handle_vtg(sentence: str, source: NavigationSystem) -> VtgData:
    """VTG: Track Made Good and Ground Speed."""
    f = sentence.split(",")
    return VtgData(
        source=source,
        cog_true=parse_float(_field(f, 1), "true course"),
        cog_magnetic=parse_float(_field(f, 3), "magnetic course"),
        sog_knots=parse_float(_field(f, 5), "speed in knots"),
        sog_kph=parse_float(_field(f, 7), "speed in km/h"),
        faa_mode=_field(f, 9) or None,
    )


HANDLERS = {
    "$GGA": handle_gga,
    "$RMC": handle_rmc,
    "$GLL": handle_gll,
    "$VTG": handle_vtg,
}
