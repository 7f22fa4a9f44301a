"""
DAC 001 - International (IMO) binary broadcast payloads.

Implements the two meteorological and hydrological layouts carried in
type 8 messages.

Offsets are relative to the end of the 56-bit type 8 header. Every field has
a "not available" value which decodes to None.

References:
- IMO SN.1/Circ.236 (FID 11, deprecated but still transmitted)
- IMO SN.1/Circ.289 (FID 31)
- https://gpsd.gitlab.io/gpsd/AIVDM.html
"""

from __future__ import annotations
import logging
from typing import Callable, Dict, Optional

from .bitreader import BitReader
from .fields import Field, decode_fields
from .messages import MeteoHydroData11, MeteoHydroData31

logger = logging.getLogger(__name__)


# FID 11 (IMO 236). Note the reversed lat/lon order.
METEO_HYDRO_11_BITS = 352
METEO_HYDRO_11 = (
    Field("latitude", 0, 24, signed=True, sentinel=0x7FFFFF, divisor=60000.0),
    Field("longitude", 24, 25, signed=True, sentinel=0x1FFFFFF, divisor=60000.0),
    Field("day", 49, 5, sentinel=31),
    Field("hour", 54, 5, sentinel=31),
    Field("minute", 59, 6, sentinel=63),
    Field("wind_speed_avg", 65, 7, sentinel=127),
    Field("wind_gust", 72, 7, sentinel=127),
    Field("wind_direction", 79, 9, sentinel=511, at_least=True),
    Field("wind_gust_direction", 88, 9, sentinel=511, at_least=True),
    Field("air_temperature", 97, 11, sentinel=2047, divisor=10.0, add=-60.0),
    Field("humidity", 108, 7, sentinel=127),
    Field("dew_point", 115, 10, sentinel=1023, divisor=10.0, add=-20.0),
    Field("air_pressure", 125, 9, sentinel=511, add=800),
    Field("pressure_tendency", 134, 2, sentinel=3),
    Field("visibility", 136, 8, sentinel=255, divisor=10.0),
    Field("water_level", 144, 9, signed=True, sentinel=511, divisor=10.0, add=-10.0),
    Field("water_level_trend", 153, 2, sentinel=3),
    Field("surface_current_speed", 155, 8, sentinel=255, divisor=10.0),
    Field("surface_current_direction", 163, 9, sentinel=511, at_least=True),
    Field("current_speed_2", 172, 8, sentinel=255, divisor=10.0),
    Field("current_direction_2", 180, 9, sentinel=511, at_least=True),
    Field("current_depth_2", 189, 5, sentinel=31, divisor=10.0),
    Field("current_speed_3", 194, 8, sentinel=255, divisor=10.0),
    Field("current_direction_3", 202, 9, sentinel=511, at_least=True),
    Field("current_depth_3", 211, 5, sentinel=31, divisor=10.0),
    Field("wave_height", 216, 8, sentinel=255, divisor=10.0),
    Field("wave_period", 224, 6, sentinel=63),
    Field("wave_direction", 230, 9, sentinel=511, at_least=True),
    Field("swell_height", 239, 8, sentinel=255, divisor=10.0),
    Field("swell_period", 247, 6, sentinel=63),
    Field("swell_direction", 253, 9, sentinel=511, at_least=True),
    Field("sea_state", 262, 4, sentinel=13, at_least=True),
    Field("water_temperature", 266, 10, sentinel=1023, divisor=10.0, add=-10.0),
    Field("precipitation_type", 276, 3, sentinel=7),
    Field("salinity", 279, 9, sentinel=511, at_least=True, divisor=10.0),
    Field("ice", 288, 2, sentinel=3),
)


# FID 31 (IMO 289). Signed fields use exact sentinels so that negative
# readings are not mistaken for reserved values.
METEO_HYDRO_31_BITS = 360
METEO_HYDRO_31 = (
    Field("longitude", 0, 25, signed=True, sentinel=181 * 60000, divisor=60000.0),
    Field("latitude", 25, 24, signed=True, sentinel=91 * 60000, divisor=60000.0),
    Field("position_accuracy", 49, 1, kind=bool),
    Field("day", 50, 5, sentinel=0),
    Field("hour", 55, 5, sentinel=24, at_least=True),
    Field("minute", 60, 6, sentinel=60, at_least=True),
    Field("wind_speed_avg", 66, 7, sentinel=127),
    Field("wind_gust", 73, 7, sentinel=127),
    Field("wind_direction", 80, 9, sentinel=360, at_least=True),
    Field("wind_gust_direction", 89, 9, sentinel=360, at_least=True),
    Field("air_temperature", 98, 11, signed=True, sentinel=0x400, divisor=10.0),
    Field("humidity", 109, 7, sentinel=101, at_least=True),
    Field("dew_point", 116, 10, signed=True, sentinel=501, divisor=10.0),
    Field("air_pressure", 126, 9, sentinel=403, at_least=True, add=799),
    Field("pressure_tendency", 135, 2, sentinel=3),
    Field("visibility_greater_than", 137, 1, kind=bool),
    Field("visibility", 138, 7, sentinel=127, divisor=10.0),
    Field("water_level", 145, 12, sentinel=4001, at_least=True, divisor=100.0, add=-10.0),
    Field("water_level_trend", 157, 2, sentinel=3),
    Field("surface_current_speed", 159, 8, sentinel=252, at_least=True, divisor=10.0),
    Field("surface_current_direction", 167, 9, sentinel=360, at_least=True),
    Field("current_speed_2", 176, 8, sentinel=252, at_least=True, divisor=10.0),
    Field("current_direction_2", 184, 9, sentinel=360, at_least=True),
    Field("current_depth_2", 193, 5, sentinel=31),
    Field("current_speed_3", 198, 8, sentinel=252, at_least=True, divisor=10.0),
    Field("current_direction_3", 206, 9, sentinel=360, at_least=True),
    Field("current_depth_3", 215, 5, sentinel=31),
    Field("wave_height", 220, 8, sentinel=252, at_least=True, divisor=10.0),
    Field("wave_period", 228, 6, sentinel=61, at_least=True),
    Field("wave_direction", 234, 9, sentinel=360, at_least=True),
    Field("swell_height", 243, 8, sentinel=252, at_least=True, divisor=10.0),
    Field("swell_period", 251, 6, sentinel=61, at_least=True),
    Field("swell_direction", 257, 9, sentinel=360, at_least=True),
    Field("sea_state", 266, 4, sentinel=13, at_least=True),
    Field("water_temperature", 270, 10, signed=True, sentinel=501, divisor=10.0),
    Field("precipitation_type", 280, 3, sentinel=7),
    Field("salinity", 283, 9, sentinel=501, at_least=True, divisor=10.0),
    Field("ice", 292, 2, sentinel=3),
)


def decode_001_11(bits: BitReader, offset: int) -> Optional[MeteoHydroData11]:
    """
    FID 11: Meteorological and Hydrological Data (IMO 236).

    Returns None unless 352 bits follow ``offset``.
    """
    if len(bits) < offset + METEO_HYDRO_11_BITS:
        logger.debug("DAC 1 FID 11 payload too short: %d bits", len(bits) - offset)
        return None
    return MeteoHydroData11(**decode_fields(bits, METEO_HYDRO_11, offset))


def decode_001_31(bits: BitReader, offset: int) -> Optional[MeteoHydroData31]:
    """
    FID 31: Meteorological and Hydrological Data (IMO 289).

    Current standard for met/hydro data, replaces FID 11.
    Returns None unless 360 bits follow ``offset``.
    """
    if len(bits) < offset + METEO_HYDRO_31_BITS:
        logger.debug("DAC 1 FID 31 payload too short: %d bits", len(bits) - offset)
        return None
    return MeteoHydroData31(**decode_fields(bits, METEO_HYDRO_31, offset))


DECODERS: Dict[int, Callable[[BitReader, int], object]] = {
    11: decode_001_11,  # Met/Hydro (IMO 236) - deprecated
    31: decode_001_31,  # Met/Hydro (IMO 289)
}
