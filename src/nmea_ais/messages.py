"""
Decoded message records.

ParsedMessage is a closed union: one dataclass per message kind plus the
Incomplete marker returned while a multi-sentence message is still being
collected. Consumers dispatch with isinstance().

Numeric fields that the wire marks "not available" are None.
"""

from __future__ import annotations
from dataclasses import dataclass, fields, replace
from datetime import datetime, time
from enum import Enum
from typing import Optional, Union

from .exceptions import InvalidSentence
from .tag_block import TagBlock


class Station(Enum):
    """AIS station kind, from the two-letter talker of a !-sentence."""
    BaseStation = "AB"
    DependentAisBaseStation = "AD"
    MobileStation = "AI"
    AidToNavigationStation = "AN"
    AisReceivingStation = "AR"
    LimitedBaseStation = "AS"
    AisTransmittingStation = "AT"
    RepeaterStation = "AX"
    Other = ""

    @classmethod
    def from_talker(cls, talker: str) -> "Station":
        if len(talker) < 2:
            raise InvalidSentence("Invalid talker identifier")
        for station in cls:
            if station.value and talker.startswith(station.value):
                return station
        return cls.Other


class NavigationSystem(Enum):
    """Satellite system, from the two-letter talker of a $-sentence."""
    Combination = "GN"
    Gps = "GP"
    Glonass = "GL"
    Galileo = "GA"
    Beidou = "BD"
    Navic = "GI"
    Qzss = "QZ"
    Proprietary = "P"
    Other = ""

    @classmethod
    def from_talker(cls, talker: str) -> "NavigationSystem":
        if len(talker) < 2:
            raise InvalidSentence("Invalid talker identifier")
        if talker.startswith("GB"):
            return cls.Beidou
        if talker.startswith("GQ"):
            return cls.Qzss
        for system in cls:
            if system.value and talker.startswith(system.value):
                return system
        return cls.Other


class AisClass(Enum):
    Unknown = 0
    ClassA = 1
    ClassB = 2


@dataclass(frozen=True)
class Incomplete:
    """More sentences are needed before a message can be produced."""


INCOMPLETE = Incomplete()


# ---------------------------------------------------------------------------
# AIS
# ---------------------------------------------------------------------------

@dataclass
class VesselDynamicData:
    """Position reports: types 1, 2, 3 (class A), 18, 19 (class B) and 27."""
    own_vessel: bool
    station: Station
    ais_type: AisClass
    message_type: int
    mmsi: int
    nav_status: Optional[int] = None
    rate_of_turn: Optional[float] = None
    sog_knots: Optional[float] = None
    high_position_accuracy: bool = False
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    cog: Optional[float] = None
    heading_true: Optional[int] = None
    timestamp_seconds: Optional[int] = None
    special_manoeuvre: Optional[int] = None
    raim_flag: bool = False
    radio_status: Optional[int] = None
    # Class B only
    class_b_unit_flag: Optional[bool] = None
    class_b_display: Optional[bool] = None
    class_b_dsc: Optional[bool] = None
    class_b_band_flag: Optional[bool] = None
    class_b_msg22_flag: Optional[bool] = None
    class_b_mode_flag: Optional[bool] = None
    # Type 27 only
    current_gnss_position: Optional[bool] = None


@dataclass
class VesselStaticData:
    """Static and voyage data: type 5, and both halves of type 24."""
    own_vessel: bool
    station: Station
    ais_type: AisClass
    mmsi: int
    ais_version: Optional[int] = None
    imo_number: Optional[int] = None
    call_sign: Optional[str] = None
    name: Optional[str] = None
    ship_type: Optional[int] = None
    vendor_id: Optional[str] = None
    unit_model_code: Optional[int] = None
    serial_number: Optional[int] = None
    dimension_to_bow: Optional[int] = None
    dimension_to_stern: Optional[int] = None
    dimension_to_port: Optional[int] = None
    dimension_to_starboard: Optional[int] = None
    mothership_mmsi: Optional[int] = None
    epfd: Optional[int] = None
    eta_month: Optional[int] = None
    eta_day: Optional[int] = None
    eta_hour: Optional[int] = None
    eta_minute: Optional[int] = None
    draught: Optional[float] = None
    destination: Optional[str] = None
    dte: Optional[bool] = None

    def merge(self, other: "VesselStaticData") -> "VesselStaticData":
        """
        Combine two partial records of the same vessel.

        Fields set on ``self`` win; gaps are filled from ``other``.
        """
        if self.mmsi != other.mmsi:
            raise InvalidSentence(
                f"Mismatching MMSI numbers: {self.mmsi} and {other.mmsi}"
            )
        changes = {}
        for f in fields(self):
            if getattr(self, f.name) is None and getattr(other, f.name) is not None:
                changes[f.name] = getattr(other, f.name)
        return replace(self, **changes)


@dataclass
class BaseStationReport:
    """Type 4 (base station report) and type 11 (UTC/date response)."""
    own_vessel: bool
    station: Station
    message_type: int
    mmsi: int
    timestamp: Optional[datetime] = None
    high_position_accuracy: bool = False
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    epfd: Optional[int] = None
    raim_flag: bool = False
    radio_status: Optional[int] = None


@dataclass
class BinaryAddressedMessage:
    """Type 6. The payload is kept raw."""
    own_vessel: bool
    station: Station
    mmsi: int
    sequence_number: int
    destination_mmsi: int
    retransmit: bool
    dac: int
    fid: int
    data: bytes = b""
    data_bit_length: int = 0


@dataclass
class MeteoHydroData11:
    """DAC 1, FID 11: meteorological and hydrological data (IMO 236)."""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    day: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None
    wind_speed_avg: Optional[int] = None
    wind_gust: Optional[int] = None
    wind_direction: Optional[int] = None
    wind_gust_direction: Optional[int] = None
    air_temperature: Optional[float] = None
    humidity: Optional[int] = None
    dew_point: Optional[float] = None
    air_pressure: Optional[int] = None
    pressure_tendency: Optional[int] = None
    visibility: Optional[float] = None
    water_level: Optional[float] = None
    water_level_trend: Optional[int] = None
    surface_current_speed: Optional[float] = None
    surface_current_direction: Optional[int] = None
    current_speed_2: Optional[float] = None
    current_direction_2: Optional[int] = None
    current_depth_2: Optional[float] = None
    current_speed_3: Optional[float] = None
    current_direction_3: Optional[int] = None
    current_depth_3: Optional[float] = None
    wave_height: Optional[float] = None
    wave_period: Optional[int] = None
    wave_direction: Optional[int] = None
    swell_height: Optional[float] = None
    swell_period: Optional[int] = None
    swell_direction: Optional[int] = None
    sea_state: Optional[int] = None
    water_temperature: Optional[float] = None
    precipitation_type: Optional[int] = None
    salinity: Optional[float] = None
    ice: Optional[int] = None


@dataclass
class MeteoHydroData31:
    """DAC 1, FID 31: meteorological and hydrological data (IMO 289)."""
    longitude: Optional[float] = None
    latitude: Optional[float] = None
    position_accuracy: bool = False
    day: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None
    wind_speed_avg: Optional[int] = None
    wind_gust: Optional[int] = None
    wind_direction: Optional[int] = None
    wind_gust_direction: Optional[int] = None
    air_temperature: Optional[float] = None
    humidity: Optional[int] = None
    dew_point: Optional[float] = None
    air_pressure: Optional[int] = None
    pressure_tendency: Optional[int] = None
    visibility_greater_than: bool = False
    visibility: Optional[float] = None
    water_level: Optional[float] = None
    water_level_trend: Optional[int] = None
    surface_current_speed: Optional[float] = None
    surface_current_direction: Optional[int] = None
    current_speed_2: Optional[float] = None
    current_direction_2: Optional[int] = None
    current_depth_2: Optional[int] = None
    current_speed_3: Optional[float] = None
    current_direction_3: Optional[int] = None
    current_depth_3: Optional[int] = None
    wave_height: Optional[float] = None
    wave_period: Optional[int] = None
    wave_direction: Optional[int] = None
    swell_height: Optional[float] = None
    swell_period: Optional[int] = None
    swell_direction: Optional[int] = None
    sea_state: Optional[int] = None
    water_temperature: Optional[float] = None
    precipitation_type: Optional[int] = None
    salinity: Optional[float] = None
    ice: Optional[int] = None


@dataclass
class UnsupportedPayload:
    """A DAC/FID pair without a known layout."""
    dac: int
    fid: int


Type8Payload = Union[MeteoHydroData11, MeteoHydroData31, UnsupportedPayload]


@dataclass
class BinaryBroadcastMessage:
    """
    Type 8. ``data`` holds the bits after the 56-bit header, MSB first,
    with ``data_bit_length`` valid bits.
    """
    own_vessel: bool
    station: Station
    mmsi: int
    dac: int
    fid: int
    data: bytes = b""
    data_bit_length: int = 0
    parsed_payload: Optional[Type8Payload] = None


@dataclass
class StandardSarAircraftPositionReport:
    """Type 9."""
    own_vessel: bool
    station: Station
    mmsi: int
    altitude: Optional[int] = None
    sog_knots: Optional[int] = None
    high_position_accuracy: bool = False
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    cog: Optional[float] = None
    timestamp_seconds: Optional[int] = None
    regional: int = 0
    dte: bool = False
    assigned: bool = False
    raim_flag: bool = False
    radio_status: Optional[int] = None


@dataclass
class SafetyRelatedBroadcastMessage:
    """Type 14."""
    own_vessel: bool
    station: Station
    mmsi: int
    text: str = ""


@dataclass
class AidToNavigationReport:
    """Type 21."""
    own_vessel: bool
    station: Station
    mmsi: int
    aid_type: Optional[int] = None
    name: Optional[str] = None
    high_position_accuracy: bool = False
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    dimension_to_bow: Optional[int] = None
    dimension_to_stern: Optional[int] = None
    dimension_to_port: Optional[int] = None
    dimension_to_starboard: Optional[int] = None
    epfd: Optional[int] = None
    timestamp_seconds: Optional[int] = None
    off_position: bool = False
    regional: int = 0
    raim_flag: bool = False
    virtual_aid: bool = False
    assigned_mode: bool = False


# ---------------------------------------------------------------------------
# GNSS
# ---------------------------------------------------------------------------

@dataclass
class GgaData:
    source: NavigationSystem
    timestamp: Optional[time] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    quality: Optional[int] = None
    satellite_count: Optional[int] = None
    hdop: Optional[float] = None
    altitude: Optional[float] = None
    geoid_separation: Optional[float] = None
    age_of_dgps: Optional[float] = None
    ref_station_id: Optional[str] = None


@dataclass
class RmcData:
    source: NavigationSystem
    timestamp: Optional[datetime] = None
    status_active: Optional[bool] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    sog_knots: Optional[float] = None
    bearing: Optional[float] = None
    variation: Optional[float] = None


@dataclass
class GllData:
    source: NavigationSystem
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    timestamp: Optional[time] = None
    data_valid: Optional[bool] = None
    faa_mode: Optional[str] = None


@dataclass
class VtgData:
    source: NavigationSystem
    cog_true: Optional[float] = None
    cog_magnetic: Optional[float] = None
    sog_knots: Optional[float] = None
    sog_kph: Optional[float] = None
    faa_mode: Optional[str] = None


ParsedMessage = Union[
    Incomplete,
    VesselDynamicData,
    VesselStaticData,
    BaseStationReport,
    BinaryAddressedMessage,
    BinaryBroadcastMessage,
    StandardSarAircraftPositionReport,
    SafetyRelatedBroadcastMessage,
    AidToNavigationReport,
    GgaData,
    RmcData,
    GllData,
    VtgData,
]


@dataclass
class NmeaMessage:
    """A parsed message together with the tag block that preceded it."""
    message: ParsedMessage
    tag_block: Optional[TagBlock] = None
