"""
nmea_ais - NMEA 0183 and AIS sentence decoder.

Decodes AIVDM/AIVDO sentences (including two-part messages and NMEA 4.10
tag blocks) and the common GNSS sentences into typed dataclasses. Type 8
binary broadcasts are decoded further by DAC/FID; DAC 1 FID 11 and FID 31
(meteorological and hydrological data) are supported.

Usage:
    from nmea_ais import NmeaParser

    parser = NmeaParser()
    msg = parser.parse("!AIVDM,1,1,,B,177KQJ5000G?tO`K>RA1wUbN0TKH,0*5C")
    print(msg.mmsi, msg.latitude, msg.longitude)

    tagged = parser.parse_with_tags(
        "\\\\g:1-2-73874,n:157036,s:r003669945,c:1241544035*4A\\\\!AIVDM,1,1,,B,15N4cJ`005Jrek0H@9n`DW5608EP,0*13"
    )
    print(tagged.tag_block.source, tagged.message)
"""

from __future__ import annotations

from .binary import PAYLOAD_DECODERS, decode_binary_payload
from .bitreader import BitReader, bits_from_ais_payload
from .checksum import checksum, validate
from .exceptions import (
    CorruptedSentence,
    InvalidSentence,
    ParseError,
    UnsupportedSentenceType,
)
from .messages import (
    INCOMPLETE,
    AidToNavigationReport,
    AisClass,
    BaseStationReport,
    BinaryAddressedMessage,
    BinaryBroadcastMessage,
    GgaData,
    GllData,
    Incomplete,
    MeteoHydroData11,
    MeteoHydroData31,
    NavigationSystem,
    NmeaMessage,
    ParsedMessage,
    RmcData,
    SafetyRelatedBroadcastMessage,
    StandardSarAircraftPositionReport,
    Station,
    Type8Payload,
    UnsupportedPayload,
    VesselDynamicData,
    VesselStaticData,
    VtgData,
)
from .parser import (
    DEFAULT_MAX_PENDING_FRAGMENTS,
    DEFAULT_MAX_STATIC_ENTRIES,
    NmeaParser,
)
from .tag_block import SentenceGrouping, TagBlock


__version__ = "0.2.0"
__all__ = [
    "NmeaParser",
    "DEFAULT_MAX_PENDING_FRAGMENTS",
    "DEFAULT_MAX_STATIC_ENTRIES",
    "BitReader",
    "bits_from_ais_payload",
    "checksum",
    "validate",
    "TagBlock",
    "SentenceGrouping",
    "PAYLOAD_DECODERS",
    "decode_binary_payload",
    "ParseError",
    "InvalidSentence",
    "CorruptedSentence",
    "UnsupportedSentenceType",
    "INCOMPLETE",
    "Incomplete",
    "ParsedMessage",
    "NmeaMessage",
    "Station",
    "NavigationSystem",
    "AisClass",
    "VesselDynamicData",
    "VesselStaticData",
    "BaseStationReport",
    "BinaryAddressedMessage",
    "BinaryBroadcastMessage",
    "Type8Payload",
    "MeteoHydroData11",
    "MeteoHydroData31",
    "UnsupportedPayload",
    "StandardSarAircraftPositionReport",
    "SafetyRelatedBroadcastMessage",
    "AidToNavigationReport",
    "GgaData",
    "RmcData",
    "GllData",
    "VtgData",
]
