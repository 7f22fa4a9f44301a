"""
NMEA 0183 sentence parser.

NmeaParser turns one line of text into a typed message. It owns the state
that spans sentences: payload fragments waiting for their counterpart, and
type 24 halves waiting for the other half of the same vessel. Use one parser
per input stream.

Usage:
    from nmea_ais import NmeaParser, Incomplete

    parser = NmeaParser()
    for line in lines:
        msg = parser.parse(line)
        if isinstance(msg, Incomplete):
            continue
        print(msg)
"""

from __future__ import annotations
import logging
import re
from collections import OrderedDict
from typing import Optional, Tuple

from . import gnss
from .bitreader import bits_from_ais_payload
from .checksum import validate
from .dispatch import dispatch
from .exceptions import CorruptedSentence, InvalidSentence, UnsupportedSentenceType
from .messages import (
    INCOMPLETE,
    NavigationSystem,
    NmeaMessage,
    ParsedMessage,
    Station,
    VesselStaticData,
)
from .tag_block import split_tag_block

logger = logging.getLogger(__name__)


DEFAULT_MAX_PENDING_FRAGMENTS = 1000
DEFAULT_MAX_STATIC_ENTRIES = 10000

AIS_SENTENCE_TYPES = ("!VDM", "!VDO")

_START = re.compile(r"[$!]")
_NUMBER = re.compile(r"[0-9]+")


def _fragment_key(sentence_type: str, message_id: int, count: int, number: int, channel: str) -> str:
    return f"{sentence_type},{message_id},{count},{number},{channel}"


def _parse_count(value: str, name: str) -> int:
    if not _NUMBER.fullmatch(value):
        raise CorruptedSentence(f"Failed to parse {name}: {value}")
    return int(value)


class NmeaParser:
    """
    Stateful NMEA parser.

    Args:
        max_pending_fragments: Fragments kept while waiting for their
            counterpart; the oldest is dropped beyond this. None for no limit.
        max_static_entries: Type 24 halves kept while waiting for the other
            half; the oldest is dropped beyond this. None for no limit.
    """

    def __init__(
        self,
        max_pending_fragments: Optional[int] = DEFAULT_MAX_PENDING_FRAGMENTS,
        max_static_entries: Optional[int] = DEFAULT_MAX_STATIC_ENTRIES,
    ):
        self.max_pending_fragments = max_pending_fragments
        self.max_static_entries = max_static_entries
        self.saved_fragments: "OrderedDict[str, str]" = OrderedDict()
        self.saved_static: "OrderedDict[int, VesselStaticData]" = OrderedDict()

    def reset(self) -> None:
        """Drop all multi-sentence state."""
        self.saved_fragments.clear()
        self.saved_static.clear()

    @property
    def pending_fragment_count(self) -> int:
        return len(self.saved_fragments)

    @property
    def cached_static_count(self) -> int:
        return len(self.saved_static)

    def _store(self, store: OrderedDict, key, value, limit: Optional[int], label: str) -> None:
        store.pop(key, None)
        store[key] = value
        while limit is not None and len(store) > limit:
            evicted, _ = store.popitem(last=False)
            logger.warning("%s store full (%d), dropped %s", label, limit, evicted)

    def push_fragment(self, key: str, payload: str) -> None:
        self._store(self.saved_fragments, key, payload, self.max_pending_fragments, "Fragment")

    def pull_fragment(self, key: str) -> Optional[str]:
        return self.saved_fragments.pop(key, None)

    def push_static(self, mmsi: int, record: VesselStaticData) -> None:
        self._store(self.saved_static, mmsi, record, self.max_static_entries, "Static data")

    def pull_static(self, mmsi: int) -> Optional[VesselStaticData]:
        return self.saved_static.pop(mmsi, None)

    def parse(self, sentence: str) -> ParsedMessage:
        """
        Parse one sentence. A tag block, if present, is validated and dropped.

        Returns INCOMPLETE while a multi-sentence message is being collected.

        Raises:
            InvalidSentence, CorruptedSentence, UnsupportedSentenceType
        """
        return self.parse_with_tags(sentence).message

    def parse_with_tags(self, sentence: str) -> NmeaMessage:
        """Parse one sentence and return it with its tag block."""
        tag_block, rest = split_tag_block(sentence.rstrip("\r\n"))
        return NmeaMessage(self._parse_sentence(rest), tag_block)

    def _parse_sentence(self, sentence: str) -> ParsedMessage:
        match = _START.search(sentence)
        if match is None:
            raise InvalidSentence(f"Invalid NMEA sentence: {sentence}")
        sentence = sentence[match.start():]

        sentence, given = self._split_checksum(sentence)
        validate(sentence[1:], given)

        comma = sentence.find(",")
        if comma < 0:
            raise InvalidSentence(f"Invalid NMEA sentence: {sentence}")
        sentence_type = sentence[:comma]
        if not all((c.isascii() and c.isalnum()) or c in "$!" for c in sentence_type):
            raise InvalidSentence(f"Invalid characters in sentence type: {sentence_type}")

        if sentence_type.startswith("$"):
            nav_system = NavigationSystem.from_talker(sentence_type[1:])
            if not sentence_type.startswith("$P") and len(sentence_type) == 6:
                sentence_type = "$" + sentence_type[3:6]
            handler = gnss.HANDLERS.get(sentence_type)
            if handler is None:
                raise UnsupportedSentenceType(f"Unsupported sentence type: {sentence_type}")
            return handler(sentence, nav_system)

        station = Station.from_talker(sentence_type[1:])
        if len(sentence_type) == 6:
            sentence_type = "!" + sentence_type[3:6]
        if sentence_type not in AIS_SENTENCE_TYPES:
            raise UnsupportedSentenceType(f"Unsupported sentence type: {sentence_type}")
        return self._parse_vdm(sentence, sentence_type, station)

    @staticmethod
    def _split_checksum(sentence: str) -> Tuple[str, str]:
        pos = sentence.rfind("*")
        if pos < 0:
            logger.debug("No checksum found for sentence: %s", sentence)
            return sentence, ""
        if pos + 3 > len(sentence):
            logger.debug("Invalid checksum found for sentence: %s", sentence)
            return sentence[:pos], ""
        return sentence[:pos], sentence[pos + 1:pos + 3]

    def _parse_vdm(self, sentence: str, sentence_type: str, station: Station) -> ParsedMessage:
        own_vessel = sentence_type == "!VDO"
        parts = sentence.split(",")
        parts += [""] * (6 - len(parts))

        count = _parse_count(parts[1], "fragment count")
        number = _parse_count(parts[2], "fragment number")
        message_id = int(parts[3]) if _NUMBER.fullmatch(parts[3]) else None
        channel = parts[4]
        payload = parts[5]

        if count == 2:
            if message_id is None:
                logger.warning("NMEA message id missing from %s fragment %d/2", sentence_type, number)
                return INCOMPLETE
            if number not in (1, 2):
                logger.warning("Unexpected NMEA fragment number: %d/%d", number, count)
                return INCOMPLETE

            own_key = _fragment_key(sentence_type, message_id, count, number, channel)
            other_key = _fragment_key(sentence_type, message_id, count, 3 - number, channel)
            other = self.pull_fragment(other_key)
            if other is None:
                self.push_fragment(own_key, payload)
                return INCOMPLETE
            payload = payload + other if number == 1 else other + payload

        elif count != 1:
            raise UnsupportedSentenceType(
                f"Unsupported fragment count {count} in {sentence_type}, at most 2 are supported"
            )

        bits = bits_from_ais_payload(payload)
        return dispatch(bits, station, own_vessel, self, sentence_type)
