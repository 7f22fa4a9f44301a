"""
JSON projection of parsed messages.

    {
      "raw_sentence": "!AIVDM,...",
      "tag_block": {"source": "r003669945", ...} | null,
      "message": {"type": "VesselDynamicData", "data": {...}}
    }

Enums are written by name, binary data as lower-case hex, datetimes in ISO
8601. A type 8 payload is nested the same way as the message itself.
"""

from __future__ import annotations
import dataclasses
import json
from datetime import datetime, time
from enum import Enum
from typing import Any, Dict, Optional

from .messages import NmeaMessage, ParsedMessage
from .tag_block import TagBlock


def _value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, bytes):
        return value.hex()
    if isinstance(value, (datetime, time)):
        return value.isoformat()
    if dataclasses.is_dataclass(value):
        return to_dict(value)
    return value


def to_dict(message: ParsedMessage) -> Dict[str, Any]:
    """Return ``{"type": <class name>, "data": {field: value}}``."""
    data = {f.name: _value(getattr(message, f.name)) for f in dataclasses.fields(message)}
    return {"type": type(message).__name__, "data": data}


def tag_block_to_dict(tag_block: Optional[TagBlock]) -> Optional[Dict[str, Any]]:
    if tag_block is None:
        return None
    return dataclasses.asdict(tag_block)


def to_json(nmea_message: NmeaMessage, raw_sentence: str, **kwargs) -> str:
    """Serialize a parse result; ``kwargs`` are passed on to json.dumps."""
    document = {
        "raw_sentence": raw_sentence,
        "tag_block": tag_block_to_dict(nmea_message.tag_block),
        "message": to_dict(nmea_message.message),
    }
    return json.dumps(document, **kwargs)
