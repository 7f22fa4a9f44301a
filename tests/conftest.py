"""
Shared test helpers: build AIS payloads field by field and wrap them in
sentences with valid checksums.
"""

from functools import reduce

import pytest

from nmea_ais import BitReader


class AisBuilder:
    """Encode test messages the way a transponder would."""

    @staticmethod
    def layout(total, *fields):
        """
        Return a '0'/'1' string of ``total`` bits with each
        (offset, width, value) written in; negative values are two's complement.
        """
        bits = ["0"] * total
        for offset, width, value in fields:
            chunk = format(value & ((1 << width) - 1), f"0{width}b")
            bits[offset:offset + width] = chunk
        return "".join(bits)

    @staticmethod
    def text(value, width):
        """6-bit text as an integer, padded with '@'."""
        number = 0
        for char in value.ljust(width // 6, "@"):
            number = (number << 6) | (ord(char) & 0x3F)
        return number

    @staticmethod
    def armor(bits):
        """Return (payload, fill bits)."""
        fill = (-len(bits)) % 6
        bits += "0" * fill
        chars = []
        for i in range(0, len(bits), 6):
            value = int(bits[i:i + 6], 2)
            chars.append(chr(value + 48) if value < 40 else chr(value + 56))
        return "".join(chars), fill

    @staticmethod
    def reader(bits):
        padding = (-len(bits)) % 8
        data = int(bits + "0" * padding, 2).to_bytes((len(bits) + padding) // 8, "big")
        return BitReader(data, len(bits))

    @staticmethod
    def checksum(body):
        return reduce(lambda acc, char: acc ^ ord(char), body, 0)

    @classmethod
    def nmea(cls, body):
        """Append '*HH' to a sentence starting with '$' or '!'."""
        return f"{body}*{cls.checksum(body[1:]):02X}"

    @classmethod
    def tag_block(cls, content):
        return f"\\{content}*{cls.checksum(content):02X}\\"

    @classmethod
    def vdm(cls, payload, fill=0, *, channel="A", count=1, number=1, message_id="", talker="!AIVDM"):
        return cls.nmea(f"{talker},{count},{number},{message_id},{channel},{payload},{fill}")

    @classmethod
    def sentence(cls, bits, **kwargs):
        """One complete single-fragment sentence carrying ``bits``."""
        payload, fill = cls.armor(bits)
        return cls.vdm(payload, fill, **kwargs)


@pytest.fixture
def ais():
    return AisBuilder


@pytest.fixture
def parser():
    from nmea_ais import NmeaParser
    return NmeaParser()


# Real-world sentences
TYPE1 = "!AIVDM,1,1,,B,177KQJ5000G?tO`K>RA1wUbN0TKH,0*5C"
TYPE5_PART1 = "!AIVDM,2,1,3,B,55P5TL01VIaAL@7WKO@mBplU@<PDhh000000001S;AJ::4A80?4i@E53,0*3E"
TYPE5_PART2 = "!AIVDM,2,2,3,B,1@0000000000000,2*55"
TYPE8 = "!AIVDM,1,1,,A,85M:Ih1KmPAU6jAs85`03cJm,0*6A"
TAGGED = (
    "\\g:1-2-73874,n:157036,s:r003669945,c:1241544035*4A\\"
    "!AIVDM,1,1,,B,15N4cJ`005Jrek0H@9n`DW5608EP,0*13"
)


@pytest.fixture
def samples():
    return {
        "type1": TYPE1,
        "type5": (TYPE5_PART1, TYPE5_PART2),
        "type8": TYPE8,
        "tagged": TAGGED,
    }
