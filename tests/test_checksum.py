"""
Tests for NMEA checksum calculation and validation.
"""

import pytest
from nmea_ais import CorruptedSentence, checksum, validate


BODY = "AIVDM,1,1,,A,85M:Ih1KmPAU6jAs85`03cJm,0"


class TestChecksum:

    def test_known_sentence(self):
        assert checksum(BODY) == 0x6A

    def test_empty(self):
        assert checksum("") == 0

    def test_xor_of_codes(self):
        assert checksum("A") == 0x41
        assert checksum("AA") == 0


class TestValidate:

    def test_match(self):
        validate(BODY, "6A")

    def test_lower_case_hex(self):
        validate(BODY, "6a")

    @pytest.mark.parametrize("given", [None, ""])
    def test_unchecked(self, given):
        validate(BODY, given)

    def test_mismatch(self):
        with pytest.raises(CorruptedSentence, match="6A != 6B"):
            validate(BODY, "6B")

    def test_non_hex_never_matches(self):
        with pytest.raises(CorruptedSentence):
            validate(BODY, "ZZ")

    def test_single_bit_corruption_detected(self):
        for pos in range(len(BODY)):
            for bit in range(7):
                corrupted = BODY[:pos] + chr(ord(BODY[pos]) ^ (1 << bit)) + BODY[pos + 1:]
                with pytest.raises(CorruptedSentence):
                    validate(corrupted, "6A")
