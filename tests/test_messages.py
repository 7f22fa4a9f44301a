"""
Tests for the AIS message decoders: position reports, static data and
fixed stations.

Offsets follow https://gpsd.gitlab.io/gpsd/AIVDM.html
"""

from datetime import datetime, timezone

import pytest
from nmea_ais import (
    INCOMPLETE,
    AidToNavigationReport,
    AisClass,
    BaseStationReport,
    InvalidSentence,
    NmeaParser,
    StandardSarAircraftPositionReport,
    VesselDynamicData,
    VesselStaticData,
)
from nmea_ais import position, station
from nmea_ais.fields import required_bits
from nmea_ais.position import rate_of_turn


class TestClassAPosition:
    """Types 1, 2 and 3."""

    def test_real_sentence(self, parser, samples):
        msg = parser.parse(samples["type1"])

        assert isinstance(msg, VesselDynamicData)
        assert msg.message_type == 1
        assert msg.ais_type == AisClass.ClassA
        assert msg.mmsi == 477553000
        assert msg.nav_status == 5
        assert msg.rate_of_turn == 0.0
        assert msg.sog_knots == 0.0
        assert msg.high_position_accuracy is False
        assert msg.longitude == pytest.approx(-122.345833, abs=1e-6)
        assert msg.latitude == pytest.approx(47.582833, abs=1e-6)
        assert msg.cog == pytest.approx(51.0)
        assert msg.heading_true == 181
        assert msg.timestamp_seconds == 15
        assert msg.special_manoeuvre is None
        assert msg.raim_flag is False
        assert msg.radio_status == 149208

    def test_not_available(self, parser, ais):
        bits = ais.layout(
            168,
            (0, 6, 3), (8, 30, 123456789), (38, 4, 15), (42, 8, -128),
            (50, 10, 1023), (61, 28, 181 * 600000), (89, 27, 91 * 600000),
            (116, 12, 3600), (128, 9, 511), (137, 6, 60),
        )
        msg = parser.parse(ais.sentence(bits))

        assert msg.message_type == 3
        assert msg.rate_of_turn is None
        assert msg.sog_knots is None
        assert msg.longitude is None
        assert msg.latitude is None
        assert msg.cog is None
        assert msg.heading_true is None
        assert msg.timestamp_seconds is None

    def test_southern_western_hemisphere(self, parser, ais):
        bits = ais.layout(168, (0, 6, 2), (61, 28, -70 * 600000), (89, 27, -33 * 600000))
        msg = parser.parse(ais.sentence(bits))
        assert msg.longitude == pytest.approx(-70.0)
        assert msg.latitude == pytest.approx(-33.0)

    def test_rate_of_turn(self):
        assert rate_of_turn(None) is None
        assert rate_of_turn(0) == 0.0
        assert rate_of_turn(127) == pytest.approx(720.0, abs=0.01)
        assert rate_of_turn(-127) == pytest.approx(-720.0, abs=0.01)
        assert rate_of_turn(-10) < 0


class TestClassBPosition:

    def test_type18(self, parser, ais):
        bits = ais.layout(
            168,
            (0, 6, 18), (8, 30, 338087471), (46, 10, 123), (57, 28, 10 * 600000),
            (85, 27, 55 * 600000), (112, 12, 1800), (124, 9, 511), (133, 6, 20),
            (141, 1, 1), (144, 1, 1), (147, 1, 1),
        )
        msg = parser.parse(ais.sentence(bits))

        assert isinstance(msg, VesselDynamicData)
        assert msg.ais_type == AisClass.ClassB
        assert msg.message_type == 18
        assert msg.mmsi == 338087471
        assert msg.sog_knots == pytest.approx(12.3)
        assert msg.longitude == pytest.approx(10.0)
        assert msg.latitude == pytest.approx(55.0)
        assert msg.cog == pytest.approx(180.0)
        assert msg.heading_true is None
        assert msg.timestamp_seconds == 20
        assert msg.class_b_unit_flag is True
        assert msg.class_b_display is False
        assert msg.class_b_band_flag is True
        assert msg.raim_flag is True
        assert msg.nav_status is None

    def test_type19(self, parser, ais):
        bits = ais.layout(
            312,
            (0, 6, 19), (8, 30, 367059850), (46, 10, 87), (124, 9, 90),
            (143, 120, ais.text("CAPT.J.RIMES", 120)), (305, 1, 1), (307, 1, 1),
        )
        msg = parser.parse(ais.sentence(bits))

        assert msg.message_type == 19
        assert msg.sog_knots == pytest.approx(8.7)
        assert msg.heading_true == 90
        assert msg.raim_flag is True
        assert msg.class_b_mode_flag is True

    def test_type19_too_short(self, parser, ais):
        with pytest.raises(InvalidSentence):
            parser.parse(ais.sentence(ais.layout(168, (0, 6, 19))))


class TestLongRange:
    """Type 27."""

    def test_decode(self, parser, ais):
        bits = ais.layout(
            96,
            (0, 6, 27), (8, 30, 206914217), (38, 1, 1), (40, 4, 3),
            (44, 18, -1000), (62, 17, 3000), (79, 6, 63), (85, 9, 90),
        )
        msg = parser.parse(ais.sentence(bits))

        assert msg.message_type == 27
        assert msg.high_position_accuracy is True
        assert msg.nav_status == 3
        assert msg.longitude == pytest.approx(-1000 / 600.0)
        assert msg.latitude == pytest.approx(5.0)
        assert msg.sog_knots is None
        assert msg.cog == 90.0
        assert msg.current_gnss_position is True


class TestSarAircraft:
    """Type 9."""

    def test_decode(self, parser, ais):
        bits = ais.layout(
            168,
            (0, 6, 9), (8, 30, 111232511), (38, 12, 4095), (50, 10, 500),
            (116, 12, 900), (142, 1, 1),
        )
        msg = parser.parse(ais.sentence(bits))

        assert isinstance(msg, StandardSarAircraftPositionReport)
        assert msg.mmsi == 111232511
        assert msg.altitude is None
        assert msg.sog_knots == 500
        assert msg.cog == pytest.approx(90.0)
        assert msg.dte is True


class TestStaticAndVoyage:
    """Type 5."""

    def test_real_sentences(self, parser, samples):
        part1, part2 = samples["type5"]
        parser.parse(part1)
        msg = parser.parse(part2)

        assert isinstance(msg, VesselStaticData)
        assert msg.ais_type == AisClass.ClassA
        assert msg.mmsi == 369190000
        assert msg.ais_version == 0
        assert msg.imo_number == 6710932
        assert msg.call_sign == "WDA9674"
        assert msg.name == "MT.MITCHELL"
        assert msg.ship_type == 99
        assert msg.dimension_to_bow == 90
        assert msg.dimension_to_stern == 90
        assert msg.dimension_to_port == 10
        assert msg.dimension_to_starboard == 10
        assert msg.epfd == 1
        assert (msg.eta_month, msg.eta_day, msg.eta_hour, msg.eta_minute) == (1, 2, 8, 0)
        assert msg.draught == pytest.approx(6.0)
        assert msg.destination == "SEATTLE"
        assert msg.dte is False


class TestClassBStatic:
    """Type 24, parts A and B merged by MMSI."""

    MMSI = 271041815

    def part_a(self, ais, mmsi=MMSI):
        bits = ais.layout(168, (0, 6, 24), (8, 30, mmsi), (40, 120, ais.text("PROGUY", 120)))
        return ais.sentence(bits)

    def part_b(self, ais, mmsi=MMSI, tail=((132, 9, 12), (141, 9, 3), (150, 6, 2), (156, 6, 4))):
        bits = ais.layout(
            168,
            (0, 6, 24), (8, 30, mmsi), (38, 2, 1), (40, 8, 37),
            (48, 18, ais.text("ABC", 18)), (66, 4, 2), (70, 20, 12345),
            (90, 42, ais.text("TC6163", 42)), *tail,
        )
        return ais.sentence(bits)

    def test_a_then_b(self, parser, ais):
        assert parser.parse(self.part_a(ais)) is INCOMPLETE
        assert parser.cached_static_count == 1

        msg = parser.parse(self.part_b(ais))
        assert parser.cached_static_count == 0
        assert isinstance(msg, VesselStaticData)
        assert msg.ais_type == AisClass.ClassB
        assert msg.mmsi == self.MMSI
        assert msg.name == "PROGUY"
        assert msg.ship_type == 37
        assert msg.vendor_id == "ABC"
        assert msg.unit_model_code == 2
        assert msg.serial_number == 12345
        assert msg.call_sign == "TC6163"
        assert msg.dimension_to_bow == 12
        assert msg.dimension_to_stern == 3
        assert msg.dimension_to_port == 2
        assert msg.dimension_to_starboard == 4
        assert msg.mothership_mmsi is None

    def test_b_then_a(self, parser, ais):
        assert parser.parse(self.part_b(ais)) is INCOMPLETE
        msg = parser.parse(self.part_a(ais))
        assert msg.name == "PROGUY"
        assert msg.call_sign == "TC6163"

    def test_different_vessels_not_merged(self, parser, ais):
        assert parser.parse(self.part_a(ais)) is INCOMPLETE
        assert parser.parse(self.part_b(ais, mmsi=211000001)) is INCOMPLETE
        assert parser.cached_static_count == 2

    def test_auxiliary_craft_mothership(self, parser, ais):
        mmsi = 981234567
        parser.parse(self.part_a(ais, mmsi))
        msg = parser.parse(self.part_b(ais, mmsi, tail=((132, 30, 244123456),)))

        assert msg.mothership_mmsi == 244123456
        assert msg.dimension_to_bow is None

    @pytest.mark.parametrize("part_number", [2, 3])
    def test_invalid_part_number(self, parser, ais, part_number):
        bits = ais.layout(168, (0, 6, 24), (8, 30, self.MMSI), (38, 2, part_number))
        with pytest.raises(InvalidSentence):
            parser.parse(ais.sentence(bits))

    def test_static_store_bounded(self, ais):
        parser = NmeaParser(max_static_entries=1)
        parser.parse(self.part_a(ais, 211000001))
        parser.parse(self.part_a(ais, 211000002))
        assert parser.cached_static_count == 1
        # The first vessel was evicted
        assert parser.parse(self.part_b(ais, 211000001)) is INCOMPLETE

    def test_merge_rejects_other_mmsi(self):
        a = VesselStaticData(own_vessel=False, station=None, ais_type=AisClass.ClassB, mmsi=1)
        b = VesselStaticData(own_vessel=False, station=None, ais_type=AisClass.ClassB, mmsi=2)
        with pytest.raises(InvalidSentence, match="Mismatching MMSI"):
            a.merge(b)


class TestBaseStation:
    """Types 4 and 11."""

    def bits(self, ais, message_type=4, date=(2024, 3, 15, 12, 30, 45)):
        year, month, day, hour, minute, second = date
        return ais.layout(
            168,
            (0, 6, message_type), (8, 30, 3669702), (38, 14, year), (52, 4, month),
            (56, 5, day), (61, 5, hour), (66, 6, minute), (72, 6, second),
            (78, 1, 1), (79, 28, -74 * 600000), (107, 27, 40 * 600000), (134, 4, 7),
        )

    def test_decode(self, parser, ais):
        msg = parser.parse(ais.sentence(self.bits(ais)))

        assert isinstance(msg, BaseStationReport)
        assert msg.message_type == 4
        assert msg.mmsi == 3669702
        assert msg.timestamp == datetime(2024, 3, 15, 12, 30, 45, tzinfo=timezone.utc)
        assert msg.high_position_accuracy is True
        assert msg.longitude == pytest.approx(-74.0)
        assert msg.latitude == pytest.approx(40.0)
        assert msg.epfd == 7

    def test_real_sentence(self, parser):
        msg = parser.parse("!AIVDM,1,1,,A,403OviQuMGCqWrRO9>E6fE700@GO,0")

        assert msg.message_type == 4
        assert msg.mmsi == 3669702
        assert msg.timestamp == datetime(2007, 5, 14, 19, 57, 39, tzinfo=timezone.utc)
        assert msg.longitude == pytest.approx(-76.352362, abs=1e-5)
        assert msg.latitude == pytest.approx(36.883767, abs=1e-5)
        assert msg.epfd == 7

    def test_type11(self, parser, ais):
        msg = parser.parse(ais.sentence(self.bits(ais, message_type=11)))
        assert msg.message_type == 11

    @pytest.mark.parametrize("date", [
        (0, 0, 0, 24, 60, 60),
        (2024, 3, 15, 24, 0, 0),
        (2024, 3, 15, 12, 60, 0),
    ])
    def test_timestamp_not_available(self, parser, ais, date):
        assert parser.parse(ais.sentence(self.bits(ais, date=date))).timestamp is None

    def test_invalid_date(self, parser):
        with pytest.raises(InvalidSentence, match="Failed to parse Utc Date from y:4161 m:15 d:31 h:0 m:0 s:0"):
            parser.parse("!AIVDM,1,1,,B,4028iqT47wP00wGiNbH8H0700`2H,0*13")


class TestAidToNavigation:
    """Type 21."""

    def test_name_extension(self, parser, ais):
        bits = ais.layout(
            296,
            (0, 6, 21), (8, 30, 993672085), (38, 5, 1),
            (43, 120, ais.text("ABCDEFGHIJKLMNOPQRST", 120)),
            (164, 28, -122 * 600000), (192, 27, 37 * 600000),
            (253, 6, 61), (269, 1, 1), (272, 24, ais.text("UVWX", 24)),
        )
        msg = parser.parse(ais.sentence(bits))

        assert isinstance(msg, AidToNavigationReport)
        assert msg.mmsi == 993672085
        assert msg.aid_type == 1
        assert msg.name == "ABCDEFGHIJKLMNOPQRSTUVWX"
        assert msg.longitude == pytest.approx(-122.0)
        assert msg.latitude == pytest.approx(37.0)
        assert msg.timestamp_seconds is None
        assert msg.virtual_aid is True
        assert msg.off_position is False

    def test_short_name(self, parser, ais):
        bits = ais.layout(272, (0, 6, 21), (43, 120, ais.text("BUOY 7", 120)))
        msg = parser.parse(ais.sentence(bits))
        assert msg.name == "BUOY 7"
        assert msg.aid_type is None

    def test_too_short(self, parser, ais):
        with pytest.raises(InvalidSentence):
            parser.parse(ais.sentence(ais.layout(200, (0, 6, 21))))


class TestLayouts:
    """Every fixed layout fits inside the message length it is checked against."""

    @pytest.mark.parametrize("table, length", [
        (position.CLASS_A, position.CLASS_A_BITS),
        (position.SAR_AIRCRAFT, position.SAR_AIRCRAFT_BITS),
        (position.CLASS_B, position.CLASS_B_BITS),
        (position.EXTENDED_CLASS_B, position.EXTENDED_CLASS_B_BITS),
        (position.LONG_RANGE, position.LONG_RANGE_BITS),
        (station.BASE_STATION, station.BASE_STATION_BITS),
        (station.AID_TO_NAVIGATION, station.AID_TO_NAVIGATION_BITS),
    ])
    def test_table_fits(self, table, length):
        assert required_bits(table) <= length
