import pytest

from tripweather.services.scheduling import clock
from tripweather.services.scheduling.errors import InvalidFormat, UnknownTimezone


def test_parse_local_rejects_seconds_and_wrong_separator():
    with pytest.raises(InvalidFormat):
        clock.parse_local("2024-06-01 08:00:00", "America/Denver")
    with pytest.raises(InvalidFormat):
        clock.parse_local("2024-06-01T08:00", "America/Denver")


def test_get_zone_unknown_identifier():
    with pytest.raises(UnknownTimezone):
        clock.get_zone("Mars/Olympus_Mons")
    with pytest.raises(UnknownTimezone):
        clock.get_zone("")


def test_convert_same_zone_is_identity():
    assert clock.convert_datetime("2024-06-01 08:00", "America/Denver", "America/Denver") == "2024-06-01 08:00"


def test_convert_across_zones():
    assert clock.convert_datetime("2024-06-01 08:00", "America/Denver", "America/Los_Angeles") == "2024-06-01 07:00"
    assert clock.convert_datetime("2024-01-15 12:00", "UTC", "America/New_York") == "2024-01-15 07:00"


def test_convert_degrades_to_input():
    assert clock.convert_datetime("not a date", "UTC", "America/Denver") == "not a date"
    assert clock.convert_datetime("2024-06-01 08:00", "Nowhere/Special", "UTC") == "2024-06-01 08:00"


def test_add_minutes_zero_and_positive():
    assert clock.add_minutes_to_datetime("2024-06-01 08:00", "America/Denver", 0) == "2024-06-01 08:00"
    assert clock.add_minutes_to_datetime("2024-06-01 23:30", "America/Denver", 45) == "2024-06-02 00:15"


def test_add_minutes_over_spring_forward_moves_the_instant():
    # 2024-03-10 02:00 MST jumps to 03:00 MDT in Denver
    assert clock.add_minutes_to_datetime("2024-03-10 01:30", "America/Denver", 60) == "2024-03-10 03:30"


def test_add_minutes_degrades_to_input():
    assert clock.add_minutes_to_datetime("2024/06/01 08:00", "UTC", 10) == "2024/06/01 08:00"


def test_add_minutes_rejects_naive_values():
    from datetime import datetime

    with pytest.raises(UnknownTimezone):
        clock.add_minutes(datetime(2024, 6, 1, 8, 0), 10)


def test_timezone_abbreviation_is_dst_aware():
    assert clock.timezone_abbreviation("America/Denver", "2024-01-15 12:00") == "MST"
    assert clock.timezone_abbreviation("America/Denver", "2024-07-15 12:00") == "MDT"


def test_timezone_abbreviation_unknown_zone_uses_city():
    assert clock.timezone_abbreviation("Nowhere/Some_City") == "Some City"


def test_current_time_matches_pattern():
    value = clock.current_time("UTC")
    assert clock.parse_local(value, "UTC").second == 0


def test_is_valid_timezone():
    assert clock.is_valid_timezone("Europe/Berlin")
    assert not clock.is_valid_timezone(None)
    assert not clock.is_valid_timezone("Bogus/Zone")


def test_current_time_unknown_zone_uses_default(monkeypatch):
    monkeypatch.setattr(clock.settings, "default_timezone_name", "UTC")

    value = clock.current_time("Bogus/Zone")

    assert clock.parse_local(value, "UTC").tzinfo is not None
