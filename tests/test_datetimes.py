from __future__ import annotations

import pytest

from fireline.datetimes import (
    compose_datetime,
    is_valid_time,
    normalize_time,
    parse_date_range,
    parse_duration,
)
from fireline.errors import InvalidDurationFormat, InvalidTimeFormat


def test_parse_duration_four_parts():
    d = parse_duration("01:19:27:00")
    assert (d.days, d.hours, d.minutes, d.seconds) == (1, 19, 27, 0)
    assert d.total_seconds() == ((24 + 19) * 60 + 27) * 60


def test_parse_duration_legacy_two_parts():
    d = parse_duration("43:27")
    assert (d.days, d.hours, d.minutes) == (0, 43, 27)


@pytest.mark.parametrize("raw", ["1:2:3", "a:b:c:d", "", "1:2:3:4:5", "01:-1:00:00"])
def test_parse_duration_rejects(raw):
    with pytest.raises(InvalidDurationFormat):
        parse_duration(raw)


@pytest.mark.parametrize(
    "raw, expected",
    [("14:50左右", "14:50"), ("約14:50", "14:50"), ("~9:05", "9:05"), (" 14:50 ", "14:50")],
)
def test_normalize_time(raw, expected):
    assert normalize_time(raw) == expected


def test_is_valid_time():
    assert is_valid_time("9:05")
    assert is_valid_time("14:50左右")
    assert is_valid_time("TIME_ALL_DAY")
    assert not is_valid_time("晚上")
    assert not is_valid_time("14:50:00")


def test_compose_datetime_pads_hour():
    assert compose_datetime("2025-11-26", "9:05") == "2025-11-26T09:05:00"
    assert compose_datetime("2025-11-26", "14:50左右") == "2025-11-26T14:50:00"


def test_compose_datetime_sentinels_are_midnight():
    assert compose_datetime("2025-11-26", "TIME_ALL_DAY") == "2025-11-26T00:00:00"
    assert compose_datetime("2025-11-26", "TIME_ONGOING") == "2025-11-26T00:00:00"


def test_compose_datetime_rejects_bad_time():
    with pytest.raises(InvalidTimeFormat):
        compose_datetime("2025-11-26", "noon")


@pytest.mark.parametrize(
    "raw",
    ["2025-11-26 至 2025-11-28", "2025-11-26 to 2025-11-28", "2025-11-26 - 2025-11-28", "2025-11-26/2025-11-28"],
)
def test_parse_date_range_separators(raw):
    assert parse_date_range(raw) == ("2025-11-26 - 2025-11-28", "2025-11-26", "2025-11-28")


def test_parse_date_range_single_date_and_passthrough():
    assert parse_date_range("2025-11-26") == ("2025-11-26", "2025-11-26", "2025-11-26")
    assert parse_date_range("待定") == ("待定", "待定", "待定")
