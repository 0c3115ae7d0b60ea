"""
Tests del codec de tiempos (parse_time / format_seconds).
"""
import pytest

from bhop_records.shared.utils.time_codec import (
    INVALID_TIME,
    format_seconds,
    is_valid_time,
    parse_time,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("12.345", 12.345),
        ("1:02.500", 62.5),
        ("1:02:03.456", 3723.456),
        ("0", 0.0),
        (" 45.1 ", 45.1),
        ("25:00:00", 90000.0),
    ],
)
def test_parse_time_accepted_shapes(text, expected):
    assert parse_time(text) == pytest.approx(expected)


@pytest.mark.parametrize(
    "text",
    ["abc", "", "1:2:3:4", "-5", "1:-2.0", "1::2", "1e3", "nan", "inf", None],
)
def test_parse_time_rejects_malformed_input(text):
    assert parse_time(text) == INVALID_TIME
    assert not is_valid_time(parse_time(text))


def test_format_seconds_picks_coarsest_unit():
    assert format_seconds(3723.456) == "1:02:03.456"
    assert format_seconds(62.5) == "1:02.500"
    assert format_seconds(12.345) == "12.345"
    assert format_seconds(0) == "0.000"


def test_format_seconds_carries_rounded_milliseconds():
    assert format_seconds(59.9996) == "1:00.000"
    assert format_seconds(3599.9999) == "1:00:00.000"


def test_format_seconds_rejects_negative_values():
    with pytest.raises(ValueError):
        format_seconds(INVALID_TIME)


@pytest.mark.parametrize("seconds", [0.001, 9.87, 59.999, 60.0, 61.25, 754.321, 3600.0, 3723.456, 86399.5])
def test_parse_of_formatted_value_is_same_duration(seconds):
    assert parse_time(format_seconds(seconds)) == pytest.approx(seconds, abs=1e-6)


@pytest.mark.parametrize("text", ["1\n:02", "12\n:00", "1:02\n.5"])
def test_parse_time_rejects_embedded_newlines(text):
    assert parse_time(text) == INVALID_TIME


@pytest.mark.parametrize("seconds", [float("nan"), float("inf"), -0.001, None])
def test_is_valid_time_requires_finite_non_negative(seconds):
    assert is_valid_time(seconds) is False
