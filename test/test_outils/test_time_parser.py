from datetime import timedelta

import pytest

from credprovider.outils.time_parser import format_duration, parse_duration


class TestParseDuration:

    @pytest.mark.parametrize("text, expected", [
        ("10m", timedelta(minutes=10)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("1.5s", timedelta(seconds=1.5)),
        ("250ms", timedelta(milliseconds=250)),
        ("-1m", timedelta(minutes=-1)),
        ("+5s", timedelta(seconds=5)),
        ("0", timedelta(0)),
        ("-0", timedelta(0)),
        ("0s", timedelta(0)),
        ("3us", timedelta(microseconds=3)),
        ("3µs", timedelta(microseconds=3)),
        ("2000ns", timedelta(microseconds=2)),
        ("1m5s", timedelta(minutes=1, seconds=5)),
        (".5h", timedelta(minutes=30)),
    ])
    def test_valid(self, text, expected):
        assert parse_duration(text) == expected

    @pytest.mark.parametrize("text", ["", "-", "abc", "m"])
    def test_invalid(self, text):
        with pytest.raises(ValueError, match="time: invalid duration"):
            parse_duration(text)

    @pytest.mark.parametrize("text, unit", [("5x", "x"), ("10mx", "mx"), ("1h 30m", "h ")])
    def test_unknown_unit(self, text, unit):
        with pytest.raises(ValueError, match=f'time: unknown unit "{unit}" in duration'):
            parse_duration(text)

    @pytest.mark.parametrize("text", ["10", "1h30"])
    def test_missing_unit(self, text):
        with pytest.raises(ValueError, match="time: missing unit in duration"):
            parse_duration(text)

    def test_non_string(self):
        with pytest.raises(ValueError):
            parse_duration(600)

    def test_largest_duration(self):
        assert parse_duration("2562047h") == timedelta(hours=2562047)

    @pytest.mark.parametrize("text", ["2562048h", "100000000000h", "-100000000000h"])
    def test_out_of_range(self, text):
        with pytest.raises(ValueError, match="time: invalid duration"):
            parse_duration(text)


class TestFormatDuration:

    @pytest.mark.parametrize("delta, expected", [
        (timedelta(0), "0s"),
        (timedelta(minutes=10), "10m0s"),
        (timedelta(hours=1), "1h0m0s"),
        (timedelta(hours=1, minutes=30, seconds=5), "1h30m5s"),
        (timedelta(minutes=-1), "-1m0s"),
        (timedelta(seconds=1.5), "1.5s"),
        (timedelta(milliseconds=250), "250ms"),
        (timedelta(microseconds=1500), "1.5ms"),
        (timedelta(microseconds=7), "7µs"),
        (timedelta(days=1), "24h0m0s"),
    ])
    def test_format(self, delta, expected):
        assert format_duration(delta) == expected
