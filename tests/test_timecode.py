"""
Tests for timecode parsing and formatting.
"""

import pytest
from shadowing.timecode import (
    SRT_TIMING_RE, VTT_TIMING_RE, format_timestamp, parse_timing_line,
    timecode_to_seconds,
)


class TestTimecodeToSeconds:

    def test_dot_separator(self):
        assert timecode_to_seconds("00:01:02.500") == 62.5

    def test_comma_separator(self):
        assert timecode_to_seconds("01:00:00,000") == 3600.0

    def test_millisecond_precision(self):
        assert timecode_to_seconds("00:00:01,234") == pytest.approx(1.234)

    @pytest.mark.parametrize("text", [
        "0:01:02.500",      # one-digit hours
        "00:01:02.50",      # two-digit millis
        "00:01:02",         # no millis
        "hello",
        "",
    ])
    def test_no_match_returns_none(self, text):
        assert timecode_to_seconds(text) is None


class TestTimingLine:

    def test_srt_line(self):
        assert parse_timing_line("00:00:01,200 --> 00:00:04,800", SRT_TIMING_RE) == (
            pytest.approx(1.2), pytest.approx(4.8)
        )

    def test_vtt_line_with_settings(self):
        line = "00:00:01.000 --> 00:00:03.500 align:start position:0%"
        assert parse_timing_line(line, VTT_TIMING_RE) == (1.0, 3.5)

    def test_wrong_separator_does_not_match(self):
        assert parse_timing_line("00:00:01.000 --> 00:00:02.000", SRT_TIMING_RE) is None


class TestFormatTimestamp:

    def test_zero(self):
        assert format_timestamp(0.0) == "00:00:00,000"

    def test_hours(self):
        assert format_timestamp(3661.123) == "01:01:01,123"

    def test_dot_separator(self):
        assert format_timestamp(65.5, ".") == "00:01:05.500"

    def test_negative_clamps_to_zero(self):
        assert format_timestamp(-1.0) == "00:00:00,000"
