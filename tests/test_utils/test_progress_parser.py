"""
Tests for FFmpeg progress line parsing.
"""

import pytest

from audioconcat.utils.progress_parser import (
    CONCAT_MULTIPLIER, FINAL_MULTIPLIER, REENCODE_MULTIPLIER, parse_progress_line
)

STATS_LINE = "size=    1024kB time=00:01:30.50 bitrate= 92.7kbits/s speed=45.2x"


class TestTimestampLines:
    """HH:MM:SS.ff stats lines."""

    def test_ninety_seconds_multiplier_one(self):
        assert parse_progress_line(STATS_LINE, 1) == 90

    def test_clamped_to_one_hundred(self):
        assert parse_progress_line(STATS_LINE, 2) == 100

    def test_small_values_scale_with_multiplier(self):
        assert parse_progress_line("time=00:00:12.75", 2) == 25

    def test_hours_and_minutes_count(self):
        assert parse_progress_line("time=01:00:00.00", 1) == 100
        assert parse_progress_line("time=00:00:59.99", 1) == 59

    def test_progress_key_value_output(self):
        """The out_time key of -progress output uses the same format."""
        assert parse_progress_line("out_time=00:00:42.000000", 1) == 42


class TestMicrosecondLines:
    """out_time_ms counters count tenths of a percent per second."""

    def test_microseconds(self):
        assert parse_progress_line("out_time_ms=2500000", 1) == 25

    def test_microseconds_with_multiplier(self):
        assert parse_progress_line("out_time_ms=2500000", 2) == 50

    def test_microseconds_clamped(self):
        assert parse_progress_line("out_time_ms=90000000", 1) == 100


class TestNonMatchingLines:

    @pytest.mark.parametrize("line", [
        "",
        "Input #0, mp3, from 'chapter_01.mp3':",
        "  Duration: 00:03:12.45, start: 0.000000, bitrate: 128 kb/s",
        "out_time_ms=N/A",
        "progress=continue",
    ])
    def test_returns_zero(self, line):
        assert parse_progress_line(line, 1) == 0


def test_phase_multipliers():
    """Re-encode phases are scaled twice as fast as straight concatenation."""
    assert REENCODE_MULTIPLIER == 2
    assert CONCAT_MULTIPLIER == 1
    assert FINAL_MULTIPLIER == 2
