"""Tests for turbocut.export.timecode module."""

import math
import re

import pytest

from turbocut.exceptions import TimecodeError
from turbocut.export.timecode import (
    SUPPORTED_FRAME_RATES,
    frames_to_seconds,
    frames_to_timecode,
    is_supported_frame_rate,
    seconds_to_frames,
    seconds_to_timecode,
    timecode_to_frames,
)

TIMECODE_PATTERN = re.compile(r"^\d{2}:\d{2}:\d{2}:\d{2}$")


class TestFramesToTimecode:
    def test_zero(self):
        assert frames_to_timecode(0, 24) == "00:00:00:00"

    def test_one_second(self):
        assert frames_to_timecode(24, 24) == "00:00:01:00"
        assert frames_to_timecode(30, 30) == "00:00:01:00"

    def test_one_minute(self):
        assert frames_to_timecode(1440, 24) == "00:01:00:00"

    def test_one_hour(self):
        assert frames_to_timecode(3600 * 25, 25) == "01:00:00:00"

    def test_mixed_fields(self):
        assert frames_to_timecode(1572, 24) == "00:01:05:12"

    def test_ntsc_rates_count_in_rounded_base(self):
        assert frames_to_timecode(30, 29.97) == "00:00:01:00"
        assert frames_to_timecode(24, 23.976) == "00:00:01:00"
        assert frames_to_timecode(60, 59.94) == "00:00:01:00"

    def test_negative_frames_rejected(self):
        with pytest.raises(TimecodeError):
            frames_to_timecode(-1, 24)

    def test_non_finite_frames_rejected(self):
        with pytest.raises(TimecodeError):
            frames_to_timecode(math.nan, 24)
        with pytest.raises(TimecodeError):
            frames_to_timecode(math.inf, 24)

    def test_fractional_frames_rejected(self):
        with pytest.raises(TimecodeError):
            frames_to_timecode(1.5, 24)

    def test_integral_float_accepted(self):
        assert frames_to_timecode(48.0, 24) == "00:00:02:00"

    def test_output_shape(self):
        for rate in SUPPORTED_FRAME_RATES:
            for frames in (0, 1, 59, 1799, 107999, 359999):
                assert TIMECODE_PATTERN.match(frames_to_timecode(frames, rate))


class TestTimecodeToFrames:
    def test_basic(self):
        assert timecode_to_frames("00:00:00:00", 24) == 0
        assert timecode_to_frames("00:00:01:00", 24) == 24
        assert timecode_to_frames("00:01:00:00", 24) == 1440
        assert timecode_to_frames("01:00:00:00", 30) == 108000

    def test_semicolon_counts_like_colon(self):
        assert timecode_to_frames("00:01:00;02", 29.97) == timecode_to_frames(
            "00:01:00:02", 29.97
        )
        assert timecode_to_frames("01;00;00;00", 29.97) == 108000

    def test_whitespace_tolerated(self):
        assert timecode_to_frames(" 00:00:02:10\n", 25) == 60

    def test_malformed_rejected(self):
        for bad in ("", "00:00:00", "aa:bb:cc:dd", "0.000000", "00:00:00:00:00"):
            with pytest.raises(TimecodeError):
                timecode_to_frames(bad, 24)

    def test_negative_field_rejected(self):
        with pytest.raises(TimecodeError):
            timecode_to_frames("00:-1:00:00", 24)

    def test_round_trip_all_supported_rates(self):
        for rate in SUPPORTED_FRAME_RATES:
            for frames in list(range(0, 200)) + [1799, 1800, 17982, 107892, 107999, 360000]:
                assert timecode_to_frames(frames_to_timecode(frames, rate), rate) == frames


class TestFramesToSeconds:
    def test_rounds_to_one_decimal(self):
        assert frames_to_seconds(24, 24) == 1.0
        assert frames_to_seconds(36, 24) == 1.5
        assert frames_to_seconds(1, 30) == 0.0
        assert frames_to_seconds(10, 30) == 0.3

    def test_ntsc_hour(self):
        assert frames_to_seconds(108000, 29.97) == 3603.6


class TestSecondsToFrames:
    def test_floors(self):
        assert seconds_to_frames(1.99, 24) == 47
        assert seconds_to_frames(2.0, 30) == 60

    def test_plain_floor_of_float_product(self):
        # 4.1 * 30 evaluates just below 123
        assert seconds_to_frames(4.1, 30) == 122
        assert seconds_to_frames(8.2, 30) == 245

    def test_seconds_to_timecode(self):
        assert seconds_to_timecode(65.5, 24) == "00:01:05:12"


class TestSupportedFrameRates:
    def test_supported(self):
        for rate in (23.976, 24, 25, 29.97, 30, 50, 59.94, 60):
            assert is_supported_frame_rate(rate) is True

    def test_unsupported(self):
        assert is_supported_frame_rate(48) is False
        assert is_supported_frame_rate(23.98) is False
