"""
turbocut.export.timecode - Timecode math utilities.

Handles conversion between frame counts, seconds and HH:MM:SS:FF timecodes.
Timecodes are always counted non-drop-frame: the frames-per-second base is the
frame rate rounded to the nearest integer (29.97 counts in base 30).
"""

from __future__ import annotations

import math
import re

from turbocut.exceptions import TimecodeError

SUPPORTED_FRAME_RATES: tuple[float, ...] = (23.976, 24, 25, 29.97, 30, 50, 59.94, 60)

ZERO_TIMECODE = "00:00:00:00"

_TIMECODE_SEPARATORS = re.compile(r"[:;]")


def timecode_base(frame_rate: float) -> int:
    """Return the integer frames-per-second used for timecode fields."""
    if not math.isfinite(frame_rate) or frame_rate <= 0:
        raise TimecodeError(f"Invalid frame rate: {frame_rate}")
    return round(frame_rate)


def is_supported_frame_rate(frame_rate: float) -> bool:
    """Check if frame rate is one of the nominal rates with an exact table entry."""
    return frame_rate in SUPPORTED_FRAME_RATES


def frames_to_timecode(frames: int, frame_rate: float) -> str:
    """Convert frame count to non-drop-frame timecode.

    Args:
        frames: Total number of frames (non-negative integer)
        frame_rate: Frames per second (23.976, 24, 25, 29.97, etc.)

    Returns:
        Timecode string in HH:MM:SS:FF format

    Raises:
        TimecodeError: If frames is negative, fractional or not finite
    """
    if isinstance(frames, float):
        if not math.isfinite(frames) or not frames.is_integer():
            raise TimecodeError(f"Invalid frame count: {frames}")
        frames = int(frames)
    if frames < 0:
        raise TimecodeError(f"Invalid frame count: {frames}")

    fps = timecode_base(frame_rate)

    ff = frames % fps
    total_seconds = frames // fps
    ss = total_seconds % 60
    mm = (total_seconds // 60) % 60
    hh = total_seconds // 3600

    return f"{hh:02d}:{mm:02d}:{ss:02d}:{ff:02d}"


def timecode_to_frames(timecode: str, frame_rate: float) -> int:
    """Convert timecode to frame count.

    Both ":" and ";" separators are accepted. A semicolon marks drop-frame in
    some producers but is counted exactly like a colon here.

    Args:
        timecode: Timecode string (HH:MM:SS:FF or HH:MM:SS;FF)
        frame_rate: Frames per second

    Returns:
        Frame count

    Raises:
        TimecodeError: If the timecode does not have four integer fields
    """
    parts = _TIMECODE_SEPARATORS.split(timecode.strip())
    if len(parts) != 4:
        raise TimecodeError(f"Malformed timecode: {timecode!r}")
    try:
        hh, mm, ss, ff = (int(part) for part in parts)
    except ValueError as e:
        raise TimecodeError(f"Malformed timecode: {timecode!r}") from e
    if min(hh, mm, ss, ff) < 0:
        raise TimecodeError(f"Malformed timecode: {timecode!r}")

    return (hh * 3600 + mm * 60 + ss) * timecode_base(frame_rate) + ff


def frames_to_seconds(frames: int, frame_rate: float) -> float:
    """Convert frame count to seconds, rounded to one decimal place.

    Only precise enough for the source start offset. Do not use it for
    frame-accurate math.
    """
    return round(frames / frame_rate, 1)


def seconds_to_frames(seconds: float, frame_rate: float) -> int:
    """Convert seconds to a whole frame count, rounding down.

    Args:
        seconds: Time in seconds
        frame_rate: Frames per second (raw rate, not rounded)

    Returns:
        Frame count
    """
    return math.floor(seconds * frame_rate)


def seconds_to_timecode(seconds: float, frame_rate: float) -> str:
    """Convert seconds to timecode via a floored frame count."""
    return frames_to_timecode(seconds_to_frames(seconds, frame_rate), frame_rate)
