"""
turbocut.export.rational - FCPXML rational frame durations.

FCPXML expresses time as a rational number of seconds. Each nominal frame rate
maps to a fixed per-frame duration; the pairs are looked up, never derived by
division, so NTSC rates keep their exact 1001 numerators.
"""

from __future__ import annotations

FRAME_DURATIONS: dict[float, tuple[int, int]] = {
    23.976: (1001, 24000),
    24: (100, 2400),
    25: (1, 25),
    29.97: (1001, 30000),
    30: (1, 30),
    50: (1, 50),
    59.94: (1001, 60000),
    60: (1, 60),
}

DEFAULT_FRAME_RATE = 23.976


def frame_duration(frame_rate: float) -> tuple[int, int]:
    """Get the (numerator, denominator) frame duration for a frame rate.

    Unknown rates fall back to the 23.976 entry.
    """
    return FRAME_DURATIONS.get(frame_rate, FRAME_DURATIONS[DEFAULT_FRAME_RATE])


def rational_time(value: int, denominator: int) -> str:
    """Format an FCPXML rational time like "1001/24000s"."""
    return f"{value}/{denominator}s"


def frame_duration_string(frame_rate: float) -> str:
    """Get the FCPXML frameDuration attribute for a frame rate."""
    numerator, denominator = frame_duration(frame_rate)
    return rational_time(numerator, denominator)


def format_name(frame_rate: float, width: int = 3840, height: int = 2160) -> str:
    """Get the FCPXML format name for a frame rate.

    Args:
        frame_rate: Frames per second
        width: Canvas width
        height: Canvas height

    Returns:
        Name like "FFVideoFormat3840x2160p2398"
    """
    rate = format(round(frame_rate * 100) / 100, "g").replace(".", "")
    return f"FFVideoFormat{width}x{height}p{rate}"
