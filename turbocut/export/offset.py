"""
turbocut.export.offset - Source start timecode resolution.

Clip times are relative to the processed audio, which starts at frame 0. The
original recording usually carries an embedded start timecode (camera time of
day, a 01:00:00:00 record run, ...). Exports must place clips on that absolute
timeline, so the start timecode is resolved from probe metadata and turned into
an offset in seconds that is added to every clip boundary.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, NamedTuple

from turbocut.export.timecode import (
    ZERO_TIMECODE,
    frames_to_seconds,
    seconds_to_timecode,
    timecode_to_frames,
)
from turbocut.logging import logger

ProbeData = dict[str, Any]


class StartTimecode(NamedTuple):
    """A resolved start timecode and the strategy that supplied it."""

    timecode: str
    source: str


def _first_stream(probe_data: ProbeData, codec_type: str) -> dict[str, Any]:
    for stream in probe_data.get("streams") or []:
        if stream.get("codec_type") == codec_type:
            return stream
    return {}


def _tag_timecode(record: dict[str, Any]) -> str | None:
    tags = record.get("tags") or {}
    value = tags.get("timecode")
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _format_tag(probe_data: ProbeData, frame_rate: float) -> str | None:
    return _tag_timecode(probe_data.get("format") or {})


def _video_stream_tag(probe_data: ProbeData, frame_rate: float) -> str | None:
    return _tag_timecode(_first_stream(probe_data, "video"))


def _data_stream_tag(probe_data: ProbeData, frame_rate: float) -> str | None:
    return _tag_timecode(_first_stream(probe_data, "data"))


def _video_start_time(probe_data: ProbeData, frame_rate: float) -> str | None:
    start_time = _first_stream(probe_data, "video").get("start_time")
    if start_time in (None, "", "N/A"):
        return None
    try:
        seconds = float(start_time)
    except (TypeError, ValueError):
        logger.debug("Ignoring unparseable video start_time %r", start_time)
        return None
    if seconds < 0:
        return None
    return seconds_to_timecode(seconds, frame_rate)


def _default(probe_data: ProbeData, frame_rate: float) -> str | None:
    return ZERO_TIMECODE


Strategy = Callable[[ProbeData, float], str | None]

# Evaluated in order; the first non-empty result wins.
START_TIMECODE_STRATEGIES: tuple[tuple[str, Strategy], ...] = (
    ("format", _format_tag),
    ("video-stream", _video_stream_tag),
    ("data-stream", _data_stream_tag),
    ("video-start-time", _video_start_time),
    ("default", _default),
)


def iter_start_timecodes(probe_data: ProbeData, frame_rate: float) -> Iterator[StartTimecode]:
    """Yield start timecode candidates lazily, in priority order."""
    for name, strategy in START_TIMECODE_STRATEGIES:
        timecode = strategy(probe_data, frame_rate)
        if timecode:
            yield StartTimecode(timecode, name)


def resolve_start_timecode(probe_data: ProbeData, frame_rate: float) -> StartTimecode:
    """Resolve the start timecode of the source recording.

    Args:
        probe_data: ffprobe JSON output (format + streams)
        frame_rate: Export frame rate, used when converting start_time seconds

    Returns:
        StartTimecode with the timecode string and the strategy name
    """
    resolved = next(iter_start_timecodes(probe_data, frame_rate))
    logger.debug("Start timecode %s (from %s)", resolved.timecode, resolved.source)
    return resolved


def start_offset_seconds(timecode: str, frame_rate: float) -> float:
    """Convert a start timecode to the coarse offset in seconds."""
    return frames_to_seconds(timecode_to_frames(timecode, frame_rate), frame_rate)


def resolve_start_offset(probe_data: ProbeData, frame_rate: float) -> float:
    """Resolve the source start offset in seconds.

    Args:
        probe_data: ffprobe JSON output (format + streams)
        frame_rate: Export frame rate

    Returns:
        Offset in seconds, rounded to one decimal place
    """
    resolved = resolve_start_timecode(probe_data, frame_rate)
    return start_offset_seconds(resolved.timecode, frame_rate)
