"""
turbocut.export.edl - CMX 3600 style EDL generator.

Generates Edit Decision List files for import into DaVinci Resolve,
Premiere Pro, and other NLEs. Every clip becomes one cut event on an
auxiliary video track; record times are laid back to back so the gaps
between retained clips are closed.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from turbocut.exceptions import ValidationError
from turbocut.export.timecode import frames_to_timecode, seconds_to_frames
from turbocut.models import Clip

FCM_NON_DROP = "NON-DROP FRAME"


@dataclass(frozen=True)
class EdlEvent:
    """One cut record of an EDL, with all times in frames."""

    number: int
    clip_name: str
    source_in: int
    source_out: int
    record_in: int
    record_out: int


def build_edl_events(
    clip_name: str,
    clips: Sequence[Clip],
    frame_rate: float,
    offset_seconds: float = 0.0,
) -> list[EdlEvent]:
    """Compute source and record frames for each clip.

    Args:
        clip_name: Source clip name for the FROM CLIP NAME comment
        clips: Retained clips, in record order
        frame_rate: Frames per second
        offset_seconds: Source start offset added to every source time

    Returns:
        List of EdlEvent, numbered from 1
    """
    events = []
    record_cursor = 0

    for number, clip in enumerate(clips, 1):
        source_in = seconds_to_frames(clip.start + offset_seconds, frame_rate)
        source_out = seconds_to_frames(clip.end + offset_seconds, frame_rate)

        record_in = record_cursor
        record_out = record_cursor + seconds_to_frames(clip.duration, frame_rate)

        events.append(
            EdlEvent(
                number=number,
                clip_name=clip_name,
                source_in=source_in,
                source_out=source_out,
                record_in=record_in,
                record_out=record_out,
            )
        )
        record_cursor = record_out

    return events


def format_event(event: EdlEvent, frame_rate: float) -> list[str]:
    """Render one event as its EDL lines (event line, clip comment, blank)."""
    # AX = auxiliary source, V = video, C = cut
    event_line = (
        f"{event.number:03d}  AX       V     C        "
        f"{frames_to_timecode(event.source_in, frame_rate)} "
        f"{frames_to_timecode(event.source_out, frame_rate)} "
        f"{frames_to_timecode(event.record_in, frame_rate)} "
        f"{frames_to_timecode(event.record_out, frame_rate)}"
    )
    return [event_line, f"* FROM CLIP NAME: {event.clip_name}", ""]


def check_single_line(label: str, value: str) -> None:
    """Reject values that would break a one-line EDL field."""
    if "\n" in value or "\r" in value:
        raise ValidationError(f"{label} must be a single line: {value!r}")


def render_edl(title: str, events: Sequence[EdlEvent], frame_rate: float) -> str:
    """Render EDL text from events.

    Args:
        title: EDL title
        events: Cut events in record order
        frame_rate: Frames per second

    Returns:
        EDL content as string, newline terminated

    Raises:
        ValidationError: If the title or a clip name spans more than one line
    """
    check_single_line("EDL title", title)
    for event in events:
        check_single_line("Clip name", event.clip_name)

    lines = [f"TITLE: {title}", f"FCM: {FCM_NON_DROP}", ""]
    for event in events:
        lines.extend(format_event(event, frame_rate))
    return "\n".join(lines) + "\n"


def generate_edl(
    title: str,
    clip_name: str,
    clips: Sequence[Clip],
    frame_rate: float,
    offset_seconds: float = 0.0,
) -> str:
    """Generate an EDL from retained clips.

    Args:
        title: EDL title
        clip_name: Source clip name
        clips: Retained clips, in record order
        frame_rate: Frames per second
        offset_seconds: Source start offset in seconds

    Returns:
        EDL content as string
    """
    events = build_edl_events(clip_name, clips, frame_rate, offset_seconds)
    return render_edl(title, events, frame_rate)
