"""
turbocut.exporter - EDL and FCPXML export entry points.

Each export asks the destination chooser for a target, probes the source for
its start timecode, generates the document and hands it to the writer.
Nothing is probed or written when the user cancels the destination choice.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from turbocut.exceptions import ExportError
from turbocut.export.edl import generate_edl
from turbocut.export.fcpxml import generate_fcpxml
from turbocut.export.offset import resolve_start_offset
from turbocut.io import make_bundle_dir, write_text
from turbocut.logging import logger
from turbocut.models import VideoInfo, validate_clips
from turbocut.probe import probe_media

DEFAULT_EDL_TITLE = "Silence Removed"
FCPXML_BUNDLE_SUFFIX = ".fcpxmld"
FCPXML_DOCUMENT_NAME = "Info.fcpxml"

# (dialog title, default filename, filter name, extension) -> path, None if cancelled
DestinationChooser = Callable[[str, str, str, str], Path | None]
Prober = Callable[[Path], dict[str, Any]]
Writer = Callable[[Path, str], None]


class ExportStatus(str, Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ExportResult:
    """Outcome of an export call."""

    status: ExportStatus
    path: Path | None = None

    @property
    def completed(self) -> bool:
        return self.status is ExportStatus.COMPLETED


def export_edl(
    title: str,
    clips: Iterable[Any],
    video_info: VideoInfo,
    clip_name: str,
    frame_rate: float,
    *,
    choose_destination: DestinationChooser,
    probe: Prober = probe_media,
    write: Writer = write_text,
    edl_title: str = DEFAULT_EDL_TITLE,
) -> ExportResult:
    """Export retained clips as an EDL.

    Args:
        title: Title for the destination chooser
        clips: Retained clips (Clip instances or start/end mappings)
        video_info: Original source media
        clip_name: Source clip name written into each event
        frame_rate: Frames per second
        choose_destination: Destination chooser collaborator
        probe: Media probe collaborator
        write: File write collaborator
        edl_title: TITLE line of the EDL

    Returns:
        ExportResult, CANCELLED if no destination was chosen

    Raises:
        ClipError: If the clip list is empty or malformed
        ValidationError: If the title or clip name spans more than one line
        ProbeError: If the source cannot be probed
        ExportError: If the EDL cannot be written
    """
    validated = validate_clips(clips)

    destination = choose_destination(title, f"{video_info.filename}.edl", "EDL", "edl")
    if destination is None:
        logger.info("EDL export cancelled")
        return ExportResult(ExportStatus.CANCELLED)
    destination = Path(destination)

    offset = resolve_start_offset(probe(video_info.path), frame_rate)
    logger.debug("Source start offset %.1fs", offset)

    edl = generate_edl(edl_title, clip_name, validated, frame_rate, offset)

    try:
        write(destination, edl)
    except OSError as e:
        raise ExportError(f"Failed to write EDL to {destination}: {e}") from e

    logger.info("Wrote EDL with %d events to %s", len(validated), destination)
    return ExportResult(ExportStatus.COMPLETED, destination)


def export_fcpxml(
    title: str,
    clips: Iterable[Any],
    video_info: VideoInfo,
    clip_name: str,
    frame_rate: float,
    *,
    choose_destination: DestinationChooser,
    probe: Prober = probe_media,
    write: Writer = write_text,
) -> ExportResult:
    """Export retained clips as an FCPXML bundle.

    The chosen path becomes a .fcpxmld directory holding Info.fcpxml. An
    existing bundle directory is reused.

    Args:
        title: Title for the destination chooser
        clips: Retained clips (Clip instances or start/end mappings)
        video_info: Original source media
        clip_name: Source clip name
        frame_rate: Frames per second
        choose_destination: Destination chooser collaborator
        probe: Media probe collaborator
        write: File write collaborator

    Returns:
        ExportResult with the bundle path, CANCELLED if no destination was chosen

    Raises:
        ClipError: If the clip list is empty or malformed
        ProbeError: If the source cannot be probed
        ExportError: If the bundle or document cannot be written
    """
    validated = validate_clips(clips)

    destination = choose_destination(
        title, f"{video_info.filename}{FCPXML_BUNDLE_SUFFIX}", "FCPXML 1.10", "fcpxmld"
    )
    if destination is None:
        logger.info("FCPXML export cancelled")
        return ExportResult(ExportStatus.CANCELLED)

    bundle = Path(destination)
    if bundle.suffix != FCPXML_BUNDLE_SUFFIX:
        bundle = bundle.with_name(bundle.name + FCPXML_BUNDLE_SUFFIX)

    offset = resolve_start_offset(probe(video_info.path), frame_rate)
    logger.debug("Source start offset %.1fs", offset)

    xml = generate_fcpxml(
        video_info.path,
        clip_name,
        video_info.duration,
        validated,
        frame_rate,
        offset,
    )

    try:
        created = make_bundle_dir(bundle)
    except OSError as e:
        raise ExportError(f"Failed to create directory {bundle}: {e}") from e

    try:
        write(bundle / FCPXML_DOCUMENT_NAME, xml)
    except OSError as e:
        if created:
            shutil.rmtree(bundle, ignore_errors=True)
        raise ExportError(f"Failed to write FCPXML to {bundle}: {e}") from e

    logger.info("Wrote FCPXML with %d clips to %s", len(validated), bundle)
    return ExportResult(ExportStatus.COMPLETED, bundle)
