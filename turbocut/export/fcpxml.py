"""
turbocut.export.fcpxml - FCPXML 1.10 generator.

Builds a complete FcpxmlDocument value first, then serializes it with
ElementTree. The document holds one 3840x2160 format, one asset pointing at
the original recording and one sequence whose spine lists every retained clip
back to back. All times are integers in the frame-duration denominator of the
export frame rate.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote
from xml.etree import ElementTree as ET

from turbocut.export.rational import format_name, frame_duration, rational_time
from turbocut.export.timecode import seconds_to_frames
from turbocut.models import Clip

FCPXML_VERSION = "1.10"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

CANVAS_WIDTH = 3840
CANVAS_HEIGHT = 2160

FORMAT_ID = "r0"
ASSET_ID = "r2"
SPINE_LANE = 2


@dataclass(frozen=True)
class FormatResource:
    id: str
    name: str
    frame_duration: str
    width: int
    height: int


@dataclass(frozen=True)
class AssetResource:
    id: str
    name: str
    start: int
    duration: int
    format: str
    src: str


@dataclass(frozen=True)
class SpineClip:
    """An asset-clip on the primary storyline."""

    offset: int
    duration: int
    start: int
    name: str
    ref: str = ASSET_ID
    lane: int = SPINE_LANE


@dataclass(frozen=True)
class FcpxmlDocument:
    """A fully built FCPXML document, times in units of 1/denominator s."""

    denominator: int
    format: FormatResource
    asset: AssetResource
    event_name: str
    project_name: str
    clips: tuple[SpineClip, ...]

    @property
    def total_duration(self) -> int:
        return sum(clip.duration for clip in self.clips)


def path_to_file_url(path: Path) -> str:
    """Convert filesystem path to file:// URL.

    Args:
        path: Filesystem path

    Returns:
        file:// URL string
    """
    absolute = path.absolute()
    return f"file://{quote(absolute.as_posix())}"


def build_fcpxml(
    source_path: Path,
    clip_name: str,
    source_duration: float,
    clips: Sequence[Clip],
    frame_rate: float,
    offset_seconds: float = 0.0,
) -> FcpxmlDocument:
    """Build the FCPXML document for a set of retained clips.

    Args:
        source_path: Path to the original source media
        clip_name: Display name of the source clip
        source_duration: Source duration in seconds
        clips: Retained clips, in timeline order
        frame_rate: Frames per second
        offset_seconds: Source start offset in seconds

    Returns:
        FcpxmlDocument
    """
    numerator, denominator = frame_duration(frame_rate)

    def scaled(seconds: float) -> int:
        return numerator * seconds_to_frames(seconds, frame_rate)

    format_resource = FormatResource(
        id=FORMAT_ID,
        name=format_name(frame_rate, CANVAS_WIDTH, CANVAS_HEIGHT),
        frame_duration=rational_time(numerator, denominator),
        width=CANVAS_WIDTH,
        height=CANVAS_HEIGHT,
    )
    asset = AssetResource(
        id=ASSET_ID,
        name=clip_name,
        start=scaled(offset_seconds),
        duration=scaled(source_duration),
        format=FORMAT_ID,
        src=path_to_file_url(source_path),
    )

    spine = []
    offset = 0
    for clip in clips:
        start = scaled(offset_seconds + clip.start)
        end = scaled(offset_seconds + clip.end)
        duration = end - start
        spine.append(SpineClip(offset=offset, duration=duration, start=start, name=clip_name))
        offset += duration

    project_name = f"TurboCut {clip_name}"
    return FcpxmlDocument(
        denominator=denominator,
        format=format_resource,
        asset=asset,
        event_name=project_name,
        project_name=project_name,
        clips=tuple(spine),
    )


def to_element(document: FcpxmlDocument) -> ET.Element:
    """Convert an FcpxmlDocument to an ElementTree root element."""
    den = document.denominator

    root = ET.Element("fcpxml", {"version": FCPXML_VERSION})

    resources = ET.SubElement(root, "resources")
    fmt = document.format
    ET.SubElement(
        resources,
        "format",
        {
            "id": fmt.id,
            "name": fmt.name,
            "frameDuration": fmt.frame_duration,
            "width": str(fmt.width),
            "height": str(fmt.height),
        },
    )

    asset = document.asset
    asset_el = ET.SubElement(
        resources,
        "asset",
        {
            "id": asset.id,
            "name": asset.name,
            "start": rational_time(asset.start, den),
            "duration": rational_time(asset.duration, den),
            "format": asset.format,
            "hasAudio": "1",
            "audioSources": "1",
            "audioChannels": "1",
        },
    )
    ET.SubElement(asset_el, "media-rep", {"src": asset.src, "kind": "original-media"})

    library = ET.SubElement(root, "library")
    event = ET.SubElement(library, "event", {"name": document.event_name})
    project = ET.SubElement(event, "project", {"name": document.project_name})
    sequence = ET.SubElement(
        project,
        "sequence",
        {"tcStart": "0/1s", "format": fmt.id, "tcFormat": "NDF"},
    )
    spine = ET.SubElement(sequence, "spine")

    for clip in document.clips:
        ET.SubElement(
            spine,
            "asset-clip",
            {
                "offset": rational_time(clip.offset, den),
                "enabled": "1",
                "ref": clip.ref,
                "duration": rational_time(clip.duration, den),
                "lane": str(clip.lane),
                "name": clip.name,
                "start": rational_time(clip.start, den),
            },
        )

    return root


def serialize_fcpxml(document: FcpxmlDocument) -> str:
    """Serialize an FcpxmlDocument to FCPXML text with 4-space indentation."""
    root = to_element(document)
    ET.indent(root, space="    ")
    body = ET.tostring(root, encoding="unicode")
    return f"{XML_DECLARATION}\n{body}\n"


def generate_fcpxml(
    source_path: Path,
    clip_name: str,
    source_duration: float,
    clips: Sequence[Clip],
    frame_rate: float,
    offset_seconds: float = 0.0,
) -> str:
    """Generate FCPXML 1.10 text from retained clips.

    Args:
        source_path: Path to the original source media
        clip_name: Display name of the source clip
        source_duration: Source duration in seconds
        clips: Retained clips, in timeline order
        frame_rate: Frames per second
        offset_seconds: Source start offset in seconds

    Returns:
        FCPXML content as string
    """
    document = build_fcpxml(
        source_path, clip_name, source_duration, clips, frame_rate, offset_seconds
    )
    return serialize_fcpxml(document)
