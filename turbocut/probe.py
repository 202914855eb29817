"""
turbocut.probe - ffprobe media metadata.

Runs ffprobe once per source file and returns its JSON output untouched, so
the start timecode resolver sees every format and stream tag.
"""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any

from turbocut.exceptions import ProbeError
from turbocut.export.rational import FRAME_DURATIONS
from turbocut.logging import logger
from turbocut.models import VideoInfo


def probe_media(
    path: Path,
    ffprobe_path: str = "ffprobe",
    timeout: float = 30.0,
) -> dict[str, Any]:
    """Probe a media file with ffprobe.

    Args:
        path: Path to the media file
        ffprobe_path: ffprobe executable
        timeout: Seconds before the probe is abandoned

    Returns:
        ffprobe JSON output with "format" and "streams"

    Raises:
        ProbeError: If ffprobe is missing, fails, times out or returns bad JSON
    """
    cmd = [
        ffprobe_path,
        "-v",
        "quiet",
        "-print_format",
        "json",
        "-show_format",
        "-show_streams",
        str(path),
    ]
    logger.debug("Probing %s", path)
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise ProbeError(f"ffprobe timed out after {timeout:g}s for {path}") from e
    except OSError as e:
        raise ProbeError(f"Could not run ffprobe: {e}") from e

    if result.returncode != 0:
        raise ProbeError(f"ffprobe failed for {path}: {result.stderr.strip()}")

    try:
        data = json.loads(result.stdout)
    except json.JSONDecodeError as e:
        raise ProbeError(f"ffprobe returned invalid JSON for {path}") from e

    if not isinstance(data, dict):
        raise ProbeError(f"ffprobe returned unexpected output for {path}")

    data.setdefault("format", {})
    data.setdefault("streams", [])
    return data


def parse_frame_rate(rate: str | None) -> float | None:
    """Parse an ffprobe rate like "30000/1001" and snap it to a nominal rate.

    Args:
        rate: ffprobe r_frame_rate / avg_frame_rate string

    Returns:
        Nominal frame rate (23.976, 29.97, ...) or the rate rounded to 3
        decimals, None if unparseable
    """
    if not rate:
        return None
    try:
        if "/" in rate:
            num, den = rate.split("/")
            if float(den) == 0:
                return None
            fps = float(num) / float(den)
        else:
            fps = float(rate)
    except ValueError:
        return None
    if fps <= 0:
        return None

    for nominal in FRAME_DURATIONS:
        if abs(fps - nominal) < 0.01:
            return nominal
    return round(fps, 3)


def video_info_from_probe(path: Path, probe_data: dict[str, Any]) -> VideoInfo:
    """Build VideoInfo from ffprobe output."""
    video_stream = next(
        (s for s in probe_data.get("streams", []) if s.get("codec_type") == "video"),
        None,
    )

    duration_str = (probe_data.get("format") or {}).get("duration")
    if duration_str is None and video_stream:
        duration_str = video_stream.get("duration")
    try:
        duration = float(duration_str) if duration_str is not None else 0.0
    except ValueError:
        duration = 0.0

    frame_rate = None
    if video_stream:
        frame_rate = parse_frame_rate(video_stream.get("r_frame_rate")) or parse_frame_rate(
            video_stream.get("avg_frame_rate")
        )

    return VideoInfo(path=path.absolute(), duration=max(duration, 0.0), frame_rate=frame_rate)


def probe_video_info(
    path: Path,
    ffprobe_path: str = "ffprobe",
    timeout: float = 30.0,
) -> VideoInfo:
    """Probe a source file and return its VideoInfo."""
    return video_info_from_probe(path, probe_media(path, ffprobe_path, timeout))
