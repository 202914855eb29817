"""
turbocut.validation - Dependency checks and validation utilities.

Validates environment, dependencies, and input files before exporting.
"""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from turbocut.exceptions import DependencyError, ValidationError
from turbocut.models import Clip


def check_ffprobe(ffprobe_path: str = "ffprobe") -> dict[str, str]:
    """Check if FFprobe is installed and get its version.

    Returns:
        Dict with 'ffprobe_version' and 'ffprobe_path'

    Raises:
        DependencyError: If FFprobe not found
    """
    resolved = shutil.which(ffprobe_path)
    if not resolved:
        raise DependencyError(
            "ffprobe",
            "FFprobe not found in PATH",
            "Install with: brew install ffmpeg (macOS) or apt install ffmpeg (Linux)",
        )

    result = {"ffprobe_path": resolved}
    try:
        proc = subprocess.run(
            [resolved, "-version"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        version_line = proc.stdout.split("\n")[0]
        result["ffprobe_version"] = version_line.split()[2] if version_line else "unknown"
    except (subprocess.TimeoutExpired, IndexError):
        result["ffprobe_version"] = "unknown"

    return result


def validate_video_file(path: Path) -> dict[str, Any]:
    """Validate a source video file exists.

    Args:
        path: Path to video file

    Returns:
        Dict with validation results

    Raises:
        ValidationError: If file doesn't exist or is not a regular file
    """
    if not path.exists():
        raise ValidationError(f"File not found: {path}")

    if not path.is_file():
        raise ValidationError(f"Not a file: {path}")

    return {
        "path": str(path),
        "exists": True,
        "size_mb": path.stat().st_size // (1024 * 1024),
    }


def check_clip_bounds(clips: Sequence[Clip], source_duration: float) -> list[str]:
    """Warn about clips reaching past the end of the source.

    Args:
        clips: Retained clips
        source_duration: Source duration in seconds (0 = unknown)

    Returns:
        List of warning messages, empty when every clip fits
    """
    if source_duration <= 0:
        return []

    warnings = []
    for index, clip in enumerate(clips, 1):
        if clip.end > source_duration:
            warnings.append(
                f"Clip {index} ends at {clip.end:.3f}s, past the source duration "
                f"of {source_duration:.3f}s"
            )
    return warnings
