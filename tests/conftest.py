"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from turbocut.models import Clip, VideoInfo


@pytest.fixture
def tmp_config_dir(tmp_path: Path) -> Path:
    """Create a temporary working directory with a turbocut.yaml."""
    work_dir = tmp_path / "work"
    work_dir.mkdir()

    config = {"frame_rate": 30, "edl_title": "Test Cut"}
    with open(work_dir / "turbocut.yaml", "w") as f:
        yaml.dump(config, f)

    return work_dir


@pytest.fixture
def sample_clips() -> list[Clip]:
    """Two clips with a gap between them."""
    return [Clip(start=2.0, end=5.0), Clip(start=10.0, end=12.0)]


@pytest.fixture
def video_info(tmp_path: Path) -> VideoInfo:
    """VideoInfo for a fake source file."""
    source = tmp_path / "interview.mov"
    source.write_bytes(b"fake video content")
    return VideoInfo(path=source, duration=60.0, frame_rate=30)


@pytest.fixture
def empty_probe() -> dict:
    """ffprobe output with no timecode tags and no start time."""
    return {
        "format": {"duration": "60.000000", "tags": {}},
        "streams": [
            {"codec_type": "video", "r_frame_rate": "30/1"},
            {"codec_type": "audio", "sample_rate": "48000"},
        ],
    }


@pytest.fixture
def tagged_probe() -> dict:
    """ffprobe output from a camera file with every timecode source present."""
    return {
        "format": {
            "duration": "120.500000",
            "tags": {"timecode": "01:00:00:00"},
        },
        "streams": [
            {
                "codec_type": "video",
                "r_frame_rate": "30000/1001",
                "start_time": "0.000000",
                "tags": {"timecode": "02:00:00:00"},
            },
            {"codec_type": "audio", "sample_rate": "48000"},
            {"codec_type": "data", "codec_tag_string": "tmcd", "tags": {"timecode": "03:00:00:00"}},
        ],
    }
