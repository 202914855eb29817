"""
turbocut.models - Clip and source media models.

Clips are the intervals kept by the silence remover, in seconds relative to
the processed (optimized) media. VideoInfo describes the original recording
the exports point back to.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from turbocut.exceptions import ClipError
from turbocut.io import read_json


class Clip(BaseModel):
    """A retained interval of the processed media."""

    model_config = ConfigDict(frozen=True)

    start: float = Field(ge=0.0)
    end: float

    @field_validator("start", "end")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("Clip bounds must be finite")
        return v

    @model_validator(mode="after")
    def validate_order(self) -> Clip:
        if self.end <= self.start:
            raise ValueError(f"Clip end ({self.end}) must be after start ({self.start})")
        return self

    @property
    def duration(self) -> float:
        return self.end - self.start


class VideoInfo(BaseModel):
    """The original source media."""

    model_config = ConfigDict(frozen=True)

    path: Path
    duration: float = Field(ge=0.0)
    frame_rate: float | None = Field(default=None, gt=0.0)

    @property
    def filename(self) -> str:
        return self.path.name


def validate_clips(clips: Iterable[Any]) -> list[Clip]:
    """Validate a clip list, rejecting the whole list on the first bad clip.

    Args:
        clips: Clip instances or {"start": ..., "end": ...} mappings

    Returns:
        List of Clip instances in the original order

    Raises:
        ClipError: If the list is empty or any clip is malformed
    """
    validated = []
    for index, clip in enumerate(clips, 1):
        if isinstance(clip, Clip):
            validated.append(clip)
            continue
        try:
            validated.append(Clip.model_validate(clip))
        except ValidationError as e:
            message = e.errors()[0]["msg"] if e.errors() else str(e)
            raise ClipError(f"Clip {index} is invalid: {message}") from e

    if not validated:
        raise ClipError("No clips to export")

    return validated


def load_clips(path: Path) -> list[Clip]:
    """Load a clip list from JSON.

    Accepts either a bare list of {"start", "end"} objects or an object with a
    "clips" key holding that list.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ClipError: If the content is not a valid clip list
    """
    data = read_json(path)
    if isinstance(data, dict):
        data = data.get("clips")
    if not isinstance(data, list):
        raise ClipError(f"Expected a list of clips in {path}")
    return validate_clips(data)
