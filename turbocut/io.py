"""
turbocut.io - JSON reads and atomic text writes.

Exports are written to a temp file beside the destination and renamed into
place, so an interrupted write never leaves a truncated EDL or FCPXML behind.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any


def read_json(path: Path) -> Any:
    """Read JSON file with UTF-8 encoding.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON data

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file contains invalid JSON
    """
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def write_text(path: Path, content: str) -> None:
    """Write text file atomically with UTF-8 encoding.

    Args:
        path: Destination path (its directory must already exist)
        content: Text content to write
    """
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        newline="",
        dir=path.parent,
        prefix=f".{path.name}.",
        delete=False,
        suffix=".tmp",
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(content)
            tmp.flush()
        except BaseException:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise
    try:
        tmp_path.replace(path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


def make_bundle_dir(path: Path) -> bool:
    """Create a bundle directory, tolerating one that already exists.

    Args:
        path: Directory to create

    Returns:
        True if the directory was created by this call

    Raises:
        OSError: For any failure other than the directory already existing
    """
    try:
        path.mkdir()
    except FileExistsError:
        if not path.is_dir():
            raise
        return False
    return True
