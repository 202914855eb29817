"""Tests for turbocut CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from turbocut.cli import app
from turbocut.exceptions import ProbeError

runner = CliRunner()


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch, empty_probe) -> Path:
    """A working directory with a clip list, a fake source and a stubbed probe."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "clips.json").write_text(
        json.dumps([{"start": 2.0, "end": 5.0}, {"start": 10.0, "end": 12.0}])
    )
    (tmp_path / "interview.mov").write_bytes(b"fake video content")
    monkeypatch.setattr("turbocut.cli.probe_media", lambda path, *args: empty_probe)
    return tmp_path


class TestInitCommand:
    def test_init_writes_config(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["init", "-d", str(tmp_path), "--fps", "25"])
        assert result.exit_code == 0
        content = (tmp_path / "turbocut.yaml").read_text()
        assert "frame_rate: 25.0" in content

    def test_init_fails_if_config_exists(self, tmp_config_dir: Path) -> None:
        result = runner.invoke(app, ["init", "-d", str(tmp_config_dir)])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_init_force_overwrites(self, tmp_config_dir: Path) -> None:
        result = runner.invoke(app, ["init", "-d", str(tmp_config_dir), "--force"])
        assert result.exit_code == 0
        assert "Test Cut" not in (tmp_config_dir / "turbocut.yaml").read_text()


class TestExportCommand:
    def test_export_edl(self, workspace: Path) -> None:
        result = runner.invoke(
            app, ["export", "clips.json", "interview.mov", "-o", "cut.edl", "--fps", "30"]
        )
        assert result.exit_code == 0, result.output
        content = (workspace / "cut.edl").read_text()
        assert content.startswith("TITLE: Silence Removed\n")
        assert "* FROM CLIP NAME: interview\n" in content
        assert "00:00:10:00 00:00:12:00 00:00:03:00 00:00:05:00" in content

    def test_export_uses_probed_frame_rate(self, workspace: Path) -> None:
        result = runner.invoke(app, ["export", "clips.json", "interview.mov", "-o", "cut.edl"])
        assert result.exit_code == 0, result.output
        assert "at 30 fps" in result.output

    def test_export_fcpxml_bundle(self, workspace: Path) -> None:
        result = runner.invoke(
            app,
            ["export", "clips.json", "interview.mov", "-f", "fcpxml", "-o", "cut", "--fps", "30"],
        )
        assert result.exit_code == 0, result.output
        document = workspace / "cut.fcpxmld" / "Info.fcpxml"
        assert document.is_file()
        assert '<fcpxml version="1.10">' in document.read_text()

    def test_config_supplies_title(self, workspace: Path) -> None:
        (workspace / "turbocut.yaml").write_text("edl_title: From Config\n")
        result = runner.invoke(app, ["export", "clips.json", "interview.mov", "-o", "cut.edl"])
        assert result.exit_code == 0, result.output
        assert (workspace / "cut.edl").read_text().startswith("TITLE: From Config\n")

    def test_multiline_title_rejected(self, workspace: Path) -> None:
        result = runner.invoke(
            app, ["export", "clips.json", "interview.mov", "-o", "cut.edl", "-t", "A\nB"]
        )
        assert result.exit_code == 1
        assert "single line" in result.output
        assert not (workspace / "cut.edl").exists()

    def test_multiline_clip_name_rejected(self, workspace: Path) -> None:
        result = runner.invoke(
            app, ["export", "clips.json", "interview.mov", "-o", "cut.edl", "-n", "take\n2"]
        )
        assert result.exit_code == 1
        assert not (workspace / "cut.edl").exists()

    def test_unknown_format(self, workspace: Path) -> None:
        result = runner.invoke(app, ["export", "clips.json", "interview.mov", "-f", "aaf"])
        assert result.exit_code == 1
        assert "Unknown format" in result.output

    def test_invalid_clip_rejected(self, workspace: Path) -> None:
        (workspace / "clips.json").write_text(json.dumps([{"start": 3.0, "end": 1.0}]))
        result = runner.invoke(app, ["export", "clips.json", "interview.mov", "-o", "cut.edl"])
        assert result.exit_code == 1
        assert not (workspace / "cut.edl").exists()

    def test_missing_source(self, workspace: Path) -> None:
        result = runner.invoke(app, ["export", "clips.json", "missing.mov", "-o", "cut.edl"])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_probe_failure(self, workspace: Path, monkeypatch) -> None:
        def broken(path, *args):
            raise ProbeError("ffprobe failed")

        monkeypatch.setattr("turbocut.cli.probe_media", broken)
        result = runner.invoke(app, ["export", "clips.json", "interview.mov", "-o", "cut.edl"])
        assert result.exit_code == 1
        assert not (workspace / "cut.edl").exists()

    def test_declining_overwrite_cancels(self, workspace: Path) -> None:
        (workspace / "cut.edl").write_text("keep me")
        result = runner.invoke(
            app, ["export", "clips.json", "interview.mov", "-o", "cut.edl"], input="n\n"
        )
        assert result.exit_code == 0
        assert "Export cancelled" in result.output
        assert (workspace / "cut.edl").read_text() == "keep me"

    def test_yes_overwrites(self, workspace: Path) -> None:
        (workspace / "cut.edl").write_text("old")
        result = runner.invoke(
            app, ["export", "clips.json", "interview.mov", "-o", "cut.edl", "-y"]
        )
        assert result.exit_code == 0
        assert (workspace / "cut.edl").read_text().startswith("TITLE:")

    def test_prompted_destination(self, workspace: Path) -> None:
        result = runner.invoke(
            app, ["export", "clips.json", "interview.mov"], input="prompted.edl\n"
        )
        assert result.exit_code == 0, result.output
        assert (workspace / "prompted.edl").is_file()


class TestTimecodeCommand:
    def test_shows_resolved_timecode(self, workspace: Path, monkeypatch, tagged_probe) -> None:
        monkeypatch.setattr("turbocut.cli.probe_media", lambda path, *args: tagged_probe)
        result = runner.invoke(app, ["timecode", "interview.mov", "--fps", "25"])
        assert result.exit_code == 0, result.output
        assert "01:00:00:00" in result.output
        assert "format" in result.output
        assert "3600.0s" in result.output

    def test_default_timecode(self, workspace: Path) -> None:
        result = runner.invoke(app, ["timecode", "interview.mov"])
        assert result.exit_code == 0, result.output
        assert "00:00:00:00" in result.output
        assert "default" in result.output


class TestDoctorCommand:
    def test_missing_ffprobe(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("shutil.which", lambda name: None)
        result = runner.invoke(app, ["doctor"])
        assert result.exit_code == 1
        assert "Missing" in result.output


class TestVersion:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "turbocut" in result.output
