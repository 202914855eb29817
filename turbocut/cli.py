"""
turbocut.cli - Typer CLI entry point.

Provides the subcommands for exporting retained clips to NLE timelines.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from turbocut import __version__
from turbocut.config import (
    CONFIG_FILENAME,
    TurboCutConfig,
    create_default_config,
    find_config_dir,
    load_config,
    write_config,
)
from turbocut.exceptions import (
    ConfigError,
    DependencyError,
    ExportError,
    ProbeError,
    TimecodeError,
    ValidationError,
)
from turbocut.export.offset import resolve_start_timecode, start_offset_seconds
from turbocut.export.rational import DEFAULT_FRAME_RATE
from turbocut.export.timecode import SUPPORTED_FRAME_RATES, is_supported_frame_rate
from turbocut.exporter import export_edl, export_fcpxml
from turbocut.logging import configure_logging
from turbocut.models import load_clips
from turbocut.probe import probe_media, video_info_from_probe
from turbocut.utils import format_duration, total_clip_duration
from turbocut.validation import check_clip_bounds, check_ffprobe, validate_video_file

app = typer.Typer(
    name="turbocut",
    help="Export silence-removed clips as EDL or FCPXML timelines.\n\n"
    "Clip times are mapped back onto the source recording's embedded "
    "timecode so DaVinci Resolve and Final Cut Pro rebuild the same cut.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"turbocut {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """TurboCut - timeline export for silence-removed recordings."""
    configure_logging(verbose)


def get_config() -> TurboCutConfig:
    """Load turbocut.yaml from the nearest directory, or fall back to defaults."""
    config_dir = find_config_dir()
    if not config_dir:
        return TurboCutConfig()
    try:
        return load_config(config_dir)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def prompt_destination(
    output: str | None, assume_yes: bool
) -> Callable[[str, str, str, str], Path | None]:
    """Build a destination chooser backed by --output or an interactive prompt.

    Declining to overwrite an existing target cancels the export.
    """

    def choose(title: str, default_name: str, filter_name: str, extension: str) -> Path | None:
        if output:
            path = Path(output).expanduser()
        else:
            answer = typer.prompt(f"{title} [{filter_name}]", default=default_name)
            path = Path(answer).expanduser()

        if not path.suffix:
            path = path.with_name(f"{path.name}.{extension}")

        if path.exists() and not assume_yes:
            if not typer.confirm(f"{path} already exists. Overwrite?", default=False):
                return None

        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    return choose


def resolve_frame_rate(fps: float | None, config: TurboCutConfig, probed: float | None) -> float:
    """Pick the export frame rate: --fps, then config, then probed, then 23.976."""
    for candidate in (fps, config.frame_rate, probed):
        if candidate:
            return candidate
    return DEFAULT_FRAME_RATE


@app.command("init")
def init_config(
    path: str = typer.Option(".", "--path", "-d", help="Directory to write turbocut.yaml in"),
    fps: float | None = typer.Option(None, "--fps", help="Default export frame rate"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing turbocut.yaml"),
) -> None:
    """Create a turbocut.yaml with default export settings."""
    config_path = Path(path) / CONFIG_FILENAME

    if config_path.exists() and not force:
        console.print(f"[red]Error: '{config_path}' already exists[/red]")
        raise typer.Exit(1)

    try:
        write_config(create_default_config(fps), config_path)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error writing config: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Wrote {config_path}")


@app.command("export")
def export_timeline(
    clips_file: Path = typer.Argument(..., help="JSON file with the retained clips"),
    source: Path = typer.Argument(..., help="Original source video"),
    format: str = typer.Option(
        "edl",
        "--format",
        "-f",
        help="Export format: edl (CMX 3600 for DaVinci/Premiere), fcpxml (Final Cut Pro XML bundle)",
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output path"),
    fps: float | None = typer.Option(None, "--fps", help="Frame rate (default: config, then probed)"),
    title: str | None = typer.Option(None, "--title", "-t", help="EDL title"),
    clip_name: str | None = typer.Option(None, "--clip-name", "-n", help="Source clip name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Overwrite existing output without asking"),
) -> None:
    """Export retained clips to an EDL or FCPXML timeline.

    Clip times are relative to the processed media; they are shifted by the
    source's embedded start timecode so the timeline points at the original.
    """
    config = get_config()

    format = format.lower()
    if format not in ("edl", "fcpxml"):
        console.print(f"[red]Error: Unknown format '{format}'. Use 'edl' or 'fcpxml'.[/red]")
        raise typer.Exit(1)

    try:
        validate_video_file(source)
        clips = load_clips(clips_file)
    except (ValidationError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: {clips_file} is not valid JSON: {e}[/red]")
        raise typer.Exit(1)

    try:
        probe_data = probe_media(source, config.ffprobe_path, config.probe_timeout)
    except ProbeError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    video_info = video_info_from_probe(source, probe_data)
    frame_rate = resolve_frame_rate(fps, config, video_info.frame_rate)
    if not is_supported_frame_rate(frame_rate):
        console.print(
            f"[yellow]Warning: {frame_rate:g} fps is not one of "
            f"{', '.join(f'{r:g}' for r in SUPPORTED_FRAME_RATES)}; "
            f"FCPXML timing falls back to {DEFAULT_FRAME_RATE} fps units[/yellow]"
        )

    for warning in check_clip_bounds(clips, video_info.duration):
        console.print(f"[yellow]Warning: {warning}[/yellow]")

    name = clip_name or config.clip_name or source.stem
    chooser = prompt_destination(output, yes)

    try:
        if format == "edl":
            result = export_edl(
                "Export EDL",
                clips,
                video_info,
                name,
                frame_rate,
                choose_destination=chooser,
                probe=lambda _path: probe_data,
                edl_title=title or config.edl_title,
            )
        else:
            result = export_fcpxml(
                "Export FCPXML",
                clips,
                video_info,
                name,
                frame_rate,
                choose_destination=chooser,
                probe=lambda _path: probe_data,
            )
    except (ValidationError, ExportError, TimecodeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not result.completed:
        console.print("[yellow]Export cancelled[/yellow]")
        return

    console.print(f"[green]✓[/green] Exported to {result.path}")
    console.print(
        f"[dim]  Format: {format.upper()}, {len(clips)} clip(s), "
        f"{format_duration(total_clip_duration(clips))} at {frame_rate:g} fps[/dim]"
    )


@app.command("timecode")
def show_timecode(
    source: Path = typer.Argument(..., help="Source video to probe"),
    fps: float | None = typer.Option(None, "--fps", help="Frame rate (default: config, then probed)"),
) -> None:
    """Show the start timecode and offset resolved for a source video."""
    config = get_config()

    try:
        validate_video_file(source)
        probe_data = probe_media(source, config.ffprobe_path, config.probe_timeout)
    except (ValidationError, ProbeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    video_info = video_info_from_probe(source, probe_data)
    frame_rate = resolve_frame_rate(fps, config, video_info.frame_rate)
    try:
        resolved = resolve_start_timecode(probe_data, frame_rate)
        offset = start_offset_seconds(resolved.timecode, frame_rate)
    except TimecodeError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title=source.name)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Start timecode", resolved.timecode)
    table.add_row("Resolved from", resolved.source)
    table.add_row("Offset", f"{offset:.1f}s")
    table.add_row("Frame rate", f"{frame_rate:g}")
    table.add_row("Duration", format_duration(video_info.duration))
    console.print(table)


@app.command("doctor")
def run_doctor() -> None:
    """Check dependencies and environment setup."""
    console.print("[cyan]Running preflight checks...[/cyan]\n")

    config = get_config()

    table = Table(title="Dependency Status")
    table.add_column("Component", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Version/Details")

    all_passed = True

    try:
        versions = check_ffprobe(config.ffprobe_path)
        table.add_row("FFprobe", "✓ Installed", versions.get("ffprobe_version", "unknown"))
    except DependencyError as e:
        table.add_row("FFprobe", "✗ Missing", e.install_hint or "")
        all_passed = False

    config_dir = find_config_dir()
    if config_dir:
        table.add_row("Config", "✓ Loaded", str(config_dir / CONFIG_FILENAME))
    else:
        table.add_row("Config", "—", "Using defaults")

    console.print(table)

    if all_passed:
        console.print("\n[green]✓ All checks passed[/green]")
    else:
        console.print("\n[yellow]⚠ Some checks failed[/yellow]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
