"""Typer CLI entrypoint for reinmap."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from .config import load_config_bundle
from .engine import TargetName, build_markers, render_markers
from .exceptions import ConfigurationError, ProjectionError, ReinmapError, RenderError
from .observations import ObservationError


EXIT_SUCCESS = 0
EXIT_VALIDATION_ERROR = 2
EXIT_IO_ERROR = 4
EXIT_CONFIG_ERROR = 5


app = typer.Typer(help="Reindeer observation marker pipeline")
config_app = typer.Typer(help="Configuration commands")
app.add_typer(config_app, name="config")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log pipeline progress at DEBUG level",
    ),
) -> None:
    """Configure logging shared by all commands."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("markers")
def markers_command(
    observations: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    config_dir: Path = typer.Option(
        Path("config"),
        "--config",
        "-c",
        help="Path to configuration directory",
    ),
    report_path: Optional[Path] = typer.Option(
        None,
        "--report",
        help="Optional path to also write the marker report JSON",
    ),
) -> None:
    """Validate, reproject and describe observations as markers."""

    report = _run_markers(observations, config_dir)
    json_payload = json.dumps(report.as_dict(), indent=2)
    typer.echo(json_payload)

    if report_path is not None:
        try:
            report_path.parent.mkdir(parents=True, exist_ok=True)
            report_path.write_text(json_payload + "\n", encoding="utf-8")
        except OSError as exc:
            typer.echo(f"Failed to write report {report_path}: {exc}", err=True)
            raise typer.Exit(EXIT_IO_ERROR) from exc


@app.command("render")
def render_command(
    observations: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    out: Path = typer.Option(
        ...,
        "--out",
        "-o",
        dir_okay=False,
        writable=True,
        help="Output file (.html for interactive/terrain, image for static)",
    ),
    target: TargetName = typer.Option(
        TargetName.INTERACTIVE,
        "--target",
        "-t",
        case_sensitive=False,
        help="Rendering surface",
    ),
    config_dir: Path = typer.Option(
        Path("config"),
        "--config",
        "-c",
        help="Path to configuration directory",
    ),
) -> None:
    """Render observation markers to an interactive map, plot or terrain view."""

    report = _run_markers(observations, config_dir)
    try:
        config = load_config_bundle(config_dir)
        handle = render_markers(report.descriptors, target.value, config)
        output = handle.save(out)
    except ConfigurationError as exc:
        typer.echo(f"Config error: {exc}", err=True)
        raise typer.Exit(EXIT_CONFIG_ERROR) from exc
    except RenderError as exc:
        typer.echo(f"Render error: {exc}", err=True)
        raise typer.Exit(EXIT_IO_ERROR) from exc

    payload = {
        "target": handle.target,
        "markers": handle.marker_count,
        "warnings": report.warning_count,
        "output": str(output),
    }
    typer.echo(json.dumps(payload, indent=2))


@config_app.command("check")
def config_check(
    config_dir: Path = typer.Option(
        Path("config"),
        "--config",
        "-c",
        help="Path to configuration directory",
    ),
) -> None:
    """Validate a configuration directory."""

    try:
        bundle = load_config_bundle(config_dir)
    except ConfigurationError as exc:
        typer.echo(f"Config error: {exc}", err=True)
        raise typer.Exit(EXIT_CONFIG_ERROR) from exc

    payload = {
        "region": bundle.region.name,
        "source_crs": bundle.region.source_crs,
        "target_crs": bundle.region.target_crs,
        "projection_errors": bundle.region.projection_errors,
    }
    typer.echo(json.dumps(payload, indent=2))


def _run_markers(observations: Path, config_dir: Path):
    try:
        return build_markers(observations, config_dir)
    except ConfigurationError as exc:
        typer.echo(f"Config error: {exc}", err=True)
        raise typer.Exit(EXIT_CONFIG_ERROR) from exc
    except ProjectionError as exc:
        typer.echo(f"Projection error: {exc}", err=True)
        raise typer.Exit(EXIT_VALIDATION_ERROR) from exc
    except ObservationError as exc:
        typer.echo(f"Observation error: {exc}", err=True)
        raise typer.Exit(EXIT_IO_ERROR) from exc
    except ReinmapError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(EXIT_IO_ERROR) from exc
