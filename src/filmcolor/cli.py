"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from jsonschema import ValidationError
from rich import print
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import BACKENDS, DEFAULT_BACKEND
from .core.filters.facade import process_image
from .core.grading_resolver import GradingParams, region_weights
from .core.wb_resolver import (
    WBParams,
    resolve_gain,
    temperature_scale,
    temperature_to_chromaticity,
    tint_scale,
)
from .errors import FilmColorError, ParameterDocumentError
from .io.image_codec import load_image, save_image
from .settings.manager import SettingsManager
from .settings.schema import DEFAULT_SETTINGS, validate_parameters
from .utils.jsonio import read_json

LOGGER = logging.getLogger(__name__)

app = typer.Typer(help="Non-destructive white balance and three-way colour grading")


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (FilmColorError, ValueError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _settings(ctx: typer.Context) -> dict[str, Any]:
    if isinstance(ctx.obj, dict):
        return ctx.obj
    return DEFAULT_SETTINGS


def _load_parameters(path: Path) -> dict[str, Any]:
    try:
        payload = read_json(path)
    except (OSError, ValueError) as exc:
        raise ParameterDocumentError(f"cannot read parameters {path}: {exc}") from exc
    try:
        validate_parameters(payload)
    except ValidationError as exc:
        raise ParameterDocumentError(f"invalid parameters {path}: {exc.message}") from exc
    return payload


@app.callback()
@_handle_errors
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (defaults to the settings value)"
    ),
    settings: Optional[Path] = typer.Option(
        None, "--settings", help="Settings file to load (created with defaults if missing)"
    ),
) -> None:
    """Configure logging and load settings shared by every command."""

    data = DEFAULT_SETTINGS
    if settings is not None:
        manager = SettingsManager(settings)
        manager.load()
        data = manager.as_dict()
    ctx.obj = data
    _configure_logging(log_level or data["log_level"])


@app.command()
@_handle_errors
def chromaticity(kelvin: float = typer.Argument(..., help="Colour temperature in Kelvin")) -> None:
    """Print the blackbody chromaticity for a temperature."""

    x, y = temperature_to_chromaticity(kelvin)
    print(f"{kelvin:.0f} K: x={x:.5f} y={y:.5f}")


@app.command()
@_handle_errors
def scales(
    temperature: float = typer.Option(0.0, "--temperature", "-t", help="Temperature shift"),
    tint: float = typer.Option(0.0, "--tint", "-n", help="Tint shift"),
) -> None:
    """Show the per-channel gains for a temperature/tint pair."""

    params = WBParams(temperature, tint).clamped()
    table = Table(title=f"Scales (temperature={params.temperature:g}, tint={params.tint:g})")
    table.add_column("Stage")
    for channel in ("R", "G", "B"):
        table.add_column(channel, justify="right")
    rows = (
        ("temperature", temperature_scale(params.temperature)),
        ("tint", tint_scale(params.tint)),
        ("combined", resolve_gain(params)),
    )
    for label, gains in rows:
        table.add_row(label, *(f"{value:.4f}" for value in gains))
    Console().print(table)


@app.command()
@_handle_errors
def weights(
    balance: float = typer.Option(0.0, "--balance", "-b", min=-1.0, max=1.0),
    steps: int = typer.Option(11, "--steps", min=2, help="Number of luminance samples"),
) -> None:
    """Tabulate shadow/midtone/highlight weights across luminance."""

    table = Table(title=f"Region weights (balance={balance:g})")
    for column in ("Luminance", "Shadow", "Midtone", "Highlight"):
        table.add_column(column, justify="right")
    for index in range(steps):
        lum = index / (steps - 1)
        table.add_row(f"{lum:.2f}", *(f"{w:.4f}" for w in region_weights(lum, balance)))
    Console().print(table)


@app.command()
@_handle_errors
def apply(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Source image"),
    output_path: Path = typer.Argument(..., dir_okay=False, help="Destination image"),
    temperature: Optional[float] = typer.Option(None, "--temperature", "-t"),
    tint: Optional[float] = typer.Option(None, "--tint", "-n"),
    params: Optional[Path] = typer.Option(
        None, "--params", exists=True, dir_okay=False, help="JSON parameter document"
    ),
    backend: Optional[str] = typer.Option(None, "--backend", help=f"One of {', '.join(BACKENDS)}"),
) -> None:
    """Load an image, white balance and grade it, then save the result."""

    settings = _settings(ctx)
    defaults = settings.get("defaults", {})
    wb_data = dict(defaults.get("white_balance", {}))
    grading_data = dict(defaults.get("grading", {}))
    if params is not None:
        document = _load_parameters(params)
        wb_data.update(document.get("white_balance", {}))
        document_grading = document.get("grading", {})
        if "regions" in document_grading:
            # Slider grades replace the raw-offset defaults wholesale.
            grading_data = dict(document_grading)
        else:
            grading_data.update(document_grading)
    if temperature is not None:
        wb_data["temperature"] = temperature
    if tint is not None:
        wb_data["tint"] = tint

    white_balance = WBParams.from_dict(wb_data)
    grading = GradingParams.from_dict(grading_data)
    name = (backend or settings.get("backend", DEFAULT_BACKEND)).lower()
    if name not in BACKENDS:
        raise ValueError(f"unknown backend {name!r}; expected one of {', '.join(BACKENDS)}")

    buffer = load_image(input_path)
    LOGGER.info(
        "Processing %s (%dx%d) with backend=%s",
        input_path,
        buffer.width,
        buffer.height,
        name,
    )
    process_image(buffer, white_balance, grading, backend=name)
    save_image(output_path, buffer)
    print(f"[green]Wrote {output_path}")


if __name__ == "__main__":  # pragma: no cover
    app()
