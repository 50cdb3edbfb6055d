"""CLI entry point for photorender.

Usage:
    photorender INPUT_FOLDER OUTPUT_FILE [--detail full] [--strict-input-checks]

Exit status is 0 on success, with the model path printed on stdout, and 1 on
any failure, with the reason logged to stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console

from photorender.core.config import RenderConfig, load_render_config
from photorender.core.contracts import RenderRequest, RenderSuccess, ValidationPolicy
from photorender.core.errors import RenderError
from photorender.core.logging import DEFAULT_LOG_FILE, setup_logging
from photorender.core.orchestrator import RenderOrchestrator
from photorender.engines.base import RenderEngine
from photorender.engines.colmap.engine import ColmapEngine

app = typer.Typer(name="photorender", help="Create a 3D model from a folder of photographs")
console = Console(stderr=True)
logger = logging.getLogger(__name__)


def build_engine(config: RenderConfig) -> RenderEngine:
    return ColmapEngine(config.colmap)


@app.command()
def render(
    input_folder: Path = typer.Argument(..., help="The path to the folder containing images used to derive 3D model"),
    output_file: Path = typer.Argument(..., help="The path (and filename) of the 3D model to create"),
    logfile: bool = typer.Option(False, "--logfile", help=f"Also log events to {DEFAULT_LOG_FILE}"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
    detail: str = typer.Option(
        "medium",
        help="The level of detail to use when creating the 3D model. "
        "Valid options are: preview, reduced, medium, full, raw.",
    ),
    min_images: int = typer.Option(40, help="Recommended minimum number of photos before processing"),
    min_short_side: int = typer.Option(1200, help="Recommended minimum short-side image resolution in pixels"),
    skip_input_checks: bool = typer.Option(
        False, "--skip-input-checks", help="Skip input image quality checks before rendering"
    ),
    strict_input_checks: bool = typer.Option(
        False, "--strict-input-checks", help="Fail before rendering if quality checks emit warnings"
    ),
    config: Path = typer.Option(None, help="Engine config file (YAML)"),
) -> None:
    """Render a 3D model from INPUT_FOLDER into OUTPUT_FILE."""
    setup_logging(
        "DEBUG" if verbose else "INFO",
        log_file=DEFAULT_LOG_FILE if logfile else None,
        console=console,
    )

    try:
        render_cfg = load_render_config(config)
    except RenderError as exc:
        logger.error(str(exc))
        raise typer.Exit(1)

    request = RenderRequest(
        input_dir=input_folder,
        output_file=output_file,
        detail=detail,
        policy=ValidationPolicy(
            min_image_count=min_images,
            min_short_side=min_short_side,
            strict=strict_input_checks,
        ),
        skip_input_checks=skip_input_checks,
    )

    orchestrator = RenderOrchestrator(build_engine(render_cfg), console=console)
    outcome = orchestrator.run(request)

    if isinstance(outcome, RenderSuccess):
        typer.echo(str(outcome.model_path))
    raise typer.Exit(outcome.exit_code)


if __name__ == "__main__":
    app()
