"""Render orchestrator: validate, launch the engine, await the terminal outcome.

State flow::

    idle -> validating -> rendering -> completed
                 |
                 +-> aborted

The orchestrator never exits the process. ``run`` returns a RenderOutcome
and the caller turns its ``exit_code`` into the process status.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, wait
from pathlib import Path

from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn, TimeElapsedColumn

from photorender.engines.base import RenderEngine

from .contracts import (
    OrchestratorState,
    RenderFailure,
    RenderOutcome,
    RenderRequest,
    RenderSuccess,
)
from .detail import map_detail
from .errors import EngineUnsupported, InvalidOutputLocation, RenderError, RenderFailed
from .progress import ProgressAggregator
from .validator import validate_corpus

logger = logging.getLogger(__name__)


def ensure_output_location(output_file: Path) -> Path:
    """Create the output file's parent directory if needed; return the absolute file path."""
    output_file = Path(output_file).absolute()
    output_dir = output_file.parent

    if output_dir.exists():
        if not output_dir.is_dir():
            raise InvalidOutputLocation(output_dir)
        return output_file

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise InvalidOutputLocation(output_dir) from exc
    return output_file


class RenderOrchestrator:
    """Runs one render invocation against an engine.

    Args:
        engine: The render engine to drive.
        console: Where to draw the progress bar; ``None`` disables it.
        refresh_interval: Seconds between progress bar redraws.
    """

    def __init__(
        self,
        engine: RenderEngine,
        console: Console | None = None,
        refresh_interval: float = 0.25,
    ):
        self.engine = engine
        self.console = console
        self.refresh_interval = refresh_interval
        self.progress = ProgressAggregator()
        self.state = OrchestratorState.IDLE

    def run(self, request: RenderRequest) -> RenderOutcome:
        self.state = OrchestratorState.VALIDATING
        try:
            if not self.engine.is_supported():
                raise EngineUnsupported(self.engine.engine_name)

            detail = map_detail(request.detail)
            output_file = ensure_output_location(request.output_file)
            input_dir = Path(request.input_dir).absolute()

            if request.skip_input_checks:
                logger.info("Skipping input checks by request")
            else:
                validate_corpus(input_dir, request.policy)
        except RenderError as exc:
            self.state = OrchestratorState.ABORTED
            logger.error(str(exc))
            return RenderFailure(error=str(exc))

        self.state = OrchestratorState.RENDERING
        future = self.engine.render(input_dir, output_file, detail, on_progress=self.progress.record)
        self._await(future)
        self.state = OrchestratorState.COMPLETED

        exc = future.exception()
        if exc is not None:
            failure = RenderFailed(exc)
            logger.error(str(failure))
            return RenderFailure(error=str(failure))

        model_path = future.result()
        logger.info(f"Model written to {model_path}")
        return RenderSuccess(model_path=model_path)

    def _await(self, future: Future) -> None:
        """Block until the engine's future settles, redrawing progress meanwhile."""
        if self.console is None:
            wait([future])
            return

        columns = (
            TextColumn("[bold blue]Rendering"),
            BarColumn(),
            TaskProgressColumn(),
            TimeElapsedColumn(),
        )
        with Progress(*columns, console=self.console, transient=True) as bar:
            task = bar.add_task("render", total=100)
            while True:
                done, _ = wait([future], timeout=self.refresh_interval)
                bar.update(task, completed=self.progress.value)
                if done:
                    break
