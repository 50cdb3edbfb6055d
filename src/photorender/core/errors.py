"""Error taxonomy for a render invocation.

Every error is terminal for the current run: it is logged once at error
severity and the CLI exits with status 1. Nothing here is retried.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .contracts import ValidationReport


class RenderError(Exception):
    """Base class for all photorender failures."""


class InvalidInput(RenderError):
    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"Input folder does not exist or is not a directory: {path}")


class InvalidOutputLocation(RenderError):
    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"Output directory is invalid: {path}")


class EmptyCorpus(RenderError):
    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"No supported image files were found in: {path}")


class InvalidConfiguration(RenderError):
    """A user-supplied option or config file is unusable."""


class ValidationFailed(RenderError):
    """Strict mode escalated one or more corpus warnings."""

    def __init__(self, report: ValidationReport, message: str = "Input validation failed in strict mode"):
        self.report = report
        super().__init__(message)


class InvalidDetailLevel(RenderError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(
            f"Invalid detail level {token!r}. "
            "Valid options are: preview, reduced, medium, full, raw."
        )


class EngineUnsupported(RenderError):
    def __init__(self, engine_name: str = "render engine"):
        self.engine_name = engine_name
        super().__init__(f"Photogrammetry is not supported on this machine ({engine_name} unavailable)")


class RenderFailed(RenderError):
    """The engine reported a terminal failure."""

    def __init__(self, error: BaseException | str):
        self.error = error
        super().__init__(f"Failed to process model, {error}")
