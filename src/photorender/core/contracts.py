"""Pydantic models shared by the validator, orchestrator and engines."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

SUPPORTED_IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "heic", "heif", "tif", "tiff"})


class ImagePath(BaseModel):
    """A scanned image file: absolute path plus lowercase extension (no dot)."""

    model_config = ConfigDict(frozen=True)

    path: Path
    extension: str

    @classmethod
    def from_path(cls, path: Path) -> ImagePath:
        return cls(path=path.absolute(), extension=path.suffix[1:].lower())

    @property
    def name(self) -> str:
        return self.path.name


class ImageDimensions(BaseModel):
    """Pixel size read from image metadata."""

    model_config = ConfigDict(frozen=True)

    width: float
    height: float

    @property
    def short_side(self) -> float:
        return min(self.width, self.height)


class ValidationPolicy(BaseModel):
    """Thresholds for the input checks. Non-positive values are rejected by the validator."""

    model_config = ConfigDict(frozen=True)

    min_image_count: int = Field(40, description="Recommended minimum number of photos")
    min_short_side: int = Field(1200, description="Recommended minimum short side in pixels")
    strict: bool = Field(False, description="Escalate any warning to a failure")


class ValidationReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_count: int
    unreadable_count: int = 0
    low_resolution_count: int = 0
    warnings: tuple[str, ...] = ()

    @property
    def readable_count(self) -> int:
        return self.total_count - self.unreadable_count


class DetailLevel(str, Enum):
    """Render quality tiers, declared in order of increasing fidelity and cost."""

    PREVIEW = "preview"
    REDUCED = "reduced"
    MEDIUM = "medium"
    FULL = "full"
    RAW = "raw"

    @property
    def rank(self) -> int:
        return list(DetailLevel).index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DetailLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, DetailLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, DetailLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, DetailLevel):
            return NotImplemented
        return self.rank >= other.rank


class RenderRequest(BaseModel):
    """Everything one CLI invocation asks for."""

    model_config = ConfigDict(frozen=True)

    input_dir: Path
    output_file: Path
    detail: str = "medium"
    policy: ValidationPolicy = Field(default_factory=ValidationPolicy)
    skip_input_checks: bool = False


class RenderSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    model_path: Path

    @property
    def exit_code(self) -> int:
        return 0


class RenderFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    error: str

    @property
    def exit_code(self) -> int:
        return 1


RenderOutcome = RenderSuccess | RenderFailure


class OrchestratorState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    RENDERING = "rendering"
    COMPLETED = "completed"
    ABORTED = "aborted"
