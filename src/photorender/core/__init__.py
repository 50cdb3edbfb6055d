"""photorender core: corpus validation and render orchestration."""

from .contracts import (
    DetailLevel,
    ImageDimensions,
    ImagePath,
    RenderFailure,
    RenderOutcome,
    RenderRequest,
    RenderSuccess,
    ValidationPolicy,
    ValidationReport,
)
from .detail import map_detail
from .logging import setup_logging
from .orchestrator import RenderOrchestrator, ensure_output_location
from .progress import ProgressAggregator
from .scanner import scan_corpus
from .validator import validate_corpus

__all__ = [
    "DetailLevel",
    "ImageDimensions",
    "ImagePath",
    "RenderFailure",
    "RenderOutcome",
    "RenderRequest",
    "RenderSuccess",
    "ValidationPolicy",
    "ValidationReport",
    "map_detail",
    "setup_logging",
    "RenderOrchestrator",
    "ensure_output_location",
    "ProgressAggregator",
    "scan_corpus",
    "validate_corpus",
]
