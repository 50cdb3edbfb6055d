"""Configuration for the COLMAP render engine."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class ColmapConfig(BaseModel):
    colmap_bin: str | None = Field(None, description="COLMAP executable (None = look up 'colmap' on PATH)")
    workspace_dir: Path | None = Field(None, description="Working directory (None = temporary directory)")
    keep_workspace: bool = Field(False, description="Keep intermediate COLMAP output after rendering")
    use_gpu: bool = Field(True, description="Use GPU for SIFT extraction and matching")
    matcher: Literal["exhaustive", "sequential"] = Field("exhaustive", description="Feature matching strategy")
    match_window: int = Field(10, gt=0, description="Sequential matcher overlap window")
