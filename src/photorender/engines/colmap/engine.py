"""COLMAP render engine: SfM + MVS + Poisson meshing via the COLMAP CLI."""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import ClassVar

from photorender.core.contracts import DetailLevel
from photorender.engines.base import ProgressCallback, RenderEngine
from photorender.utils.subprocess_utils import run_command
from .config import ColmapConfig

logger = logging.getLogger(__name__)

# Longest image side used for feature extraction and dense stereo.
MAX_IMAGE_SIZE: dict[DetailLevel, int] = {
    DetailLevel.PREVIEW: 800,
    DetailLevel.REDUCED: 1200,
    DetailLevel.MEDIUM: 2000,
    DetailLevel.FULL: 3200,
    DetailLevel.RAW: 8192,
}

MESH_NAME = "meshed-poisson.ply"


class ColmapEngine(RenderEngine):
    name: ClassVar[str] = "colmap"

    def __init__(self, config: ColmapConfig | None = None):
        self.config = config or ColmapConfig()

    def colmap_bin(self) -> str | None:
        if self.config.colmap_bin:
            return shutil.which(self.config.colmap_bin)
        return shutil.which("colmap")

    def is_supported(self) -> bool:
        return self.colmap_bin() is not None

    def build_stages(
        self, colmap_bin: str, input_dir: Path, workspace: Path, detail: DetailLevel
    ) -> list[tuple[str, list[str]]]:
        """Return (label, argv) for each COLMAP invocation, in order."""
        size = str(MAX_IMAGE_SIZE[detail])
        gpu_flag = "1" if self.config.use_gpu else "0"
        database_path = workspace / "database.db"
        sparse_dir = workspace / "sparse"
        dense_dir = workspace / "dense"

        if self.config.matcher == "sequential":
            matcher = [
                colmap_bin, "sequential_matcher",
                "--database_path", str(database_path),
                "--SiftMatching.use_gpu", gpu_flag,
                "--SequentialMatching.overlap", str(self.config.match_window),
            ]
        else:
            matcher = [
                colmap_bin, "exhaustive_matcher",
                "--database_path", str(database_path),
                "--SiftMatching.use_gpu", gpu_flag,
            ]

        return [
            ("feature extraction", [
                colmap_bin, "feature_extractor",
                "--database_path", str(database_path),
                "--image_path", str(input_dir),
                "--ImageReader.single_camera", "1",
                "--SiftExtraction.use_gpu", gpu_flag,
                "--SiftExtraction.max_image_size", size,
            ]),
            ("feature matching", matcher),
            ("sparse mapping", [
                colmap_bin, "mapper",
                "--database_path", str(database_path),
                "--image_path", str(input_dir),
                "--output_path", str(sparse_dir),
            ]),
            ("undistortion", [
                colmap_bin, "image_undistorter",
                "--image_path", str(input_dir),
                "--input_path", str(sparse_dir / "0"),
                "--output_path", str(dense_dir),
                "--output_type", "COLMAP",
                "--max_image_size", size,
            ]),
            ("dense stereo", [
                colmap_bin, "patch_match_stereo",
                "--workspace_path", str(dense_dir),
                "--workspace_format", "COLMAP",
                "--PatchMatchStereo.max_image_size", size,
                "--PatchMatchStereo.geom_consistency", "true",
            ]),
            ("stereo fusion", [
                colmap_bin, "stereo_fusion",
                "--workspace_path", str(dense_dir),
                "--workspace_format", "COLMAP",
                "--input_type", "geometric",
                "--output_path", str(dense_dir / "fused.ply"),
            ]),
            ("meshing", [
                colmap_bin, "poisson_mesher",
                "--input_path", str(dense_dir / "fused.ply"),
                "--output_path", str(dense_dir / MESH_NAME),
            ]),
        ]

    def run(
        self,
        input_dir: Path,
        output_file: Path,
        detail: DetailLevel,
        on_progress: ProgressCallback,
    ) -> Path:
        colmap_bin = self.colmap_bin()
        if colmap_bin is None:
            raise RuntimeError("COLMAP CLI not found. Install COLMAP: https://colmap.github.io/")

        if self.config.workspace_dir is not None:
            workspace = Path(self.config.workspace_dir)
            workspace.mkdir(parents=True, exist_ok=True)
            cleanup = False
        else:
            workspace = Path(tempfile.mkdtemp(prefix="photorender-"))
            cleanup = not self.config.keep_workspace
        # mapper writes into an existing sparse/ directory.
        (workspace / "sparse").mkdir(parents=True, exist_ok=True)

        try:
            stages = self.build_stages(colmap_bin, input_dir, workspace, detail)
            # One extra step for exporting the mesh.
            total = len(stages) + 1
            on_progress(0.0)
            for i, (label, cmd) in enumerate(stages):
                logger.info(f"COLMAP {label} ({i + 1}/{len(stages)})...")
                try:
                    run_command(cmd)
                except subprocess.CalledProcessError as exc:
                    detail_msg = (exc.stderr or "").strip().splitlines()
                    reason = detail_msg[-1] if detail_msg else f"exit status {exc.returncode}"
                    raise RuntimeError(f"COLMAP {label} failed: {reason}") from exc
                on_progress((i + 1) / total)

            mesh_path = workspace / "dense" / MESH_NAME
            if not mesh_path.exists():
                raise RuntimeError(f"COLMAP produced no mesh at {mesh_path}")

            model_path = export_mesh(mesh_path, output_file)
            on_progress(1.0)
            return model_path
        finally:
            if cleanup:
                shutil.rmtree(workspace, ignore_errors=True)
            else:
                logger.info(f"COLMAP workspace kept at {workspace}")


def export_mesh(mesh_path: Path, output_file: Path) -> Path:
    """Copy a PLY mesh to ``output_file``, converting with trimesh for other formats."""
    if output_file.suffix.lower() == ".ply":
        shutil.copyfile(mesh_path, output_file)
        return output_file

    import trimesh

    mesh = trimesh.load(str(mesh_path), force="mesh")
    mesh.export(str(output_file))
    logger.info(f"Converted {mesh_path.name} to {output_file.suffix.lstrip('.')}")
    return output_file
