"""Subprocess runner for external photogrammetry tools."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def _tail(text: str, limit: int = 500) -> str:
    return text[-limit:].strip()


def run_command(
    cmd: list[str],
    cwd: Path | None = None,
    timeout: float | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess:
    """Run an external tool, capturing its output into the debug log.

    There is no timeout unless one is given; reconstruction stages can run
    for hours. With ``check`` a non-zero exit raises CalledProcessError whose
    ``stderr`` holds the tool's diagnostics.
    """
    cmd_str = " ".join(cmd)
    logger.debug(f"Running: {cmd_str}")

    result = subprocess.run(
        cmd,
        cwd=cwd,
        capture_output=True,
        text=True,
        timeout=timeout,
        check=False,
    )

    if result.stdout:
        logger.debug(f"stdout: {_tail(result.stdout)}")
    if result.stderr:
        logger.debug(f"stderr: {_tail(result.stderr)}")

    if check and result.returncode != 0:
        logger.warning(f"{Path(cmd[0]).name} exited with status {result.returncode}")
        raise subprocess.CalledProcessError(
            result.returncode, cmd_str, result.stdout, result.stderr
        )
    return result
