"""Base class for photogrammetry render engines.

An engine turns a folder of images into a model file. ``render`` returns a
future right away; the work itself happens in ``run`` on a worker thread,
which reports fractional progress through ``on_progress``. The future is the
single terminal outcome: it resolves to the model path or raises.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import ClassVar

from photorender.core.contracts import DetailLevel

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


class RenderEngine(ABC):
    """Abstract base for render engines.

    Subclasses must:
    1. Set the ``name`` class variable
    2. Implement is_supported() and run()

    Example:
        class MyEngine(RenderEngine):
            name = "my_engine"

            def is_supported(self) -> bool: ...
            def run(self, input_dir, output_file, detail, on_progress) -> Path: ...
    """

    name: ClassVar[str] = ""

    @abstractmethod
    def is_supported(self) -> bool:
        """Whether this engine can run on the current host."""
        ...

    @abstractmethod
    def run(
        self,
        input_dir: Path,
        output_file: Path,
        detail: DetailLevel,
        on_progress: ProgressCallback,
    ) -> Path:
        """Produce the model synchronously. Returns the written model path."""
        ...

    def render(
        self,
        input_dir: Path,
        output_file: Path,
        detail: DetailLevel,
        on_progress: ProgressCallback,
    ) -> Future[Path]:
        """Start ``run`` on a worker thread and return its future immediately."""
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"render-{self.engine_name}")
        try:
            return executor.submit(self._execute, input_dir, output_file, detail, on_progress)
        finally:
            # Lets the worker finish and exit without blocking the caller.
            executor.shutdown(wait=False)

    @property
    def engine_name(self) -> str:
        return self.name or self.__class__.__name__

    def _execute(
        self,
        input_dir: Path,
        output_file: Path,
        detail: DetailLevel,
        on_progress: ProgressCallback,
    ) -> Path:
        """Run with logging and timing."""
        logger.info(f"[{self.engine_name}] Rendering {input_dir} at detail '{detail.value}'...")
        t0 = time.time()
        try:
            result = self.run(input_dir, output_file, detail, on_progress)
        except Exception:
            logger.debug(f"[{self.engine_name}] Failed after {time.time() - t0:.1f}s", exc_info=True)
            raise
        logger.info(f"[{self.engine_name}] Done in {time.time() - t0:.1f}s")
        return result
