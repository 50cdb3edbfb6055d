"""Shared pytest fixtures for photorender tests."""

from __future__ import annotations

import struct
import threading
import zlib
from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from photorender.core.contracts import DetailLevel
from photorender.engines.base import ProgressCallback, RenderEngine


def write_image(path: Path, size: tuple[int, int] = (64, 48)) -> Path:
    """Write a small solid-colour image; format follows the suffix."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fmt = {".jpg": "JPEG", ".jpeg": "JPEG", ".png": "PNG", ".tif": "TIFF", ".tiff": "TIFF"}[
        path.suffix.lower()
    ]
    Image.new("RGB", size, (120, 80, 40)).save(path, format=fmt)
    return path


def _png_chunk(cid: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + cid + data + struct.pack(">I", zlib.crc32(cid + data))


def write_png_header(path: Path, width: int, height: int) -> Path:
    """Write a PNG that declares its size but carries no pixel data."""
    path.parent.mkdir(parents=True, exist_ok=True)
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    path.write_bytes(b"\x89PNG\r\n\x1a\n" + _png_chunk(b"IHDR", ihdr) + _png_chunk(b"IEND", b""))
    return path


@pytest.fixture
def png_header_writer() -> Callable[..., Path]:
    return write_png_header


@pytest.fixture
def image_writer() -> Callable[..., Path]:
    return write_image


@pytest.fixture
def make_corpus(tmp_path: Path) -> Callable[..., Path]:
    """Build an image folder: ``ok`` good images, ``low_res`` small ones, ``unreadable`` junk files."""

    def _make(
        ok: int = 0,
        low_res: int = 0,
        unreadable: int = 0,
        size: tuple[int, int] = (64, 48),
        low_size: tuple[int, int] = (20, 16),
        name: str = "images",
    ) -> Path:
        folder = tmp_path / name
        folder.mkdir(parents=True, exist_ok=True)
        for i in range(ok):
            write_image(folder / f"ok_{i:03d}.jpg", size)
        for i in range(low_res):
            write_image(folder / f"small_{i:03d}.png", low_size)
        for i in range(unreadable):
            (folder / f"broken_{i:03d}.jpg").write_bytes(b"not an image")
        return folder

    return _make


class FakeEngine(RenderEngine):
    """Scripted engine: emits ``fractions`` then returns ``result`` or raises ``error``."""

    name = "fake"

    def __init__(
        self,
        fractions: tuple[float, ...] = (0.0, 0.5, 1.0),
        error: Exception | None = None,
        supported: bool = True,
        release: threading.Event | None = None,
    ):
        self.fractions = fractions
        self.error = error
        self.supported = supported
        self.release = release
        self.calls: list[tuple[Path, Path, DetailLevel]] = []
        self.worker_thread: str | None = None

    def is_supported(self) -> bool:
        return self.supported

    def run(
        self,
        input_dir: Path,
        output_file: Path,
        detail: DetailLevel,
        on_progress: ProgressCallback,
    ) -> Path:
        self.calls.append((input_dir, output_file, detail))
        self.worker_thread = threading.current_thread().name
        if self.release is not None:
            self.release.wait(timeout=5)
        for fraction in self.fractions:
            on_progress(fraction)
        if self.error is not None:
            raise self.error
        output_file.write_text("ply\n")
        return output_file


@pytest.fixture
def fake_engine_cls() -> type[FakeEngine]:
    return FakeEngine
