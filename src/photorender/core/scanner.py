"""Corpus scanner: collect supported image files under an input folder."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .contracts import SUPPORTED_IMAGE_EXTENSIONS, ImagePath
from .errors import InvalidInput

logger = logging.getLogger(__name__)

# Directories that behave as a single opaque document (macOS bundles, photo libraries).
PACKAGE_SUFFIXES = frozenset({
    ".app", ".bundle", ".framework", ".photoslibrary", ".plugin", ".pkg", ".xcarchive",
})


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def _is_package(name: str) -> bool:
    return Path(name).suffix.lower() in PACKAGE_SUFFIXES


def is_supported_image(path: Path) -> bool:
    return path.suffix[1:].lower() in SUPPORTED_IMAGE_EXTENSIONS


def scan_corpus(folder: Path) -> list[ImagePath]:
    """Recursively list supported images, sorted by file name.

    Hidden files and directories are skipped and package-like bundles are
    not descended into. Raises InvalidInput if ``folder`` is missing, is not
    a directory, or any part of it cannot be listed.
    """
    folder = Path(folder)
    if not folder.is_dir():
        raise InvalidInput(folder)

    def _on_error(exc: OSError) -> None:
        logger.debug(f"Cannot enumerate {exc.filename}: {exc}")
        raise InvalidInput(folder) from exc

    images: list[ImagePath] = []
    for dirpath, dirnames, filenames in os.walk(folder, onerror=_on_error):
        # Pruning in place stops os.walk from descending.
        dirnames[:] = [d for d in dirnames if not _is_hidden(d) and not _is_package(d)]
        for fname in filenames:
            if _is_hidden(fname):
                continue
            path = Path(dirpath) / fname
            if not path.is_file() or not is_supported_image(path):
                continue
            images.append(ImagePath.from_path(path))

    images.sort(key=lambda img: (img.name, str(img.path)))
    logger.debug(f"Scanned {folder}: {len(images)} supported images")
    return images
