"""Tests for the corpus scanner."""

import os
from pathlib import Path

import pytest

from photorender.core.errors import InvalidInput
from photorender.core.scanner import is_supported_image, scan_corpus


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x")
    return path


class TestScanCorpus:
    def test_filters_and_sorts_by_name(self, tmp_path: Path):
        for name in ["b.PNG", "a.jpg", "c.txt"]:
            _touch(tmp_path / name)

        images = scan_corpus(tmp_path)
        assert [img.name for img in images] == ["a.jpg", "b.PNG"]
        assert [img.extension for img in images] == ["jpg", "png"]
        assert all(img.path.is_absolute() for img in images)

    def test_sorts_by_file_name_not_path(self, tmp_path: Path):
        _touch(tmp_path / "z_dir" / "a.jpg")
        _touch(tmp_path / "a_dir" / "c.jpg")
        _touch(tmp_path / "b.heic")

        images = scan_corpus(tmp_path)
        assert [img.name for img in images] == ["a.jpg", "b.heic", "c.jpg"]

    def test_all_supported_extensions(self, tmp_path: Path):
        names = ["1.jpg", "2.JPEG", "3.png", "4.HEIC", "5.heif", "6.tif", "7.TIFF", "8.gif", "9.bmp"]
        for name in names:
            _touch(tmp_path / name)

        images = scan_corpus(tmp_path)
        assert [img.name for img in images] == names[:7]

    def test_skips_hidden_files_and_dirs(self, tmp_path: Path):
        _touch(tmp_path / ".hidden.jpg")
        _touch(tmp_path / ".cache" / "inside.jpg")
        _touch(tmp_path / "visible.jpg")

        images = scan_corpus(tmp_path)
        assert [img.name for img in images] == ["visible.jpg"]

    def test_skips_package_bundles(self, tmp_path: Path):
        _touch(tmp_path / "Library.photoslibrary" / "originals" / "p.jpg")
        _touch(tmp_path / "Thing.app" / "icon.png")
        _touch(tmp_path / "shot.jpg")

        images = scan_corpus(tmp_path)
        assert [img.name for img in images] == ["shot.jpg"]

    def test_directory_named_like_image_is_ignored(self, tmp_path: Path):
        (tmp_path / "folder.jpg").mkdir()
        _touch(tmp_path / "folder.jpg" / "real.png")

        images = scan_corpus(tmp_path)
        assert [img.name for img in images] == ["real.png"]

    def test_empty_directory(self, tmp_path: Path):
        assert scan_corpus(tmp_path) == []

    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(InvalidInput, match="does not exist"):
            scan_corpus(tmp_path / "nope")

    def test_unlistable_subdirectory(self, tmp_path: Path, monkeypatch):
        _touch(tmp_path / "a.jpg")
        locked = tmp_path / "locked"
        _touch(locked / "b.jpg")
        real_scandir = os.scandir

        def _scandir(path):
            if Path(path) == locked:
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        # chmod does not stop root, so the listing failure is simulated.
        monkeypatch.setattr(os, "scandir", _scandir)
        with pytest.raises(InvalidInput) as excinfo:
            scan_corpus(tmp_path)
        assert isinstance(excinfo.value.__cause__, PermissionError)

    def test_file_instead_of_directory(self, tmp_path: Path):
        f = _touch(tmp_path / "a.jpg")
        with pytest.raises(InvalidInput):
            scan_corpus(f)


def test_is_supported_image():
    assert is_supported_image(Path("x/IMG_0001.HEIC"))
    assert not is_supported_image(Path("notes.txt"))
    assert not is_supported_image(Path("jpg"))
