"""Tests for pkgpush.archive."""

from __future__ import annotations

import hashlib
import io
import json
import tarfile
from pathlib import Path

import pytest

from pkgpush.archive import build_archive, build_contents
from pkgpush.models import Metadata


@pytest.fixture
def files(tmp_path: Path) -> list[str]:
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pkg" / "__init__.py").write_text("X = 1\n")
    (tmp_path / "README.md").write_text("hello\n")
    return ["README.md", "pkg/__init__.py"]


def _members(blob: bytes) -> dict[str, bytes]:
    with tarfile.open(fileobj=io.BytesIO(blob), mode="r:") as tar:
        return {m.name: tar.extractfile(m).read() for m in tar.getmembers()}


def test_archive_layout(tmp_path: Path, files: list[str]) -> None:
    metadata = Metadata(name="pkg", version="1.0.0", files=files)

    members = _members(build_archive(metadata, files, tmp_path))

    assert list(members) == ["VERSION", "CHECKSUM", "metadata.json", "contents.tar.gz"]
    assert json.loads(members["metadata.json"])["name"] == "pkg"
    expected = hashlib.sha256(
        members["VERSION"] + members["metadata.json"] + members["contents.tar.gz"]
    ).hexdigest().upper()
    assert members["CHECKSUM"].decode() == expected


def test_contents_hold_files(tmp_path: Path, files: list[str]) -> None:
    with tarfile.open(fileobj=io.BytesIO(build_contents(files, tmp_path)), mode="r:gz") as tar:
        assert tar.getnames() == ["README.md", "pkg/__init__.py"]
        assert tar.extractfile("pkg/__init__.py").read() == b"X = 1\n"
        assert all(m.mtime == 0 and m.uid == 0 for m in tar.getmembers())


def test_contents_are_deterministic(tmp_path: Path, files: list[str]) -> None:
    assert build_contents(files, tmp_path) == build_contents(list(reversed(files)), tmp_path)


def test_missing_file_propagates(tmp_path: Path) -> None:
    metadata = Metadata(name="pkg", version="1.0.0", files=["gone.py"])
    with pytest.raises(OSError):
        build_archive(metadata, metadata.files, tmp_path)
