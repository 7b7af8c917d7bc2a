"""Release archive builder.

A release archive is an uncompressed tar holding four members:

- ``VERSION``: archive format version
- ``CHECKSUM``: SHA-256 (hex, uppercase) of VERSION + metadata + contents
- ``metadata.json``: the release metadata
- ``contents.tar.gz``: the package files

The inner tarball is deterministic (sorted names, zeroed mtime and owners)
so the same inputs always produce the same checksum.
"""

from __future__ import annotations

import gzip
import hashlib
import io
import json
import os
import tarfile
from collections.abc import Sequence
from pathlib import Path

from .models import Metadata

ARCHIVE_VERSION = b"1"


def _add_bytes(tar: tarfile.TarFile, name: str, data: bytes) -> None:
    info = tarfile.TarInfo(name=name)
    info.size = len(data)
    info.mode = 0o644
    tar.addfile(info, io.BytesIO(data))


def build_contents(files: Sequence[str], root: Path) -> bytes:
    """Create a deterministic tar.gz of the given project-relative files."""
    buf = io.BytesIO()
    with gzip.GzipFile(fileobj=buf, mode="wb", mtime=0) as gz:
        with tarfile.TarFile(fileobj=gz, mode="w") as tar:
            for rel in sorted(files):
                src = root / rel
                st = os.stat(src)
                info = tarfile.TarInfo(name=rel)
                info.mode = (st.st_mode & 0o777) or 0o644
                info.uid = 0
                info.gid = 0
                info.uname = ""
                info.gname = ""
                info.size = st.st_size
                info.mtime = 0
                with open(src, "rb") as f:
                    tar.addfile(info, f)
    return buf.getvalue()


def build_archive(
    metadata: Metadata, files: Sequence[str], root: Path | None = None
) -> bytes:
    """Build the release archive uploaded to the registry.

    Args:
        metadata: Release metadata, stored as metadata.json.
        files: Project-relative file paths to ship.
        root: Project root the paths are relative to; defaults to cwd.

    Raises:
        OSError: If a file cannot be read. Files were resolved moments
            earlier, so this is not expected and is left to propagate.
    """
    root = root or Path.cwd()
    meta = json.dumps(metadata.to_payload(), sort_keys=True, indent=2).encode()
    contents = build_contents(files, root)
    checksum = hashlib.sha256(ARCHIVE_VERSION + meta + contents).hexdigest().upper()

    buf = io.BytesIO()
    with tarfile.TarFile(fileobj=buf, mode="w") as tar:
        _add_bytes(tar, "VERSION", ARCHIVE_VERSION)
        _add_bytes(tar, "CHECKSUM", checksum.encode())
        _add_bytes(tar, "metadata.json", meta)
        _add_bytes(tar, "contents.tar.gz", contents)
    return buf.getvalue()
