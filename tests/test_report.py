"""Tests for pkgpush.report."""

from __future__ import annotations

from pkgpush.models import Metadata, Requirement
from pkgpush.report import render


def test_full_report(sample_metadata: Metadata) -> None:
    lines = render(sample_metadata, ["internal-lib"])

    assert lines == [
        "Publishing my-package v1.2.0",
        "  Dependencies:",
        "    requests >=2.0",
        "  Excluded dependencies (not part of the package):",
        "    internal-lib",
        "  Included files:",
        "    README.md",
        "    my_package/__init__.py",
        "  WARNING! Missing metadata fields: contributors, links",
    ]


def test_no_files_warning() -> None:
    metadata = Metadata(name="empty", version="0.1.0", files=[])
    lines = render(metadata, [])

    assert "  WARNING! No included files" in lines
    assert "  Included files:" not in lines
    assert "  Dependencies:" not in lines
    assert not any("Excluded" in line for line in lines)


def test_dependencies_sorted_and_optional_marked() -> None:
    metadata = Metadata(
        name="pkg",
        version="1.0.0",
        requirements={
            "zlib-ng": Requirement(requirement=">=1"),
            "attrs": Requirement(requirement="", optional=True),
        },
        files=["a.py"],
    )
    lines = render(metadata, [])

    deps = lines[lines.index("  Dependencies:") + 1 : lines.index("  Dependencies:") + 3]
    assert deps == ["    attrs (optional)", "    zlib-ng >=1"]


def test_files_sorted() -> None:
    metadata = Metadata(name="pkg", version="1.0.0", files=["b.py", "a.py"])
    lines = render(metadata, [])
    start = lines.index("  Included files:")
    assert lines[start + 1 : start + 3] == ["    a.py", "    b.py"]
