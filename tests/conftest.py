"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import tomlkit

from pkgpush.models import Metadata, Requirement

PYPROJECT = """\
[project]
name = "My_Package"
version = "1.2.0"
description = "A package for tests."
dependencies = [
    "requests>=2.0",
    "internal-lib>=1.0",
    "vendored @ https://example.com/vendored-1.0.tar.gz",
]

[project.optional-dependencies]
fast = ["orjson>=3.9"]

[dependency-groups]
dev = ["pytest>=8.0"]
prod = ["gunicorn>=21"]

[tool.uv.sources]
internal-lib = { git = "https://example.com/internal-lib.git" }

[tool.pkgpush.package]
license = "MIT"
contributors = ["Jane Doe"]
links = { Source = "https://example.com/my-package" }
homepage = "https://ignored.example.com"
"""


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project with a pyproject.toml, a package directory and a README."""
    (tmp_path / "pyproject.toml").write_text(PYPROJECT)
    (tmp_path / "README.md").write_text("# My package\n")
    pkg = tmp_path / "my_package"
    pkg.mkdir()
    (pkg / "__init__.py").write_text('"""My package."""\n')
    (pkg / "core.py").write_text("VALUE = 1\n")
    return tmp_path


@pytest.fixture
def pyproject_doc() -> dict[str, Any]:
    """The sample pyproject.toml as plain Python data."""
    return tomlkit.parse(PYPROJECT).unwrap()


@pytest.fixture
def sample_metadata() -> Metadata:
    return Metadata(
        name="my-package",
        version="1.2.0",
        description="A package for tests.",
        licenses=["MIT"],
        requirements={"requests": Requirement(requirement=">=2.0")},
        files=["README.md", "my_package/__init__.py"],
    )
