"""TOML reading utilities.

Uses tomlkit to read pyproject.toml and the user config file. Values are
unwrapped into plain Python containers before they leave this module so the
rest of the pipeline never sees tomlkit item types.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import ParseError
from packaging.utils import canonicalize_name

from .errors import ConfigError
from .models import ProjectConfig
from .versions import check_version


def load_toml(path: Path) -> dict[str, Any]:
    """Load and parse a TOML file into plain dicts and lists."""
    try:
        return tomlkit.parse(path.read_text()).unwrap()
    except ParseError as exc:
        raise ConfigError(f"Could not parse {path}: {exc}") from exc


def load_pyproject(root: Path) -> dict[str, Any]:
    """Load pyproject.toml from a project directory.

    Raises:
        ConfigError: If the file is missing or malformed.
    """
    path = root / "pyproject.toml"
    if not path.exists():
        raise ConfigError(f"No pyproject.toml found in {root}")
    return load_toml(path)


def get_project_name(doc: dict[str, Any]) -> str:
    """Extract the canonical package name from [project].name.

    Names are normalized per PEP 503 (lowercase, hyphens instead of
    underscores) since that is the name the registry knows the package by.

    Raises:
        ConfigError: If the name is missing.
    """
    name = doc.get("project", {}).get("name")
    if not name:
        raise ConfigError("Missing required field [project].name in pyproject.toml")
    return canonicalize_name(str(name))


def get_project_version(doc: dict[str, Any]) -> str:
    """Extract and validate [project].version.

    Raises:
        ConfigError: If the version is missing, dynamic, or not semver-like.
    """
    project = doc.get("project", {})
    version = project.get("version")
    if not version:
        if "version" in project.get("dynamic", []):
            raise ConfigError(
                "[project].version is dynamic; set a static version to publish"
            )
        raise ConfigError(
            "Missing required field [project].version in pyproject.toml"
        )
    return check_version(str(version))


def read_project_config(doc: dict[str, Any]) -> ProjectConfig:
    """Read the [project] fields a release is built from."""
    description = doc.get("project", {}).get("description")
    return ProjectConfig(
        name=get_project_name(doc),
        version=get_project_version(doc),
        description=str(description) if description else None,
    )


def get_package_config(doc: dict[str, Any]) -> dict[str, Any]:
    """Return the [tool.pkgpush.package] table, or {} if absent."""
    package = doc.get("tool", {}).get("pkgpush", {}).get("package", {})
    if not isinstance(package, dict):
        raise ConfigError("[tool.pkgpush.package] must be a table")
    return package


def get_dependency_tables(
    doc: dict[str, Any],
) -> tuple[list[str], dict[str, list[Any]], dict[str, list[Any]]]:
    """Collect the raw dependency declarations of a pyproject.toml.

    Returns:
        Tuple of ([project].dependencies, [project.optional-dependencies],
        [dependency-groups]). Group entries may include non-string
        ``{include-group = ...}`` tables.
    """
    project = doc.get("project", {})
    return (
        list(project.get("dependencies", [])),
        dict(project.get("optional-dependencies", {})),
        dict(doc.get("dependency-groups", {})),
    )


def get_source_tables(doc: dict[str, Any]) -> dict[str, Any]:
    """Return [tool.uv.sources] keyed by canonical package name."""
    sources = doc.get("tool", {}).get("uv", {}).get("sources", {})
    return {canonicalize_name(name): value for name, value in sources.items()}


def get_override_dependencies(doc: dict[str, Any]) -> list[str]:
    """Raw PEP 508 strings listed in [tool.uv].override-dependencies."""
    return list(doc.get("tool", {}).get("uv", {}).get("override-dependencies", []))
