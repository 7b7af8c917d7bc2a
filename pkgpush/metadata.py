"""Release metadata assembly.

Builds the canonical Metadata record from three sources merged in order of
increasing precedence: built-in defaults, [project] fields, the
[tool.pkgpush.package] table, and finally the computed requirements.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import ConfigError
from .files import default_patterns, resolve
from .models import Metadata, ProjectConfig, Requirement

# Fields reported as missing when absent from the metadata.
RECOMMENDED_FIELDS = ("description", "licenses", "contributors", "links")


def _as_list(value: Any, field: str) -> list[str]:
    if isinstance(value, str):
        return [value]
    try:
        return [str(v) for v in value]
    except TypeError as exc:
        raise ConfigError(
            f"[tool.pkgpush.package].{field} must be a string or a list of strings"
        ) from exc


def _as_links(value: Any) -> dict[str, str]:
    """Normalize links given as a table or as a list of [label, url] pairs."""
    pairs = value.items() if isinstance(value, Mapping) else value
    try:
        return {str(label): str(url) for label, url in pairs}
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            "[tool.pkgpush.package].links must be a table or a list of [label, url] pairs"
        ) from exc


def package_fields(package_config: Mapping[str, Any]) -> dict[str, Any]:
    """Normalize the package table, keeping only recognized fields.

    ``license`` is accepted as an alias of ``licenses``; when both are given
    ``licenses`` wins. Unknown keys are dropped.
    """
    fields: dict[str, Any] = {}

    licenses = package_config.get("licenses") or package_config.get("license")
    if licenses:
        fields["licenses"] = _as_list(licenses, "licenses")

    if package_config.get("contributors"):
        fields["contributors"] = _as_list(package_config["contributors"], "contributors")

    if package_config.get("links"):
        fields["links"] = _as_links(package_config["links"])

    if package_config.get("description"):
        fields["description"] = str(package_config["description"])

    if "files" in package_config:
        fields["files"] = _as_list(package_config["files"], "files")

    return fields


def assemble(
    project: ProjectConfig,
    package_config: Mapping[str, Any],
    requirements: Mapping[str, Requirement],
    root: Path | None = None,
) -> Metadata:
    """Merge project config, package config and requirements into Metadata.

    Args:
        project: Required [project] fields.
        package_config: The raw [tool.pkgpush.package] table.
        requirements: Requirements computed from the included dependencies.
        root: Project root that file patterns are resolved against.

    Returns:
        A frozen Metadata record. ``files`` holds resolved file paths, not
        patterns.
    """
    layers: list[Mapping[str, Any]] = [
        {"files": default_patterns(project.name)},
        project.model_dump(exclude_none=True),
        package_fields(package_config),
        {"requirements": dict(requirements)},
    ]

    merged: dict[str, Any] = {}
    for layer in layers:
        merged.update(layer)
    merged["files"] = resolve(merged["files"], root)

    try:
        return Metadata(**merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid package metadata: {exc}") from exc


def missing_fields(metadata: Metadata) -> list[str]:
    """Recommended fields that are absent from the metadata."""
    return [field for field in RECOMMENDED_FIELDS if getattr(metadata, field) is None]
