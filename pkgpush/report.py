"""Publish report shown to the operator before anything is sent."""

from __future__ import annotations

from collections.abc import Sequence

from .metadata import missing_fields
from .models import Metadata


def render(metadata: Metadata, excluded: Sequence[str]) -> list[str]:
    """Render the metadata about to be published as display lines.

    Lists the requirements, the dependencies left out of the package, and the
    included files, and warns about an empty file list and missing
    recommended fields. Requirements and files are sorted.
    """
    lines = [f"Publishing {metadata.name} v{metadata.version}"]

    if metadata.requirements:
        lines.append("  Dependencies:")
        for name in sorted(metadata.requirements):
            req = metadata.requirements[name]
            suffix = " (optional)" if req.optional else ""
            lines.append(f"    {name} {req.requirement}".rstrip() + suffix)

    if excluded:
        lines.append("  Excluded dependencies (not part of the package):")
        lines.extend(f"    {name}" for name in excluded)

    if metadata.files:
        lines.append("  Included files:")
        lines.extend(f"    {path}" for path in sorted(metadata.files))
    else:
        lines.append("  WARNING! No included files")

    missing = missing_fields(metadata)
    if missing:
        lines.append(f"  WARNING! Missing metadata fields: {', '.join(missing)}")

    return lines
