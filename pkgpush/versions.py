"""Version parsing and validation.

Release versions must be semver-like. Incomplete versions are accepted and
padded with zeros (e.g., "1.0" → "1.0.0"); prerelease and build suffixes are
kept (e.g., "0.3.0-dev").
"""

from __future__ import annotations

import semver

from .errors import ConfigError


def parse_version(version_str: str) -> semver.Version:
    """Parse a version string into a semver.Version object.

    Handles incomplete versions by padding with zeros:
    - "1" → "1.0.0"
    - "1.2" → "1.2.0"
    - "1.2.3-rc.1" → "1.2.3-rc.1"

    Raises:
        ValueError: If the string is not semver-like.
    """
    return semver.Version.parse(version_str, optional_minor_and_patch=True)


def check_version(version_str: str, *, what: str = "version") -> str:
    """Validate a version string, returning it unchanged.

    Raises:
        ConfigError: If the version is not semver-like.
    """
    try:
        parse_version(version_str)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {what} {version_str!r}: {exc}") from exc
    return version_str
