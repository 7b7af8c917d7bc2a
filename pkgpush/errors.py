"""Errors raised before anything is sent to the registry.

Both are click exceptions so the CLI prints ``Error: <message>`` and exits
with status 1 without a traceback. Registry rejections are not exceptions;
they come back as a ``Failed`` outcome (see ``pkgpush.models``).
"""

from __future__ import annotations

import click


class ConfigError(click.ClickException):
    """Project or user configuration is missing or invalid."""


class OverriddenDependencyError(ConfigError):
    """A dependency that would be published carries an override."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Can't publish with overridden dependency {name}, "
            f"remove it from [tool.uv].override-dependencies"
        )
        self.name = name
