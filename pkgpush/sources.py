"""Dependency source handlers.

Each handler decides whether it is responsible for a dependency given the
dependency's source options. Handlers are checked in a fixed order and the
first one that accepts wins; the registry handler comes last and accepts only
dependencies that no external source claims.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NamedTuple

from .models import REGISTRY_SOURCE

# Option keys that mark a dependency as coming from outside the registry.
EXTERNAL_SOURCE_KEYS = ("git", "path", "url", "workspace", "index")


class SourceHandler(NamedTuple):
    name: str
    key: str | None

    def accepts(self, dep_name: str, options: Mapping[str, Any]) -> bool:
        if self.key is None:
            return not any(options.get(k) for k in EXTERNAL_SOURCE_KEYS)
        return bool(options.get(self.key))


HANDLERS: tuple[SourceHandler, ...] = (
    *(SourceHandler(name=key, key=key) for key in EXTERNAL_SOURCE_KEYS),
    SourceHandler(name=REGISTRY_SOURCE, key=None),
)


def find_handler(dep_name: str, options: Mapping[str, Any]) -> SourceHandler:
    """Return the first handler that accepts the dependency.

    The registry handler accepts anything the external handlers do not, so
    this always finds one.
    """
    for handler in HANDLERS:
        if handler.accepts(dep_name, options):
            return handler
    raise AssertionError(f"no source handler accepted {dep_name}")


def is_registry_managed(dep_name: str, options: Mapping[str, Any]) -> bool:
    return find_handler(dep_name, options).name == REGISTRY_SOURCE
