"""File set resolution.

Expands the ``files`` patterns of a package into the list of regular files
that go into the release archive, relative to the project root.
"""

from __future__ import annotations

import glob
import os
from collections.abc import Iterable
from pathlib import Path

# Both cases are listed because glob matching is case-sensitive on most
# filesystems.
DEFAULT_FILES = (
    "src",
    "lib",
    "pyproject.toml",
    "README*",
    "readme*",
    "LICENSE*",
    "license*",
    "CHANGELOG*",
    "changelog*",
)

EXCLUDED_DIRS = frozenset({"__pycache__"})


def default_patterns(name: str) -> list[str]:
    """Default file patterns for a project, including its import package."""
    import_dir = name.replace("-", "_")
    return [import_dir, *DEFAULT_FILES]


def _expand(pattern: str, root: Path) -> list[str]:
    # Globs run relative to root_dir so that glob characters in the root
    # itself are never interpreted. An existing file name is taken literally.
    path = root / pattern
    if path.is_dir():
        return glob.glob(
            os.path.join(glob.escape(pattern), "**"), root_dir=root, recursive=True
        )
    if path.is_file():
        return [pattern]
    return glob.glob(pattern, root_dir=root)


def resolve(patterns: Iterable[str], root: Path | None = None) -> list[str]:
    """Expand file and directory patterns into project-relative file paths.

    Directories expand to everything below them; existing file names match
    themselves; other patterns are globbed. Only regular files survive
    (symlinks to files count, symlinks to directories do not). Paths outside
    the root are dropped. Duplicates are dropped, first occurrence wins.

    Args:
        patterns: File names, directory names or glob patterns.
        root: Project root; defaults to the current directory.

    Returns:
        Paths relative to root with "/" separators. Order is unspecified;
        sort before display.
    """
    root = (root or Path.cwd()).absolute()

    matches: list[str] = []
    for pattern in patterns:
        matches.extend(_expand(pattern, root))

    files: dict[str, None] = {}
    for match in matches:
        absolute = os.path.abspath(root / match)
        if not os.path.isfile(absolute):
            continue
        relative = Path(os.path.relpath(absolute, root))
        if relative.parts[0] == os.pardir:
            continue
        if EXCLUDED_DIRS.intersection(relative.parts):
            continue
        files.setdefault(relative.as_posix(), None)
    return list(files)
