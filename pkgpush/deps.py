"""Dependency handling utilities.

Collects the dependencies declared in a pyproject.toml and splits them into
the ones published as requirements of the release and the ones that are
sourced outside the registry (git, path, URL, workspace, alternate index) or
only used outside production.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from packaging.requirements import InvalidRequirement, Requirement
from packaging.utils import canonicalize_name

from .errors import ConfigError, OverriddenDependencyError
from .models import Dependency, RawDependency
from .models import Requirement as ReleaseRequirement
from .sources import find_handler
from .toml import get_dependency_tables, get_override_dependencies, get_source_tables


def parse_requirement(dep_str: str) -> Requirement:
    try:
        return Requirement(dep_str)
    except InvalidRequirement as exc:
        raise ConfigError(f"Invalid dependency {dep_str!r}: {exc}") from exc


def dep_canonical_name(dep_str: str) -> str:
    """Extract the canonical package name from a PEP 508 dependency string.

    Handles version specifiers, extras, and normalizes the name per PEP 503
    (lowercase, hyphens instead of underscores).

    Examples:
        "requests>=2.0" → "requests"
        "My_Package[extra]~=1.0" → "my-package"
    """
    return canonicalize_name(parse_requirement(dep_str).name)


def source_options(entry: Any) -> dict[str, Any]:
    """Flatten a [tool.uv.sources] entry into one options mapping.

    uv allows a list of sources (one per marker); their keys are merged in
    order, which is enough to tell whether any of them points outside the
    registry.
    """
    if isinstance(entry, dict):
        return dict(entry)
    options: dict[str, Any] = {}
    if isinstance(entry, list):
        for item in entry:
            if isinstance(item, dict):
                options.update(item)
    return options


def collect_dependencies(doc: dict[str, Any]) -> list[RawDependency]:
    """Read every declared dependency of a pyproject.toml.

    Dependencies are gathered from three locations:
    - [project].dependencies (runtime, all environments)
    - [project.optional-dependencies].* (runtime, marked optional)
    - [dependency-groups].* (restricted to the group's environment)

    A name declared in several places keeps the requirement and optional
    flag of its first declaration, so each name is classified exactly once.
    Group names accumulate into ``environments`` across groups, unless the
    name was first declared as a runtime dependency, in which case it stays
    unrestricted.
    """
    dependencies, extras, groups = get_dependency_tables(doc)
    sources = get_source_tables(doc)
    overrides = {dep_canonical_name(dep) for dep in get_override_dependencies(doc)}

    def declared() -> Iterator[tuple[str, bool, frozenset[str]]]:
        for dep_str in dependencies:
            yield dep_str, False, frozenset()
        for group_deps in extras.values():
            for dep_str in group_deps:
                yield dep_str, True, frozenset()
        for group, group_deps in groups.items():
            for dep_str in group_deps:
                # {include-group = "..."} entries reference other groups
                if isinstance(dep_str, str):
                    yield dep_str, False, frozenset({group})

    raw: dict[str, RawDependency] = {}
    for dep_str, optional, environments in declared():
        req = parse_requirement(dep_str)
        name = canonicalize_name(req.name)
        if name in raw:
            first = raw[name]
            if first.environments and environments:
                first.environments = first.environments | environments
            continue

        options = source_options(sources.get(name))
        if req.url:
            options.setdefault("url", req.url)
        if name in overrides:
            options["override"] = True

        raw[name] = RawDependency(
            name=name,
            requirement=str(req.specifier),
            optional=optional,
            environments=environments,
            options=options,
        )
    return list(raw.values())


def to_dependency(raw: RawDependency) -> Dependency:
    handler = find_handler(raw.name, raw.options)
    return Dependency(
        name=raw.name,
        requirement=raw.requirement,
        optional=raw.optional,
        environments=raw.environments,
        is_override=bool(raw.options.get("override")),
        source=handler.name,
    )


def classify(deps: Iterable[RawDependency]) -> tuple[list[Dependency], list[str]]:
    """Split dependencies into published requirements and excluded names.

    A dependency is included when the registry handler claims it and it is a
    production dependency. Everything else is excluded by name.

    Raises:
        OverriddenDependencyError: If an included dependency is an override.
            Overrides must never end up as fixed requirements of a release.
    """
    include: list[Dependency] = []
    exclude: list[str] = []
    for raw in deps:
        dep = to_dependency(raw)
        if dep.registry_managed and dep.production:
            include.append(dep)
        else:
            exclude.append(dep.name)

    for dep in include:
        if dep.is_override:
            raise OverriddenDependencyError(dep.name)

    return include, exclude


def requirements_map(include: Sequence[Dependency]) -> dict[str, ReleaseRequirement]:
    """Reshape included dependencies into Metadata.requirements."""
    return {
        dep.name: ReleaseRequirement(requirement=dep.requirement, optional=dep.optional)
        for dep in include
    }
