"""Tests for pkgpush.toml."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from pkgpush.errors import ConfigError
from pkgpush.toml import (
    get_dependency_tables,
    get_override_dependencies,
    get_package_config,
    get_project_name,
    get_project_version,
    get_source_tables,
    load_pyproject,
    read_project_config,
)


class TestLoadPyproject:
    def test_load(self, project_dir: Path) -> None:
        doc = load_pyproject(project_dir)
        assert get_project_name(doc) == "my-package"

    def test_returns_plain_containers(self, project_dir: Path) -> None:
        doc = load_pyproject(project_dir)
        assert type(doc) is dict
        assert type(doc["project"]["dependencies"]) is list

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="No pyproject.toml"):
            load_pyproject(tmp_path)


class TestProjectFields:
    def test_name_is_normalized(self) -> None:
        assert get_project_name({"project": {"name": "My_Package"}}) == "my-package"

    def test_missing_name(self) -> None:
        with pytest.raises(ConfigError, match="name"):
            get_project_name({"project": {}})

    def test_version(self) -> None:
        assert get_project_version({"project": {"version": "0.3.0-dev"}}) == "0.3.0-dev"

    def test_dynamic_version(self) -> None:
        doc = {"project": {"dynamic": ["version"]}}
        with pytest.raises(ConfigError, match="dynamic"):
            get_project_version(doc)

    def test_invalid_version(self) -> None:
        with pytest.raises(ConfigError, match="Invalid version"):
            get_project_version({"project": {"version": "one"}})

    def test_read_project_config(self, pyproject_doc: dict[str, Any]) -> None:
        project = read_project_config(pyproject_doc)
        assert project.name == "my-package"
        assert project.version == "1.2.0"
        assert project.description == "A package for tests."

    def test_description_optional(self) -> None:
        project = read_project_config({"project": {"name": "a", "version": "1.0"}})
        assert project.description is None


class TestToolTables:
    def test_package_config(self, pyproject_doc: dict[str, Any]) -> None:
        assert get_package_config(pyproject_doc)["license"] == "MIT"

    def test_package_config_absent(self) -> None:
        assert get_package_config({}) == {}

    def test_package_config_not_a_table(self) -> None:
        with pytest.raises(ConfigError):
            get_package_config({"tool": {"pkgpush": {"package": ["x"]}}})

    def test_dependency_tables(self, pyproject_doc: dict[str, Any]) -> None:
        deps, extras, groups = get_dependency_tables(pyproject_doc)
        assert "requests>=2.0" in deps
        assert extras == {"fast": ["orjson>=3.9"]}
        assert set(groups) == {"dev", "prod"}

    def test_source_tables_are_canonical(self) -> None:
        doc = {"tool": {"uv": {"sources": {"Internal_Lib": {"path": "../lib"}}}}}
        assert get_source_tables(doc) == {"internal-lib": {"path": "../lib"}}

    def test_override_dependencies(self) -> None:
        doc = {"tool": {"uv": {"override-dependencies": ["urllib3==2"]}}}
        assert get_override_dependencies(doc) == ["urllib3==2"]
