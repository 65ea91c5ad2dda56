"""Project configuration loaded from ``rrrgradle.toml``."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

CONFIG_FILE = "rrrgradle.toml"
DEFAULT_MAIN_OUTPUT = "build/classes/java/main"
DEFAULT_TEST_OUTPUT = "build/classes/java/test"


@dataclass
class SourceSet:
    """Source, resource and output directories of one source set."""

    java: list[str] = field(default_factory=list)
    resources: list[str] = field(default_factory=list)
    output: str | None = None


@dataclass
class Project:
    """The ``[project]`` table."""

    name: str
    version: str
    main_class: str
    source_dir: str | None = None
    resource_dir: str | None = None
    output_dir: str | None = None


@dataclass
class Config:
    """A whole project configuration."""

    project: Project
    main: SourceSet | None = None
    test: SourceSet | None = None
    dependencies: dict[str, str] | None = None
    test_dependencies: dict[str, str] | None = None


def _table(data: dict[str, Any], key: str, where: str) -> dict[str, Any] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError(f"{where}{key}: expected a table")
    return value


def _required_str(data: dict[str, Any], key: str, where: str) -> str:
    if key not in data:
        raise ValueError(f"{where}: missing field `{key}`")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"{where}.{key}: expected a string")
    return value


def _optional_str(data: dict[str, Any], key: str, where: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{where}.{key}: expected a string")
    return value


def _str_list(data: dict[str, Any], key: str, where: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"{where}.{key}: expected a list of strings")
    return list(value)


def _str_mapping(data: dict[str, Any], key: str) -> dict[str, str] | None:
    value = _table(data, key, "")
    if value is None:
        return None
    if not all(isinstance(v, str) for v in value.values()):
        raise ValueError(f"{key}: versions must be strings")
    return dict(value)


def _source_set(table: dict[str, Any], where: str) -> SourceSet:
    return SourceSet(
        java=_str_list(table, "java", where),
        resources=_str_list(table, "resources", where),
        output=_optional_str(table, "output", where),
    )


def _default_source_set(kind: str, output: str) -> SourceSet:
    return SourceSet(
        java=[f"src/{kind}/java"],
        resources=[f"src/{kind}/resources"],
        output=output,
    )


def parse_config(text: str) -> Config:
    """Parse configuration text, filling in default source sets.

    Raises ValueError when the text is not valid TOML or lacks required fields.
    """
    data = tomllib.loads(text)

    project_table = _table(data, "project", "")
    if project_table is None:
        raise ValueError("missing table `project`")
    project = Project(
        name=_required_str(project_table, "name", "project"),
        version=_required_str(project_table, "version", "project"),
        main_class=_required_str(project_table, "main_class", "project"),
        source_dir=_optional_str(project_table, "source_dir", "project"),
        resource_dir=_optional_str(project_table, "resource_dir", "project"),
        output_dir=_optional_str(project_table, "output_dir", "project"),
    )

    main_table = _table(data, "main", "")
    test_table = _table(data, "test", "")

    return Config(
        project=project,
        main=(
            _source_set(main_table, "main")
            if main_table is not None
            else _default_source_set("main", DEFAULT_MAIN_OUTPUT)
        ),
        test=(
            _source_set(test_table, "test")
            if test_table is not None
            else _default_source_set("test", DEFAULT_TEST_OUTPUT)
        ),
        dependencies=_str_mapping(data, "dependencies"),
        test_dependencies=_str_mapping(data, "test_dependencies"),
    )


def load_config(path: str | Path = CONFIG_FILE) -> Config:
    """Read and parse the configuration file at ``path``."""
    return parse_config(Path(path).read_text(encoding="utf-8"))