"""Packaging compiled classes into a JAR with the ``jar`` tool."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from .build import DEFAULT_CACHE_DIR, build_project
from .config import DEFAULT_MAIN_OUTPUT, Config

BUILD_DIR = Path("build")
TEMP_JAR_DIR = BUILD_DIR / "temp_jar"
MANIFEST_PATH = "META-INF/MANIFEST.MF"


class PackagingError(OSError):
    """Raised when the project cannot be packaged."""


def manifest_text(main_class: str, class_path: list[str] | None = None) -> str:
    """Manifest content naming ``main_class`` and, if given, a ``Class-Path``.

    Class-Path entries are wrapped onto a continuation line every three
    entries.
    """
    pieces = ["Manifest-Version: 1.0\n", f"Main-Class: {main_class}\n", "\n"]
    if class_path:
        pieces.append("Class-Path:")
        for index, entry in enumerate(class_path):
            if index and index % 3 == 0:
                pieces.append("\n ")
            elif index:
                pieces.append(" ")
            pieces.append(f" {entry}")
        pieces.append("\n")
    return "".join(pieces)


def _copy_tree(source: Path, target: Path) -> None:
    """Copy every file below ``source`` into ``target``, keeping relative paths."""
    if not source.is_dir():
        return
    for path in sorted(source.rglob("*")):
        if not path.is_file():
            continue
        destination = target / path.relative_to(source)
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy(path, destination)


def _bundle_dependencies(lib_dir: Path, cache_dir: Path) -> list[str]:
    """Copy cached JARs into ``lib_dir``; return their manifest entries."""
    lib_dir.mkdir(parents=True, exist_ok=True)
    try:
        jars = sorted(entry for entry in cache_dir.iterdir() if entry.suffix == ".jar")
    except OSError:
        return []
    entries = []
    for jar in jars:
        shutil.copy(jar, lib_dir / jar.name)
        entries.append(f"lib/{jar.name}")
    return entries


def package_project(config: Config, uber: bool = False) -> Path:
    """Build the project and package it as ``<name>-<version>.jar``.

    With ``uber`` the cached dependency JARs are bundled under ``lib/`` and
    listed in the manifest. Returns the path of the created JAR.
    """
    if not build_project(config):
        raise PackagingError("Build failed")

    jar_name = f"{config.project.name}-{config.project.version}.jar"
    temp_dir = TEMP_JAR_DIR
    temp_dir.mkdir(parents=True, exist_ok=True)

    if config.main is not None:
        _copy_tree(Path(config.main.output or DEFAULT_MAIN_OUTPUT), temp_dir)
        for resource_dir in config.main.resources:
            _copy_tree(Path(resource_dir), temp_dir)

    class_path = (
        _bundle_dependencies(temp_dir / "lib", Path(DEFAULT_CACHE_DIR)) if uber else []
    )

    manifest = temp_dir / MANIFEST_PATH
    manifest.parent.mkdir(parents=True, exist_ok=True)
    manifest.write_text(manifest_text(config.project.main_class, class_path), encoding="utf-8")

    print(f"Creating JAR: {jar_name}")
    try:
        result = subprocess.run(["jar", "cfm", jar_name, MANIFEST_PATH, "."], cwd=temp_dir)
    except OSError as exc:
        raise PackagingError(f"Failed to run jar: {exc}") from exc
    if result.returncode != 0:
        raise PackagingError("jar command failed")

    target = Path(jar_name)
    if target.exists():
        target.unlink()
    (temp_dir / jar_name).replace(target)
    shutil.rmtree(temp_dir)

    print(f"✓ Created {jar_name}")
    return target