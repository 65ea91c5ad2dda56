"""Compiling Java source sets with ``javac``."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from pathlib import Path

from .config import DEFAULT_MAIN_OUTPUT, DEFAULT_TEST_OUTPUT, Config, SourceSet

DEFAULT_CACHE_DIR = ".rrrgradle/cache"


def _files_under(root: Path) -> list[Path]:
    return sorted(path for path in root.rglob("*") if path.is_file())


def find_java_files(dirs: list[str]) -> list[Path]:
    """All ``.java`` files below the existing directories in ``dirs``."""
    return [
        path
        for directory in map(Path, dirs)
        if directory.exists()
        for path in _files_under(directory)
        if path.suffix == ".java"
    ]


def copy_resources(source_set: SourceSet, output_dir: str | Path) -> None:
    """Copy resource files into ``output_dir``, keeping relative paths.

    Files that cannot be copied are skipped.
    """
    output = Path(output_dir)
    for directory in map(Path, source_set.resources):
        if not directory.exists():
            continue
        for path in _files_under(directory):
            target = output / path.relative_to(directory)
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy(path, target)
            except OSError:
                continue


def _cached_jars(cache_dir: str | Path) -> list[str]:
    try:
        entries = sorted(Path(cache_dir).iterdir())
    except OSError:
        return []
    return [str(entry) for entry in entries if entry.suffix == ".jar"]


def build_classpath(cache_dir: str | Path, main_output: str | None = None, is_test: bool = False) -> str:
    """Cached dependency JARs, plus the main output for test compilation."""
    entries = _cached_jars(cache_dir)
    if is_test and main_output is not None:
        entries.append(main_output)
    return os.pathsep.join(entries)


def _needs_recompile(java_file: Path, class_file: Path) -> bool:
    try:
        java_mtime = java_file.stat().st_mtime
    except OSError:
        print("Error reading file metadata, defaulting to rebuild")
        return True
    try:
        class_mtime = class_file.stat().st_mtime
    except OSError:
        print(f"Class file missing: {class_file}")
        return True
    return java_mtime > class_mtime


def compile_source_set(
    source_set: SourceSet,
    cache_dir: str | Path,
    is_test: bool = False,
    main_output: str | None = None,
) -> bool:
    """Compile the stale sources of one source set; True on success.

    A source is stale when its class file is missing or older. Resources
    are copied after a successful (or unnecessary) compilation.
    """
    kind = "test" if is_test else "main"
    output_dir = source_set.output or (DEFAULT_TEST_OUTPUT if is_test else DEFAULT_MAIN_OUTPUT)
    output = Path(output_dir)
    output.mkdir(parents=True, exist_ok=True)

    sources = [
        (path, root)
        for root in map(Path, source_set.java)
        if root.exists()
        for path in _files_under(root)
        if path.suffix == ".java"
    ]
    if not sources:
        print(f"No Java files found to compile in {kind} source set.")
        return True

    to_compile: list[Path] = []
    for java_file, root in sources:
        class_file = (output / java_file.relative_to(root)).with_suffix(".class")
        class_file.parent.mkdir(parents=True, exist_ok=True)
        if _needs_recompile(java_file, class_file):
            to_compile.append(java_file)

    if not to_compile:
        print("✓ Nothing to compile (incremental build up-to-date).")
        copy_resources(source_set, output)
        return True

    print(f"Compiling {len(to_compile)} {kind} source file(s)...")
    classpath = build_classpath(cache_dir, main_output, is_test)
    command = ["javac", "-d", output_dir]
    if classpath:
        command += ["-cp", classpath]
    command += [str(path) for path in to_compile]

    try:
        result = subprocess.run(command)
    except OSError as exc:
        raise RuntimeError("Failed to run javac") from exc

    if result.returncode == 0:
        copy_resources(source_set, output)
        print(f"✓ {kind.capitalize()} compilation successful ({len(to_compile)} file(s) compiled)")
        return True
    print(f"✗ {kind.capitalize()} compilation failed", file=sys.stderr)
    return False


def build_project(config: Config, cache_dir: str | Path = DEFAULT_CACHE_DIR) -> bool:
    """Compile the main source set, then the test set if main succeeded."""
    if config.main is not None and not compile_source_set(config.main, cache_dir, False, None):
        return False
    if config.test is None:
        return True
    main_output = config.main.output if config.main is not None else None
    return compile_source_set(config.test, cache_dir, True, main_output)