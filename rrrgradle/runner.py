"""Running the project's main class with ``java``."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

from .build import DEFAULT_CACHE_DIR, build_classpath
from .config import DEFAULT_MAIN_OUTPUT, Config


def runtime_classpath(config: Config, cache_dir: str | Path = DEFAULT_CACHE_DIR) -> str:
    """The main output directory followed by every cached dependency JAR."""
    main_output = (config.main.output if config.main is not None else None) or DEFAULT_MAIN_OUTPUT
    parts = [main_output]
    jars = build_classpath(cache_dir)
    if jars:
        parts.append(jars)
    return os.pathsep.join(parts)


def run_project(config: Config) -> None:
    """Run the configured main class.

    Raises SystemExit(1) when the application fails or cannot be started.
    """
    command = ["java", "-cp", runtime_classpath(config), config.project.main_class]
    try:
        result = subprocess.run(command)
    except OSError:
        result = None
    if result is not None and result.returncode == 0:
        print("✓ Application finished successfully.")
        return
    print("✗ Application failed to run.", file=sys.stderr)
    raise SystemExit(1)