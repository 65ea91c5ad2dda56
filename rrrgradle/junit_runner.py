"""Running compiled JUnit test classes."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

from .build import DEFAULT_CACHE_DIR, build_classpath
from .config import DEFAULT_MAIN_OUTPUT, DEFAULT_TEST_OUTPUT, Config

JUNIT_RUNNER = "org.junit.runner.JUnitCore"


def find_test_classes(test_output: str | Path) -> list[str]:
    """Class names of the ``.class`` files below ``test_output`` whose path mentions ``Test``."""
    root = Path(test_output)
    if not root.is_dir():
        return []
    return sorted(
        ".".join(path.relative_to(root).with_suffix("").parts)
        for path in root.rglob("*.class")
        if path.is_file() and "Test" in str(path)
    )


def _outputs(config: Config) -> tuple[str, str]:
    test_output = (config.test.output if config.test is not None else None) or DEFAULT_TEST_OUTPUT
    main_output = (config.main.output if config.main is not None else None) or DEFAULT_MAIN_OUTPUT
    return test_output, main_output


def test_classpath(config: Config, cache_dir: str | Path = DEFAULT_CACHE_DIR) -> str:
    """Test output, main output, then every cached dependency JAR."""
    parts = list(_outputs(config))
    jars = build_classpath(cache_dir)
    if jars:
        parts.append(jars)
    return os.pathsep.join(parts)


def test_project(config: Config) -> list[str]:
    """Run every compiled test class through JUnit.

    Returns the classes run (empty when none were found). Raises
    SystemExit(1) when a test fails or JUnit cannot be started.
    """
    test_output, _ = _outputs(config)
    classes = find_test_classes(test_output)
    if not classes:
        print("No test classes found.")
        return []

    print("Running tests...")
    command = ["java", "-cp", test_classpath(config), JUNIT_RUNNER, *classes]
    try:
        result = subprocess.run(command)
    except OSError:
        result = None
    if result is not None and result.returncode == 0:
        print("✓ All tests passed.")
        return classes
    print("✗ Some tests failed.", file=sys.stderr)
    raise SystemExit(1)