"""Command-line entry point."""

from __future__ import annotations

import argparse
import shutil
import sys
from pathlib import Path

from . import build, fetch, junit_runner, package, runner
from .config import CONFIG_FILE, load_config

BUILD_DIR = Path("build")

CONFIG_TEMPLATE = """\
[project]
name = "MyJavaApp"
version = "0.1.0"
main_class = "com.example.Main"

[main]
java = ["src/main/java"]
resources = ["src/main/resources"]
output = "build/classes/java/main"

[test]
java = ["src/test/java"]
resources = ["src/test/resources"]
output = "build/classes/java/test"

[dependencies]
# Main dependencies go here
# example: "org.slf4j:slf4j-api" = "2.0.9"

[test_dependencies]
"junit:junit" = "4.13.2"
"org.hamcrest:hamcrest-core" = "1.3"
"""

_MAIN_CLASS_BODY = """public class {name} {{
    public static void main(String[] args) {{
        System.out.println("Hello from rrrGradle!");
    }}
}}"""

_TEST_CLASS_BODY = """import org.junit.Test;
import static org.junit.Assert.*;

public class {name}Test {{
    @Test
    public void testSampleFunction() {{
        assertTrue("Default test case", true);
    }}
}}"""


def build_parser() -> argparse.ArgumentParser:
    """The argument parser with one sub-command per action."""
    parser = argparse.ArgumentParser(
        prog="rrrGradle", description="An experimental build tool for Java"
    )
    commands = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")
    commands.add_parser("init", help="Initialize a new project")
    commands.add_parser("fetch", help="Fetch dependencies from Maven Central")
    commands.add_parser("build", help="Build the Java project")
    commands.add_parser("clean", help="Clean the build directory")
    commands.add_parser("run", help="Run the Java project (main class must be configured)")
    commands.add_parser("test", help="Run the project tests")
    package_cmd = commands.add_parser("package", help="Package the application into a JAR")
    package_cmd.add_argument("--uber", action="store_true", help="Bundle dependency JARs")
    return parser


def _write_class(directory: str, main_class: str, suffix: str, body: str) -> Path:
    *package_parts, class_name = main_class.split(".")
    package_dir = Path(directory, *package_parts)
    package_dir.mkdir(parents=True, exist_ok=True)
    header = f"package {'.'.join(package_parts)};\n\n" if package_parts else ""
    path = package_dir / f"{class_name}{suffix}.java"
    path.write_text(header + body.format(name=class_name), encoding="utf-8")
    return path


def init_project() -> list[Path]:
    """Write a starter configuration and source layout in the current directory.

    Returns the paths of the generated Java classes.
    """
    print("Initializing new rrrGradle project...")
    Path(CONFIG_FILE).write_text(CONFIG_TEMPLATE, encoding="utf-8")
    config = load_config()
    main_class = config.project.main_class
    created: list[Path] = []

    for source_set, suffix, body, label in (
        (config.main, "", _MAIN_CLASS_BODY, "main"),
        (config.test, "Test", _TEST_CLASS_BODY, "test"),
    ):
        if source_set is None:
            continue
        for directory in source_set.java:
            Path(directory).mkdir(parents=True, exist_ok=True)
            path = _write_class(directory, main_class, suffix, body)
            print(f"Created {label} class at: {path.as_posix()}")
            created.append(path)
        for directory in source_set.resources:
            Path(directory).mkdir(parents=True, exist_ok=True)

    print("Project structure created.")
    print(f"Edit `{CONFIG_FILE}` to define your dependencies.")
    return created


def clean_project() -> bool:
    """Delete the build directory; True if there was one to delete."""
    print("Cleaning build directory...")
    load_config()
    if BUILD_DIR.exists():
        shutil.rmtree(BUILD_DIR)
        print("Deleted build directory.")
        return True
    print("Nothing to clean.")
    return False


def main(argv: list[str] | None = None) -> int:
    """Run the command named in ``argv``."""
    args = build_parser().parse_args(argv)
    match args.command:
        case "init":
            init_project()
        case "fetch":
            print("Fetching dependencies...")
            fetch.fetch_dependencies(load_config())
        case "build":
            print("Building project...")
            build.build_project(load_config())
        case "clean":
            clean_project()
        case "run":
            print("Running Java application...")
            runner.run_project(load_config())
        case "test":
            print("Running tests...")
            junit_runner.test_project(load_config())
        case "package":
            print(f"Packaging project{' (uber JAR)' if args.uber else ''}")
            config = load_config()
            try:
                package.package_project(config, args.uber)
            except OSError as exc:
                print(f"✗ Packaging failed: {exc}", file=sys.stderr)
    return 0