import subprocess
from pathlib import Path
from unittest import mock

import pytest

from rrrgradle.cli import build_parser, clean_project, init_project, main
from rrrgradle.config import load_config

EMPTY_CONFIG = """
[project]
name = "Demo"
version = "1.0"
main_class = "com.example.Main"

[main]
java = []
resources = []

[test]
java = []
resources = []
"""


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_parser_package_uber():
    args = build_parser().parse_args(["package", "--uber"])
    assert args.command == "package"
    assert args.uber is True


def test_parser_package_default_not_uber():
    assert build_parser().parse_args(["package"]).uber is False


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_parser_rejects_unknown_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["deploy"])


def test_init_writes_loadable_config(workdir):
    init_project()
    config = load_config()
    assert config.project.name == "MyJavaApp"
    assert config.project.main_class == "com.example.Main"
    assert config.test_dependencies == {"junit:junit": "4.13.2", "org.hamcrest:hamcrest-core": "1.3"}


def test_init_creates_classes_and_dirs(workdir):
    created = init_project()
    main_file = Path("src/main/java/com/example/Main.java")
    test_file = Path("src/test/java/com/example/MainTest.java")
    assert created == [main_file, test_file]
    main_text = main_file.read_text(encoding="utf-8")
    assert main_text.startswith("package com.example;")
    assert "public class Main {" in main_text
    assert "Hello from rrrGradle!" in main_text
    test_text = test_file.read_text(encoding="utf-8")
    assert "public class MainTest {" in test_text
    assert "import org.junit.Test;" in test_text
    assert Path("src/main/resources").is_dir()
    assert Path("src/test/resources").is_dir()


def test_clean_removes_build_dir(workdir):
    Path("rrrgradle.toml").write_text(EMPTY_CONFIG, encoding="utf-8")
    Path("build/classes").mkdir(parents=True)
    assert clean_project() is True
    assert not Path("build").exists()


def test_clean_nothing_to_clean(workdir):
    Path("rrrgradle.toml").write_text(EMPTY_CONFIG, encoding="utf-8")
    assert clean_project() is False


def test_clean_without_config_fails(workdir):
    with pytest.raises(FileNotFoundError):
        clean_project()


def test_main_clean(workdir, capsys):
    Path("rrrgradle.toml").write_text(EMPTY_CONFIG, encoding="utf-8")
    Path("build").mkdir()
    assert main(["clean"]) == 0
    assert not Path("build").exists()
    assert "Deleted build directory." in capsys.readouterr().out


def test_main_build_without_sources(workdir, capsys):
    Path("rrrgradle.toml").write_text(EMPTY_CONFIG, encoding="utf-8")
    assert main(["build"]) == 0
    out = capsys.readouterr().out
    assert "No Java files found to compile in main source set." in out
    assert Path("build/classes/java/main").is_dir()


def test_main_package_reports_jar_failure(workdir, capsys):
    Path("rrrgradle.toml").write_text(EMPTY_CONFIG, encoding="utf-8")
    failed = subprocess.CompletedProcess(args=["jar"], returncode=1)
    with mock.patch("rrrgradle.package.subprocess.run", return_value=failed) as run:
        assert main(["package", "--uber"]) == 0
    assert run.call_args.args[0][:2] == ["jar", "cfm"]
    captured = capsys.readouterr()
    assert "Packaging project (uber JAR)" in captured.out
    assert "✗ Packaging failed: jar command failed" in captured.err