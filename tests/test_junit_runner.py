import os
import subprocess
from unittest import mock

import pytest

from rrrgradle import junit_runner
from rrrgradle.config import Config, Project, SourceSet


def _config() -> Config:
    return Config(
        project=Project(name="App", version="1.0", main_class="com.example.Main"),
        main=SourceSet(java=[], resources=[], output="out/main"),
        test=SourceSet(java=[], resources=[], output="out/test"),
    )


def _write_classes(root):
    package = root / "out/test/com/example"
    package.mkdir(parents=True)
    (package / "MainTest.class").write_bytes(b"")
    (package / "Main.class").write_bytes(b"")
    (package / "OtherTest.java").write_text("")
    (root / "out/test/TopTest.class").write_bytes(b"")


def test_find_test_classes(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_classes(tmp_path)
    assert junit_runner.find_test_classes("out/test") == ["TopTest", "com.example.MainTest"]


def test_find_test_classes_missing_dir(tmp_path):
    assert junit_runner.find_test_classes(tmp_path / "nothing") == []


def test_classpath_order(tmp_path):
    cache = tmp_path / "cache"
    cache.mkdir()
    (cache / "junit.jar").write_bytes(b"")
    expected = os.pathsep.join(["out/test", "out/main", str(cache / "junit.jar")])
    assert junit_runner.test_classpath(_config(), cache) == expected


def test_classpath_defaults(tmp_path):
    config = _config()
    config.main = None
    config.test = None
    expected = os.pathsep.join(["build/classes/java/test", "build/classes/java/main"])
    assert junit_runner.test_classpath(config, tmp_path / "missing") == expected


def test_no_test_classes(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    with mock.patch.object(subprocess, "run") as run:
        assert junit_runner.test_project(_config()) == []
    assert run.call_count == 0
    assert "No test classes found." in capsys.readouterr().out


def test_runs_junit(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_classes(tmp_path)
    config = _config()
    done = subprocess.CompletedProcess([], 0)
    with mock.patch.object(subprocess, "run", return_value=done) as run:
        classes = junit_runner.test_project(config)
    command = run.call_args.args[0]
    assert classes == junit_runner.find_test_classes("out/test")
    assert command[:4] == ["java", "-cp", junit_runner.test_classpath(config), "org.junit.runner.JUnitCore"]
    assert command[4:] == classes


def test_failing_tests_exit(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_classes(tmp_path)
    failed = subprocess.CompletedProcess([], 1)
    with mock.patch.object(subprocess, "run", return_value=failed):
        with pytest.raises(SystemExit) as info:
            junit_runner.test_project(_config())
    assert info.value.code == 1


def test_missing_java_exits(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_classes(tmp_path)
    with mock.patch.object(subprocess, "run", side_effect=FileNotFoundError("java")):
        with pytest.raises(SystemExit) as info:
            junit_runner.test_project(_config())
    assert info.value.code == 1