import os
import subprocess
from unittest import mock

import pytest

from rrrgradle.config import Config, Project, SourceSet
from rrrgradle.runner import run_project, runtime_classpath


def _config(output="out/main") -> Config:
    return Config(
        project=Project(name="App", version="1.0", main_class="com.example.Main"),
        main=SourceSet(java=["src"], resources=[], output=output),
    )


def test_classpath_lists_output_then_jars(tmp_path):
    cache = tmp_path / "cache"
    cache.mkdir()
    (cache / "b.jar").write_bytes(b"")
    (cache / "a.jar").write_bytes(b"")
    (cache / "a.pom").write_text("")
    expected = os.pathsep.join(["out/main", str(cache / "a.jar"), str(cache / "b.jar")])
    assert runtime_classpath(_config(), cache) == expected


def test_classpath_without_cache_is_main_output(tmp_path):
    assert runtime_classpath(_config(), tmp_path / "missing") == "out/main"


def test_classpath_defaults_main_output(tmp_path):
    config = _config(output=None)
    assert runtime_classpath(config, tmp_path / "missing") == "build/classes/java/main"
    config.main = None
    assert runtime_classpath(config, tmp_path / "missing") == "build/classes/java/main"


def test_run_invokes_java(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    config = _config()
    done = subprocess.CompletedProcess([], 0)
    with mock.patch.object(subprocess, "run", return_value=done) as run:
        run_project(config)
    command = run.call_args.args[0]
    assert command == ["java", "-cp", runtime_classpath(config), "com.example.Main"]
    assert "Application finished successfully" in capsys.readouterr().out


def test_run_failure_exits(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    failed = subprocess.CompletedProcess([], 3)
    with mock.patch.object(subprocess, "run", return_value=failed):
        with pytest.raises(SystemExit) as info:
            run_project(_config())
    assert info.value.code == 1


def test_run_without_java_exits(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with mock.patch.object(subprocess, "run", side_effect=FileNotFoundError("java")):
        with pytest.raises(SystemExit) as info:
            run_project(_config())
    assert info.value.code == 1