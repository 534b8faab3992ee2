"""CLI tests via click's CliRunner against a catalog under ``tmp_path``."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from fw import cli
from fw.cli import main

CATALOG = {
    "projects": {
        "fw": {"name": "fw", "git": "git@github.com:mriehl/fw.git", "tags": ["rust"]},
    },
    "settings": {
        "workspace": "/workspace",
        "default_after_workon": "echo hi",
        "tags": {
            "rust": {"after_clone": "cargo build", "after_workon": "cargo check", "priority": 5},
        },
    },
}


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the CLI from replacing the process-wide loguru sinks."""
    monkeypatch.setattr(cli, "setup_logging", lambda level: None)


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    path = tmp_path / "fw.json"
    path.write_text(json.dumps(CATALOG), encoding="utf-8")
    return path


@pytest.fixture
def run(catalog_file: Path):
    runner = CliRunner()

    def _run(*args: str):
        return runner.invoke(main, ["--config", str(catalog_file), *args])

    return _run


def _saved(catalog_file: Path) -> dict:
    return json.loads(catalog_file.read_text(encoding="utf-8"))


def test_projects(run) -> None:
    result = run("projects")

    assert result.exit_code == 0
    assert result.output == "fw\n"


def test_check(run) -> None:
    result = run("check")

    assert result.exit_code == 0
    assert "1 projects" in result.output


def test_print_path(run) -> None:
    result = run("print-path", "fw")

    assert result.exit_code == 0
    assert result.output == "/workspace/fw\n"


def test_gen_workon(run) -> None:
    result = run("gen-workon", "fw")

    assert result.exit_code == 0
    assert result.output == "cd /workspace/fw && cargo check\n"


def test_gen_after_clone(run) -> None:
    result = run("gen-after-clone", "fw")

    assert result.exit_code == 0
    assert result.output == "cargo build\n"


def test_inspect(run) -> None:
    result = run("inspect", "fw")

    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "name": "fw",
        "git": "git@github.com:mriehl/fw.git",
        "path": "/workspace/fw",
        "after_clone": "cargo build",
        "after_workon": " && cargo check",
    }


def test_unknown_project(run) -> None:
    result = run("print-path", "ghost")

    assert result.exit_code == 1
    assert "Project key ghost does not exist" in result.output


def test_add(run, catalog_file: Path) -> None:
    result = run("add", "https://github.com/me/other.git")

    assert result.exit_code == 0
    project = _saved(catalog_file)["projects"]["other"]
    assert project["after_workon"] == "echo hi"
    assert project["tags"] is None


def test_add_duplicate_fails(run, catalog_file: Path) -> None:
    before = catalog_file.read_text(encoding="utf-8")

    result = run("add", "https://github.com/someone/fw")

    assert result.exit_code == 1
    assert "already exists" in result.output
    assert catalog_file.read_text(encoding="utf-8") == before


def test_update(run, catalog_file: Path) -> None:
    result = run("update", "fw", "--after-clone", "make", "--override-path", "/opt/fw")

    assert result.exit_code == 0
    project = _saved(catalog_file)["projects"]["fw"]
    assert project["after_clone"] == "make"
    assert project["override_path"] == "/opt/fw"
    assert project["tags"] is None


def test_update_with_url_fails(run) -> None:
    result = run("update", "git@github.com:mriehl/fw.git", "--git", "x")

    assert result.exit_code == 1
    assert "looks like a repo URL" in result.output


def test_update_relative_override_fails(run) -> None:
    result = run("update", "fw", "--override-path", "relative")

    assert result.exit_code == 1
    assert "is relative" in result.output


def test_remove(run, catalog_file: Path) -> None:
    result = run("remove", "fw")

    assert result.exit_code == 0
    assert _saved(catalog_file)["projects"] == {}


def test_tag_commands(run, catalog_file: Path) -> None:
    assert run("tag", "create", "py", "--after-workon", "source venv/bin/activate", "--priority", "1").exit_code == 0
    assert run("tag", "add", "fw", "py").exit_code == 0
    assert run("gen-workon", "fw").output == "cd /workspace/fw && source venv/bin/activate && cargo check\n"

    result = run("tag", "list")
    assert result.output == "py\t1\nrust\t5\n"

    assert run("tag", "remove", "fw", "py").exit_code == 0
    assert run("tag", "delete", "py").exit_code == 0
    assert "py" not in _saved(catalog_file)["settings"]["tags"]


def test_tag_priority_out_of_range(run) -> None:
    result = run("tag", "create", "bad", "--priority", "300")

    assert result.exit_code == 2


def test_missing_config_file(tmp_path: Path) -> None:
    result = CliRunner().invoke(main, ["--config", str(tmp_path / "missing.json"), "projects"])

    assert result.exit_code == 1
    assert "Could not read config file" in result.output
