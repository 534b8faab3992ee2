"""Unit tests for the sanity check."""

from __future__ import annotations

from pathlib import Path

import pytest

from fw.errors import HomeDirectoryError, InvalidConfigError
from fw.models.config import Config, Project, Settings, Tag
from fw.sanity import check
from fw.settings import Environment


def test_absolute_paths_pass(config: Config, env: Environment) -> None:
    assert check(config, env) is config


def test_relative_workspace_rejected(env: Environment) -> None:
    config = Config(
        projects={"p": Project(name="p", git="x")},
        settings=Settings(workspace="relative/workspace"),
    )

    with pytest.raises(InvalidConfigError) as exc_info:
        check(config, env)

    assert exc_info.value.project == "p"
    assert exc_info.value.path == Path("relative/workspace/p")


def test_relative_override_path_rejected(env: Environment) -> None:
    config = Config(
        projects={
            "good": Project(name="good", git="x"),
            "bad": Project(name="bad", git="x", override_path="code/bad"),
        },
        settings=Settings(workspace="/w"),
    )

    with pytest.raises(InvalidConfigError, match="bad"):
        check(config, env)


def test_relative_tag_workspace_rejected(env: Environment) -> None:
    config = Config(
        projects={"p": Project(name="p", git="x", tags={"t"})},
        settings=Settings(workspace="/w", tags={"t": Tag(workspace="rel")}),
    )

    with pytest.raises(InvalidConfigError):
        check(config, env)


def test_home_relative_paths_pass(env: Environment) -> None:
    config = Config(
        projects={"p": Project(name="p", git="x", override_path="~/p")},
        settings=Settings(workspace="~/w"),
    )

    assert check(config, env) is config


def test_home_relative_without_home_raises() -> None:
    config = Config(
        projects={"p": Project(name="p", git="x")},
        settings=Settings(workspace="~/w"),
    )

    with pytest.raises(HomeDirectoryError):
        check(config, Environment(home=None))


def test_empty_catalog_passes(env: Environment) -> None:
    config = Config(settings=Settings(workspace="relative"))

    assert check(config, env) is config
