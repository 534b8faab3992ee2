"""Shared test fixtures: sample catalogs, a fixed environment, log capture.

Everything runs in memory or under ``tmp_path``; no real home directory or
``~/.fw.json`` is touched.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from fw.models.config import Config, Project, Settings, Tag
from fw.settings import Environment, get_environment, get_settings

HOME = Path("/my/home")


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Point FW_HOME at a temp dir so nothing falls back to the real home."""
    monkeypatch.delenv("FW_CONFIG", raising=False)
    monkeypatch.delenv("FW_LOG_LEVEL", raising=False)
    monkeypatch.setenv("FW_HOME", str(tmp_path / "home"))
    get_settings.cache_clear()
    get_environment.cache_clear()
    yield
    get_settings.cache_clear()
    get_environment.cache_clear()


@pytest.fixture
def env() -> Environment:
    return Environment(home=HOME)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture
def log_records() -> Iterator[list[dict]]:
    """Collect loguru records emitted during the test."""
    records: list[dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="TRACE")
    yield records
    logger.remove(handler_id)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


def make_project(name: str, tags: set[str] | None = None, **kwargs: str) -> Project:
    return Project(name=name, git="irrelevant", tags=tags, **kwargs)


@pytest.fixture
def config() -> Config:
    """Catalog with four tags and five projects covering the merge rules."""
    projects = [
        make_project("test1", {"tag1", "tag2"}),
        make_project("test2", {"tag1", "tag-does-not-exist"}),
        make_project(
            "test3",
            {"tag1"},
            after_clone="clone override in project",
            after_workon="workon override in project",
        ),
        make_project("test4", {"tag-does-not-exist"}),
        make_project("test5", {"tag3", "tag4"}),
    ]
    tags = {
        "tag1": Tag(after_clone="clone1", after_workon="workon1"),
        "tag2": Tag(after_clone="clone2", after_workon="workon2"),
        "tag3": Tag(after_clone="clone3", after_workon="workon3", priority=100),
        "tag4": Tag(after_clone="clone4", after_workon="workon4", priority=0),
    }
    return Config(
        projects={p.name: p for p in projects},
        settings=Settings(workspace="/test", tags=tags),
    )
