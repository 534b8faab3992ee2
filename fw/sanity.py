"""Catalog sanity check.

Runs after every load and before every save so that hand-edited files are
caught early and programmatic edits cannot persist a broken catalog.
"""

from __future__ import annotations

from loguru import logger

from fw.errors import InvalidConfigError
from fw.models.config import Config
from fw.resolver import resolve_workspace
from fw.settings import Environment, get_environment


def check(config: Config, env: Environment | None = None) -> Config:
    """Return ``config`` unchanged if every project resolves to an absolute path.

    Raises ``InvalidConfigError`` for the first project whose resolved
    workspace path is relative.
    """
    env = env or get_environment()
    log = logger.bind(task="check_sanity")
    for project in config.projects.values():
        path = resolve_workspace(config, project, env)
        if not path.is_absolute():
            raise InvalidConfigError(project.name, path)
    log.trace("{} projects ok", len(config.projects))
    return config
