"""Tag definition and assignment operations.

Project tag references are soft, so deleting a tag leaves references to it
in place (they are skipped with a warning during resolution) and assigning
an undefined tag is allowed.
"""

from __future__ import annotations

from loguru import logger

from fw.errors import DuplicateTagError, ProjectNotFoundError, TagNotFoundError
from fw.models.config import Config, Project, Tag


def list_tags(config: Config) -> dict[str, Tag]:
    """Return defined tags ordered by name."""
    return dict(sorted((config.settings.tags or {}).items()))


def create_tag(config: Config, name: str, tag: Tag) -> Config:
    """Define a new tag.  Raises ``DuplicateTagError`` if it exists."""
    tags = config.settings.tags
    if tags is None:
        tags = config.settings.tags = {}
    if name in tags:
        raise DuplicateTagError(name)
    tags[name] = tag
    logger.bind(tag_name=name).info("Created tag {}", tag)
    return config


def delete_tag(config: Config, name: str) -> Config:
    """Remove a tag definition.  Raises ``TagNotFoundError`` if missing."""
    tags = config.settings.tags
    if tags is None or name not in tags:
        raise TagNotFoundError(name)
    del tags[name]
    logger.bind(tag_name=name).info("Deleted tag")
    return config


def tag_project(config: Config, project_name: str, tag_name: str) -> Config:
    """Add ``tag_name`` to a project's tags."""
    project = _get_project(config, project_name)
    log = logger.bind(project=project_name, tag_name=tag_name)
    if tag_name not in (config.settings.tags or {}):
        log.warning("Tag is not defined in settings, it will be ignored until it is")
    if project.tags is None:
        project.tags = set()
    project.tags.add(tag_name)
    log.info("Tagged project")
    return config


def untag_project(config: Config, project_name: str, tag_name: str) -> Config:
    """Remove ``tag_name`` from a project's tags.  No-op if not tagged."""
    project = _get_project(config, project_name)
    if project.tags is None or tag_name not in project.tags:
        return config
    project.tags.discard(tag_name)
    if not project.tags:
        project.tags = None
    logger.bind(project=project_name, tag_name=tag_name).info("Untagged project")
    return config


def _get_project(config: Config, name: str) -> Project:
    project = config.projects.get(name)
    if project is None:
        raise ProjectNotFoundError(name)
    return project
