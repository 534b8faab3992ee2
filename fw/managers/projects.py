"""Project entry operations: add, update, remove."""

from __future__ import annotations

from loguru import logger

from fw.errors import DuplicateProjectError, NameLooksLikeUrlError, ProjectNameError, ProjectNotFoundError
from fw.models.config import Config, Project

GIT_SUFFIX = ".git"
URL_PREFIXES = ("http", "git@")


def repo_name_from_url(url: str) -> str:
    """Derive a project name from the last path segment of a repository URL.

    Exactly one trailing ``.git`` is stripped, so ``fw.git.git`` yields
    ``fw.git``.  Raises ``ProjectNameError`` if nothing is left.
    """
    last_fragment = url.rsplit("/", 1)[-1]
    name = last_fragment.removesuffix(GIT_SUFFIX)
    if not name:
        raise ProjectNameError(url)
    return name


def add_project(config: Config, url: str, name: str | None = None) -> Config:
    """Add a project cloned from ``url``.

    The entry inherits ``default_after_clone``, ``default_after_workon`` and
    ``default_tags`` from settings as-is.  Raises ``DuplicateProjectError``
    if the key exists.
    """
    name = name if name is not None else repo_name_from_url(url)
    log = logger.bind(name=name, url=url)
    log.info("Prepare new project entry")

    if name in config.projects:
        raise DuplicateProjectError(name)

    settings = config.settings
    config.projects[name] = Project(
        name=name,
        git=url,
        after_clone=settings.default_after_clone,
        after_workon=settings.default_after_workon,
        override_path=None,
        tags=set(settings.default_tags) if settings.default_tags is not None else None,
    )
    log.debug("Added project {}", config.projects[name])
    return config


def update_project(
    config: Config,
    name: str,
    *,
    git: str | None = None,
    after_workon: str | None = None,
    after_clone: str | None = None,
    override_path: str | None = None,
) -> Config:
    """Replace the given fields of an existing project.

    Fields passed as None keep their current value.  Tags are always cleared:
    an explicit update supersedes tag-derived configuration.

    Raises ``NameLooksLikeUrlError`` if ``name`` looks like a repository URL
    and ``ProjectNotFoundError`` if it is not in the catalog.
    """
    log = logger.bind(name=name)
    log.info("Update project entry")

    if name.startswith(URL_PREFIXES):
        raise NameLooksLikeUrlError(name)
    project = config.projects.get(name)
    if project is None:
        raise ProjectNotFoundError(name)

    changes: dict[str, str | None] = {
        key: value
        for key, value in {
            "git": git,
            "after_workon": after_workon,
            "after_clone": after_clone,
            "override_path": override_path,
        }.items()
        if value is not None
    }
    changes["tags"] = None

    config.projects[name] = project.model_copy(update=changes)
    log.debug("Updated project {}", config.projects[name])
    return config


def remove_project(config: Config, name: str) -> Config:
    """Delete a project entry.  Raises ``ProjectNotFoundError`` if missing."""
    if name not in config.projects:
        raise ProjectNotFoundError(name)
    del config.projects[name]
    logger.bind(name=name).info("Removed project entry")
    return config
