"""Config resolver -- merges project overrides, tags and global settings into
the effective workspace path and hook commands of a project.

Resolution order (highest first):

1. Explicit project field (``override_path``, ``after_clone``, ``after_workon``).
2. Values contributed by the project's tags, ordered by ``(priority, tag name)``.
3. Global settings (``settings.workspace``) or nothing.

Tag references are soft: a name missing from ``settings.tags`` is logged and
skipped, never an error.  A tag that exists but does not set the field being
resolved is skipped silently.

Every function here is pure apart from logging; the only failure is path
expansion without a home directory (``HomeDirectoryError``).
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from loguru import logger
from pydantic import BaseModel

from fw.models.config import DEFAULT_TAG_PRIORITY, Config, Project, Tag
from fw.models.enums import MergeStrategy
from fw.paths import expand_path
from fw.settings import Environment, get_environment

COMMAND_SEPARATOR = " && "

TagAccessor = Callable[[Tag], str | None]
T = TypeVar("T")

# ---------------------------------------------------------------------------
# Output model
# ---------------------------------------------------------------------------


class ResolvedProject(BaseModel):
    """Fully resolved view of a single project."""

    name: str
    git: str
    path: Path
    after_clone: str | None = None
    after_workon: str = ""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def resolve_workspace(config: Config, project: Project, env: Environment | None = None) -> Path:
    """Return the directory the project is checked out in.

    ``override_path`` wins outright and skips tag resolution.  Otherwise the
    highest-priority tag ``workspace`` (or ``settings.workspace``) is joined
    with the project name.  ``~`` is expanded in both cases.
    """
    env = env or get_environment()
    if project.override_path is not None:
        return expand_path(project.override_path, env.home)

    workspace = _first(
        merge_from_tags(config, project, _tag_workspace, MergeStrategy.LAST_WINS),
        config.settings.workspace,
    )
    logger.bind(project=project.name).trace("Resolved workspace {}", workspace)
    return expand_path(Path(workspace) / project.name, env.home)


def resolve_after_clone(config: Config, project: Project) -> str | None:
    """Return the command to run after cloning, or None."""
    if project.after_clone is not None:
        return project.after_clone
    return merge_from_tags(config, project, _tag_after_clone, MergeStrategy.ORDERED_JOIN)


def resolve_after_workon(config: Config, project: Project) -> str:
    """Return the command suffix to append after entering the project.

    The result is either empty or starts with ``" && "`` so callers can append
    it directly to their ``cd`` command.
    """
    command = project.after_workon
    if command is None:
        command = merge_from_tags(config, project, _tag_after_workon, MergeStrategy.ORDERED_JOIN)
    if command is None:
        return ""
    return COMMAND_SEPARATOR + command


def resolve_project(config: Config, project: Project, env: Environment | None = None) -> ResolvedProject:
    """Resolve every derived field of ``project`` at once."""
    return ResolvedProject(
        name=project.name,
        git=project.git,
        path=resolve_workspace(config, project, env),
        after_clone=resolve_after_clone(config, project),
        after_workon=resolve_after_workon(config, project),
    )


def merge_from_tags(
    config: Config,
    project: Project,
    accessor: TagAccessor,
    strategy: MergeStrategy,
) -> str | None:
    """Merge one field over the project's tags.

    Values are ordered by ascending ``(priority, tag name)`` so the result is
    independent of the iteration order of ``project.tags``.  Returns None when
    no tag contributes a value.
    """
    log = logger.bind(project=project.name, tags=_tag_names(project))
    log.trace("Resolving")

    defined_tags = config.settings.tags
    if project.tags is None or defined_tags is None:
        return None

    contributions: list[tuple[int, str, str]] = []
    for tag_name in project.tags:
        tag = defined_tags.get(tag_name)
        if tag is None:
            log.warning("Ignoring tag since it was not found in the config (missing_tag={})", tag_name)
            continue
        value = accessor(tag)
        if value is None:
            continue
        contributions.append((_tag_priority(tag_name, tag), tag_name, value))

    log.trace("before sort: {}", contributions)
    contributions.sort(key=lambda c: (c[0], c[1]))
    log.trace("after sort: {}", contributions)

    if not contributions:
        return None

    values = [value for _, _, value in contributions]
    resolved = values[-1] if strategy is MergeStrategy.LAST_WINS else COMMAND_SEPARATOR.join(values)
    log.debug("Resolved {!r} ({})", resolved, strategy)
    return resolved


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _tag_workspace(tag: Tag) -> str | None:
    return tag.workspace


def _tag_after_clone(tag: Tag) -> str | None:
    return tag.after_clone


def _tag_after_workon(tag: Tag) -> str | None:
    return tag.after_workon


def _tag_priority(name: str, tag: Tag) -> int:
    if tag.priority is not None:
        return tag.priority
    logger.bind(tag_name=name).debug(
        "No tag priority set, using default ({}). Tags with low priority are applied first and "
        "tags with equal priority are applied in alphabetical name order, so consider setting it.",
        DEFAULT_TAG_PRIORITY,
    )
    return DEFAULT_TAG_PRIORITY


def _tag_names(project: Project) -> list[str] | None:
    return sorted(project.tags) if project.tags is not None else None


def _first(override: T | None, default: T) -> T:
    """Return the override if not None, otherwise the default."""
    return override if override is not None else default
