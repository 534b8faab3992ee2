from __future__ import annotations

import shlex
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click

from fw.errors import ConfigError, ProjectNotFoundError
from fw.log import setup_logging
from fw.managers.projects import add_project, remove_project, update_project
from fw.managers.tags import create_tag, delete_tag, list_tags, tag_project, untag_project
from fw.models.config import Config, Project, Tag
from fw.resolver import resolve_after_clone, resolve_after_workon, resolve_project, resolve_workspace
from fw.settings import get_settings
from fw.store import load_config, save_config


@contextmanager
def _user_errors() -> Iterator[None]:
    """Render domain errors as a one-line message with exit status 1."""
    try:
        yield
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


def _load(ctx: click.Context) -> Config:
    return load_config(ctx.obj)


def _save(ctx: click.Context, config: Config) -> None:
    save_config(config, ctx.obj)


def _project(config: Config, name: str) -> Project:
    project = config.projects.get(name)
    if project is None:
        raise ProjectNotFoundError(name)
    return project


@click.group()
@click.option(
    "--config",
    "config_file",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Catalog file (default: from FW_CONFIG or ~/.fw.json).",
)
@click.option("--log-level", default=None, help="Log level (default: from FW_LOG_LEVEL or WARNING).")
@click.pass_context
def main(ctx: click.Context, config_file: Path | None, log_level: str | None) -> None:
    """fw - catalog of workspace projects and their hook commands."""
    setup_logging(log_level or get_settings().log_level)
    ctx.obj = config_file


# ---------------------------------------------------------------------------
# Project entries
# ---------------------------------------------------------------------------


@main.command()
@click.argument("url")
@click.option("--name", default=None, help="Project name (default: derived from the URL).")
@click.pass_context
def add(ctx: click.Context, url: str, name: str | None) -> None:
    """Add a project cloned from URL."""
    with _user_errors():
        config = add_project(_load(ctx), url, name)
        _save(ctx, config)


@main.command()
@click.argument("name")
@click.option("--git", default=None, help="New repository URL.")
@click.option("--after-workon", default=None, help="Command to run after entering the project.")
@click.option("--after-clone", default=None, help="Command to run after cloning the project.")
@click.option("--override-path", default=None, help="Absolute or ~-relative checkout path.")
@click.pass_context
def update(
    ctx: click.Context,
    name: str,
    git: str | None,
    after_workon: str | None,
    after_clone: str | None,
    override_path: str | None,
) -> None:
    """Update fields of project NAME.  Clears its tags."""
    with _user_errors():
        config = update_project(
            _load(ctx),
            name,
            git=git,
            after_workon=after_workon,
            after_clone=after_clone,
            override_path=override_path,
        )
        _save(ctx, config)


@main.command()
@click.argument("name")
@click.pass_context
def remove(ctx: click.Context, name: str) -> None:
    """Remove project NAME from the catalog (the checkout is left alone)."""
    with _user_errors():
        _save(ctx, remove_project(_load(ctx), name))


@main.command()
@click.pass_context
def projects(ctx: click.Context) -> None:
    """List project names."""
    with _user_errors():
        for name in sorted(_load(ctx).projects):
            click.echo(name)


@main.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Load the catalog and verify every project path is absolute."""
    with _user_errors():
        config = _load(ctx)
    click.echo(f"OK: {len(config.projects)} projects")


# ---------------------------------------------------------------------------
# Resolution output
# ---------------------------------------------------------------------------


@main.command("print-path")
@click.argument("name")
@click.pass_context
def print_path(ctx: click.Context, name: str) -> None:
    """Print the resolved checkout path of project NAME."""
    with _user_errors():
        config = _load(ctx)
        click.echo(str(resolve_workspace(config, _project(config, name))))


@main.command("gen-workon")
@click.argument("name")
@click.pass_context
def gen_workon(ctx: click.Context, name: str) -> None:
    """Print the shell command that enters project NAME."""
    with _user_errors():
        config = _load(ctx)
        project = _project(config, name)
        path = resolve_workspace(config, project)
        click.echo(f"cd {shlex.quote(str(path))}{resolve_after_workon(config, project)}")


@main.command("gen-after-clone")
@click.argument("name")
@click.pass_context
def gen_after_clone(ctx: click.Context, name: str) -> None:
    """Print the post-clone command of project NAME (empty if none)."""
    with _user_errors():
        config = _load(ctx)
        click.echo(resolve_after_clone(config, _project(config, name)) or "")


@main.command()
@click.argument("name")
@click.pass_context
def inspect(ctx: click.Context, name: str) -> None:
    """Show every resolved value of project NAME as JSON."""
    with _user_errors():
        config = _load(ctx)
        click.echo(resolve_project(config, _project(config, name)).model_dump_json(indent=2))


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


@main.group()
def tag() -> None:
    """Tag definition and assignment commands."""


@tag.command("list")
@click.pass_context
def tag_list(ctx: click.Context) -> None:
    """List defined tags with their priority."""
    with _user_errors():
        for name, definition in list_tags(_load(ctx)).items():
            priority = definition.priority if definition.priority is not None else "-"
            click.echo(f"{name}\t{priority}")


@tag.command("create")
@click.argument("name")
@click.option("--after-clone", default=None, help="Command contributed after cloning.")
@click.option("--after-workon", default=None, help="Command contributed after entering.")
@click.option("--priority", default=None, type=click.IntRange(0, 255), help="Lower is applied first (default 50).")
@click.option("--workspace", default=None, help="Workspace directory for tagged projects.")
@click.pass_context
def tag_create(
    ctx: click.Context,
    name: str,
    after_clone: str | None,
    after_workon: str | None,
    priority: int | None,
    workspace: str | None,
) -> None:
    """Define tag NAME."""
    definition = Tag(after_clone=after_clone, after_workon=after_workon, priority=priority, workspace=workspace)
    with _user_errors():
        _save(ctx, create_tag(_load(ctx), name, definition))


@tag.command("delete")
@click.argument("name")
@click.pass_context
def tag_delete(ctx: click.Context, name: str) -> None:
    """Delete tag NAME.  Projects keep their (now dangling) references."""
    with _user_errors():
        _save(ctx, delete_tag(_load(ctx), name))


@tag.command("add")
@click.argument("project_name")
@click.argument("tag_name")
@click.pass_context
def tag_add(ctx: click.Context, project_name: str, tag_name: str) -> None:
    """Tag project PROJECT_NAME with TAG_NAME."""
    with _user_errors():
        _save(ctx, tag_project(_load(ctx), project_name, tag_name))


@tag.command("remove")
@click.argument("project_name")
@click.argument("tag_name")
@click.pass_context
def tag_remove(ctx: click.Context, project_name: str, tag_name: str) -> None:
    """Remove TAG_NAME from project PROJECT_NAME."""
    with _user_errors():
        _save(ctx, untag_project(_load(ctx), project_name, tag_name))


if __name__ == "__main__":
    main()
