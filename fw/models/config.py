"""Catalog data models.

These pydantic models mirror the persisted ``~/.fw.json`` layout one to one.
Tag and project references are plain names looked up in ``Settings.tags`` /
``Config.projects``; nothing embeds a copy of another record.

Serialization is stable: sets are written as sorted arrays and maps are
written in key order, so a load -> save cycle without edits reproduces the
same bytes.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, field_serializer, model_validator

DEFAULT_TAG_PRIORITY = 50


def _sorted_names(value: set[str] | None) -> list[str] | None:
    return sorted(value) if value is not None else None


def _sorted_mapping(value: dict[str, Any] | None, handler: SerializerFunctionWrapHandler) -> Any:
    dumped = handler(value)
    if dumped is None:
        return None
    return dict(sorted(dumped.items()))


class Tag(BaseModel):
    """Reusable bundle of overrides, identified by its key in ``Settings.tags``."""

    after_clone: str | None = None
    after_workon: str | None = None
    priority: int | None = Field(default=None, ge=0, le=255, description="Lower is applied first, default 50")
    workspace: str | None = None


class Settings(BaseModel):
    """Global defaults."""

    workspace: str
    shell: list[str] | None = None
    default_after_workon: str | None = None
    default_after_clone: str | None = None
    default_tags: set[str] | None = None
    tags: dict[str, Tag] | None = None

    @field_serializer("default_tags")
    def serialize_default_tags(self, value: set[str] | None) -> list[str] | None:
        return _sorted_names(value)

    @field_serializer("tags", mode="wrap")
    def serialize_tags(self, value: dict[str, Tag] | None, handler: SerializerFunctionWrapHandler) -> Any:
        return _sorted_mapping(value, handler)


class Project(BaseModel):
    """A source-controlled project checked out somewhere under a workspace."""

    name: str
    git: str
    after_clone: str | None = None
    after_workon: str | None = None
    override_path: str | None = None
    tags: set[str] | None = None

    @field_serializer("tags")
    def serialize_tags(self, value: set[str] | None) -> list[str] | None:
        return _sorted_names(value)


class Config(BaseModel):
    """The catalog: all projects plus global settings."""

    projects: dict[str, Project] = Field(default_factory=dict)
    settings: Settings

    @model_validator(mode="after")
    def check_project_keys(self) -> Config:
        for key, project in self.projects.items():
            if key != project.name:
                msg = f"Project key {key!r} does not match its name field {project.name!r}"
                raise ValueError(msg)
        return self

    @field_serializer("projects", mode="wrap")
    def serialize_projects(self, value: dict[str, Project], handler: SerializerFunctionWrapHandler) -> Any:
        return _sorted_mapping(value, handler)
