"""Data models for the project catalog."""

from fw.models.config import DEFAULT_TAG_PRIORITY, Config, Project, Settings, Tag
from fw.models.enums import MergeStrategy

__all__ = [
    "DEFAULT_TAG_PRIORITY",
    "Config",
    "MergeStrategy",
    "Project",
    "Settings",
    "Tag",
]
