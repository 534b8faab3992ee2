"""Domain exceptions.

Every expected failure of the engine is a ``ConfigError`` subclass.  Modules
raise these and never print or exit; turning them into a one-line message
and an exit status is the CLI's responsibility.
"""

from __future__ import annotations

from pathlib import Path


class ConfigError(Exception):
    """Base class for all catalog errors."""


class HomeDirectoryError(ConfigError):
    """The user's home directory could not be determined."""

    def __init__(self) -> None:
        super().__init__("$HOME not set, cannot determine home directory")


class ConfigIOError(ConfigError):
    """Reading or writing the catalog file failed.  The ``OSError`` is chained."""

    def __init__(self, path: Path, action: str) -> None:
        self.path = path
        super().__init__(f"Could not {action} config file {path}")


class BadConfigError(ConfigError):
    """The catalog file is not valid JSON or does not match the schema."""


class InvalidConfigError(ConfigError):
    """A project resolves to a relative workspace path."""

    def __init__(self, project: str, path: Path) -> None:
        self.project = project
        self.path = path
        super().__init__(
            f"Misconfigured project {project}: resolved path {str(path)!r} is relative which is not allowed"
        )


class DuplicateProjectError(ConfigError, ValueError):
    """Raised when adding a project whose key already exists."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Project key {name} already exists, not going to overwrite it")


class ProjectNotFoundError(ConfigError, LookupError):
    """Raised when a project key is not in the catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Project key {name} does not exist")


class NameLooksLikeUrlError(ConfigError, ValueError):
    """Raised when a project name was given where a URL was probably meant."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"{name} looks like a repo URL and not like a project name, please fix")


class ProjectNameError(ConfigError, ValueError):
    """Raised when no project name was given and none can be derived from the URL."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Cannot determine project name from URL {url}, please give one")


class DuplicateTagError(ConfigError, ValueError):
    """Raised when creating a tag whose name already exists."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tag {name} already exists")


class TagNotFoundError(ConfigError, LookupError):
    """Raised when a tag name is not defined in settings."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tag {name} does not exist")
