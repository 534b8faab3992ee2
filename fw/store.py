"""Catalog persistence.

The catalog is a single pretty-printed JSON file, by default::

    {home}/.fw.json

The path can be overridden per call or with ``FW_CONFIG``.  Every load and
every save runs the sanity check, so neither a hand-edited file nor an
in-memory edit can produce a catalog with relative project paths.

Writes go to a temporary file in the same directory which is then renamed
over the target.  There is no locking: concurrent writers are unsupported.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from fw.errors import BadConfigError, ConfigIOError, HomeDirectoryError
from fw.models.config import Config
from fw.sanity import check
from fw.settings import DEFAULT_CONFIG_NAME, Environment, get_environment


def config_path(override: str | Path | None = None, env: Environment | None = None) -> Path:
    """Return the catalog location.

    Precedence: ``override`` argument, then ``FW_CONFIG``, then
    ``<home>/.fw.json``.  Raises ``HomeDirectoryError`` if the default is
    needed and no home directory is known, and ``BadConfigError`` if the
    path is not valid text.
    """
    env = env or get_environment()
    if override is None:
        override = env.config_override
    if override is not None:
        path = Path(override)
    elif env.home is None:
        raise HomeDirectoryError()
    else:
        path = env.home / DEFAULT_CONFIG_NAME

    try:
        str(path).encode("utf-8")
    except UnicodeEncodeError as exc:
        msg = f"Config path {path!r} is not valid utf8"
        raise BadConfigError(msg) from exc
    return path


def load_config(path: str | Path | None = None, env: Environment | None = None) -> Config:
    """Read, parse and sanity-check the catalog.

    Raises ``ConfigIOError`` if the file cannot be read, ``BadConfigError`` if
    it is not a valid catalog and ``InvalidConfigError`` if a project resolves
    to a relative path.
    """
    env = env or get_environment()
    path = config_path(path, env)
    logger.bind(path=str(path)).debug("Reading config")

    try:
        raw = _read_file(path)
    except OSError as exc:
        raise ConfigIOError(path, "read") from exc
    except UnicodeDecodeError as exc:
        msg = f"Config file {path} is not valid utf8"
        raise BadConfigError(msg) from exc

    try:
        config = Config.model_validate_json(raw)
    except ValidationError as exc:
        msg = f"Config file {path} is not a valid fw config: {exc}"
        raise BadConfigError(msg) from exc

    return check(config, env)


def save_config(config: Config, path: str | Path | None = None, env: Environment | None = None) -> Path:
    """Sanity-check and write the catalog.  Returns the path written."""
    env = env or get_environment()
    path = config_path(path, env)
    logger.bind(path=str(path)).info("Writing config")

    check(config, env)
    data = dump_config(config)
    try:
        _atomic_write(path, data)
    except OSError as exc:
        raise ConfigIOError(path, "write") from exc
    return path


def dump_config(config: Config) -> str:
    """Serialize the catalog exactly as ``save_config`` writes it."""
    return config.model_dump_json(indent=2) + "\n"


# -- File helpers ----------------------------------------------------------------


def _atomic_write(path: Path, data: str) -> None:
    """Write data via temp file + rename next to the real target.

    Symlinks are followed so the linked file is updated, not replaced.  An
    existing file keeps its permission bits; a new one gets the umask default.
    """
    path = path.resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        mode = path.stat().st_mode & 0o777
    except FileNotFoundError:
        mode = 0o666 & ~_current_umask()
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def _read_file(path: Path) -> str:
    """Read file contents.  Raises ``FileNotFoundError`` if missing."""
    return path.read_text(encoding="utf-8")
