"""Home-directory shorthand expansion for configured paths."""

from __future__ import annotations

from pathlib import Path

from fw.errors import HomeDirectoryError

HOME_SHORTHAND = "~"


def expand_path(path: str | Path, home: Path | None) -> Path:
    """Replace a leading ``~`` component with ``home``.

    Only a bare ``~`` first component is expanded (``~/code`` or ``~``);
    ``~user/code`` and paths without a leading ``~`` are returned unchanged.

    Raises ``HomeDirectoryError`` if expansion is needed but ``home`` is None.
    """
    path = Path(path)
    if not path.parts or path.parts[0] != HOME_SHORTHAND:
        return path
    if home is None:
        raise HomeDirectoryError()
    return home.joinpath(*path.parts[1:])
