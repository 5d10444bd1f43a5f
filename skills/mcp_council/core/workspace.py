"""
Council workspace resolution.

A workspace is the ``.council/<title>/`` directory holding every artifact of
one deliberation. It is created upstream; this module only locates it.
"""

from pathlib import Path
from typing import Optional

from .errors import InvalidArgumentError, WorkspaceNotFoundError
from ..security.input_validator import InputValidator

COUNCIL_DIR_NAME = '.council'
MAX_PARENT_LEVELS = 5

_VALIDATOR = InputValidator()


def find_council_dir(
    cwd: Optional[Path] = None,
    dir_name: str = COUNCIL_DIR_NAME,
    max_levels: int = MAX_PARENT_LEVELS
) -> Path:
    """
    Find the council root directory.

    Checks the current directory first, then up to ``max_levels`` parents.
    Falls back to ``<cwd>/.council`` even though it does not exist, so the
    caller reports a "directory not found" error with the full path.
    """
    cwd = cwd or Path.cwd()

    for parent in [cwd] + list(cwd.parents)[:max_levels]:
        candidate = parent / dir_name
        if candidate.is_dir():
            return candidate

    return cwd / dir_name


def resolve_workspace(
    title: str,
    cwd: Optional[Path] = None,
    dir_name: str = COUNCIL_DIR_NAME,
    max_levels: int = MAX_PARENT_LEVELS
) -> Path:
    """
    Resolve ``.council/<title>`` and require it to exist.

    Raises:
        InvalidArgumentError: title is absolute or escapes the council dir
        WorkspaceNotFoundError: the title directory does not exist
    """
    validation = _VALIDATOR.validate_title(title)
    if not validation.is_valid:
        raise InvalidArgumentError(f"Invalid title '{title}': {'; '.join(validation.violations)}")

    cwd = cwd or Path.cwd()
    base_dir = find_council_dir(cwd, dir_name, max_levels) / title

    if not base_dir.is_dir():
        raise WorkspaceNotFoundError(
            f"Directory not found: {base_dir} (searched from: {cwd})"
        )
    return base_dir
