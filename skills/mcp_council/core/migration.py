"""
Migration of legacy peer review filenames.

Older council runs wrote ``peer-review.md`` or ``peer-review-<engine>.md``.
The canonical name is ``peer-review-by-<engine>.md``. Every move here is
rename-if-absent, so running the migration again is a no-op, and failures
are reported but never raised.
"""

from pathlib import Path
from typing import List, Tuple

from .artifacts import REVIEW_PREFIX, review_path
from .emit import emit

LEGACY_REVIEW_FILE = 'peer-review.md'
LEGACY_PREFIX = 'peer-review-'
LEGACY_SUFFIX = '.md'


def move_if_absent(src: Path, dst: Path) -> bool:
    """
    Move ``src`` to ``dst`` unless ``dst`` already exists.

    Falls back to copy-then-delete when rename fails (e.g. across
    devices). Returns True when ``dst`` was created.
    """
    if dst.exists():
        return False
    try:
        src.rename(dst)
        return True
    except OSError:
        pass
    try:
        dst.write_text(src.read_text(encoding='utf-8'), encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        emit({"type": "migration_error", "from": str(src), "to": str(dst), "error": str(e)})
        return False
    try:
        src.unlink()
    except OSError as e:
        emit({"type": "migration_error", "from": str(src), "to": str(dst), "error": f"copied but not removed: {e}"})
    return True


def legacy_engine_token(name: str) -> str:
    """``peer-review-gemini.md`` -> ``gemini``; empty when the name is not legacy."""
    if not (name.startswith(LEGACY_PREFIX) and name.endswith(LEGACY_SUFFIX)):
        return ''
    if '-by-' in name:
        return ''
    return name[len(LEGACY_PREFIX):-len(LEGACY_SUFFIX)]


def migrate_legacy_reviews(base_dir: Path, engine_token: str) -> List[Tuple[Path, Path]]:
    """
    Rename legacy review files in ``base_dir`` to the canonical convention.

    ``peer-review.md`` is attributed to the engine currently running the
    review. Returns the (old, new) pairs that were migrated.
    """
    migrated = []

    legacy = base_dir / LEGACY_REVIEW_FILE
    if legacy.is_file():
        target = review_path(base_dir, engine_token)
        if move_if_absent(legacy, target):
            migrated.append((legacy, target))

    try:
        entries = sorted(base_dir.iterdir(), key=lambda p: p.name)
    except OSError as e:
        emit({"type": "migration_error", "from": str(base_dir), "error": str(e)})
        return migrated

    for path in entries:
        if not path.is_file():
            continue
        token = legacy_engine_token(path.name)
        if not token:
            continue
        target = base_dir / f"{REVIEW_PREFIX}{token}{LEGACY_SUFFIX}"
        if move_if_absent(path, target):
            migrated.append((path, target))

    for old, new in migrated:
        emit({"type": "migration", "from": old.name, "to": new.name, "dir": str(base_dir)})

    return migrated
