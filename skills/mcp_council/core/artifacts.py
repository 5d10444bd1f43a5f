"""
Artifact reading and writing for a council workspace.

Stage1 answers and Stage2 reviews may be JSON documents or plain
markdown/text. JSON is tried first; anything that does not decode is taken
verbatim as the answer or review text. Missing metadata (model, engine) is
derived from the filename.
"""

import json
from pathlib import Path
from typing import Any, List, Optional, Tuple

from .errors import ArtifactError, ArtifactNotFoundError
from .models import Stage1Answer, Stage2Review
from .parsing import extract_content

QUERY_FILES = ('query.txt', 'user_query.txt', 'question.txt', 'input.txt')
UNKNOWN_QUERY = 'Unknown query'

REVIEW_PREFIX = 'peer-review-by-'


def is_stage1_file(name: str) -> bool:
    """Stage1 answers: ``<model>-answer.md`` or ``<model>-answer.json``."""
    return (
        '-answer.md' in name or name.endswith('answer.md')
        or '-answer.json' in name or name.endswith('answer.json')
    )


def is_stage1_json_file(name: str) -> bool:
    return '-answer.json' in name or name.endswith('answer.json')


def is_stage2_file(name: str) -> bool:
    """Stage2 reviews: anything with ``peer-review`` in its name."""
    return 'peer-review' in name


def list_files(base_dir: Path, predicate) -> List[Path]:
    """Regular files in ``base_dir`` whose name satisfies ``predicate``, sorted by name."""
    try:
        entries = sorted(base_dir.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise ArtifactError(f"Failed to read directory: {base_dir}: {e}") from e
    return [p for p in entries if p.is_file() and predicate(p.name)]


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise ArtifactError(f"Failed to read file: {path}: {e}") from e


def _decode(content: str) -> Tuple[bool, Any]:
    """Return (is_json, value)."""
    try:
        return True, json.loads(content)
    except json.JSONDecodeError:
        return False, content


def _string_field(value: Any, key: str) -> Optional[str]:
    if isinstance(value, dict) and isinstance(value.get(key), str):
        return value[key]
    return None


def read_stage1_answer(path: Path) -> Stage1Answer:
    """Load one Stage1 answer file (JSON or text)."""
    content = _read_text(path)
    model_from_name = path.stem.replace('-answer', '')

    is_json, value = _decode(content)
    if is_json:
        return Stage1Answer(
            model=_string_field(value, 'model') or model_from_name,
            response=extract_content(value),
            raw=value,
            path=path
        )

    return Stage1Answer(model=model_from_name, response=content, raw=content, path=path)


def read_stage2_review(path: Path) -> Stage2Review:
    """Load one Stage2 review file (JSON or text)."""
    content = _read_text(path)
    engine_from_name = path.stem.replace(REVIEW_PREFIX, '')

    is_json, value = _decode(content)
    if is_json:
        review = _string_field(value, 'review')
        return Stage2Review(
            engine=_string_field(value, 'engine') or engine_from_name,
            review=review if review is not None else extract_content(value),
            raw=value,
            path=path
        )

    return Stage2Review(engine=engine_from_name, review=content, raw=content, path=path)


def load_stage1_answers(base_dir: Path) -> List[Stage1Answer]:
    """
    Load every Stage1 answer in the workspace.

    Raises:
        ArtifactNotFoundError: no answer files are present
    """
    files = list_files(base_dir, is_stage1_file)
    if not files:
        raise ArtifactNotFoundError(f"No Stage1 answer files found in {base_dir}")
    return [read_stage1_answer(p) for p in files]


def load_stage2_reviews(base_dir: Path) -> List[Stage2Review]:
    """Load every Stage2 review in the workspace (possibly none)."""
    return [read_stage2_review(p) for p in list_files(base_dir, is_stage2_file)]


def extract_user_query(base_dir: Path) -> str:
    """
    Find the original user question.

    Tries the dedicated query files in order, then ``query``/``user_query``
    fields of Stage1 JSON answers, then gives up with ``"Unknown query"``.
    Never raises.
    """
    for name in QUERY_FILES:
        path = base_dir / name
        if path.is_file():
            try:
                return path.read_text(encoding='utf-8').strip()
            except (OSError, UnicodeDecodeError):
                continue

    try:
        json_files = list_files(base_dir, is_stage1_json_file)
    except ArtifactError:
        json_files = []

    for path in json_files:
        try:
            is_json, value = _decode(path.read_text(encoding='utf-8'))
        except (OSError, UnicodeDecodeError):
            continue
        if not is_json:
            continue
        query = _string_field(value, 'query') or _string_field(value, 'user_query')
        if query is not None:
            return query

    return UNKNOWN_QUERY


def review_path(base_dir: Path, engine_token: str) -> Path:
    return base_dir / f"{REVIEW_PREFIX}{engine_token}.md"


def final_answer_path(base_dir: Path, engine_token: str) -> Path:
    return base_dir / f"final-answer-by-{engine_token}.md"


def write_artifact(path: Path, text: str) -> Path:
    """Write (or overwrite) an artifact as UTF-8 text."""
    try:
        path.write_text(text, encoding='utf-8')
    except OSError as e:
        raise ArtifactError(
            f"Failed to write file: {path} (current dir: {Path.cwd()}): {e}"
        ) from e
    return path
