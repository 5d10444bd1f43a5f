"""
Content extraction and naming utilities.
"""

import json
import re
import string
from typing import Any, List, Optional

from .models import DEFAULT_ENGINE, LabeledAnswer, Stage1Answer

# Pre-compiled regex patterns (performance optimization)
UNSAFE_FILENAME_CHARS = re.compile(r'[^A-Za-z0-9_-]')

ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def extract_content(value: Any) -> str:
    """
    Extract the answer text from a decoded artifact.

    Fallback order: string ``response`` field, string ``content`` field,
    the value itself when it is a string, pretty-printed JSON.
    """
    if isinstance(value, dict):
        if isinstance(value.get('response'), str):
            return value['response']
        if isinstance(value.get('content'), str):
            return value['content']
    if isinstance(value, str):
        return value
    return json.dumps(value, indent=2, ensure_ascii=False)


def normalize_engine(engine: Optional[str], default: str = DEFAULT_ENGINE) -> str:
    """Strip the engine name; blank or missing falls back to the default."""
    engine = (engine or '').strip()
    return engine or default


def engine_file_token(engine: str, default: str = DEFAULT_ENGINE) -> str:
    """
    Derive the filename-safe engine token.

    Unsafe characters become ``-``. The emptiness check runs on the
    ``-``-stripped form, but the returned token keeps its leading and
    trailing dashes: ``"gpt 4!"`` -> ``"gpt-4-"``, ``"!!!"`` -> default.
    """
    sanitized = UNSAFE_FILENAME_CHARS.sub('-', engine)
    if not sanitized.strip('-'):
        return default
    return sanitized


def response_label(index: int) -> str:
    """
    Anonymous label for the index-th answer.

    Examples:
        0 -> 'Response A'
        25 -> 'Response Z'
        26 -> 'Response AA'
    """
    letters = ''
    index += 1
    while index:
        index, rem = divmod(index - 1, 26)
        letters = chr(ord('A') + rem) + letters
    return f"Response {letters}"


def ascii_lower(text: str) -> str:
    return text.translate(ASCII_LOWER)


def label_answers(answers: List[Stage1Answer]) -> List[LabeledAnswer]:
    """Label answers consecutively in the given order, starting at A."""
    return [LabeledAnswer(label=response_label(i), answer=a) for i, a in enumerate(answers)]


def exclude_self_model(answers: List[Stage1Answer], self_model: Optional[str]) -> tuple[List[Stage1Answer], List[Stage1Answer]]:
    """
    Split answers into (kept, skipped) by model name, ignoring ASCII case.

    Only A-Z fold: ``"Claude"`` matches ``"CLAUDE"``, ``"ß"`` does not match
    ``"SS"``. A missing ``self_model`` keeps everything.
    """
    if self_model is None:
        return list(answers), []
    target = ascii_lower(self_model)
    kept = [a for a in answers if ascii_lower(a.model) != target]
    skipped = [a for a in answers if ascii_lower(a.model) == target]
    return kept, skipped


def preview_text(text: str, max_len: int) -> str:
    """First ``max_len`` characters, with ``...`` appended when truncated."""
    if len(text) <= max_len:
        return text
    return f"{text[:max_len]}..."
