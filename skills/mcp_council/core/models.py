"""
Data classes for council artifacts.

Contains the structured types shared across the pipeline stages.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional


# Default constants (defined here to avoid circular imports)
DEFAULT_ENGINE = 'claude'  # Engine used when the caller passes none or a blank one


@dataclass
class LLMResponse:
    """Response from a single LLM query via CLI."""
    content: str
    model: str
    latency_ms: int
    success: bool
    error: Optional[str] = None


@dataclass
class CLIConfig:
    """Configuration for a CLI tool invocation."""
    name: str
    args: List[str] = field(default_factory=list)
    use_stdin: bool = False
    prompt_flag: Optional[str] = '-p'  # None: prompt is the last positional argument


@dataclass
class Stage1Answer:
    """One model's answer to the user question, as found on disk."""
    model: str
    response: str
    raw: Any = field(repr=False)  # Parsed JSON, or the file text for markdown answers
    path: Optional[Path] = None


@dataclass
class Stage2Review:
    """One engine's ranking of the Stage1 answers."""
    engine: str
    review: str
    raw: Any = field(repr=False)
    path: Optional[Path] = None


@dataclass
class LabeledAnswer:
    """A Stage1 answer under its anonymous label ("Response A", ...)."""
    label: str
    answer: Stage1Answer


# The collaborator contract: (engine, prompt) -> LLM output text.
# Implementations raise a CouncilError subclass on any failure.
LLMRunner = Callable[[str, str], Awaitable[str]]
