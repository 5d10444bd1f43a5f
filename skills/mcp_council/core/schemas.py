"""
Pydantic models for tool arguments and tool results.

Arguments arrive as untyped JSON from the MCP client; results are
serialized back into the ``text`` content of a ``tools/call`` response.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, StrictStr, ValidationError, field_validator

from .errors import InvalidArgumentError


class _ToolArguments(BaseModel):
    """Common handling for council tool arguments."""
    title: StrictStr = Field(..., description="Conversation title/directory name")
    engine: Optional[str] = Field(None, description="LLM model/engine (examples: sonnet, gemini, gpt, grok)")

    @field_validator('engine', mode='before')
    @classmethod
    def _ignore_non_string(cls, value: Any) -> Optional[str]:
        # Non-string values behave as if the field were absent
        return value if isinstance(value, str) else None

    @classmethod
    def from_arguments(cls, arguments: Any):
        """Validate raw tool arguments, raising InvalidArgumentError on failure."""
        if not isinstance(arguments, dict):
            arguments = {}
        try:
            return cls.model_validate(arguments)
        except ValidationError as e:
            raise InvalidArgumentError("Missing required parameter: title") from e


class PeerReviewArguments(_ToolArguments):
    """Arguments of ``council.peer_review``."""
    self_model: Optional[str] = Field(None, description="Model name to exclude from peer review (its own response)")

    @field_validator('self_model', mode='before')
    @classmethod
    def _ignore_non_string_self_model(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None


class FinalizeArguments(_ToolArguments):
    """Arguments of ``council.finalize``."""


class PeerReviewResult(BaseModel):
    """Result of ``council.peer_review``."""
    success: bool = True
    review_markdown_file: str
    summary: str
    review_preview: str
    markdown: str


class FinalizeResult(BaseModel):
    """Result of ``council.finalize``."""
    success: bool = True
    final_markdown_file: str
    summary: str
    final_answer_preview: str
    markdown: str
