"""
Council tool registry.

Each tool pairs its advertised MCP descriptor with the argument model and
the pipeline stage that implements it.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from pydantic import BaseModel

from ..config import CouncilConfig
from ..core.models import LLMRunner
from ..core.review import peer_review
from ..core.schemas import FinalizeArguments, PeerReviewArguments
from ..core.synthesis import finalize

PEER_REVIEW_TOOL = 'council.peer_review'
FINALIZE_TOOL = 'council.finalize'

_TITLE_PROPERTY = {
    "type": "string",
    "description": "Conversation title/directory name"
}

_ENGINE_PROPERTY = {
    "type": "string",
    "description": "LLM model/engine (examples: sonnet, gemini, gpt, grok)",
    "default": "claude"
}


@dataclass
class ToolSpec:
    """One MCP tool: descriptor, argument model, stage coroutine."""
    name: str
    description: str
    input_schema: Dict[str, Any]
    arguments: Type[BaseModel]
    handler: Callable[..., Awaitable[BaseModel]]
    failure_prefix: str

    def descriptor(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }

    async def invoke(
        self,
        raw_arguments: Any,
        run_llm: LLMRunner,
        config: CouncilConfig,
        cwd: Optional[Path] = None
    ) -> BaseModel:
        args = self.arguments.from_arguments(raw_arguments)
        return await self.handler(args, run_llm, config, cwd)


TOOLS: Dict[str, ToolSpec] = {
    PEER_REVIEW_TOOL: ToolSpec(
        name=PEER_REVIEW_TOOL,
        description="Stage2: Read Stage1 JSON files and generate peer review using local LLM CLI",
        input_schema={
            "type": "object",
            "properties": {
                "title": _TITLE_PROPERTY,
                "engine": _ENGINE_PROPERTY,
                "self_model": {
                    "type": "string",
                    "description": "Model name to exclude from peer review (its own response)"
                }
            },
            "required": ["title"]
        },
        arguments=PeerReviewArguments,
        handler=peer_review,
        failure_prefix="Peer review failed"
    ),
    FINALIZE_TOOL: ToolSpec(
        name=FINALIZE_TOOL,
        description="Stage3: Read Stage1 and Stage2 JSON files and generate final answer using local LLM CLI",
        input_schema={
            "type": "object",
            "properties": {
                "title": _TITLE_PROPERTY,
                "engine": _ENGINE_PROPERTY
            },
            "required": ["title"]
        },
        arguments=FinalizeArguments,
        handler=finalize,
        failure_prefix="Finalize failed"
    ),
}


def list_tools() -> List[Dict[str, Any]]:
    """Descriptors for ``tools/list``, in registration order."""
    return [spec.descriptor() for spec in TOOLS.values()]
