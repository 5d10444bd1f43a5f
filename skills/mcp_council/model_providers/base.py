"""
Provider interface for the council collaborator.

``run_llm`` and ``mcp-council --check`` only talk to engines through this
interface: ``name`` keys the results, ``is_available`` gates the setup
check, ``query`` runs one review or synthesis prompt.
"""

from abc import ABC, abstractmethod
from typing import Optional
import time

from ..core.models import LLMResponse


class ProviderProtocol(ABC):
    """
    One engine that turns a council prompt into text.

    Engine-side failures (bad exit, timeout, missing binary) come back as an
    unsuccessful LLMResponse; ``run_llm`` decides whether to raise.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Engine name as passed in the tool call (``claude``, ``sonnet``, ...)."""
        ...

    @abstractmethod
    def is_available(self) -> bool:
        """True when the engine can be launched on this machine."""
        ...

    @abstractmethod
    async def query(self, prompt: str, timeout: int) -> LLMResponse:
        """Run ``prompt`` to completion within ``timeout`` seconds."""
        ...


class BaseProvider(ProviderProtocol):
    """Stores the engine name and stamps latency onto every response."""

    def __init__(self, engine: str):
        self._engine = engine

    @property
    def name(self) -> str:
        return self._engine

    def _create_response(
        self,
        content: str,
        start_time: float,
        success: bool = True,
        error: Optional[str] = None
    ) -> LLMResponse:
        return LLMResponse(
            content=content,
            model=self._engine,
            latency_ms=int((time.time() - start_time) * 1000),
            success=success,
            error=error
        )

    def _create_error_response(self, error: str, start_time: float) -> LLMResponse:
        return self._create_response('', start_time, success=False, error=error)
