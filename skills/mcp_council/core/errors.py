"""
Error types for council tool handlers.

Every failure inside a tool handler is a ``CouncilError``. The protocol
server maps all of them to one JSON-RPC code (-32603); the subclasses exist
so callers and tests can tell causes apart.
"""


class CouncilError(Exception):
    """Base class for all tool handler failures."""


class InvalidArgumentError(CouncilError):
    """Missing or malformed tool call parameters (title, tool name, params)."""


class WorkspaceNotFoundError(CouncilError):
    """The ``.council/<title>`` directory does not exist."""


class ArtifactError(CouncilError):
    """An artifact could not be read or written."""


class ArtifactNotFoundError(ArtifactError):
    """No Stage1 answers or Stage2 reviews are present in the workspace."""


class LLMInvocationError(CouncilError):
    """The LLM command-line tool failed (launch error, non-zero exit, timeout)."""

    def __init__(self, engine: str, error: str):
        self.engine = engine
        self.error = error
        super().__init__(f"{engine} CLI failed: {error}")


class StageError(CouncilError):
    """A pipeline stage failed; wraps the underlying cause with stage context."""
