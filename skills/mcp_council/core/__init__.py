"""
Council Core - staged deliberation pipeline over a file-backed workspace.

Modules:
- models: Data classes (Stage1Answer, Stage2Review, LLMResponse, CLIConfig)
- schemas: Pydantic tool arguments and results
- errors: CouncilError hierarchy
- emit: Diagnostic events on stderr with secret redaction
- workspace: .council/<title> resolution
- artifacts: Stage1/Stage2 readers, user query lookup, artifact writer
- parsing: Content extraction, engine tokens, labels
- migration: Legacy peer review filename migration
- prompts: Ranking and chairman prompt builders
- trail: Markdown documents for Stage2/Stage3 artifacts
- review: Stage 2 (peer review)
- synthesis: Stage 3 (finalize)
"""

from .models import LLMResponse, CLIConfig, Stage1Answer, Stage2Review, LabeledAnswer, LLMRunner
from .errors import (
    CouncilError,
    InvalidArgumentError,
    WorkspaceNotFoundError,
    ArtifactError,
    ArtifactNotFoundError,
    LLMInvocationError,
    StageError,
)

__all__ = [
    'LLMResponse',
    'CLIConfig',
    'Stage1Answer',
    'Stage2Review',
    'LabeledAnswer',
    'LLMRunner',
    'CouncilError',
    'InvalidArgumentError',
    'WorkspaceNotFoundError',
    'ArtifactError',
    'ArtifactNotFoundError',
    'LLMInvocationError',
    'StageError',
]
