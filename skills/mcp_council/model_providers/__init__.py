"""
Provider layer for the council collaborator.

Engines are local LLM command-line tools (claude, gemini, codex, or any
configured command) run as subprocesses with their own authentication.
"""

from .base import ProviderProtocol, BaseProvider
from .cli_provider import CLIProvider, CLI_CONFIGS, resolve_cli_config, run_llm, make_runner

__all__ = [
    'ProviderProtocol',
    'BaseProvider',
    'CLIProvider',
    'CLI_CONFIGS',
    'resolve_cli_config',
    'run_llm',
    'make_runner',
]
