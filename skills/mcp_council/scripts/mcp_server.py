#!/usr/bin/env python3
"""
mcp-council - MCP server for file-based council deliberation.
CLI entry point: serves the council tools over JSON-RPC on stdio.

Usage:
    # Serve (an MCP client spawns this and talks over stdin/stdout)
    mcp-council

    # Validate setup (which engine CLIs are installed)
    mcp-council --check
"""

import argparse
import asyncio
import subprocess
import sys
from pathlib import Path
from typing import Dict

from ..config import CouncilConfig, load_council_config_defaults
from ..core.emit import emit, set_output_mode
from ..model_providers.cli_provider import CLI_CONFIGS, CLIProvider, resolve_cli_config
from ..protocol.server import McpServer
from ..security.input_validator import InputValidator

INSTALL_HINTS = {
    'claude': 'npm install -g @anthropic-ai/claude-code',
    'gemini': 'npm install -g @google/gemini-cli',
    'codex': 'npm install -g @openai/codex',
}


# ============================================================================
# Setup Check
# ============================================================================

def _missing_cli_error(command: str) -> str:
    hint = INSTALL_HINTS.get(command)
    return f'CLI not found. Install: {hint}' if hint else 'CLI not found'


def check_setup(config: CouncilConfig) -> Dict[str, dict]:
    """
    Validate that the engine CLIs are installed and working.
    Returns a dict with status for each engine.
    """
    results = {}
    engines = list(CLI_CONFIGS) + [name for name in config.engines if name not in CLI_CONFIGS]

    for engine in engines:
        provider = CLIProvider(engine, resolve_cli_config(engine, config.engines))
        command = provider.config.name
        status = {'command': command, 'installed': False, 'version': None, 'error': None}
        if not provider.is_available():
            status['error'] = _missing_cli_error(command)
            results[provider.name] = status
            continue
        try:
            result = subprocess.run(
                [command, '--version'],
                capture_output=True,
                text=True,
                timeout=10
            )
            if result.returncode == 0:
                status['installed'] = True
                status['version'] = result.stdout.strip().split('\n')[0]
            else:
                status['error'] = result.stderr.strip() or 'Unknown error'
        except FileNotFoundError:
            status['error'] = _missing_cli_error(command)
        except subprocess.TimeoutExpired:
            status['error'] = 'Timeout checking CLI'
        except OSError as e:
            status['error'] = str(e)
        results[provider.name] = status

    return results


def print_setup_status(results: Dict[str, dict], default_engine: str) -> bool:
    """Print setup validation results; True when the default engine is usable."""
    print("\nmcp-council setup check")
    print("=" * 62)
    for engine, status in results.items():
        if status['installed']:
            print(f"  ✓ {engine:<10} {status['command']:<10} {status['version'] or ''}")
        else:
            print(f"  ✗ {engine:<10} {status['command']:<10} {status['error']}")
    print("=" * 62)

    default_ok = results.get(default_engine, {}).get('installed', False)
    if default_ok:
        print(f"  STATUS: default engine '{default_engine}' ready ✓")
    else:
        print(f"  STATUS: default engine '{default_engine}' unavailable - tool calls without 'engine' will fail")
    print()
    return default_ok


# ============================================================================
# CLI
# ============================================================================

def main(argv=None):
    parser = argparse.ArgumentParser(description='mcp-council - MCP server for council peer review and synthesis')
    parser.add_argument('--config', type=Path, default=None,
                        help='Path to council.config.yaml (default: the one shipped with the package)')
    parser.add_argument('--timeout', type=int, default=None,
                        help='Per-call timeout for the LLM CLI (seconds)')
    parser.add_argument('--human', action='store_true', default=None,
                        help='Human-readable diagnostics on stderr instead of JSON events')
    parser.add_argument('--check', action='store_true', help='Validate setup (test engine CLIs) and exit')

    args = parser.parse_args(argv)

    config = load_council_config_defaults(args.config)
    if args.timeout is not None:
        config.timeout = args.timeout
    if args.human is not None:
        config.human_output = args.human

    set_output_mode(human=config.human_output)

    config.timeout, violations = InputValidator().validate_timeout(config.timeout)
    if violations:
        emit({'type': 'validation_warnings', 'violations': violations})

    if args.check:
        results = check_setup(config)
        sys.exit(0 if print_setup_status(results, config.default_engine) else 1)

    # JSON-RPC is UTF-8 regardless of the platform default
    for stream in (sys.stdin, sys.stdout):
        if hasattr(stream, 'reconfigure'):
            stream.reconfigure(encoding='utf-8')

    try:
        asyncio.run(McpServer(config=config).run())
    except KeyboardInterrupt:
        pass


if __name__ == '__main__':
    main()
