"""
Event emission for the council MCP server.

Provides structured diagnostic output with:
- Automatic secret redaction
- Human-readable formatting option

stdout carries the JSON-RPC stream, so every event goes to stderr.
"""

import json
import sys
import time

from ..security.input_validator import InputValidator

# Global InputValidator instance for security
INPUT_VALIDATOR = InputValidator()

# Output mode flag (set by main entry point)
HUMAN_OUTPUT = False  # Set to True for user-friendly diagnostics


def set_output_mode(human: bool = False):
    """Configure output mode flags."""
    global HUMAN_OUTPUT
    HUMAN_OUTPUT = human


def emit(event: dict):
    """Emit event to stderr with automatic secret redaction."""
    event['ts'] = int(time.time())
    redacted_event = INPUT_VALIDATOR.redact_output(event)

    if HUMAN_OUTPUT:
        _emit_human(redacted_event)
    else:
        print(json.dumps(redacted_event, ensure_ascii=False), file=sys.stderr, flush=True)


def _err(line: str):
    print(line, file=sys.stderr, flush=True)


def _emit_human(event: dict):
    """Format event as human-readable output."""
    event_type = event.get('type', '')

    if event_type == 'server_start':
        _err(f"🏛️  {event.get('server', 'mcp-council')} {event.get('version', '')} listening on stdio")

    elif event_type == 'server_stop':
        _err("👋 stdin closed, shutting down")

    elif event_type == 'status':
        stage = event.get('stage')
        prefix = f"[stage {stage}] " if stage else ""
        _err(f"📋 {prefix}{event.get('msg', '')}")

    elif event_type == 'self_model_skipped':
        _err(f"ℹ️  Skipping self_model '{event.get('model', '')}' from peer review")

    elif event_type == 'llm_call':
        _err(f"   🤖 {event.get('engine', 'unknown').upper()} thinking...")

    elif event_type == 'llm_complete':
        latency = event.get('latency_ms', 0) / 1000
        _err(f"   ✓ {event.get('engine', 'unknown').upper()} done ({latency:.1f}s)")

    elif event_type == 'llm_error':
        error = event.get('error', 'unknown error')
        _err(f"   ❌ {event.get('engine', 'unknown').upper()} failed: {error[:80]}")

    elif event_type == 'migration':
        _err(f"🔁 Migrated {event.get('from', '')} -> {event.get('to', '')}")

    elif event_type == 'migration_error':
        _err(f"⚠️  Could not migrate {event.get('from', '')}: {event.get('error', '')}")

    elif event_type == 'artifact_saved':
        _err(f"✅ Saved {event.get('kind', 'artifact')} (markdown) to: {event.get('path', '')}")

    elif event_type in ('parse_error', 'notification_error', 'invalid_id'):
        _err(f"⚠️  {event.get('msg', '')}")

    elif event_type == 'validation_warnings':
        for violation in event.get('violations', []):
            _err(f"⚠️  {violation}")

    elif event_type == 'error':
        _err(f"⚠️  Error: {event.get('msg', '')}")

    # Default: silent for unhandled events
    else:
        pass
