"""
Tests for title validation, timeout bounds and event redaction.
"""

import json
import sys
from dataclasses import fields
from pathlib import Path

# Ensure mcp_council package is importable
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from mcp_council.core import emit as emit_module
from mcp_council.security.input_validator import InputValidator, ValidationResult


class TestTitleValidation:

    def test_plain_and_nested_titles_valid(self):
        validator = InputValidator()
        assert validator.validate_title("capital").is_valid
        assert validator.validate_title("2024/capital").is_valid

    def test_result_carries_only_verdict_and_violations(self):
        assert [f.name for f in fields(ValidationResult)] == ["is_valid", "violations"]
        assert InputValidator().validate_title("ok") == ValidationResult(is_valid=True, violations=[])

    def test_traversal_rejected(self):
        result = InputValidator().validate_title("../secrets")
        assert not result.is_valid
        assert "Path traversal in title" in result.violations

    def test_absolute_rejected(self):
        validator = InputValidator()
        assert not validator.validate_title("/tmp/x").is_valid
        assert not validator.validate_title("C:\\Users\\x").is_valid

    def test_length_and_nul(self):
        validator = InputValidator()
        assert not validator.validate_title("a" * 256).is_valid
        assert not validator.validate_title("bad\x00name").is_valid


class TestTimeoutBounds:

    def test_within_range_unchanged(self):
        assert InputValidator().validate_timeout(120) == (120, [])

    def test_clamped_low_and_high(self):
        validator = InputValidator()
        low, low_violations = validator.validate_timeout(1)
        high, high_violations = validator.validate_timeout(9999)

        assert low == InputValidator.MIN_TIMEOUT and low_violations
        assert high == InputValidator.MAX_TIMEOUT and high_violations


class TestRedaction:

    def test_redact_secrets_returns_text(self):
        redacted = InputValidator()._redact_secrets("token ghp_abcdefghijklmnopqrstu here")
        assert redacted == "token [REDACTED_GITHUB_TOKEN] here"

    def test_nested_values_redacted(self):
        event = {
            "type": "llm_error",
            "error": "auth failed for sk-ant-abcdefghijklmnop",
            "details": ["token ghp_abcdefghijklmnopqrstu"],
            "latency_ms": 12,
        }

        redacted = InputValidator().redact_output(event)

        assert "sk-ant-" not in redacted["error"]
        assert "[REDACTED_ANTHROPIC_KEY]" in redacted["error"]
        assert "[REDACTED_GITHUB_TOKEN]" in redacted["details"][0]
        assert redacted["latency_ms"] == 12

    def test_emit_writes_redacted_json_to_stderr(self, capsys, monkeypatch):
        monkeypatch.setattr(emit_module, "HUMAN_OUTPUT", False)

        emit_module.emit({"type": "llm_error", "engine": "gemini", "error": "key AIzaSyA1234567890abcdef leaked"})

        captured = capsys.readouterr()
        assert captured.out == ""
        event = json.loads(captured.err.strip())
        assert event["type"] == "llm_error"
        assert "ts" in event
        assert "AIza" not in event["error"]

    def test_human_mode_is_plain_text(self, capsys, monkeypatch):
        monkeypatch.setattr(emit_module, "HUMAN_OUTPUT", True)

        emit_module.emit({"type": "migration", "from": "peer-review.md", "to": "peer-review-by-claude.md"})

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "peer-review.md -> peer-review-by-claude.md" in captured.err
