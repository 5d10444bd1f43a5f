"""
Input validation and redaction for the council MCP server.

Provides:
- Secret redaction for diagnostic events (API keys, tokens, passwords)
- Workspace title validation (path traversal prevention)
- Timeout bounds for collaborator subprocesses
"""

import re
from dataclasses import dataclass
from pathlib import PurePosixPath, PureWindowsPath
from typing import List, Tuple


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    violations: List[str]


class InputValidator:
    """
    Validation and redaction for values crossing the server boundary.

    Titles come from the MCP client and are joined onto the council
    directory, so they must stay inside it. Diagnostic events can carry
    file contents and LLM output, so secrets are scrubbed before emission.
    """

    # ============================================================================
    # Secret Patterns
    # ============================================================================

    SECRET_PATTERNS = {
        'openai_proj_key': (r'sk-proj-[a-zA-Z0-9_-]{12,}', '[REDACTED_OPENAI_PROJECT_KEY]'),
        'anthropic_key': (r'sk-ant-[a-zA-Z0-9_-]{12,}', '[REDACTED_ANTHROPIC_KEY]'),
        'openai_key': (r'sk-[a-zA-Z0-9]{12,}', '[REDACTED_OPENAI_KEY]'),
        'google_key': (r'AIza[a-zA-Z0-9_-]{12,}', '[REDACTED_GOOGLE_KEY]'),
        'github_token': (r'ghp_[a-zA-Z0-9]{12,}', '[REDACTED_GITHUB_TOKEN]'),
        'github_oauth': (r'gho_[a-zA-Z0-9]{12,}', '[REDACTED_GITHUB_OAUTH]'),
        'aws_key': (r'AKIA[0-9A-Z]{16}', '[REDACTED_AWS_KEY]'),
        'slack_token': (r'xox[baprs]-[0-9]{10,13}-[a-zA-Z0-9-]{16,}', '[REDACTED_SLACK_TOKEN]'),
        'generic_bearer': (r'Bearer\s+[a-zA-Z0-9_\-\.]{16,}', 'Bearer [REDACTED_TOKEN]'),
        'jwt_token': (r'eyJ[a-zA-Z0-9_-]+\.eyJ[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+', '[REDACTED_JWT]'),
        'password_literal': (r'password\s*[:=]\s*["\']([^"\']{6,})["\']', 'password=[REDACTED]'),
        'generic_api_key': (r'api[_-]?key\s*[:=]\s*["\']([a-zA-Z0-9_-]{16,})["\']', 'api_key=[REDACTED]'),
    }

    # ============================================================================
    # Limits
    # ============================================================================

    MAX_TITLE_LENGTH = 255
    MIN_TIMEOUT = 10
    MAX_TIMEOUT = 420              # 7 minutes, same ceiling as the council CLI runs

    # ============================================================================
    # Validation Methods
    # ============================================================================

    def validate_title(self, title: str) -> ValidationResult:
        """
        Validate a workspace title before it is joined onto the council dir.

        Nested titles (``2024/capital``) are allowed; absolute paths and
        ``..`` components are not.
        """
        violations = []

        if not title.strip():
            violations.append("Title is empty")
        if len(title) > self.MAX_TITLE_LENGTH:
            violations.append(
                f"Title exceeds maximum length ({len(title)} > {self.MAX_TITLE_LENGTH})"
            )
        if '\x00' in title:
            violations.append("Title contains a NUL byte")

        posix, windows = PurePosixPath(title), PureWindowsPath(title)
        if posix.is_absolute() or windows.is_absolute() or windows.drive:
            violations.append("Title must be a relative path")
        if '..' in posix.parts or '..' in windows.parts:
            violations.append("Path traversal in title")

        return ValidationResult(
            is_valid=len(violations) == 0,
            violations=violations
        )

    def validate_timeout(self, timeout: int) -> Tuple[int, List[str]]:
        """
        Clamp a collaborator timeout into the supported range.

        Returns:
            Tuple of (sanitized_timeout, violations)
        """
        violations = []

        if timeout < self.MIN_TIMEOUT:
            violations.append(f"timeout must be >= {self.MIN_TIMEOUT}s, got {timeout}")
            timeout = self.MIN_TIMEOUT
        elif timeout > self.MAX_TIMEOUT:
            violations.append(f"timeout exceeds limit ({timeout} > {self.MAX_TIMEOUT})")
            timeout = self.MAX_TIMEOUT

        return timeout, violations

    # ============================================================================
    # Redaction
    # ============================================================================

    def _redact_secrets(self, text: str) -> str:
        """Replace every known secret pattern in ``text`` with its placeholder."""
        for pattern, replacement in self.SECRET_PATTERNS.values():
            text = re.sub(pattern, replacement, text)
        return text

    def redact_output(self, output):
        """
        Redact secrets from an event before emission.

        Recursively scans all string values in dicts and lists.
        """
        if isinstance(output, dict):
            return {k: self.redact_output(v) for k, v in output.items()}
        elif isinstance(output, list):
            return [self.redact_output(item) for item in output]
        elif isinstance(output, str):
            return self._redact_secrets(output)
        else:
            return output
