"""Input validation and secret redaction."""

from .input_validator import InputValidator, ValidationResult

__all__ = ['InputValidator', 'ValidationResult']
