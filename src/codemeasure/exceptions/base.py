"""Base exception for codemeasure."""

from typing import Dict, Optional


class CodeMeasureError(Exception):
    """Base exception for all codemeasure errors.

    Attributes:
        message: Human-readable description.
        details: Offending node, value or setting, rendered after the message.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_json(self) -> Dict[str, object]:
        """Structured logging format."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": dict(self.details),
        }
