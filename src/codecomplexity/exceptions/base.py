"""Base exception for Code Complexity Analyzer."""

from typing import Any, Dict, Optional


class CodeComplexityError(Exception):
    """Base exception for all analyzer errors.

    Attributes:
        message: Human-readable summary
        details: Flat string key/value context (paths, languages, reasons)
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({details_str})"

    def to_dict(self) -> Dict[str, Any]:
        """Error body for the HTTP API."""
        return {
            "error": self.message,
            "type": self.__class__.__name__,
            "details": dict(self.details),
        }
