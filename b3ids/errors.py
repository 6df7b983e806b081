"""b3ids error hierarchy and exceptions."""

from __future__ import annotations


class B3Error(Exception):
    """Base exception for all b3ids errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class HeaderParseError(B3Error):
    """Raised when a combined `b3` header cannot be split into known parts."""

    def __init__(self, header_value: str):
        super().__init__(
            f"Header 'b3: {header_value}' could not be parsed into parts",
            details={"header": header_value},
        )
        self.header_value = header_value


class ConfigError(B3Error):
    """Raised when configuration is invalid or cannot be loaded."""
    pass
