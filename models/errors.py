"""
Error types for the sheet layout planner.
"""

from typing import Optional


class ConfigurationError(ValueError):
    """Invalid input handed to the placement engine."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class ValidationError(ValueError):
    """Form text that could not be turned into a number."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class StorageError(Exception):
    """Saved layout could not be read back."""


class ExportError(Exception):
    """Export of a layout to Google Sheets failed."""
