"""Error types raised by the illustration calculators."""

from typing import List, Optional


class InputValidationError(ValueError):
    """Raised when inputs pass schema validation but cannot be projected."""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class DataNotFoundError(LookupError):
    """Raised when reference data (e.g. a mortality column) is missing."""

    def __init__(self, message: str, available: Optional[List[str]] = None):
        super().__init__(message)
        self.available = available or []
