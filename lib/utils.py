# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import math
import re
from typing import Any


# =============================================================================
# ID Utilities
# =============================================================================

# Numeric literals an ID may be written as. ASCII only: int() alone would
# also take "1_0" and non-Latin digits.
_DECIMAL_ID = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?", re.ASCII)
_INTEGER_ID = re.compile(r"[+-]?[0-9]+", re.ASCII)
_PREFIXED_ID = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)", re.ASCII)
_INFINITE_ID = re.compile(r"[+-]?Infinity")


def normalize_id(value: str | int) -> str:
    """
    Normalize a record ID to its canonical string form.

    Any numeric literal is accepted and rewritten in canonical form, so
    "007", " 7", "7.0" and 7 all address the same record. Non-integer
    numbers ("1.5") stay valid IDs; they simply never match a record.

    Args:
        value: ID as string or int

    Returns:
        Canonical string representation of the ID

    Raises:
        InvalidIdError: If the value is empty or not numeric

    Example:
        record_id = normalize_id("007")  # "7"
        record_id = normalize_id("1.50") # "1.5"
        record_id = normalize_id(41)     # "41"
    """
    if isinstance(value, int):
        return str(value)

    stripped = value.strip()
    if not stripped:
        raise InvalidIdError(value, "ID cannot be empty")

    if _INTEGER_ID.fullmatch(stripped):
        return str(int(stripped))
    if _PREFIXED_ID.fullmatch(stripped):
        return str(int(stripped, 0))
    if _INFINITE_ID.fullmatch(stripped):
        return stripped.lstrip("+")
    if _DECIMAL_ID.fullmatch(stripped):
        number = float(stripped)
        if math.isinf(number):
            return "Infinity" if number > 0 else "-Infinity"
        if number.is_integer():
            return str(int(number))
        return repr(number)

    raise InvalidIdError(value, "ID must be a numeric value")


def numeric_id(value: str) -> int | None:
    """Return the integer value of an ID, or None if it is not an integer."""
    if isinstance(value, str) and _INTEGER_ID.fullmatch(value.strip()):
        return int(value)
    return None


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific errors.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result


class InvalidIdError(ApplicationError):
    """Raised when a record ID is empty or not numeric."""

    def __init__(self, value: Any, reason: str):
        super().__init__(
            message=reason,
            code="INVALID_ID",
            suggestion="Use the numeric ID returned when the application was created",
            details={"id": str(value)},
        )
