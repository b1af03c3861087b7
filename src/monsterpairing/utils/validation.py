"""Validation utilities for Monster Pairing.

This module provides reusable validation functions with consistent error handling.
"""

import re
from typing import Optional

from monsterpairing.constants import IDENTIFIER_PATTERN
from monsterpairing.exceptions import (
    InvalidConfigurationException,
    InvalidIdentifierException,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Optional[str] = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Identifier Validation ==========


def validate_identifier(
    value: Optional[str],
    kind: str = "Identifier",
    max_length: Optional[int] = None,
    min_length: int = 1,
) -> ValidationResult:
    """Validate an identifier string.

    Identifiers are trimmed and may only contain letters, digits, hyphens
    and underscores.

    Args:
        value: Identifier to validate
        kind: Name used in error messages (e.g. "Monster identifier")
        max_length: Maximum allowed length, or None for no limit
        min_length: Minimum allowed length

    Returns:
        ValidationResult with validation status and the trimmed identifier

    Example:
        >>> result = validate_identifier("pikachu", max_length=50)
        >>> if result:
        ...     print(f"Valid id: {result.sanitized_value}")
    """
    if value is None or not str(value).strip():
        return ValidationResult(
            is_valid=False,
            error_message="Identifier cannot be empty",
        )

    value = str(value).strip()

    if not re.match(IDENTIFIER_PATTERN, value):
        return ValidationResult(
            is_valid=False,
            error_message=(
                f"{kind} must contain only alphanumeric characters, hyphens, "
                f"and underscores. Got: {value}"
            ),
        )

    if max_length is not None and len(value) > max_length:
        return ValidationResult(
            is_valid=False,
            error_message=f"{kind} cannot exceed {max_length} characters. Got: {value}",
        )

    if len(value) < min_length:
        return ValidationResult(
            is_valid=False,
            error_message=f"{kind} must be at least {min_length} characters. Got: {value}",
        )

    return ValidationResult(is_valid=True, sanitized_value=value)


def validate_identifier_strict(
    value: Optional[str],
    kind: str = "Identifier",
    max_length: Optional[int] = None,
    min_length: int = 1,
) -> str:
    """Validate an identifier and raise exception if invalid.

    Returns:
        The trimmed identifier

    Raises:
        InvalidIdentifierException: If identifier is invalid
    """
    result = validate_identifier(value, kind, max_length, min_length)
    if not result.is_valid:
        raise InvalidIdentifierException(result.error_message)
    return result.sanitized_value


# ========== Bracket Size Validation ==========


def is_power_of_two(value: int) -> bool:
    """Check whether a positive integer is a power of two."""
    return value > 0 and (value & (value - 1)) == 0


def validate_playoff_cutoff(cutoff: Optional[int]) -> ValidationResult:
    """Validate the number of participants cut to a playoff bracket.

    Args:
        cutoff: Number of top participants seeded into the bracket

    Returns:
        ValidationResult with validation status
    """
    if cutoff is None or cutoff < 2:
        return ValidationResult(
            is_valid=False,
            error_message="playoff-cutoff must be >= 2 when playoff is defined",
        )

    if not is_power_of_two(cutoff):
        return ValidationResult(
            is_valid=False,
            error_message=f"playoff-cutoff must be a power of two, got {cutoff}",
        )

    return ValidationResult(is_valid=True, sanitized_value=str(cutoff))


def validate_playoff_cutoff_strict(cutoff: Optional[int]) -> None:
    """Validate the playoff cutoff and raise exception if invalid.

    Raises:
        InvalidConfigurationException: If the cutoff is invalid
    """
    result = validate_playoff_cutoff(cutoff)
    if not result.is_valid:
        raise InvalidConfigurationException(result.error_message)
