"""
Validation utilities for core domain models.

Provides consistent validation across the application.
"""

from typing import Any

from portfolio_tracker.core.exceptions.portfolio import ValidationError


def validate_currency_code(iso: Any, param_name: str = "iso") -> str:
    """Validate a currency code.

    Codes are case-sensitive; only blank or non-string codes are rejected.

    Args:
        iso: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The validated code

    Raises:
        ValidationError: If the code is not a non-empty string
    """
    if not isinstance(iso, str) or not iso.strip():
        raise ValidationError(f"{param_name} must be a non-empty currency code, got {iso!r}")
    return iso


def is_valid_index(items: list[Any], index: int) -> bool:
    """Check that index addresses an existing element (no negative indexing)."""
    return 0 <= index < len(items)


def remove_at(items: list[Any], index: int) -> bool:
    """Remove the element at index.

    Returns:
        True if an element was removed, False for an out-of-range index
        (the list is left unchanged)
    """
    if not is_valid_index(items, index):
        return False
    del items[index]
    return True
