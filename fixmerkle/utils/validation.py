"""
Input Validation - argument checks for tree and proof inputs.

Validators return (is_valid, error_message) so callers can choose
whether to raise or to answer False.
"""

from typing import Any, Tuple, Optional

# =============================================================================
# Constants
# =============================================================================

# Node table holds 2**(height+1) - 1 digests and is allocated up front;
# height 20 is about two million digests
MIN_HEIGHT = 0
MAX_HEIGHT = 20


# =============================================================================
# Validation Functions
# =============================================================================


def validate_bytes(
    data: Any,
    name: str,
    expected_length: Optional[int] = None,
    max_length: Optional[int] = None,
) -> Tuple[bool, str]:
    """
    Validate bytes input.

    Args:
        data: Data to validate
        name: Field name for error messages
        expected_length: Exact expected length
        max_length: Maximum allowed length

    Returns:
        (is_valid, error_message)
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        return False, f"{name} must be bytes, got {type(data).__name__}"

    if expected_length is not None and len(data) != expected_length:
        return False, f"{name} must be {expected_length} bytes, got {len(data)}"

    if max_length is not None and len(data) > max_length:
        return False, f"{name} exceeds max length {max_length}, got {len(data)}"

    return True, ""


def validate_integer(
    value: Any,
    name: str,
    min_val: Optional[int] = None,
    max_val: Optional[int] = None,
) -> Tuple[bool, str]:
    """
    Validate integer within bounds.

    bool is rejected even though it subclasses int.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False, f"{name} must be int, got {type(value).__name__}"

    if min_val is not None and value < min_val:
        return False, f"{name} must be >= {min_val}, got {value}"

    if max_val is not None and value > max_val:
        return False, f"{name} must be <= {max_val}, got {value}"

    return True, ""


def validate_height(height: Any) -> Tuple[bool, str]:
    """Validate a tree height."""
    return validate_integer(height, "height", MIN_HEIGHT, MAX_HEIGHT)


def validate_leaf(leaf: Any, name: str = "leaf") -> Tuple[bool, str]:
    """Validate a raw leaf value."""
    return validate_bytes(leaf, name)


# =============================================================================
# Raising Helpers
# =============================================================================


def require_height(height: Any) -> int:
    """
    Return height unchanged or raise.

    Raises:
        TypeError: If height is not an int
        ValueError: If height is outside [MIN_HEIGHT, MAX_HEIGHT]
    """
    valid, err = validate_height(height)
    if not valid:
        if isinstance(height, bool) or not isinstance(height, int):
            raise TypeError(err)
        raise ValueError(err)
    return height


def require_leaf(leaf: Any, name: str = "leaf") -> bytes:
    """
    Return leaf as immutable bytes or raise TypeError.
    """
    valid, err = validate_leaf(leaf, name)
    if not valid:
        raise TypeError(err)
    return bytes(leaf)


# =============================================================================
# Module Exports
# =============================================================================

__all__ = [
    "validate_bytes",
    "validate_integer",
    "validate_height",
    "validate_leaf",
    "require_height",
    "require_leaf",
    "MIN_HEIGHT",
    "MAX_HEIGHT",
]
