"""
Input Validation - Boundary checks for marketplace payloads.

Every validator returns ``(is_valid, error_message)`` so callers can turn
a failure into an InvalidPayload message without raising.
"""

import re
from typing import Any, Optional, Tuple

# =============================================================================
# Constants
# =============================================================================

MAX_STRING_LENGTH = 1024
MAX_NAME_LENGTH = 256
MAX_URL_LENGTH = 2048
WALLET_ADDRESS_LENGTH = 64

MIN_AMOUNT = 0
MAX_AMOUNT = 2**64 - 1  # nat64

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


# =============================================================================
# Validation Functions
# =============================================================================


def validate_string(
    value: Any,
    name: str,
    max_length: int = MAX_STRING_LENGTH,
    pattern: Optional[str] = None,
    allow_blank: bool = False,
) -> Tuple[bool, str]:
    """
    Validate string input.

    Args:
        value: Value to validate
        name: Field name for errors
        max_length: Maximum string length
        pattern: Optional regex pattern
        allow_blank: Accept empty / whitespace-only strings

    Returns:
        (is_valid, error_message)
    """
    if not isinstance(value, str):
        return False, f"{name} must be str, got {type(value).__name__}"

    if not allow_blank and not value.strip():
        return False, f"{name} is required"

    if len(value) > max_length:
        return False, f"{name} exceeds max length {max_length}"

    if pattern and not re.match(pattern, value):
        return False, f"{name} does not match required pattern"

    return True, ""


def validate_integer(
    value: Any,
    name: str,
    min_val: int = MIN_AMOUNT,
    max_val: int = MAX_AMOUNT,
) -> Tuple[bool, str]:
    """
    Validate integer within bounds.

    Args:
        value: Value to validate
        name: Field name for errors
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        (is_valid, error_message)
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False, f"{name} must be int, got {type(value).__name__}"

    if value < min_val:
        return False, f"{name} must be >= {min_val}, got {value}"

    if value > max_val:
        return False, f"{name} must be <= {max_val}, got {value}"

    return True, ""


def validate_amount(amount: Any, name: str = "amount") -> Tuple[bool, str]:
    """Validate a bid amount (non-negative nat64)."""
    return validate_integer(amount, name, MIN_AMOUNT, MAX_AMOUNT)


def validate_price(price: Any, name: str = "price") -> Tuple[bool, str]:
    """Validate a listing price (positive nat64)."""
    return validate_integer(price, name, 1, MAX_AMOUNT)


def validate_hex_string(value: Any, name: str, expected_chars: Optional[int] = None) -> Tuple[bool, str]:
    """
    Validate a hex string (no 0x prefix).

    Args:
        value: Value to validate
        name: Field name
        expected_chars: Expected number of hex characters

    Returns:
        (is_valid, error_message)
    """
    if not isinstance(value, str):
        return False, f"{name} must be str, got {type(value).__name__}"

    if not re.fullmatch(r"[a-fA-F0-9]*", value):
        return False, f"{name} contains invalid hex characters"

    if expected_chars is not None and len(value) != expected_chars:
        return False, f"{name} must be {expected_chars} hex characters, got {len(value)}"

    return True, ""


def validate_email(email: Any) -> Tuple[bool, str]:
    """Validate an email address of the form local@domain.tld."""
    valid, err = validate_string(email, "email", MAX_NAME_LENGTH)
    if not valid:
        return False, err

    if not EMAIL_PATTERN.match(email):
        return False, "Invalid email address"

    return True, ""


def validate_wallet_address(wallet_address: Any) -> Tuple[bool, str]:
    """Validate a wallet address (64-character hexadecimal string)."""
    valid, err = validate_hex_string(wallet_address, "wallet_address", WALLET_ADDRESS_LENGTH)
    if not valid:
        return False, "Invalid wallet address"
    return True, ""


def validate_identifier(value: Any, name: str) -> Tuple[bool, str]:
    """Validate an entity identifier (non-blank string)."""
    return validate_string(value, name, MAX_NAME_LENGTH)


# =============================================================================
# Module Exports
# =============================================================================

__all__ = [
    "validate_string",
    "validate_integer",
    "validate_amount",
    "validate_price",
    "validate_hex_string",
    "validate_email",
    "validate_wallet_address",
    "validate_identifier",
    "MAX_STRING_LENGTH",
    "MAX_NAME_LENGTH",
    "MAX_URL_LENGTH",
    "WALLET_ADDRESS_LENGTH",
    "MAX_AMOUNT",
]
