"""Domain exceptions.

All domain-level errors raised by the variant matrix engine. Data
conditions (empty value lists, unknown attribute ids, unmatched
combinations) are handled by policy and never raise; the errors below
cover opt-in guards, basic bounds on variant records and programming
mistakes at the call site.
"""

from collections.abc import Iterable
from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Combination Errors
# ============================================================================


class CombinationError(DomainError):
    """Base class for combination-related errors."""

    pass


class CombinationLimitExceededError(CombinationError):
    """Raised when an attribute set would produce too many combinations.

    Only raised when the caller opts into a limit; the unguarded
    generator never raises.
    """

    def __init__(self, count: int, limit: int) -> None:
        """Initialize combination limit exceeded error.

        Args:
            count: Number of combinations the attribute set would produce.
            limit: Maximum number of combinations allowed.
        """
        super().__init__(
            f"Attribute set yields {count} combinations, limit is {limit}",
            details={"count": count, "limit": limit},
        )


# ============================================================================
# Variant Errors
# ============================================================================


class VariantError(DomainError):
    """Base class for variant-related errors."""

    pass


class VariantNotFoundError(VariantError):
    """Raised when editing a variant that is not in the variant list."""

    def __init__(self, variant_id: str) -> None:
        """Initialize variant not found error.

        Args:
            variant_id: ID of the missing variant.
        """
        super().__init__(
            f"Variant {variant_id} not found",
            details={"variant_id": variant_id},
        )


class InvalidPriceError(VariantError):
    """Raised when a price is negative or not a finite number."""

    def __init__(self, price: Any, reason: str = "Price cannot be negative") -> None:
        """Initialize invalid price error.

        Args:
            price: The rejected price value.
            reason: Explanation of why the price is invalid.
        """
        super().__init__(
            f"Invalid price {price}: {reason}",
            details={"price": str(price), "reason": reason},
        )


class InvalidQuantityError(VariantError):
    """Raised when an invalid quantity is provided."""

    def __init__(self, quantity: int, reason: str = "Quantity cannot be negative") -> None:
        """Initialize invalid quantity error.

        Args:
            quantity: The invalid quantity value.
            reason: Explanation of why the quantity is invalid.
        """
        super().__init__(
            f"Invalid quantity {quantity}: {reason}",
            details={"quantity": quantity, "reason": reason},
        )


class InvalidBulkUpdateError(VariantError):
    """Raised when a bulk update carries a value of the wrong kind."""

    def __init__(self, update_type: str, value: Any) -> None:
        """Initialize invalid bulk update error.

        Args:
            update_type: The bulk update type (price, stock, status).
            value: The rejected value.
        """
        super().__init__(
            f"Invalid value {value!r} for bulk {update_type} update",
            details={"update_type": update_type, "value": repr(value)},
        )


class NonEditableFieldError(VariantError):
    """Raised when an edit targets a field that identifies the variant."""

    def __init__(self, fields: Iterable[str]) -> None:
        """Initialize non-editable field error.

        Args:
            fields: Names of the rejected fields.
        """
        names = sorted(fields)
        super().__init__(
            f"Fields are not editable: {', '.join(names)}",
            details={"fields": names},
        )


# ============================================================================
# Command Errors
# ============================================================================


class UnknownCommandError(DomainError):
    """Raised when the attribute reducer receives an unsupported command."""

    def __init__(self, command: object) -> None:
        """Initialize unknown command error.

        Args:
            command: The object passed in place of a command.
        """
        command_type = type(command).__name__
        super().__init__(
            f"Unsupported attribute command: {command_type}",
            details={"command_type": command_type},
        )
