"""Domain layer - Value objects, domain events and exceptions.

This module exports the building blocks shared by the catalog engine:

- **Value Objects**: Immutable typed identifiers (AttributeId, VariantId)
- **Domain Events**: Record regenerations and edits of a variant matrix
- **Exceptions**: Domain-specific errors and bound violations

Example usage:
    from variantmatrix.domain import VariantId

    variant_id = VariantId.generate()
    print(variant_id)  # var_3f2a9c1d0b7e
"""

# Base classes
from variantmatrix.domain.base import DomainEvent, ValueObject

# Domain Events
from variantmatrix.domain.events import (
    EVENT_REGISTRY,
    VariantMatrixRegenerated,
    VariantsBulkUpdated,
    VariantUpdated,
    get_event_class,
)

# Exceptions
from variantmatrix.domain.exceptions import (
    CombinationError,
    CombinationLimitExceededError,
    DomainError,
    InvalidBulkUpdateError,
    InvalidPriceError,
    InvalidQuantityError,
    NonEditableFieldError,
    UnknownCommandError,
    VariantError,
    VariantNotFoundError,
)

# Value Objects
from variantmatrix.domain.value_objects import AttributeId, MatchStrategy, VariantId

__all__ = [
    # Base
    "DomainEvent",
    "ValueObject",
    # Events
    "EVENT_REGISTRY",
    "VariantMatrixRegenerated",
    "VariantUpdated",
    "VariantsBulkUpdated",
    "get_event_class",
    # Exceptions
    "CombinationError",
    "CombinationLimitExceededError",
    "DomainError",
    "InvalidBulkUpdateError",
    "InvalidPriceError",
    "InvalidQuantityError",
    "NonEditableFieldError",
    "UnknownCommandError",
    "VariantError",
    "VariantNotFoundError",
    # Value Objects
    "AttributeId",
    "MatchStrategy",
    "VariantId",
]
