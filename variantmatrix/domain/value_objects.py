"""Value Objects for the domain layer.

Strongly-typed identifiers for attribute definitions and variant
records. Identifiers are opaque strings with a short prefix so that
they stay readable in logs and serialized payloads.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Self
from uuid import uuid4

from variantmatrix.domain.base import ValueObject


# ============================================================================
# Typed Identifiers
# ============================================================================


@dataclass(frozen=True)
class AttributeId(ValueObject):
    """Strongly-typed attribute definition identifier.

    Assigned once when the attribute is added and never changed,
    even when the attribute is renamed or its values are edited.
    """

    value: str

    PREFIX = "attr_"

    @classmethod
    def generate(cls) -> Self:
        """Generate a new attribute ID.

        Returns:
            New AttributeId with random suffix.
        """
        return cls(value=f"{cls.PREFIX}{uuid4().hex[:12]}")

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create AttributeId from string representation.

        Args:
            value: Identifier string.

        Returns:
            AttributeId instance.
        """
        return cls(value=value)

    def __post_init__(self) -> None:
        """Validate attribute ID format."""
        if not self.value or not self.value.strip():
            raise ValueError("Attribute ID cannot be empty")

    def __str__(self) -> str:
        """Return string representation.

        Returns:
            Attribute ID value.
        """
        return self.value


@dataclass(frozen=True)
class VariantId(ValueObject):
    """Strongly-typed variant identifier.

    Assigned at first materialization of a combination and carried
    forward for as long as the combination keeps matching.
    """

    value: str

    PREFIX = "var_"

    @classmethod
    def generate(cls) -> Self:
        """Generate a new variant ID.

        Returns:
            New VariantId with random suffix.
        """
        return cls(value=f"{cls.PREFIX}{uuid4().hex[:12]}")

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create VariantId from string representation.

        Args:
            value: Identifier string.

        Returns:
            VariantId instance.
        """
        return cls(value=value)

    def __post_init__(self) -> None:
        """Validate variant ID format."""
        if not self.value or not self.value.strip():
            raise ValueError("Variant ID cannot be empty")

    def __str__(self) -> str:
        """Return string representation.

        Returns:
            Variant ID value.
        """
        return self.value


# ============================================================================
# Matching
# ============================================================================


class MatchStrategy(str, Enum):
    """How a combination is matched against previously stored variants.

    POSITIONAL compares the ordered value tuple, so reordering attribute
    definitions breaks every match. BY_ATTRIBUTE compares the sorted
    (attribute name, value) pairs and survives reordering.
    """

    POSITIONAL = "positional"
    BY_ATTRIBUTE = "by_attribute"
