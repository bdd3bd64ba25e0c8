"""Domain events for the variant matrix.

Events are recorded by the variant matrix session whenever the variant
list is regenerated or edited, so the caller can audit or persist what
changed without diffing lists itself.
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from variantmatrix.domain.base import DomainEvent


# ============================================================================
# Matrix Events
# ============================================================================


@dataclass(frozen=True)
class VariantMatrixRegenerated(DomainEvent):
    """Event raised when the variant list is rebuilt from the attributes."""

    event_type: ClassVar[str] = "variant_matrix.regenerated"

    combination_count: int = 0
    kept_ids: tuple[str, ...] = ()
    created_ids: tuple[str, ...] = ()
    dropped_ids: tuple[str, ...] = ()

    def _payload(self) -> dict[str, Any]:
        """Get event-specific payload."""
        return {
            "combination_count": self.combination_count,
            "kept_ids": list(self.kept_ids),
            "created_ids": list(self.created_ids),
            "dropped_ids": list(self.dropped_ids),
        }


# ============================================================================
# Variant Events
# ============================================================================


@dataclass(frozen=True)
class VariantUpdated(DomainEvent):
    """Event raised when fields of a single variant are edited."""

    event_type: ClassVar[str] = "variant.updated"

    variant_id: str = ""
    changed_fields: tuple[str, ...] = ()

    def _payload(self) -> dict[str, Any]:
        """Get event-specific payload."""
        return {
            "variant_id": self.variant_id,
            "changed_fields": list(self.changed_fields),
        }


@dataclass(frozen=True)
class VariantsBulkUpdated(DomainEvent):
    """Event raised when a bulk price, stock or status update is applied."""

    event_type: ClassVar[str] = "variant.bulk_updated"

    variant_ids: tuple[str, ...] = ()
    update_type: str = ""
    reason: str | None = None

    def _payload(self) -> dict[str, Any]:
        """Get event-specific payload."""
        return {
            "variant_ids": list(self.variant_ids),
            "update_type": self.update_type,
            "reason": self.reason,
        }


# ============================================================================
# Event Registry
# ============================================================================


EVENT_REGISTRY: dict[str, type[DomainEvent]] = {
    VariantMatrixRegenerated.event_type: VariantMatrixRegenerated,
    VariantUpdated.event_type: VariantUpdated,
    VariantsBulkUpdated.event_type: VariantsBulkUpdated,
}


def get_event_class(event_type: str) -> type[DomainEvent] | None:
    """Get event class by event type string.

    Args:
        event_type: Event type identifier.

    Returns:
        Event class or None if not found.
    """
    return EVENT_REGISTRY.get(event_type)
