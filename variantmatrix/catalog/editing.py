"""Per-variant and bulk edits.

These are the edits the variant grid feeds back after a regeneration:
changing the SKU, price, quantity or active flag of individual records.
They never touch attributes and never regenerate; the edited list is
simply passed as ``prior_variants`` to the next reconciliation.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

import structlog

from variantmatrix.catalog.models import VariantRecord
from variantmatrix.domain.exceptions import InvalidBulkUpdateError, VariantNotFoundError
from variantmatrix.domain.value_objects import VariantId

logger = structlog.get_logger()


class BulkUpdateType(str, Enum):
    """Fields a bulk update can set."""

    PRICE = "price"
    STOCK = "stock"
    STATUS = "status"


@dataclass(frozen=True)
class BulkVariantUpdate:
    """Set one field to the same value on many variants.

    Attributes:
        variant_ids: Variants to edit; ids not in the list are ignored.
        update_type: Which field to set.
        value: New price (number), stock (int) or status (bool).
        reason: Optional note carried into events and logs.
    """

    variant_ids: tuple[VariantId, ...]
    update_type: BulkUpdateType
    value: Any
    reason: str | None = None


def update_variant(
    variants: Sequence[VariantRecord],
    variant_id: VariantId,
    **changes: Any,
) -> list[VariantRecord]:
    """Replace one record with an edited copy.

    Args:
        variants: Current variant list.
        variant_id: Record to edit.
        **changes: Editable fields (``sku``, ``price``, ``quantity``, ``is_active``).

    Returns:
        New list, same order.

    Raises:
        VariantNotFoundError: If no record has ``variant_id``.
    """
    if not any(v.id == variant_id for v in variants):
        raise VariantNotFoundError(str(variant_id))
    return [v.with_changes(**changes) if v.id == variant_id else v for v in variants]


def _bulk_changes(update: BulkVariantUpdate) -> dict[str, Any]:
    value = update.value
    if update.update_type == BulkUpdateType.STATUS:
        if not isinstance(value, bool):
            raise InvalidBulkUpdateError(update.update_type.value, value)
        return {"is_active": value}

    # bool is an int subclass and is never a valid price or stock
    if isinstance(value, bool):
        raise InvalidBulkUpdateError(update.update_type.value, value)
    if update.update_type == BulkUpdateType.STOCK:
        if not isinstance(value, int):
            raise InvalidBulkUpdateError(update.update_type.value, value)
        return {"quantity": value}
    if not isinstance(value, (Decimal, int, float)):
        raise InvalidBulkUpdateError(update.update_type.value, value)
    return {"price": value}


def apply_bulk_update(
    variants: Sequence[VariantRecord], update: BulkVariantUpdate
) -> list[VariantRecord]:
    """Apply a bulk price, stock or status update.

    Args:
        variants: Current variant list.
        update: The bulk update.

    Returns:
        New list, same order.

    Raises:
        InvalidBulkUpdateError: If the value does not fit the update type.
    """
    changes = _bulk_changes(update)
    targets = set(update.variant_ids)
    updated = [v.with_changes(**changes) if v.id in targets else v for v in variants]

    logger.info(
        "Bulk variant update applied",
        update_type=update.update_type.value,
        matched=sum(1 for v in variants if v.id in targets),
        requested=len(targets),
        reason=update.reason,
    )
    return updated
