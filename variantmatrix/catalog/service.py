"""Variant matrix session.

Owns the current attribute set and variant list for one product and
runs the editor -> generator -> reconciler cycle on every attribute
edit. Variant edits from the grid are applied in place on the session
list and become the prior list for the next regeneration.

A failed regeneration (for example an attribute edit that would exceed
the combination limit) leaves both the attributes and the variants as
they were.

Example usage:
    matrix = VariantMatrix(base_price=20, base_sku="TSHIRT")
    matrix.dispatch(AddAttribute(name="Size"))
    size_id = matrix.attributes[0].id
    matrix.dispatch(SetValue(size_id, 0, "S"))
    matrix.dispatch(AddValue(size_id, "M"))
    for variant in matrix.variants:
        print(variant.sku, variant.price)
"""

from collections.abc import Callable, Iterable
from decimal import Decimal
from typing import Any, Self
from uuid import uuid4

import structlog

from variantmatrix.catalog.attributes import AttributeCommand, AttributeSet, apply_command
from variantmatrix.catalog.combinations import generate_combinations
from variantmatrix.catalog.editing import BulkVariantUpdate, apply_bulk_update, update_variant
from variantmatrix.catalog.models import VariantRecord, to_price
from variantmatrix.catalog.reconciler import reconcile, summarize
from variantmatrix.catalog.schemas import (
    AttributeDefinitionSchema,
    VariantMatrixSchema,
    VariantRecordSchema,
)
from variantmatrix.domain.base import DomainEvent
from variantmatrix.domain.events import (
    VariantMatrixRegenerated,
    VariantsBulkUpdated,
    VariantUpdated,
)
from variantmatrix.domain.exceptions import InvalidPriceError
from variantmatrix.domain.value_objects import MatchStrategy, VariantId
from variantmatrix.infrastructure.config import Settings, settings

logger = structlog.get_logger()


class VariantMatrix:
    """Stateful shell around the pure variant engine.

    Attributes:
        matrix_id: Identifier stamped on recorded events.
        strategy: How combinations are matched to existing variants.
        max_combinations: Combination limit, or None for no limit.
        separator: Separator for synthesized SKUs.
    """

    def __init__(
        self,
        attributes: AttributeSet | None = None,
        variants: Iterable[VariantRecord] = (),
        base_price: Decimal | int | float | str = 0,
        base_sku: str | None = None,
        *,
        config: Settings | None = None,
        strategy: MatchStrategy | None = None,
        matrix_id: str | None = None,
        id_factory: Callable[[], VariantId] = VariantId.generate,
    ) -> None:
        """Initialize the session.

        Existing variants are taken as-is; nothing is regenerated until
        the first edit or an explicit ``regenerate()``.

        Args:
            attributes: Initial attribute set.
            variants: Previously stored variants.
            base_price: Price for newly created variants.
            base_sku: SKU fragment for newly created variants.
            config: Settings to read defaults from; module settings if omitted.
            strategy: Overrides the configured match strategy.
            matrix_id: Id stamped on events; random if omitted.
            id_factory: Produces ids for new variants.
        """
        config = config or settings
        self.matrix_id = matrix_id or str(uuid4())
        self.strategy = strategy or config.match_strategy
        self.max_combinations = config.max_combinations
        self.separator = config.sku_separator
        self.base_sku = base_sku
        self._base_price = self._validated_price(base_price)
        self._id_factory = id_factory
        self._attributes = attributes or AttributeSet()
        self._variants: list[VariantRecord] = list(variants)
        self._events: list[DomainEvent] = []

    @classmethod
    def from_schema(cls, schema: VariantMatrixSchema, **kwargs: Any) -> Self:
        """Restore a session from a serialized matrix.

        Args:
            schema: Validated matrix payload.
            **kwargs: Extra keyword arguments for the constructor.

        Returns:
            Session holding the payload's attributes and variants.
        """
        return cls(
            attributes=schema.attribute_set(),
            variants=schema.variant_records(),
            base_price=schema.base_price,
            base_sku=schema.base_sku,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def attributes(self) -> AttributeSet:
        """Current attribute snapshot."""
        return self._attributes

    @property
    def variants(self) -> list[VariantRecord]:
        """Copy of the current variant list."""
        return list(self._variants)

    @property
    def base_price(self) -> Decimal:
        """Price given to variants created from now on."""
        return self._base_price

    def set_base_price(self, price: Decimal | int | float | str) -> None:
        """Change the default price; existing variants keep their prices."""
        self._base_price = self._validated_price(price)

    @staticmethod
    def _validated_price(price: Decimal | int | float | str) -> Decimal:
        value = to_price(price)
        if value < 0:
            raise InvalidPriceError(value)
        return value

    # ------------------------------------------------------------------
    # Attribute edits
    # ------------------------------------------------------------------

    def dispatch(self, command: AttributeCommand) -> list[VariantRecord]:
        """Apply an attribute command and regenerate the variants.

        Args:
            command: Attribute editor command.

        Returns:
            The new variant list.

        Raises:
            UnknownCommandError: If ``command`` is not an attribute command.
            CombinationLimitExceededError: If the edit exceeds the limit.
        """
        return self._rebuild(apply_command(self._attributes, command))

    def dispatch_many(self, commands: Iterable[AttributeCommand]) -> list[VariantRecord]:
        """Apply several commands, regenerating once at the end."""
        attributes = self._attributes
        for command in commands:
            attributes = apply_command(attributes, command)
        return self._rebuild(attributes)

    def set_attributes(self, attributes: AttributeSet) -> list[VariantRecord]:
        """Replace the whole attribute set and regenerate."""
        return self._rebuild(attributes)

    def regenerate(self) -> list[VariantRecord]:
        """Regenerate from the current attributes."""
        return self._rebuild(self._attributes)

    def _rebuild(self, attributes: AttributeSet) -> list[VariantRecord]:
        combinations = generate_combinations(attributes, limit=self.max_combinations)
        variants = reconcile(
            combinations,
            self._variants,
            self._base_price,
            base_sku=self.base_sku,
            strategy=self.strategy,
            separator=self.separator,
            id_factory=self._id_factory,
        )
        summary = summarize(self._variants, variants)

        self._attributes = attributes
        self._variants = variants
        self._events.append(
            VariantMatrixRegenerated(
                matrix_id=self.matrix_id,
                combination_count=len(combinations),
                kept_ids=summary.kept_ids,
                created_ids=summary.created_ids,
                dropped_ids=summary.dropped_ids,
            )
        )
        logger.info(
            "Variant matrix regenerated",
            matrix_id=self.matrix_id,
            attribute_count=len(attributes),
            variant_count=len(variants),
            created=len(summary.created_ids),
            dropped=len(summary.dropped_ids),
        )
        return list(variants)

    # ------------------------------------------------------------------
    # Variant edits
    # ------------------------------------------------------------------

    def update_variant(self, variant_id: VariantId, **changes: Any) -> VariantRecord:
        """Edit fields of one variant.

        Args:
            variant_id: Variant to edit.
            **changes: Editable fields (``sku``, ``price``, ``quantity``, ``is_active``).

        Returns:
            The edited record.

        Raises:
            VariantNotFoundError: If the variant is not in the matrix.
        """
        self._variants = update_variant(self._variants, variant_id, **changes)
        self._events.append(
            VariantUpdated(
                matrix_id=self.matrix_id,
                variant_id=str(variant_id),
                changed_fields=tuple(sorted(changes)),
            )
        )
        return next(v for v in self._variants if v.id == variant_id)

    def bulk_update(self, update: BulkVariantUpdate) -> list[VariantRecord]:
        """Apply a bulk price, stock or status update.

        The recorded event lists only the variants that were actually
        edited, in matrix order.
        """
        targets = set(update.variant_ids)
        self._variants = apply_bulk_update(self._variants, update)
        self._events.append(
            VariantsBulkUpdated(
                matrix_id=self.matrix_id,
                variant_ids=tuple(str(v.id) for v in self._variants if v.id in targets),
                update_type=update.update_type.value,
                reason=update.reason,
            )
        )
        return list(self._variants)

    # ------------------------------------------------------------------
    # Events and serialization
    # ------------------------------------------------------------------

    def collect_events(self) -> list[DomainEvent]:
        """Collect and clear recorded events.

        Returns:
            Events recorded since the last call, oldest first.
        """
        events = self._events.copy()
        self._events.clear()
        return events

    def snapshot(self) -> VariantMatrixSchema:
        """Serialize the current state."""
        return VariantMatrixSchema(
            attributes=[AttributeDefinitionSchema.from_domain(a) for a in self._attributes],
            variants=[VariantRecordSchema.from_domain(v) for v in self._variants],
            base_price=self._base_price,
            base_sku=self.base_sku,
        )
