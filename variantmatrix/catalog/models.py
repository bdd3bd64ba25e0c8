"""Variant records.

A variant is the independently priced and stocked record behind one
combination. Records are immutable; edits go through ``with_changes``
(or ``variantmatrix.catalog.editing``) and produce a new record with
the same id.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Self

from variantmatrix.catalog.combinations import IdentityKey, identity_key
from variantmatrix.domain.base import ValueObject
from variantmatrix.domain.exceptions import (
    InvalidPriceError,
    InvalidQuantityError,
    NonEditableFieldError,
)
from variantmatrix.domain.value_objects import MatchStrategy, VariantId

EDITABLE_FIELDS = frozenset({"sku", "price", "quantity", "is_active"})


def to_price(value: Decimal | int | float | str) -> Decimal:
    """Convert a numeric price to Decimal without float artifacts.

    Args:
        value: Price as Decimal, int, float or numeric string.

    Returns:
        Decimal price (``9.99`` becomes ``Decimal("9.99")``).

    Raises:
        InvalidPriceError: If the value is not a finite number.
    """
    if isinstance(value, Decimal):
        price = value
    else:
        try:
            price = Decimal(str(value))
        except InvalidOperation:
            raise InvalidPriceError(value, reason="Price must be a number") from None
    if not price.is_finite():
        raise InvalidPriceError(value, reason="Price must be finite")
    return price


def build_variant_sku(
    base_sku: str | None,
    values: Iterable[str],
    separator: str = "-",
) -> str:
    """Synthesize a variant SKU from a base SKU and combination values.

    Args:
        base_sku: Product SKU fragment; no SKU is synthesized without one.
        values: Combination values in attribute order.
        separator: Joins the base and each value.

    Returns:
        ``"TSHIRT-S-Red"`` style SKU, or ``""`` when ``base_sku`` is empty.
    """
    if not base_sku:
        return ""
    parts = [base_sku, *values]
    return separator.join(parts)


@dataclass(frozen=True)
class VariantRecord(ValueObject):
    """A purchasable variant of a product.

    Attributes:
        id: Stable identifier assigned when the combination first appeared.
        attribute_values: Value tuple of the combination this record represents.
        sku: User-edited or synthesized SKU.
        price: Unit price; defaults to the product's base price.
        quantity: Stock on hand.
        is_active: Whether the variant is offered for sale.
        attribute_names: Attribute names when the record was created.
    """

    id: VariantId
    attribute_values: tuple[str, ...]
    sku: str = ""
    price: Decimal = Decimal("0")
    quantity: int = 0
    is_active: bool = True
    attribute_names: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        """Normalize price and enforce basic bounds."""
        price = to_price(self.price)
        object.__setattr__(self, "price", price)
        object.__setattr__(self, "attribute_values", tuple(self.attribute_values))
        object.__setattr__(self, "attribute_names", tuple(self.attribute_names))

        if price < 0:
            raise InvalidPriceError(price)
        if self.quantity < 0:
            raise InvalidQuantityError(self.quantity)

    def identity_key(self, strategy: MatchStrategy = MatchStrategy.POSITIONAL) -> IdentityKey:
        """Key used to match this record against regenerated combinations."""
        return identity_key(self.attribute_names, self.attribute_values, strategy)

    @property
    def has_attribute_names(self) -> bool:
        """Whether every value has a recorded attribute name."""
        return len(self.attribute_names) == len(self.attribute_values)

    @property
    def attributes(self) -> dict[str, str]:
        """``{attribute name: value}`` for display."""
        return dict(zip(self.attribute_names, self.attribute_values))

    def with_changes(self, **changes: Any) -> Self:
        """Return a copy with editable fields replaced.

        Args:
            **changes: Any of ``sku``, ``price``, ``quantity``, ``is_active``.

        Returns:
            Edited record with the same id.

        Raises:
            NonEditableFieldError: If a non-editable field is passed.
            InvalidPriceError: If the new price is negative.
            InvalidQuantityError: If the new quantity is negative.
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise NonEditableFieldError(unknown)
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "id": str(self.id),
            "attribute_values": list(self.attribute_values),
            "attribute_names": list(self.attribute_names),
            "sku": self.sku,
            "price": str(self.price),
            "quantity": self.quantity,
            "is_active": self.is_active,
        }
