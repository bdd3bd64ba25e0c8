"""Boundary schemas for the variant matrix.

Pydantic models that validate payloads coming from the form layer and
serialize engine state back to it. The engine itself works on the frozen
domain types; these models convert in both directions.
"""

from decimal import Decimal
from typing import Self

from pydantic import BaseModel, Field

from variantmatrix.catalog.attributes import AttributeDefinition, AttributeSet
from variantmatrix.catalog.models import VariantRecord
from variantmatrix.domain.value_objects import AttributeId, VariantId


# ============================================================================
# Attribute Schemas
# ============================================================================


class AttributeDefinitionSchema(BaseModel):
    """Attribute definition as exchanged with the form layer."""

    id: str = Field(..., min_length=1, description="Stable attribute identifier")
    name: str = Field(default="", description="Attribute label (e.g., 'Size')")
    values: list[str] = Field(
        default_factory=list, description="Allowed values in display order"
    )

    @classmethod
    def from_domain(cls, definition: AttributeDefinition) -> Self:
        """Build from a domain definition."""
        return cls(
            id=str(definition.id),
            name=definition.name,
            values=list(definition.values),
        )

    def to_domain(self) -> AttributeDefinition:
        """Convert to a domain definition."""
        return AttributeDefinition(
            id=AttributeId.from_string(self.id),
            name=self.name,
            values=tuple(self.values),
        )


# ============================================================================
# Variant Schemas
# ============================================================================


class VariantRecordSchema(BaseModel):
    """Variant record as exchanged with the form layer."""

    id: str = Field(..., min_length=1, description="Stable variant identifier")
    attribute_values: list[str] = Field(
        ..., description="Combination values in attribute order"
    )
    attribute_names: list[str] = Field(
        default_factory=list, description="Attribute names when the variant was created"
    )
    sku: str = Field(default="", description="Variant SKU")
    price: Decimal = Field(default=Decimal("0"), ge=0, description="Unit price")
    quantity: int = Field(default=0, ge=0, description="Stock on hand")
    is_active: bool = Field(default=True, description="Whether the variant is for sale")

    @classmethod
    def from_domain(cls, variant: VariantRecord) -> Self:
        """Build from a domain record."""
        return cls(
            id=str(variant.id),
            attribute_values=list(variant.attribute_values),
            attribute_names=list(variant.attribute_names),
            sku=variant.sku,
            price=variant.price,
            quantity=variant.quantity,
            is_active=variant.is_active,
        )

    def to_domain(self) -> VariantRecord:
        """Convert to a domain record."""
        return VariantRecord(
            id=VariantId.from_string(self.id),
            attribute_values=tuple(self.attribute_values),
            attribute_names=tuple(self.attribute_names),
            sku=self.sku,
            price=self.price,
            quantity=self.quantity,
            is_active=self.is_active,
        )


# ============================================================================
# Matrix Schema
# ============================================================================


class VariantMatrixSchema(BaseModel):
    """Full matrix state: attributes, variants and defaults for new variants."""

    attributes: list[AttributeDefinitionSchema] = Field(default_factory=list)
    variants: list[VariantRecordSchema] = Field(default_factory=list)
    base_price: Decimal = Field(default=Decimal("0"), ge=0, description="Price for new variants")
    base_sku: str | None = Field(default=None, description="SKU fragment for new variants")

    def attribute_set(self) -> AttributeSet:
        """Domain attribute set in payload order."""
        return AttributeSet(attributes=tuple(a.to_domain() for a in self.attributes))

    def variant_records(self) -> list[VariantRecord]:
        """Domain variant records in payload order."""
        return [v.to_domain() for v in self.variants]
