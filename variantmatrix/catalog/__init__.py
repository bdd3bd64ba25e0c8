"""Variant matrix engine.

Derives product variants from configurable attributes and keeps
per-variant data stable across attribute edits:

- **Attributes**: immutable attribute snapshots, editor operators and commands
- **Combinations**: Cartesian product of attribute values
- **Reconciler**: carries matching variants forward, creates the rest
- **Service**: stateful session running the edit/regenerate cycle
"""

from variantmatrix.catalog.attributes import (
    AddAttribute,
    AddValue,
    AttributeCommand,
    AttributeDefinition,
    AttributeSet,
    RemoveAttribute,
    RemoveValue,
    RenameAttribute,
    SetValue,
    add_attribute,
    add_value,
    apply_command,
    apply_commands,
    remove_attribute,
    remove_value,
    rename_attribute,
    set_value,
)
from variantmatrix.catalog.combinations import (
    Combination,
    Selection,
    count_combinations,
    generate_combinations,
    identity_key,
    iter_combinations,
)
from variantmatrix.catalog.editing import (
    BulkUpdateType,
    BulkVariantUpdate,
    apply_bulk_update,
    update_variant,
)
from variantmatrix.catalog.models import VariantRecord, build_variant_sku
from variantmatrix.catalog.reconciler import ReconciliationSummary, reconcile, summarize
from variantmatrix.catalog.schemas import (
    AttributeDefinitionSchema,
    VariantMatrixSchema,
    VariantRecordSchema,
)
from variantmatrix.catalog.service import VariantMatrix

__all__ = [
    # Attributes
    "AttributeDefinition",
    "AttributeSet",
    "add_attribute",
    "remove_attribute",
    "rename_attribute",
    "add_value",
    "set_value",
    "remove_value",
    # Commands
    "AttributeCommand",
    "AddAttribute",
    "RemoveAttribute",
    "RenameAttribute",
    "AddValue",
    "SetValue",
    "RemoveValue",
    "apply_command",
    "apply_commands",
    # Combinations
    "Combination",
    "Selection",
    "count_combinations",
    "generate_combinations",
    "identity_key",
    "iter_combinations",
    # Variants
    "VariantRecord",
    "build_variant_sku",
    "ReconciliationSummary",
    "reconcile",
    "summarize",
    # Editing
    "BulkUpdateType",
    "BulkVariantUpdate",
    "apply_bulk_update",
    "update_variant",
    # Schemas
    "AttributeDefinitionSchema",
    "VariantMatrixSchema",
    "VariantRecordSchema",
    # Service
    "VariantMatrix",
]
