"""Variant reconciler.

Derives the next variant list from freshly generated combinations and
the previous variant list. A combination whose identity key matches a
prior record carries that record forward unchanged, so SKU, price,
quantity and activation edits survive unrelated attribute edits. A
combination without a match gets a new record with defaults. Prior
records whose combination no longer exists are dropped.

The output follows generator order and holds exactly one record per
combination. Reconciling the output again against the same
combinations returns an identical list.
"""

from collections import defaultdict, deque
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

import structlog

from variantmatrix.catalog.combinations import Combination, IdentityKey
from variantmatrix.catalog.models import VariantRecord, build_variant_sku, to_price
from variantmatrix.domain.value_objects import MatchStrategy, VariantId

logger = structlog.get_logger()


@dataclass(frozen=True)
class ReconciliationSummary:
    """What a reconciliation kept, created and dropped.

    Attributes:
        kept_ids: Ids present before and after, in output order.
        created_ids: Ids new in the output, in output order.
        dropped_ids: Ids no longer present, in prior order.
    """

    kept_ids: tuple[str, ...] = ()
    created_ids: tuple[str, ...] = ()
    dropped_ids: tuple[str, ...] = ()

    @property
    def has_changes(self) -> bool:
        """Whether any record was created or dropped."""
        return bool(self.created_ids or self.dropped_ids)


def _index_by_key(
    variants: Iterable[VariantRecord], strategy: MatchStrategy
) -> tuple[dict[IdentityKey, deque[VariantRecord]], dict[IdentityKey, deque[VariantRecord]]]:
    """Index prior records by identity key.

    Under BY_ATTRIBUTE a record without one name per value cannot build a
    name-keyed key; such records go to a second index keyed by their
    value tuple.

    Returns:
        The strategy index and the positional fallback index.
    """
    index: dict[IdentityKey, deque[VariantRecord]] = defaultdict(deque)
    fallback: dict[IdentityKey, deque[VariantRecord]] = defaultdict(deque)
    for variant in variants:
        if strategy == MatchStrategy.BY_ATTRIBUTE and not variant.has_attribute_names:
            fallback[variant.identity_key(MatchStrategy.POSITIONAL)].append(variant)
        else:
            index[variant.identity_key(strategy)].append(variant)
    return index, fallback


def reconcile(
    combinations: Iterable[Combination],
    prior_variants: Iterable[VariantRecord],
    base_price: Decimal | int | float | str,
    *,
    base_sku: str | None = None,
    strategy: MatchStrategy = MatchStrategy.POSITIONAL,
    separator: str = "-",
    id_factory: Callable[[], VariantId] = VariantId.generate,
) -> list[VariantRecord]:
    """Produce the next variant list.

    Args:
        combinations: Generator output, in generator order.
        prior_variants: The variant list from the previous regeneration.
        base_price: Price given to newly created variants.
        base_sku: SKU fragment for synthesized SKUs; new variants get an
            empty SKU when omitted.
        strategy: How combinations are matched to prior records.
        separator: Separator for synthesized SKUs.
        id_factory: Produces ids for new records.

    Returns:
        One record per combination, in combination order.
    """
    prior = list(prior_variants)
    price = to_price(base_price)
    # Each prior record is claimed at most once so repeated values never
    # share an id.
    index, fallback = _index_by_key(prior, strategy)
    if fallback:
        logger.warning(
            "Variants without attribute names matched by position",
            count=sum(len(records) for records in fallback.values()),
            strategy=strategy.value,
        )

    variants: list[VariantRecord] = []
    created = 0
    for combination in combinations:
        candidates = index.get(combination.identity_key(strategy))
        if not candidates:
            candidates = fallback.get(combination.values)
        if candidates:
            variants.append(candidates.popleft())
            continue

        values = combination.values
        variants.append(
            VariantRecord(
                id=id_factory(),
                attribute_values=values,
                attribute_names=combination.names,
                sku=build_variant_sku(base_sku, values, separator),
                price=price,
                quantity=0,
                is_active=True,
            )
        )
        created += 1

    kept = len(variants) - created
    logger.info(
        "Variants reconciled",
        variant_count=len(variants),
        kept=kept,
        created=created,
        dropped=len(prior) - kept,
        strategy=strategy.value,
    )
    return variants


def summarize(
    prior_variants: Sequence[VariantRecord],
    next_variants: Sequence[VariantRecord],
) -> ReconciliationSummary:
    """Compare two variant lists by id.

    Args:
        prior_variants: List before reconciliation.
        next_variants: List after reconciliation.

    Returns:
        Summary of kept, created and dropped ids.
    """
    prior_ids = {str(v.id) for v in prior_variants}
    next_ids = {str(v.id) for v in next_variants}
    return ReconciliationSummary(
        kept_ids=tuple(str(v.id) for v in next_variants if str(v.id) in prior_ids),
        created_ids=tuple(str(v.id) for v in next_variants if str(v.id) not in prior_ids),
        dropped_ids=tuple(str(v.id) for v in prior_variants if str(v.id) not in next_ids),
    )
