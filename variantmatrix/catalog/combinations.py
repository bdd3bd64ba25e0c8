"""Combination generator.

Derives every purchasable combination of attribute values (the
Cartesian product of the attribute set). Attributes are expanded
outer-to-inner in definition order and values in list order, so for
``Size: [S, M]`` and ``Color: [Red, Blue]`` the order is
``(S, Red), (S, Blue), (M, Red), (M, Blue)``.

An attribute with no values is a dimension with zero options and
collapses the whole product to nothing; it is not skipped. An attribute
whose values are all empty strings (a freshly added attribute) is not a
dimension yet and is left out, so adding one does not change any
combination. Values are never deduplicated.

The product grows multiplicatively with the number of attributes, so
``generate_combinations`` accepts an optional ``limit`` and
``iter_combinations`` enumerates lazily for callers that stream.
"""

import itertools
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import structlog

from variantmatrix.catalog.attributes import AttributeDefinition
from variantmatrix.domain.base import ValueObject
from variantmatrix.domain.exceptions import CombinationLimitExceededError
from variantmatrix.domain.value_objects import AttributeId, MatchStrategy

logger = structlog.get_logger()

IdentityKey = tuple[str, ...] | tuple[tuple[str, str], ...]


# ============================================================================
# Combination
# ============================================================================


@dataclass(frozen=True)
class Selection(ValueObject):
    """One attribute's chosen value within a combination.

    Attributes:
        attribute_id: Id of the attribute definition.
        name: Attribute name at generation time.
        value: Selected value.
    """

    attribute_id: AttributeId
    name: str
    value: str


@dataclass(frozen=True)
class Combination(ValueObject):
    """A full assignment of one value to every attribute with a non-empty value.

    Selections are kept in attribute-definition order. Attribute names
    may repeat, which is why selections are a tuple and not a dict.
    """

    selections: tuple[Selection, ...]

    @property
    def values(self) -> tuple[str, ...]:
        """Selected values in attribute order."""
        return tuple(s.value for s in self.selections)

    @property
    def names(self) -> tuple[str, ...]:
        """Attribute names in attribute order."""
        return tuple(s.name for s in self.selections)

    def as_dict(self) -> dict[str, str]:
        """Return ``{attribute name: value}`` in attribute order.

        When two attributes share a name the later one wins.
        """
        return {s.name: s.value for s in self.selections}

    def identity_key(self, strategy: MatchStrategy = MatchStrategy.POSITIONAL) -> IdentityKey:
        """Key used to match this combination against stored variants."""
        return identity_key(self.names, self.values, strategy)

    def __len__(self) -> int:
        return len(self.selections)


def identity_key(
    names: Iterable[str],
    values: Iterable[str],
    strategy: MatchStrategy = MatchStrategy.POSITIONAL,
) -> IdentityKey:
    """Build a matching key from attribute names and values.

    Args:
        names: Attribute names in attribute order.
        values: Selected values in attribute order.
        strategy: Matching strategy.

    Returns:
        The ordered value tuple for POSITIONAL, or the sorted
        ``(name, value)`` pairs for BY_ATTRIBUTE.
    """
    if strategy == MatchStrategy.BY_ATTRIBUTE:
        return tuple(sorted(zip(names, values)))
    return tuple(values)


# ============================================================================
# Generation
# ============================================================================


def _dimensions(attributes: Iterable[AttributeDefinition]) -> tuple[AttributeDefinition, ...]:
    """Definitions that take part in the product.

    A definition with no values is kept (it collapses the product). One
    whose values are all empty strings is dropped.
    """
    return tuple(a for a in attributes if not a.values or any(a.values))


def count_combinations(attributes: Iterable[AttributeDefinition]) -> int:
    """Number of combinations the attributes produce, without building them.

    Args:
        attributes: Attribute definitions.

    Returns:
        Product of value-list sizes, or 0 when no attribute has a
        non-empty value.
    """
    sizes = [len(a.values) for a in _dimensions(attributes)]
    if not sizes:
        return 0
    return math.prod(sizes)


def iter_combinations(attributes: Iterable[AttributeDefinition]) -> Iterator[Combination]:
    """Lazily enumerate combinations in generator order.

    Each call starts a fresh, finite enumeration.

    Args:
        attributes: Attribute definitions.

    Yields:
        Combination instances.
    """
    definitions = _dimensions(attributes)
    if not definitions:
        return

    dimensions = [
        [Selection(attribute_id=a.id, name=a.name, value=v) for v in a.values]
        for a in definitions
    ]
    for selections in itertools.product(*dimensions):
        yield Combination(selections=selections)


def generate_combinations(
    attributes: Iterable[AttributeDefinition],
    limit: int | None = None,
) -> list[Combination]:
    """Build the complete list of combinations.

    Args:
        attributes: Attribute definitions, in definition order.
        limit: Optional maximum number of combinations.

    Returns:
        All combinations in generator order.

    Raises:
        CombinationLimitExceededError: If ``limit`` is set and the product
            is larger.
    """
    definitions = tuple(attributes)
    count = count_combinations(definitions)

    if limit is not None and count > limit:
        logger.warning(
            "Combination limit exceeded",
            attribute_count=len(definitions),
            combination_count=count,
            limit=limit,
        )
        raise CombinationLimitExceededError(count=count, limit=limit)

    combinations = list(iter_combinations(definitions))
    logger.debug(
        "Combinations generated",
        attribute_count=len(definitions),
        combination_count=len(combinations),
    )
    return combinations
