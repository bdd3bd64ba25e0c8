"""Tests for the variant reconciler."""

from collections.abc import Callable
from decimal import Decimal

from variantmatrix.catalog import (
    AttributeSet,
    VariantRecord,
    add_value,
    generate_combinations,
    reconcile,
    remove_value,
    summarize,
    update_variant,
)
from variantmatrix.domain import MatchStrategy, VariantId


def find(variants: list[VariantRecord], *values: str) -> VariantRecord:
    """Return the variant for a value tuple."""
    return next(v for v in variants if v.attribute_values == values)


class TestNewVariants:
    """Tests for variants created from unmatched combinations."""

    def test_end_to_end_example(
        self, size_color: AttributeSet, id_factory: Callable[[], VariantId]
    ) -> None:
        """Size [S, M] x Color [Red] at base price 20 yields two fresh variants."""
        variants = reconcile(generate_combinations(size_color), [], 20, id_factory=id_factory)

        assert [v.attribute_values for v in variants] == [("S", "Red"), ("M", "Red")]
        for variant in variants:
            assert variant.price == Decimal("20")
            assert variant.quantity == 0
            assert variant.is_active is True
        assert [str(v.id) for v in variants] == ["var_0001", "var_0002"]

    def test_new_variants_record_attribute_names(self, size_color: AttributeSet) -> None:
        """New variants remember the attribute names they were built from."""
        variants = reconcile(generate_combinations(size_color), [], 20)
        assert variants[0].attribute_names == ("Size", "Color")
        assert variants[0].attributes == {"Size": "S", "Color": "Red"}

    def test_sku_empty_without_base_sku(self, size_color: AttributeSet) -> None:
        """No SKU is synthesized when no base SKU is given."""
        variants = reconcile(generate_combinations(size_color), [], 20)
        assert all(v.sku == "" for v in variants)

    def test_sku_synthesized_from_base_sku(self, size_color: AttributeSet) -> None:
        """SKUs join the base SKU and the values."""
        variants = reconcile(generate_combinations(size_color), [], 20, base_sku="TSHIRT")
        assert [v.sku for v in variants] == ["TSHIRT-S-Red", "TSHIRT-M-Red"]

    def test_custom_separator(self, size_color: AttributeSet) -> None:
        """The SKU separator is configurable."""
        variants = reconcile(
            generate_combinations(size_color), [], 20, base_sku="TS", separator="_"
        )
        assert variants[0].sku == "TS_S_Red"

    def test_float_base_price_is_exact(self, size_color: AttributeSet) -> None:
        """Float prices convert without binary artifacts."""
        variants = reconcile(generate_combinations(size_color), [], 19.99)
        assert variants[0].price == Decimal("19.99")

    def test_empty_inputs(self) -> None:
        """No combinations and no prior variants yield an empty list."""
        assert reconcile([], [], 10) == []


class TestStability:
    """Tests for carrying prior variants forward."""

    def test_edit_survives_irrelevant_attribute_edit(self) -> None:
        """A price edit on (S, Red) survives adding Color Blue."""
        attributes = AttributeSet.from_mapping({"Size": ["S", "M"], "Color": ["Red"]})
        variants = reconcile(generate_combinations(attributes), [], 20)
        s_red = find(variants, "S", "Red")
        variants = update_variant(variants, s_red.id, price=Decimal("9.99"))

        color_id = attributes[1].id
        attributes = add_value(attributes, color_id, "Blue")
        variants = reconcile(generate_combinations(attributes), variants, 20)

        assert find(variants, "S", "Red").price == Decimal("9.99")
        assert find(variants, "S", "Red").id == s_red.id

    def test_new_combinations_get_defaults(self) -> None:
        """(S, Blue) and (M, Blue) appear with default fields."""
        attributes = AttributeSet.from_mapping({"Size": ["S", "M"], "Color": ["Red"]})
        variants = reconcile(generate_combinations(attributes), [], 20)
        variants = update_variant(variants, variants[0].id, price=Decimal("9.99"))

        attributes = add_value(attributes, attributes[1].id, "Blue")
        variants = reconcile(generate_combinations(attributes), variants, 20)

        assert [v.attribute_values for v in variants] == [
            ("S", "Red"),
            ("S", "Blue"),
            ("M", "Red"),
            ("M", "Blue"),
        ]
        for values in [("S", "Blue"), ("M", "Blue")]:
            variant = find(variants, *values)
            assert variant.price == Decimal("20")
            assert variant.quantity == 0
            assert variant.is_active is True

    def test_orphans_removed(self) -> None:
        """Removing Red drops both Red variants and keeps the Blue ones intact."""
        attributes = AttributeSet.from_mapping({"Size": ["S", "M"], "Color": ["Red", "Blue"]})
        variants = reconcile(generate_combinations(attributes), [], 20)
        s_blue = find(variants, "S", "Blue")
        m_blue = find(variants, "M", "Blue")
        variants = update_variant(variants, s_blue.id, quantity=7, sku="S-BLUE")
        variants = update_variant(variants, m_blue.id, is_active=False)
        before = {v.id: v for v in variants}

        attributes = remove_value(attributes, attributes[1].id, 0)
        variants = reconcile(generate_combinations(attributes), variants, 20)

        assert [v.attribute_values for v in variants] == [("S", "Blue"), ("M", "Blue")]
        assert variants == [before[s_blue.id], before[m_blue.id]]
        assert variants[0].quantity == 7
        assert variants[0].sku == "S-BLUE"
        assert variants[1].is_active is False

    def test_idempotence(
        self, size_color: AttributeSet, id_factory: Callable[[], VariantId]
    ) -> None:
        """Reconciling the output again changes nothing."""
        combinations = generate_combinations(size_color)
        first = reconcile(combinations, [], 20, id_factory=id_factory)
        second = reconcile(combinations, first, 20, id_factory=id_factory)
        assert second == first

    def test_base_price_only_affects_new_variants(self, size_color: AttributeSet) -> None:
        """Changing the base price leaves existing variants alone."""
        combinations = generate_combinations(size_color)
        first = reconcile(combinations, [], 20)
        second = reconcile(combinations, first, 35)
        assert all(v.price == Decimal("20") for v in second)

    def test_removing_attribute_recreates_all(self) -> None:
        """Dropping a dimension changes every key, so all variants are new."""
        attributes = AttributeSet.from_mapping({"Size": ["S", "M"], "Color": ["Red"]})
        first = reconcile(generate_combinations(attributes), [], 20)
        attributes = AttributeSet(attributes=attributes.attributes[:1])
        second = reconcile(generate_combinations(attributes), first, 20)

        assert [v.attribute_values for v in second] == [("S",), ("M",)]
        assert not {v.id for v in first} & {v.id for v in second}

    def test_duplicate_values_get_distinct_ids(
        self, id_factory: Callable[[], VariantId]
    ) -> None:
        """Repeated combinations never share a variant id and stay stable."""
        attributes = AttributeSet.from_mapping({"Color": ["Red", "Red"]})
        combinations = generate_combinations(attributes)
        first = reconcile(combinations, [], 5, id_factory=id_factory)
        second = reconcile(combinations, first, 5, id_factory=id_factory)

        assert len({v.id for v in first}) == 2
        assert second == first


class TestMatchStrategy:
    """Tests for positional and attribute-keyed matching."""

    def test_positional_reorder_loses_matches(self) -> None:
        """Under positional matching, reordering attributes recreates every variant."""
        attributes = AttributeSet.from_mapping({"Size": ["S"], "Color": ["Red"]})
        first = reconcile(generate_combinations(attributes), [], 20)
        first = update_variant(first, first[0].id, price=Decimal("9.99"))

        reordered = AttributeSet(attributes=tuple(reversed(attributes.attributes)))
        second = reconcile(generate_combinations(reordered), first, 20)

        assert second[0].id != first[0].id
        assert second[0].price == Decimal("20")

    def test_by_attribute_survives_reorder(self) -> None:
        """Attribute-keyed matching carries variants across a reorder."""
        attributes = AttributeSet.from_mapping({"Size": ["S"], "Color": ["Red"]})
        first = reconcile(
            generate_combinations(attributes), [], 20, strategy=MatchStrategy.BY_ATTRIBUTE
        )
        first = update_variant(first, first[0].id, price=Decimal("9.99"))

        reordered = AttributeSet(attributes=tuple(reversed(attributes.attributes)))
        second = reconcile(
            generate_combinations(reordered), first, 20, strategy=MatchStrategy.BY_ATTRIBUTE
        )

        assert second == first

    def test_by_attribute_rename_breaks_match(self) -> None:
        """Attribute-keyed matching treats a renamed attribute as a new dimension."""
        attributes = AttributeSet.from_mapping({"Size": ["S"]})
        first = reconcile(
            generate_combinations(attributes), [], 20, strategy=MatchStrategy.BY_ATTRIBUTE
        )
        renamed = AttributeSet.from_mapping({"Fit": ["S"]})
        second = reconcile(
            generate_combinations(renamed), first, 20, strategy=MatchStrategy.BY_ATTRIBUTE
        )
        assert second[0].id != first[0].id

    def test_positional_rename_keeps_match(self) -> None:
        """Positional matching ignores names, so renaming keeps variants."""
        attributes = AttributeSet.from_mapping({"Size": ["S"]})
        first = reconcile(generate_combinations(attributes), [], 20)
        renamed = AttributeSet.from_mapping({"Fit": ["S"]})
        second = reconcile(generate_combinations(renamed), first, 20)
        assert second == first

    def test_by_attribute_matches_nameless_records_by_position(self) -> None:
        """Records restored without attribute names still match on their values."""
        attributes = AttributeSet.from_mapping({"Size": ["S", "M"]})
        stored = VariantRecord(
            id=VariantId("var_1"), attribute_values=("S",), price=Decimal("9.99")
        )
        variants = reconcile(
            generate_combinations(attributes),
            [stored],
            20,
            strategy=MatchStrategy.BY_ATTRIBUTE,
        )

        assert variants[0] == stored
        assert variants[1].id != stored.id
        assert variants[1].price == Decimal("20")

    def test_by_attribute_mismatched_names_fall_back(self) -> None:
        """A record whose names do not line up with its values matches by position."""
        attributes = AttributeSet.from_mapping({"Size": ["S"], "Color": ["Red"]})
        stored = VariantRecord(
            id=VariantId("var_1"),
            attribute_values=("S", "Red"),
            attribute_names=("Size",),
        )
        (variant,) = reconcile(
            generate_combinations(attributes),
            [stored],
            20,
            strategy=MatchStrategy.BY_ATTRIBUTE,
        )
        assert variant.id == stored.id

    def test_by_attribute_prefers_named_record(self) -> None:
        """A named match is claimed before a nameless one with the same values."""
        attributes = AttributeSet.from_mapping({"Size": ["S"]})
        nameless = VariantRecord(id=VariantId("var_1"), attribute_values=("S",))
        named = VariantRecord(
            id=VariantId("var_2"), attribute_values=("S",), attribute_names=("Size",)
        )
        (variant,) = reconcile(
            generate_combinations(attributes),
            [nameless, named],
            20,
            strategy=MatchStrategy.BY_ATTRIBUTE,
        )
        assert variant.id == named.id


class TestSummarize:
    """Tests for reconciliation summaries."""

    def test_summary(self) -> None:
        """Kept, created and dropped ids are reported."""
        attributes = AttributeSet.from_mapping({"Color": ["Red", "Blue"]})
        first = reconcile(generate_combinations(attributes), [], 20)
        red, blue = first

        attributes = AttributeSet.from_mapping({"Color": ["Blue", "Green"]})
        second = reconcile(generate_combinations(attributes), first, 20)
        summary = summarize(first, second)

        assert summary.kept_ids == (str(blue.id),)
        assert summary.dropped_ids == (str(red.id),)
        assert summary.created_ids == (str(second[1].id),)
        assert summary.has_changes

    def test_summary_without_changes(self, size_color: AttributeSet) -> None:
        """Identical lists report no changes."""
        variants = reconcile(generate_combinations(size_color), [], 20)
        summary = summarize(variants, variants)
        assert not summary.has_changes
        assert len(summary.kept_ids) == 2
