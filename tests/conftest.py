"""Shared fixtures for variant matrix tests."""

import itertools
from collections.abc import Callable

import pytest

from variantmatrix.catalog import AttributeSet
from variantmatrix.domain import VariantId


@pytest.fixture
def id_factory() -> Callable[[], VariantId]:
    """Deterministic variant id factory (var_0001, var_0002, ...)."""
    counter = itertools.count(1)
    return lambda: VariantId(f"var_{next(counter):04d}")


@pytest.fixture
def size_color() -> AttributeSet:
    """Size [S, M] x Color [Red]."""
    return AttributeSet.from_mapping({"Size": ["S", "M"], "Color": ["Red"]})
