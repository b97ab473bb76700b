import random

import pytest

from clope.dataset import Transaction


@pytest.fixture
def themed_baskets():
    """Baskets drawn from two disjoint item themes, with repeats."""
    rng = random.Random(7)
    themes = ["abcdef", "uvwxyz"]
    baskets = []
    for i in range(60):
        theme = themes[i % 2]
        size = rng.randint(2, 5)
        baskets.append(rng.sample(theme, size))
    return baskets


@pytest.fixture
def make_transaction():
    def _make(items):
        return Transaction(items)
    return _make
