"""
Transaction Module

A transaction is an immutable multiset of categorical items.
"""

from collections import Counter
from typing import Any, Dict, Hashable, Iterable, Iterator, Tuple


class Transaction:
    """
    Immutable multiset of hashable items.

    Items keep their input order, but identity is order-independent:
    two transactions are equal when every item occurs the same number
    of times in both. Duplicated items are kept and counted.
    """

    __slots__ = ('_items', '_counts', '_hash')

    def __init__(self, items: Iterable[Hashable] = ()):
        self._items: Tuple[Hashable, ...] = tuple(items)
        self._counts: Dict[Hashable, int] = dict(Counter(self._items))
        self._hash = hash(frozenset(self._counts.items()))

    @property
    def items(self) -> Tuple[Hashable, ...]:
        return self._items

    def item_counts(self) -> Dict[Hashable, int]:
        """Map each distinct item to its multiplicity."""
        return dict(self._counts)

    def unique_items(self) -> Iterator[Hashable]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._items)

    def __contains__(self, item: Any) -> bool:
        return item in self._counts

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self._hash == other._hash and self._counts == other._counts

    def __hash__(self) -> int:
        return self._hash

    def __setattr__(self, name, value):
        if hasattr(self, '_hash'):
            raise AttributeError("Transaction is immutable")
        object.__setattr__(self, name, value)

    def __repr__(self) -> str:
        return f"Transaction({list(self._items)!r})"
