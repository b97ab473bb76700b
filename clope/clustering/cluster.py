"""
Cluster Statistics Module

Aggregate counters for one cluster of transactions:
N (transactions), S (item occurrences), Occ (per-item counts)
and W (distinct items).
"""

from collections import Counter
from typing import Dict, Hashable, List, Tuple

from clope.dataset import Transaction


class ClusterInvariantError(AssertionError):
    """Cluster counters are inconsistent. Always a programming error."""


class Cluster:
    """
    Mutable statistics of the transactions currently in a cluster.

    Invariants:
        unique_objects_count == len(count_by_objects)
        all_objects_count == sum(count_by_objects.values())
        every stored count is positive
    """

    __slots__ = (
        'transactions_count',
        'all_objects_count',
        'unique_objects_count',
        'count_by_objects',
    )

    def __init__(self):
        self.transactions_count = 0   # N
        self.all_objects_count = 0    # S
        self.unique_objects_count = 0  # W
        self.count_by_objects: Dict[Hashable, int] = {}  # Occ

    def add_transaction(self, transaction: Transaction):
        """Add a transaction in O(len(transaction))."""
        self.transactions_count += 1
        self.all_objects_count += len(transaction)

        counts = self.count_by_objects
        for item in transaction:
            counts[item] = counts.get(item, 0) + 1

        self.unique_objects_count = len(counts)

    def remove_transaction(self, transaction: Transaction):
        """
        Remove a previously added transaction.

        Raises:
            ClusterInvariantError: if the cluster does not hold the
                transaction's items. Counters are left untouched.
        """
        if self.transactions_count <= 0:
            raise ClusterInvariantError("Cannot remove a transaction from an empty cluster")

        counts = self.count_by_objects
        for item, needed in transaction.item_counts().items():
            if counts.get(item, 0) < needed:
                raise ClusterInvariantError(
                    f"Item {item!r} occurs {counts.get(item, 0)} times in cluster, "
                    f"cannot remove {needed}"
                )

        self.transactions_count -= 1
        self.all_objects_count -= len(transaction)

        for item in transaction:
            remaining = counts[item] - 1
            if remaining:
                counts[item] = remaining
            else:
                del counts[item]

        self.unique_objects_count = len(counts)

    def is_empty(self) -> bool:
        return self.transactions_count == 0

    def copy(self) -> "Cluster":
        clone = Cluster()
        clone.transactions_count = self.transactions_count
        clone.all_objects_count = self.all_objects_count
        clone.unique_objects_count = self.unique_objects_count
        clone.count_by_objects = dict(self.count_by_objects)
        return clone

    def new_items_count(self, transaction: Transaction) -> int:
        """Number of distinct items of transaction not yet in the cluster."""
        counts = self.count_by_objects
        return sum(1 for item in transaction.unique_items() if item not in counts)

    def top_items(self, n: int = 5) -> List[Tuple[Hashable, int]]:
        """Most frequent items, ties in insertion order."""
        return Counter(self.count_by_objects).most_common(n)

    def check_invariants(self):
        """Raise ClusterInvariantError if counters disagree."""
        counts = self.count_by_objects
        if self.transactions_count < 0:
            raise ClusterInvariantError(f"Negative transaction count: {self.transactions_count}")
        if self.unique_objects_count != len(counts):
            raise ClusterInvariantError(
                f"W={self.unique_objects_count} but {len(counts)} items are counted"
            )
        if self.all_objects_count != sum(counts.values()):
            raise ClusterInvariantError(
                f"S={self.all_objects_count} but occurrences sum to {sum(counts.values())}"
            )
        if any(count <= 0 for count in counts.values()):
            raise ClusterInvariantError("Non-positive item count stored")
        if self.is_empty() and (counts or self.all_objects_count):
            raise ClusterInvariantError("Empty cluster carries residual item counts")

    def __repr__(self) -> str:
        return (
            f"Cluster(N={self.transactions_count}, S={self.all_objects_count}, "
            f"W={self.unique_objects_count})"
        )
