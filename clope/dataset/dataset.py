"""
Dataset Module

Maps every distinct transaction to its current cluster label.
Identical transactions collapse into a single entry.
"""

import numpy as np
from typing import Dict, Hashable, Iterable, Iterator, List, Tuple, Union
import logging

from config.settings import UNASSIGNED_CLUSTER

from .transaction import Transaction

logger = logging.getLogger(__name__)

TransactionLike = Union[Transaction, Iterable[Hashable]]


def _as_transaction(raw: TransactionLike) -> Transaction:
    if isinstance(raw, Transaction):
        return raw
    # A plain string becomes a transaction of single-character items
    return Transaction(raw)


class Dataset:
    """
    Ordered mapping of transaction -> cluster label.

    Entries are fixed at construction; only labels change afterwards.
    Iteration follows the order in which transactions first appeared.
    """

    def __init__(self):
        self._labels: Dict[Transaction, int] = {}
        self.n_duplicates = 0

    @classmethod
    def from_transactions(cls, transactions: Iterable[TransactionLike]) -> "Dataset":
        """
        Build a dataset, dropping duplicate transactions.

        Args:
            transactions: Transaction objects or iterables of items

        Returns:
            Dataset with every entry labelled UNASSIGNED_CLUSTER
        """
        dataset = cls()
        n_input = 0
        for raw in transactions:
            n_input += 1
            tr = _as_transaction(raw)
            if tr in dataset._labels:
                dataset.n_duplicates += 1
                continue
            dataset._labels[tr] = UNASSIGNED_CLUSTER

        logger.info(
            f"Created dataset: {len(dataset)} transactions "
            f"({dataset.n_duplicates} duplicates dropped from {n_input})"
        )
        return dataset

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._labels)

    def __contains__(self, transaction) -> bool:
        return transaction in self._labels

    def items(self) -> Iterator[Tuple[Transaction, int]]:
        return iter(self._labels.items())

    @property
    def transactions(self) -> List[Transaction]:
        return list(self._labels)

    def get_label(self, transaction: Transaction) -> int:
        return self._labels[transaction]

    def set_label(self, transaction: Transaction, label: int):
        if transaction not in self._labels:
            raise KeyError(f"{transaction!r} is not part of the dataset")
        self._labels[transaction] = label

    def labels(self) -> np.ndarray:
        """Labels in iteration order."""
        return np.fromiter(self._labels.values(), dtype=int, count=len(self._labels))

    def labels_for(self, transactions: Iterable[TransactionLike]) -> np.ndarray:
        """Labels for a raw transaction collection, duplicates included."""
        return np.array(
            [self._labels[_as_transaction(raw)] for raw in transactions],
            dtype=int,
        )

    def is_assigned(self) -> bool:
        return all(label != UNASSIGNED_CLUSTER for label in self._labels.values())

    def __repr__(self) -> str:
        return f"Dataset(n_transactions={len(self)}, n_duplicates={self.n_duplicates})"


def create_dataset(transactions: Iterable[TransactionLike]) -> Dataset:
    """Convenience wrapper around Dataset.from_transactions."""
    return Dataset.from_transactions(transactions)
