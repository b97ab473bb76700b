"""
CLOPE Clustering Module

Clusters transactional data by greedily maximizing profit:
an initial placement pass followed by improvement passes that
relocate transactions until a full pass moves nothing.
"""

import math
import numpy as np
from enum import Enum
from typing import Callable, Dict, Hashable, Iterable, List, Optional
from dataclasses import dataclass, field
import logging

from sklearn.metrics import silhouette_score
from sklearn.preprocessing import MultiLabelBinarizer

from clope.dataset import Dataset, Transaction, create_dataset
from config.settings import (
    DEFAULT_REPULSION,
    CLOPE_MAX_PASSES,
    DEFAULT_PROBE,
    SILHOUETTE_MAX_SAMPLES,
)

from .cluster import Cluster
from .placement import GreedyPlacer
from .profit import total_profit, normalized_profit

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

RelocateCallback = Callable[[Transaction, int, int], None]


class ClusteringState(Enum):
    UNINITIALIZED = 'uninitialized'
    INITIALIZED = 'initialized'
    CONVERGED = 'converged'


@dataclass
class ClusterResult:
    """Result of a CLOPE run."""
    labels: np.ndarray
    transactions: List[Transaction]
    n_clusters: int
    repulsion: float
    n_passes: int
    converged: bool
    metrics: Dict[str, float] = field(default_factory=dict)
    algorithm: str = 'clope'

    def get_cluster_indices(self, cluster_id: int) -> np.ndarray:
        """Get indices of transactions in a specific cluster."""
        return np.where(self.labels == cluster_id)[0]

    def get_cluster_sizes(self) -> Dict[int, int]:
        """Get size of each cluster."""
        unique, counts = np.unique(self.labels, return_counts=True)
        return dict(zip(unique.tolist(), counts.tolist()))

    def get_cluster_transactions(self, cluster_id: int) -> List[Transaction]:
        return [self.transactions[i] for i in self.get_cluster_indices(cluster_id)]

    def label_of(self, transaction: Iterable[Hashable]) -> int:
        """Cluster label of a transaction (or plain iterable of items)."""
        if not isinstance(transaction, Transaction):
            transaction = Transaction(transaction)
        return int(self.labels[self.transactions.index(transaction)])


class ClopeClusterer:
    """
    CLOPE clustering engine.

    Owns the dataset labels and the partition for the duration of a run.
    States move UNINITIALIZED -> INITIALIZED -> CONVERGED.
    """

    def __init__(
        self,
        repulsion: float = DEFAULT_REPULSION,
        max_passes: Optional[int] = CLOPE_MAX_PASSES,
        probe: str = DEFAULT_PROBE,
        on_relocate: Optional[RelocateCallback] = None,
        compute_silhouette: bool = True,
    ):
        """
        Initialize clusterer.

        Args:
            repulsion: Repulsion coefficient r >= 0
            max_passes: Cap on improvement passes, None to run until converged
            probe: Delta evaluation mode passed to GreedyPlacer
            on_relocate: Called as (transaction, old_label, new_label) after
                every move during an improvement pass
            compute_silhouette: Whether fit() reports a Jaccard silhouette
        """
        if isinstance(repulsion, bool) or not isinstance(repulsion, (int, float)):
            raise ValueError(f"Repulsion must be a real number, got {repulsion!r}")
        if not math.isfinite(repulsion) or repulsion < 0:
            raise ValueError(f"Repulsion must be finite and non-negative, got {repulsion}")
        if max_passes is not None and max_passes < 1:
            raise ValueError(f"max_passes must be at least 1, got {max_passes}")

        self.repulsion = float(repulsion)
        self.max_passes = max_passes
        self.placer = GreedyPlacer(self.repulsion, probe=probe)
        self.on_relocate = on_relocate
        self.compute_silhouette = compute_silhouette

        self.clusters: List[Cluster] = []
        self.dataset: Optional[Dataset] = None
        self.state = ClusteringState.UNINITIALIZED
        self.n_passes = 0

    def init(self, dataset: Dataset):
        """Step 1: place every transaction greedily, in dataset order."""
        if self.state is not ClusteringState.UNINITIALIZED:
            raise RuntimeError("Clusterer already initialized. Create a new one per run.")

        self.dataset = dataset
        for transaction in dataset:
            dataset.set_label(transaction, self.placer.add_by_max_profit(self.clusters, transaction))

        self.state = ClusteringState.INITIALIZED
        logger.info(
            f"Initial placement: {len(dataset)} transactions in {len(self.clusters)} clusters"
        )

    def run_pass(self) -> int:
        """
        One improvement pass over every transaction.

        Each transaction leaves its cluster and is re-placed against the
        live partition. Empty clusters are pruned only after the pass,
        since labels index into the partition while it runs.

        Returns:
            Number of transactions that changed cluster
        """
        if self.state is ClusteringState.UNINITIALIZED:
            raise RuntimeError("Clusterer not initialized. Call init() first.")

        dataset = self.dataset
        moves = 0
        for transaction, old_label in dataset.items():
            self.clusters[old_label].remove_transaction(transaction)
            new_label = self.placer.add_by_max_profit(self.clusters, transaction)
            dataset.set_label(transaction, new_label)

            if new_label != old_label:
                moves += 1
                if self.on_relocate is not None:
                    self.on_relocate(transaction, old_label, new_label)

        self._prune_empty_clusters()
        self.n_passes += 1
        self.state = ClusteringState.INITIALIZED if moves else ClusteringState.CONVERGED
        logger.debug(f"Pass {self.n_passes}: {moves} moves, {len(self.clusters)} clusters")
        return moves

    def improve_clustering(self) -> bool:
        """
        Step 2: run passes until one produces no moves.

        Returns:
            True if the partition converged, False if max_passes stopped it
        """
        if self.state is ClusteringState.UNINITIALIZED:
            raise RuntimeError("Clusterer not initialized. Call init() first.")

        passes = 0
        while self.state is not ClusteringState.CONVERGED:
            if self.max_passes is not None and passes >= self.max_passes:
                logger.warning(f"Stopped after {passes} passes without converging")
                return False
            self.run_pass()
            passes += 1

        logger.info(
            f"Converged after {self.n_passes} passes: {len(self.clusters)} clusters, "
            f"profit = {self.total_profit():.4f}"
        )
        return True

    def fit(self, dataset: Dataset) -> ClusterResult:
        """
        Cluster a dataset.

        Args:
            dataset: Deduplicated transactions, all unassigned

        Returns:
            ClusterResult with labels and metrics
        """
        self.init(dataset)
        converged = self.improve_clustering()

        labels = dataset.labels()
        transactions = dataset.transactions

        return ClusterResult(
            labels=labels,
            transactions=transactions,
            n_clusters=len(self.clusters),
            repulsion=self.repulsion,
            n_passes=self.n_passes,
            converged=converged,
            metrics=self._calculate_metrics(transactions, labels),
        )

    def total_profit(self) -> float:
        return total_profit(self.clusters, self.repulsion)

    def _prune_empty_clusters(self):
        """Drop empty clusters and remap labels to the compacted indices."""
        if all(not cluster.is_empty() for cluster in self.clusters):
            return

        remap = {}
        kept = []
        for index, cluster in enumerate(self.clusters):
            if not cluster.is_empty():
                remap[index] = len(kept)
                kept.append(cluster)

        logger.debug(f"Pruned {len(self.clusters) - len(kept)} empty clusters")
        self.clusters = kept

        for transaction, label in list(self.dataset.items()):
            self.dataset.set_label(transaction, remap[label])

    def _calculate_metrics(
        self,
        transactions: List[Transaction],
        labels: np.ndarray,
    ) -> Dict[str, float]:
        """Calculate clustering quality metrics."""
        metrics = {
            'profit': self.total_profit(),
            'normalized_profit': normalized_profit(self.clusters, self.repulsion),
        }

        n_clusters = len(self.clusters)
        if not self.compute_silhouette or not (2 <= n_clusters < len(transactions)):
            return metrics

        try:
            X = MultiLabelBinarizer().fit_transform(
                [list(tr.unique_items()) for tr in transactions]
            ).astype(bool)
            sample_size = SILHOUETTE_MAX_SAMPLES if len(X) > SILHOUETTE_MAX_SAMPLES else None
            metrics['silhouette_jaccard'] = float(
                silhouette_score(X, labels, metric='jaccard', sample_size=sample_size, random_state=42)
            )
        except (ValueError, TypeError) as e:
            logger.warning(f"Could not compute silhouette: {e}")

        return metrics


def cluster_transactions(
    transactions: Iterable[Iterable[Hashable]],
    repulsion: float = DEFAULT_REPULSION,
    **kwargs
) -> ClusterResult:
    """
    Convenience function to cluster raw transactions.

    Args:
        transactions: Transactions as iterables of items (duplicates collapse)
        repulsion: Repulsion coefficient r
        **kwargs: Additional ClopeClusterer parameters

    Returns:
        ClusterResult
    """
    dataset = create_dataset(transactions)
    clusterer = ClopeClusterer(repulsion=repulsion, **kwargs)
    return clusterer.fit(dataset)


if __name__ == "__main__":
    baskets = [
        "abc", "abcd", "bcde", "abd", "xyz", "xy", "xyzw", "yzw", "ab", "xz",
    ]

    result = cluster_transactions(baskets, repulsion=2.0)
    print(f"  Clusters: {result.n_clusters}")
    print(f"  Sizes: {result.get_cluster_sizes()}")
    print(f"  Passes: {result.n_passes}")
    print(f"  Profit: {result.metrics['profit']:.4f}")
