"""
Greedy Placement Engine

Puts a transaction into the cluster where it adds the most profit,
opening a new cluster when that is strictly better.
"""

from typing import List, Tuple

from clope.dataset import Transaction
from config.settings import DEFAULT_PROBE, PROBE_MODES

from .cluster import Cluster
from .profit import delta_profit_add, delta_profit_add_by_copy

_EMPTY_CLUSTER = Cluster()


class GreedyPlacer:
    """
    Stateless placement strategy.

    The partition is owned by the caller and passed in on every call.
    Candidates are scored in index order with the new-cluster slot last;
    among equal deltas the lowest index wins, so a new cluster is only
    opened when it is strictly better than every existing one.
    """

    def __init__(self, repulsion: float, probe: str = DEFAULT_PROBE):
        """
        Args:
            repulsion: Repulsion coefficient r
            probe: 'analytic' to score from counters, 'copy' to score
                a throwaway copy of each cluster
        """
        if probe not in PROBE_MODES:
            raise ValueError(f"Unknown probe: {probe}. Available: {list(PROBE_MODES)}")
        self.repulsion = repulsion
        self.probe = probe
        self._delta = delta_profit_add if probe == 'analytic' else delta_profit_add_by_copy

    def delta(self, cluster: Cluster, transaction: Transaction) -> float:
        return self._delta(cluster, transaction, self.repulsion)

    def best_placement(self, clusters: List[Cluster], transaction: Transaction) -> Tuple[int, float]:
        """
        Find the best cluster for a transaction without modifying anything.

        Returns:
            (index, delta). index == len(clusters) means a new cluster.
        """
        best_index = len(clusters)
        best_delta = self.delta(_EMPTY_CLUSTER, transaction)

        for index, cluster in enumerate(clusters):
            delta = self.delta(cluster, transaction)
            if delta > best_delta or (delta == best_delta and index < best_index):
                best_index = index
                best_delta = delta

        return best_index, best_delta

    def add_by_max_profit(self, clusters: List[Cluster], transaction: Transaction) -> int:
        """
        Commit a transaction to its best cluster.

        Args:
            clusters: Partition, extended in place when a new cluster wins
            transaction: Transaction to place

        Returns:
            Index of the cluster that received the transaction
        """
        index, _ = self.best_placement(clusters, transaction)

        if index == len(clusters):
            clusters.append(Cluster())

        clusters[index].add_transaction(transaction)
        return index
