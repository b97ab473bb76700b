"""
Profit Function

Pure functions scoring clusters for CLOPE. The profit of a cluster is
its cohesion area S*N/W^r normalized per transaction:

    profit = (S * N) / (W ** r) / N

Nothing here mutates a cluster, so deltas can be evaluated speculatively.
"""

from typing import Iterable

from clope.dataset import Transaction

from .cluster import Cluster


def profit_from_stats(
    all_objects: int,
    transactions: int,
    unique_objects: int,
    repulsion: float,
) -> float:
    """
    Profit from raw counters.

    Args:
        all_objects: S, total item occurrences
        transactions: N, number of transactions
        unique_objects: W, number of distinct items
        repulsion: r, exponent applied to W

    Returns:
        0.0 for an empty cluster (or one holding only empty transactions),
        S*N/W^r/N otherwise
    """
    if transactions == 0 or unique_objects == 0:
        return 0.0

    area = all_objects * transactions / (unique_objects ** repulsion)
    return area / transactions


def profit(cluster: Cluster, repulsion: float) -> float:
    """Profit of a cluster."""
    return profit_from_stats(
        cluster.all_objects_count,
        cluster.transactions_count,
        cluster.unique_objects_count,
        repulsion,
    )


def delta_profit_add(cluster: Cluster, transaction: Transaction, repulsion: float) -> float:
    """
    Profit gained by adding transaction to cluster, without copying it.

    Feeds the post-add counters through the same formula a copied
    cluster would, so the result matches delta_profit_add_by_copy
    exactly.
    """
    after = profit_from_stats(
        cluster.all_objects_count + len(transaction),
        cluster.transactions_count + 1,
        cluster.unique_objects_count + cluster.new_items_count(transaction),
        repulsion,
    )
    return after - profit(cluster, repulsion)


def delta_profit_add_by_copy(cluster: Cluster, transaction: Transaction, repulsion: float) -> float:
    """Profit gained by adding transaction to a throwaway copy of cluster."""
    probe = cluster.copy()
    probe.add_transaction(transaction)
    return profit(probe, repulsion) - profit(cluster, repulsion)


def total_profit(clusters: Iterable[Cluster], repulsion: float) -> float:
    """Sum of per-cluster profits."""
    return sum(profit(cluster, repulsion) for cluster in clusters)


def normalized_profit(clusters: Iterable[Cluster], repulsion: float) -> float:
    """
    Global CLOPE criterion: sum(S_i * N_i / W_i^r) / sum(N_i).

    Reported as a quality metric; placement uses per-cluster profit.
    """
    weighted = 0.0
    n_transactions = 0
    for cluster in clusters:
        weighted += profit(cluster, repulsion) * cluster.transactions_count
        n_transactions += cluster.transactions_count

    if n_transactions == 0:
        return 0.0
    return weighted / n_transactions
