"""
Cluster Analysis Module

Summarizes CLOPE results: cluster sizes, histogram shape (S, W, height)
and the items that dominate each cluster.
"""

from typing import Hashable, List, Optional, Tuple
from dataclasses import dataclass, field
import logging

from config.settings import ANALYSIS_TOP_ITEMS

from .cluster import Cluster
from .clusterer import ClusterResult
from .profit import profit

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@dataclass
class ClusterSummary:
    """Summary information about a single cluster."""
    cluster_id: int
    size: int
    percentage: float
    all_objects_count: int
    unique_objects_count: int
    height: float
    profit: float
    top_items: List[Tuple[Hashable, int]] = field(default_factory=list)
    description: str = ""


def rebuild_clusters(result: ClusterResult) -> List[Cluster]:
    """Recompute cluster statistics from result labels."""
    clusters = [Cluster() for _ in range(result.n_clusters)]
    for transaction, label in zip(result.transactions, result.labels.tolist()):
        clusters[label].add_transaction(transaction)
    return clusters


def analyze_clusters(
    result: ClusterResult,
    n_top_items: int = ANALYSIS_TOP_ITEMS,
) -> List[ClusterSummary]:
    """
    Analyze clustering results and generate summaries for each cluster.

    Args:
        result: ClusterResult from clustering
        n_top_items: Number of most frequent items listed per cluster

    Returns:
        List of ClusterSummary objects, ordered by cluster id
    """
    summaries = []
    total = len(result.labels)

    for cluster_id, cluster in enumerate(rebuild_clusters(result)):
        if cluster.is_empty():
            continue

        width = cluster.unique_objects_count
        height = cluster.all_objects_count / width if width else 0.0
        top_items = cluster.top_items(n_top_items)

        summaries.append(ClusterSummary(
            cluster_id=cluster_id,
            size=cluster.transactions_count,
            percentage=cluster.transactions_count / total * 100,
            all_objects_count=cluster.all_objects_count,
            unique_objects_count=width,
            height=height,
            profit=profit(cluster, result.repulsion),
            top_items=top_items,
            description=_generate_cluster_description(cluster_id, cluster, top_items),
        ))

    return summaries


def _generate_cluster_description(
    cluster_id: int,
    cluster: Cluster,
    top_items: List[Tuple[Hashable, int]],
) -> str:
    """Generate a human-readable description of a cluster."""
    if not top_items:
        return f"Cluster {cluster_id}: empty transactions"

    n = cluster.transactions_count
    # Items present in every transaction of the cluster
    core = [item for item, count in top_items if count >= n]
    if core:
        return f"Cluster {cluster_id}: always " + ", ".join(str(item) for item in core)

    shares = [f"{item} ({count / n:.0%})" for item, count in top_items]
    return f"Cluster {cluster_id}: mostly " + ", ".join(shares)


def get_cluster_summary(
    result: ClusterResult,
    cluster_id: int,
    n_top_items: int = ANALYSIS_TOP_ITEMS,
) -> Optional[ClusterSummary]:
    """
    Get summary for a specific cluster.

    Returns:
        ClusterSummary or None if cluster doesn't exist
    """
    if cluster_id not in result.labels:
        return None

    for summary in analyze_clusters(result, n_top_items):
        if summary.cluster_id == cluster_id:
            return summary
    return None


def print_cluster_report(summaries: List[ClusterSummary]):
    """Print a formatted cluster analysis report."""
    print("\n" + "=" * 60)
    print("CLOPE CLUSTER REPORT")
    print("=" * 60)

    for summary in summaries:
        print(f"\n{summary.description}")
        print(f"  Size: {summary.size} transactions ({summary.percentage:.1f}%)")
        print(f"  S = {summary.all_objects_count}, W = {summary.unique_objects_count}, "
              f"H = {summary.height:.2f}, profit = {summary.profit:.4f}")

        if summary.top_items:
            print("  Top items:")
            for item, count in summary.top_items:
                print(f"    - {item}: {count}")

    print("\n" + "=" * 60)
