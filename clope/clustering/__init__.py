"""Clustering package for transactional data."""
from .cluster import Cluster, ClusterInvariantError
from .profit import profit, delta_profit_add, total_profit
from .placement import GreedyPlacer
from .clusterer import ClopeClusterer, ClusterResult, ClusteringState, cluster_transactions
from .analysis import analyze_clusters, get_cluster_summary, print_cluster_report
