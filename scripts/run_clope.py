#!/usr/bin/env python3
"""
CLOPE Demo Run

Clusters a small built-in basket dataset:
1. Build the dataset (duplicates collapse)
2. Initial greedy placement
3. Improvement passes until convergence
4. Print a cluster report
"""

import argparse
import sys
from pathlib import Path

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from clope.dataset import create_dataset
from clope.clustering import ClopeClusterer, analyze_clusters, print_cluster_report
from config.project_config import load_config, get_preset, PRESETS

# Illustrative baskets, one character per item
DEMO_TRANSACTIONS = [
    "abc", "abcd", "bcd", "abd", "ab",
    "xyz", "xy", "xyzw", "yzw", "xz",
    "mno", "mnop", "nop", "mo",
    "abc", "xyz",
]


def main():
    parser = argparse.ArgumentParser(
        description="Run CLOPE on a built-in demo dataset"
    )
    parser.add_argument(
        '--repulsion',
        type=float,
        default=None,
        help='Repulsion coefficient r (overrides config)'
    )
    parser.add_argument(
        '--preset',
        choices=list(PRESETS.keys()),
        default=None,
        help='Named configuration preset'
    )
    parser.add_argument(
        '--max-passes',
        type=int,
        default=None,
        help='Cap on improvement passes'
    )
    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help='Path to clope.yaml config file'
    )

    args = parser.parse_args()

    config = get_preset(args.preset) if args.preset else load_config(args.config)
    repulsion = args.repulsion if args.repulsion is not None else config.repulsion
    max_passes = args.max_passes if args.max_passes is not None else config.max_passes

    print("\nCLOPE Clustering")
    print("=" * 50)

    dataset = create_dataset(DEMO_TRANSACTIONS)
    print(f"   {len(dataset)} distinct transactions ({dataset.n_duplicates} duplicates)")

    clusterer = ClopeClusterer(
        repulsion=repulsion,
        max_passes=max_passes,
        probe=config.probe,
        compute_silhouette=config.compute_silhouette,
    )
    result = clusterer.fit(dataset)

    print(f"   Repulsion: {result.repulsion}")
    print(f"   Clusters: {result.n_clusters}")
    print(f"   Passes: {result.n_passes} (converged: {result.converged})")
    for name, value in result.metrics.items():
        print(f"   {name}: {value:.4f}")

    if config.print_report:
        print_cluster_report(analyze_clusters(result, n_top_items=config.n_top_items))


if __name__ == "__main__":
    main()
