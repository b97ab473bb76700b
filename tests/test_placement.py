"""Tests for the greedy placement engine."""

import pytest

from clope.dataset import Transaction
from clope.clustering.cluster import Cluster
from clope.clustering.placement import GreedyPlacer


def _cluster(*transactions):
    cluster = Cluster()
    for items in transactions:
        cluster.add_transaction(Transaction(items))
    return cluster


class TestGreedyPlacer:
    """Tests for GreedyPlacer."""

    def test_first_transaction_opens_cluster(self):
        clusters = []
        index = GreedyPlacer(2.0).add_by_max_profit(clusters, Transaction("ab"))

        assert index == 0
        assert len(clusters) == 1
        assert clusters[0].transactions_count == 1

    def test_joins_matching_cluster(self):
        clusters = [_cluster("cd"), _cluster("ab")]
        index = GreedyPlacer(2.0).add_by_max_profit(clusters, Transaction("ab"))

        assert index == 1
        assert len(clusters) == 2
        assert clusters[1].transactions_count == 2

    def test_dissimilar_transaction_opens_new_cluster(self):
        clusters = [_cluster("ab")]
        index = GreedyPlacer(1.0).add_by_max_profit(clusters, Transaction("cd"))

        # Joining: S=4, W=4 -> delta 0; new cluster: 2/2 -> delta 1
        assert index == 1
        assert len(clusters) == 2

    def test_ties_go_to_lowest_index(self):
        # At r=0 every candidate gains len(transaction)
        clusters = [_cluster("ab"), _cluster("cd")]
        index, delta = GreedyPlacer(0.0).best_placement(clusters, Transaction("xy"))

        assert index == 0
        assert delta == pytest.approx(2.0)

    def test_new_cluster_needs_strictly_better_delta(self):
        # An emptied cluster ties with the new-cluster slot
        clusters = [_cluster("ab"), Cluster()]
        index, _ = GreedyPlacer(1.0).best_placement(clusters, Transaction("cd"))

        assert index == 1

    def test_best_placement_does_not_mutate(self):
        clusters = [_cluster("ab")]
        GreedyPlacer(2.0).best_placement(clusters, Transaction("cd"))

        assert len(clusters) == 1
        assert clusters[0].count_by_objects == {'a': 1, 'b': 1}

    def test_copy_probe_agrees_with_analytic(self):
        clusters = [_cluster("abc", "ab"), _cluster("xyz"), _cluster("abx")]
        tr = Transaction("abz")

        analytic = GreedyPlacer(2.0, probe='analytic').best_placement(clusters, tr)
        copied = GreedyPlacer(2.0, probe='copy').best_placement(clusters, tr)

        assert analytic == copied

    def test_unknown_probe_raises(self):
        with pytest.raises(ValueError, match="Unknown probe"):
            GreedyPlacer(2.0, probe='sampled')
