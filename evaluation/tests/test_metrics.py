"""Ranking metric functions."""

import math

import pytest

from evaluation.metrics import (
    average_precision_at_k,
    coverage_percent,
    hit_rate_at_k,
    intra_list_diversity,
    ndcg_at_k,
    precision_at_k,
    recall_at_k,
    reciprocal_rank_at_k,
    round_metric,
)

CASES = [
    (["a", "b", "c", "d"], {"a", "c"}),
    (["x", "y"], {"a"}),
    (["a", "b", "c"], {"a", "b", "c", "d", "e", "f"}),
    ([], {"a"}),
    (["a"], set()),
]


class TestRankingMetrics:

    def test_precision_recall_hit(self):
        predicted, truth = ["a", "b", "c"], {"a", "c"}
        assert precision_at_k(predicted, truth, 2) == 0.5
        assert recall_at_k(predicted, truth, 2) == 0.5
        assert recall_at_k(predicted, truth, 3) == 1.0
        assert hit_rate_at_k(predicted, truth, 1) == 1.0
        assert hit_rate_at_k(["b"], truth, 1) == 0.0

    def test_precision_divides_by_k_not_list_length(self):
        assert precision_at_k(["a"], {"a"}, 5) == 0.2

    def test_recall_with_empty_truth(self):
        assert recall_at_k(["a"], set(), 5) == 0.0

    def test_reciprocal_rank(self):
        assert reciprocal_rank_at_k(["x", "a"], {"a"}, 5) == 0.5
        assert reciprocal_rank_at_k(["x", "a"], {"a"}, 1) == 0.0

    def test_average_precision(self):
        ap = average_precision_at_k(["a", "b", "c"], {"a", "c"}, 3)
        assert ap == pytest.approx((1 / 1 + 2 / 3) / 2)
        assert average_precision_at_k(["x"], {"a"}, 3) == 0.0

    def test_ndcg_ideal_ranking_is_one(self):
        assert ndcg_at_k(["a", "b", "c"], {"a", "b", "c"}, 3) == pytest.approx(1.0)
        assert ndcg_at_k(["a", "b"], {"a", "b", "c"}, 2) == pytest.approx(1.0)

    def test_ndcg_discounts_late_hits(self):
        assert ndcg_at_k(["x", "a"], {"a"}, 2) == pytest.approx(1 / math.log2(3))
        assert ndcg_at_k(["x"], set(), 1) == 0.0

    @pytest.mark.parametrize("predicted,truth", CASES)
    @pytest.mark.parametrize("k", [1, 3, 10])
    def test_metrics_bounded(self, predicted, truth, k):
        for fn in (
            precision_at_k,
            recall_at_k,
            hit_rate_at_k,
            reciprocal_rank_at_k,
            average_precision_at_k,
            ndcg_at_k,
        ):
            assert 0.0 <= fn(predicted, truth, k) <= 1.0


class TestCatalogMetrics:

    def test_coverage(self):
        assert coverage_percent(["a", "b", "a"], 4) == 50.0
        assert coverage_percent([], 4) == 0.0
        assert coverage_percent(["a"], 0) == 0.0

    @pytest.mark.parametrize("ids,size", [(["a"], 1), (["a", "b", "c"], 10), ([], 3)])
    def test_coverage_bounded(self, ids, size):
        assert 0.0 <= coverage_percent(ids, size) <= 100.0


class TestDiversity:

    VECTORS = {"p1": [1.0, 0.0], "p2": [0.0, 1.0], "p3": [1.0, 0.0]}

    def test_adjacent_pairs(self):
        assert intra_list_diversity(["p1", "p2", "p3"], self.VECTORS) == pytest.approx(1.0)

    def test_all_pairs(self):
        value = intra_list_diversity(["p1", "p2", "p3"], self.VECTORS, pairs="all")
        assert value == pytest.approx(2 / 3)

    def test_short_lists_score_zero(self):
        assert intra_list_diversity(["p1"], self.VECTORS) == 0.0
        assert intra_list_diversity([], self.VECTORS) == 0.0

    def test_identical_posts_score_zero(self):
        assert intra_list_diversity(["p1", "p3"], self.VECTORS) == pytest.approx(0.0)

    def test_unknown_pairs_mode(self):
        with pytest.raises(ValueError):
            intra_list_diversity(["p1", "p2"], self.VECTORS, pairs="random")


class TestRounding:

    @pytest.mark.parametrize(
        "value,expected",
        [(0.0005, 0.001), (0.1235, 0.124), (2.0004, 2.0), (1 / 3, 0.333), (0.0, 0.0)],
    )
    def test_half_up(self, value, expected):
        assert round_metric(value) == expected
