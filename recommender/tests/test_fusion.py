"""Score fusion: ordering policy, exclusions, backfill, determinism."""

import pytest

from recommender.models.catalog import Post
from recommender.models.interactions import build_interaction_matrix
from recommender.recommendation_engine import RecommendationEngine
from recommender.services.catalog_store import InMemoryCatalogStore
from recommender.stages.fusion import FUSION_WEIGHTS, fuse_scores
from recommender.stages.vector_space import build_vector_space
from recommender.tests.factories import (
    make_comment,
    make_like,
    make_post,
    make_tag,
    make_user,
    run,
)


def _similarity_first_store():
    """t1 matches u's tags; q only has a strong collaborative signal."""
    return InMemoryCatalogStore(
        tags=[make_tag("A"), make_tag("B")],
        users=[make_user("u", ["A"]), make_user("v", ["B"])],
        posts=[
            make_post("t1", "w", ["A"], day=0),
            make_post("q", "w", ["B"], day=1),
            make_post("shared", "w", ["B"], day=2),
        ],
        likes=[make_like("u", "shared"), make_like("v", "shared"), make_like("v", "q")],
        comments=[make_comment("v", "q")],
    )


class TestFusionScenarios:

    def test_backfills_past_threshold_with_every_other_post(self, three_tag_store):
        engine = RecommendationEngine(three_tag_store)
        result = run(engine.explain_final_recommendations("u1"))

        assert [sp.post.id for sp in result.ranked] == ["pA", "pC", "pB"]
        assert [sp.backfill for sp in result.ranked] == [False, True, True]
        assert result.ranked[0].score == pytest.approx(FUSION_WEIGHTS["tag"])
        assert result.ranked[1].score == 0.0
        assert result.backfill_count == 2

    def test_never_returns_own_posts(self, three_tag_store, sample_store):
        engine = RecommendationEngine(three_tag_store)
        assert "pOwn" not in [p.id for p in run(engine.get_final_recommendations("u1"))]

        engine = RecommendationEngine(sample_store)
        for user in run(sample_store.list_all_users_with_preferences()):
            posts = run(engine.get_final_recommendations(user.id))
            assert all(p.author.id != user.id for p in posts)

    def test_backfill_length_guarantee(self, sample_store):
        engine = RecommendationEngine(sample_store)
        active = run(sample_store.list_active_posts())
        for user in run(sample_store.list_all_users_with_preferences()):
            eligible = [p for p in active if p.author.id != user.id]
            for min_results in (1, 5, 10, 50):
                posts = run(engine.get_final_recommendations(user.id, min_results))
                assert len(posts) >= min(min_results, len(eligible))
                assert len({p.id for p in posts}) == len(posts)

    def test_min_results_does_not_truncate_scored_posts(self, three_tag_store):
        engine = RecommendationEngine(three_tag_store)
        assert [p.id for p in run(engine.get_final_recommendations("u1", 1))] == ["pA"]

    def test_deterministic_across_calls(self, sample_store):
        engine = RecommendationEngine(sample_store)
        first = run(engine.explain_final_recommendations("u-alice"))
        second = run(engine.explain_final_recommendations("u-alice"))
        assert [(sp.post.id, sp.score) for sp in first.ranked] == [
            (sp.post.id, sp.score) for sp in second.ranked
        ]

    def test_unknown_user_gets_empty_result(self, three_tag_store):
        engine = RecommendationEngine(three_tag_store)
        result = run(engine.explain_final_recommendations("ghost"))
        assert result.ranked == []
        assert result.posts == []


class TestFusionOrdering:

    @pytest.fixture(autouse=True)
    def setup(self):
        store = _similarity_first_store()
        self.users = run(store.list_all_users_with_preferences())
        self.posts = run(store.list_active_posts())
        self.space = build_vector_space(run(store.list_all_tags()), self.posts)
        self.matrix = build_interaction_matrix(
            [u.id for u in self.users],
            run(store.list_all_likes()),
            run(store.list_all_comments()),
        )
        self.user = self.users[0]

    def test_similarity_matches_come_before_higher_fused_totals(self):
        result = fuse_scores(self.user, self.space, self.posts, self.users, self.matrix)
        ranked = [(sp.post.id, sp.score) for sp in result.ranked]

        assert ranked == [
            ("t1", pytest.approx(0.4)),
            ("q", pytest.approx(0.6)),
            ("shared", pytest.approx(0.4)),
        ]

    def test_signals_and_breakdown_exposed(self):
        result = fuse_scores(self.user, self.space, self.posts, self.users, self.matrix)
        by_id = {sp.post.id: sp for sp in result.ranked}

        assert result.signals.tag == {"t1": pytest.approx(1.0)}
        assert result.signals.interaction == {"shared": 2.0}
        assert result.signals.collaborative == {"q": 3.0}
        assert by_id["q"].breakdown == {"collaborative": 3.0}
        assert by_id["shared"].breakdown == {"interaction": 2.0}

    def test_inactive_posts_never_ranked(self):
        posts = [p for p in self.posts if p.id != "q"]
        result = fuse_scores(self.user, self.space, posts, self.users, self.matrix)
        assert "q" not in [sp.post.id for sp in result.ranked]


class TestFusionInputs:

    def _mixed_timezone_store(self):
        naive = make_post("naive", "x", ["B"], day=4).model_dump()
        naive["created_at"] = naive["created_at"].replace(tzinfo=None)
        return InMemoryCatalogStore(
            tags=[make_tag("A"), make_tag("B")],
            users=[make_user("u", ["A"]), make_user("x", ["B"])],
            posts=[make_post("aware", "x", ["B"], day=1), Post.model_validate(naive)],
        )

    def test_backfill_with_naive_and_aware_timestamps(self):
        engine = RecommendationEngine(self._mixed_timezone_store())
        posts = run(engine.get_final_recommendations("u"))
        assert [p.id for p in posts] == ["naive", "aware"]

    @pytest.mark.parametrize("min_results", [0, -5])
    def test_non_positive_min_results_rejected(self, three_tag_store, min_results):
        engine = RecommendationEngine(three_tag_store)
        with pytest.raises(ValueError):
            run(engine.get_final_recommendations("u1", min_results))
