"""RecommendationConfig defaults and fail-fast parsing."""

import pytest

from recommender.models.config import (
    DEFAULT_CONFIG,
    ENV_MIN_RESULTS,
    ENV_SIMILARITY_THRESHOLD,
    ConfigurationError,
    RecommendationConfig,
    resolve_config,
)


class TestRecommendationConfig:

    def test_defaults(self):
        assert DEFAULT_CONFIG.similarity_threshold == 0.33
        assert DEFAULT_CONFIG.min_results == 10
        assert DEFAULT_CONFIG.context_include_own_posts is False

    def test_from_env_reads_values(self):
        config = RecommendationConfig.from_env(
            {ENV_SIMILARITY_THRESHOLD: "0.5", ENV_MIN_RESULTS: " 25 "}
        )
        assert config.similarity_threshold == 0.5
        assert config.min_results == 25

    def test_from_env_unset_keeps_defaults(self):
        assert RecommendationConfig.from_env({}) == DEFAULT_CONFIG

    @pytest.mark.parametrize(
        "env",
        [
            {ENV_SIMILARITY_THRESHOLD: "high"},
            {ENV_MIN_RESULTS: "ten"},
            {ENV_MIN_RESULTS: "2.5"},
            {ENV_SIMILARITY_THRESHOLD: "1.5"},
            {ENV_MIN_RESULTS: "0"},
        ],
    )
    def test_malformed_values_fail_fast(self, env):
        with pytest.raises(ConfigurationError):
            RecommendationConfig.from_env(env)

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)

    def test_from_dict_ignores_unknown_keys(self):
        config = RecommendationConfig.from_dict({"min_results": 3, "unused": True})
        assert config.min_results == 3

    def test_resolve_config(self):
        custom = RecommendationConfig(min_results=4)
        assert resolve_config(None) is DEFAULT_CONFIG
        assert resolve_config(custom) is custom
