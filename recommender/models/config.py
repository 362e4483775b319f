"""
Recommendation configuration: thresholds and page sizes for the pipeline.

RecommendationConfig defaults are defined here. Callers build one explicitly
(from_dict, from_env) and pass it to the engine; nothing in the scoring code
reads the environment.
"""

import os
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError


ENV_SIMILARITY_THRESHOLD = "RECOMMENDATION_SIMILARITY_THRESHOLD"
ENV_MIN_RESULTS = "RECOMMENDATION_MIN_RESULTS"


class ConfigurationError(ValueError):
    """Raised when recommendation settings cannot be parsed or validated."""


class RecommendationConfig(BaseModel):
    """Configuration for the recommendation pipeline."""

    # -------------------------------------------------------------------------
    # Content-based scoring
    # -------------------------------------------------------------------------

    # Posts must score strictly above this cosine similarity to pass the filter.
    similarity_threshold: float = Field(default=0.33, ge=0.0, le=1.0)

    # Minimum number of results the content-based recommender and the fusion
    # backfill aim for. Single default for every call site.
    min_results: int = Field(default=10, ge=1)

    # -------------------------------------------------------------------------
    # Post-context recommendations
    # -------------------------------------------------------------------------

    # When True, a last backfill tier may return the user's own posts.
    context_include_own_posts: bool = False

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "RecommendationConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in config_dict.items() if k in allowed}
        try:
            return cls.model_validate(filtered)
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RecommendationConfig":
        """
        Load thresholds from RECOMMENDATION_* environment variables.

        Unset variables keep their defaults. Values that do not parse raise
        ConfigurationError so a bad deployment fails at startup.
        """
        env = os.environ if environ is None else environ
        values: Dict = {}

        raw_threshold = (env.get(ENV_SIMILARITY_THRESHOLD) or "").strip()
        if raw_threshold:
            try:
                values["similarity_threshold"] = float(raw_threshold)
            except ValueError as e:
                raise ConfigurationError(
                    f"{ENV_SIMILARITY_THRESHOLD} must be a number, got {raw_threshold!r}"
                ) from e

        raw_min = (env.get(ENV_MIN_RESULTS) or "").strip()
        if raw_min:
            try:
                values["min_results"] = int(raw_min)
            except ValueError as e:
                raise ConfigurationError(
                    f"{ENV_MIN_RESULTS} must be an integer, got {raw_min!r}"
                ) from e

        return cls.from_dict(values)


DEFAULT_CONFIG = RecommendationConfig()


def resolve_config(config: Optional["RecommendationConfig"]) -> "RecommendationConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
