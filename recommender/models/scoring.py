"""
Scoring model: ScoredPost and the fusion trace returned by the pipeline.

Contains:
- ScoredPost: a post with its final score and per-signal breakdown
- SignalScores: the four independent score maps fused by the fusion stage
- FusionResult: ranked list plus the signal maps it was built from
"""

from typing import Dict, List

from pydantic import BaseModel, Field

from .catalog import Post


class ScoredPost(BaseModel):
    """A post with its recommendation score and how it was obtained."""

    post: Post
    score: float
    breakdown: Dict[str, float] = Field(default_factory=dict)
    # True when the post was only added to reach the minimum page size.
    backfill: bool = False


class SignalScores(BaseModel):
    """Per-signal score maps keyed by post id. Absent ids mean score 0."""

    tag: Dict[str, float] = Field(default_factory=dict)
    user_based: Dict[str, float] = Field(default_factory=dict)
    interaction: Dict[str, float] = Field(default_factory=dict)
    collaborative: Dict[str, float] = Field(default_factory=dict)

    def breakdown_for(self, post_id: str) -> Dict[str, float]:
        """Raw (unweighted) signal values for one post, only signals that scored it."""
        out = {}
        for name, scores in (
            ("tag", self.tag),
            ("user_based", self.user_based),
            ("interaction", self.interaction),
            ("collaborative", self.collaborative),
        ):
            if post_id in scores:
                out[name] = scores[post_id]
        return out


class FusionResult(BaseModel):
    """Output of the fusion stage: ranked posts and the signals behind them."""

    ranked: List[ScoredPost] = Field(default_factory=list)
    signals: SignalScores = Field(default_factory=SignalScores)

    @property
    def posts(self) -> List[Post]:
        return [sp.post for sp in self.ranked]

    @property
    def backfill_count(self) -> int:
        return sum(1 for sp in self.ranked if sp.backfill)
