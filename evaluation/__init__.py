"""
Offline evaluation harness for the blog recommendation engine.

- metrics.py: pure ranking metric functions
- evaluator.py: RecommendationEvaluator, options and report models
- config.py: environment-backed settings
- run_evaluation.py: command-line runner
"""

from .evaluator import (
    ALGORITHMS,
    AlgorithmMetrics,
    CutoffMetrics,
    EvaluationOptions,
    EvaluationReport,
    RecommendationEvaluator,
)

__all__ = [
    "ALGORITHMS",
    "AlgorithmMetrics",
    "CutoffMetrics",
    "EvaluationOptions",
    "EvaluationReport",
    "RecommendationEvaluator",
]
