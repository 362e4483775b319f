#!/usr/bin/env python3
"""
Offline Evaluation Runner

Loads a blog dataset, runs every registered recommendation algorithm for each
user with interactions, and prints precision/recall/hitRate/MRR/MAP/NDCG plus
coverage, popularity and diversity at each cutoff.

Usage:
    python -m evaluation.run_evaluation
    python -m evaluation.run_evaluation --dataset evaluation/fixtures/sample_blog --ks 5 10
    python -m evaluation.run_evaluation --algorithm fusion --mask-ground-truth --save
"""

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from recommender.models.config import ConfigurationError, RecommendationConfig
from recommender.services.dataset_loader import load_catalog_dataset

from .config import EvaluationSettings, get_settings
from .evaluator import ALGORITHMS, EvaluationOptions, EvaluationReport, RecommendationEvaluator

logger = logging.getLogger(__name__)

METRIC_COLUMNS = [
    ("precision", "P"),
    ("recall", "R"),
    ("hit_rate", "Hit"),
    ("mrr", "MRR"),
    ("map", "MAP"),
    ("ndcg", "NDCG"),
    ("coverage", "Cov%"),
    ("avg_popularity", "Pop"),
    ("diversity", "Div"),
]


# =============================================================================
# Reporting
# =============================================================================


def print_report(report: EvaluationReport):
    """Print a per-algorithm metrics table."""
    print(f"\n{'='*72}")
    print("EVALUATION REPORT")
    print(f"{'='*72}")
    print(f"Dataset: {report.dataset or 'N/A'} | Active posts: {report.catalog_size}")
    print(f"Users considered: {report.users_considered} | ks: {report.ks}")

    header = f"{'k':>4} " + " ".join(f"{label:>7}" for _, label in METRIC_COLUMNS)
    for name, metrics in report.algorithms.items():
        print(f"\n{name}  (users evaluated: {metrics.users_evaluated}, failures: {metrics.failures})")
        print(header)
        for k in report.ks:
            row = metrics.at_k.get(k)
            if row is None:
                continue
            values = " ".join(f"{getattr(row, field):>7.3f}" for field, _ in METRIC_COLUMNS)
            print(f"{k:>4} {values}")
    print(f"{'='*72}")


def save_report(report: EvaluationReport, reports_dir: Path) -> Path:
    """Save the report as timestamped JSON and return its path."""
    reports_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    report_path = reports_dir / f"evaluation_report_{timestamp}.json"
    with open(report_path, "w") as f:
        json.dump(report.model_dump(mode="json"), f, indent=2)
    return report_path


# =============================================================================
# Entry point
# =============================================================================


def build_parser(settings: EvaluationSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Blog Recommendation Offline Evaluation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Evaluate every algorithm on the bundled sample dataset
  python -m evaluation.run_evaluation

  # Only fusion and content-based, at k=5 and k=10, saving a JSON report
  python -m evaluation.run_evaluation --algorithm fusion cosine_based --ks 5 10 --save

  # Hide each user's own interactions from the algorithms being scored
  python -m evaluation.run_evaluation --mask-ground-truth
        """,
    )
    parser.add_argument(
        "--dataset", "-d",
        default=str(settings.dataset_dir),
        help=f"Dataset directory (default: {settings.dataset_dir})",
    )
    parser.add_argument(
        "--ks",
        type=int,
        nargs="+",
        default=settings.ks,
        help="Cutoffs to evaluate (default: %(default)s)",
    )
    parser.add_argument(
        "--algorithm", "-a",
        nargs="+",
        choices=list(ALGORITHMS),
        help="Algorithms to evaluate (default: all)",
    )
    parser.add_argument(
        "--user", "-u",
        nargs="+",
        dest="users",
        help="Only evaluate these user ids",
    )
    parser.add_argument(
        "--min-interactions",
        type=int,
        default=1,
        help="Skip users with fewer likes+comments (default: 1)",
    )
    parser.add_argument(
        "--mask-ground-truth",
        action="store_true",
        help="Hide the evaluated user's likes/comments from the algorithms",
    )
    parser.add_argument(
        "--diversity-pairs",
        choices=["adjacent", "all"],
        default="adjacent",
        help="Pairs used for intra-list diversity (default: adjacent)",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=1,
        help="Users evaluated concurrently (default: 1)",
    )
    parser.add_argument(
        "--save", "-s",
        action="store_true",
        help=f"Save the report as JSON under {settings.reports_dir}",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = get_settings()
        config = RecommendationConfig.from_env()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    args = build_parser(settings).parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = load_catalog_dataset(args.dataset)
    options = EvaluationOptions(
        ks=args.ks,
        user_ids=args.users,
        min_interactions=args.min_interactions,
        algorithms=args.algorithm,
        diversity_pairs=args.diversity_pairs,
        mask_ground_truth=args.mask_ground_truth,
        max_concurrency=args.concurrency,
    )

    evaluator = RecommendationEvaluator(store, config, dataset_name=store.manifest.name)
    report = asyncio.run(evaluator.evaluate(options))
    print_report(report)

    if args.save:
        path = save_report(report, settings.reports_dir)
        print(f"\nReport saved to: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
