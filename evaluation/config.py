"""
Evaluation Configuration

Loads evaluation settings from environment variables and provides defaults.
Supports loading from a project-root .env file using python-dotenv.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

from dotenv import load_dotenv

from recommender.models.config import ConfigurationError

# Single .env at the project root, shared with the recommender settings
root_env = Path(__file__).resolve().parent.parent / ".env"
if root_env.exists():
    load_dotenv(root_env)

EVALUATION_DIR = Path(__file__).parent
DEFAULT_DATASET_DIR = EVALUATION_DIR / "fixtures" / "sample_blog"
DEFAULT_REPORTS_DIR = EVALUATION_DIR / "reports"
DEFAULT_KS = [5, 10, 20]

ENV_DATASET_DIR = "EVAL_DATASET_DIR"
ENV_REPORTS_DIR = "EVAL_REPORTS_DIR"
ENV_KS = "EVAL_KS"
ENV_LOG_LEVEL = "EVAL_LOG_LEVEL"


def parse_ks(raw: str) -> List[int]:
    """Parse "5,10,20" (commas or spaces) into a list of positive cutoffs."""
    parts = [p for p in raw.replace(",", " ").split() if p]
    try:
        ks = [int(p) for p in parts]
    except ValueError as e:
        raise ConfigurationError(f"{ENV_KS} must be a list of integers, got {raw!r}") from e
    if not ks or any(k < 1 for k in ks):
        raise ConfigurationError(f"{ENV_KS} must list positive integers, got {raw!r}")
    return ks


@dataclass
class EvaluationSettings:
    """Evaluation harness settings."""

    dataset_dir: Path = DEFAULT_DATASET_DIR
    reports_dir: Path = DEFAULT_REPORTS_DIR
    ks: List[int] = field(default_factory=lambda: list(DEFAULT_KS))
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EvaluationSettings":
        """Load settings from environment variables."""
        env = os.environ if environ is None else environ
        base_dir = EVALUATION_DIR.parent

        def _path_env(key: str, default: Path) -> Path:
            v = env.get(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (base_dir / p).resolve()

        raw_ks = env.get(ENV_KS, "").strip()
        log_level = env.get(ENV_LOG_LEVEL, "INFO").strip().upper() or "INFO"
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigurationError(f"{ENV_LOG_LEVEL} is not a logging level: {log_level!r}")

        return cls(
            dataset_dir=_path_env(ENV_DATASET_DIR, DEFAULT_DATASET_DIR),
            reports_dir=_path_env(ENV_REPORTS_DIR, DEFAULT_REPORTS_DIR),
            ks=parse_ks(raw_ks) if raw_ks else list(DEFAULT_KS),
            log_level=log_level,
        )


# Global settings instance
_settings: Optional[EvaluationSettings] = None


def get_settings() -> EvaluationSettings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = EvaluationSettings.from_env()
    return _settings


def reload_settings() -> EvaluationSettings:
    """Reload settings from environment."""
    global _settings
    _settings = None
    return get_settings()
