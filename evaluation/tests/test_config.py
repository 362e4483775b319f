"""EvaluationSettings environment parsing."""

import pytest

from evaluation.config import (
    DEFAULT_DATASET_DIR,
    DEFAULT_KS,
    EVALUATION_DIR,
    EvaluationSettings,
    parse_ks,
)
from recommender.models.config import ConfigurationError


class TestEvaluationSettings:

    def test_defaults(self):
        settings = EvaluationSettings.from_env({})
        assert settings.dataset_dir == DEFAULT_DATASET_DIR
        assert settings.ks == DEFAULT_KS
        assert settings.log_level == "INFO"

    def test_reads_environment(self, tmp_path):
        settings = EvaluationSettings.from_env(
            {
                "EVAL_DATASET_DIR": str(tmp_path),
                "EVAL_REPORTS_DIR": "out/reports",
                "EVAL_KS": "3, 7",
                "EVAL_LOG_LEVEL": "debug",
            }
        )
        assert settings.dataset_dir == tmp_path
        assert settings.reports_dir == (EVALUATION_DIR.parent / "out" / "reports").resolve()
        assert settings.ks == [3, 7]
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("raw", ["five", "5,0", ","])
    def test_bad_ks(self, raw):
        with pytest.raises(ConfigurationError):
            parse_ks(raw)

    def test_bad_log_level(self):
        with pytest.raises(ConfigurationError):
            EvaluationSettings.from_env({"EVAL_LOG_LEVEL": "loud"})
