"""Tests for the command-line runner."""

import json
import logging
from pathlib import Path

import pytest
import yaml

from alignment.run import main, run_comparison, setup_logging

PROJECT_ROOT = Path(__file__).parent.parent


def _write_config(tmp_path: Path, log_level=None, **report) -> Path:
    config = {
        "global": {"log_level": log_level or "WARNING"},
        "data": {
            "survey": {"path": str(PROJECT_ROOT / "data" / "sample_survey.yaml")},
            "answers_csv": {"path": None},
        },
        "comparison": {"question_set": "risk_alignment"},
        "report": {"format": "text", "round_scores": True, **report},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(config))
    return path


class TestRunComparison:
    def test_text_report_to_stdout(self, tmp_path, capsys) -> None:
        config_path = _write_config(tmp_path)

        result = run_comparison(str(config_path))

        out = capsys.readouterr().out
        assert result["success"]
        assert "Comparisons: Risk Alignment Test" in out
        assert "leo (choose the left most) ----- linda (choose the left most)" in out
        assert "total 100 %" in out
        assert "robert (choose the right most) ----- nathan (has not answered)" in out

    def test_sample_scores(self, tmp_path) -> None:
        config_path = _write_config(tmp_path, output=str(tmp_path / "out.txt"))

        report = run_comparison(str(config_path))["report"]

        by_names = {(c.user_a.name, c.user_b.name): c for c in report.comparisons}
        assert len(by_names) == 10
        assert by_names[("leo", "linda")].aggregate == 100
        assert by_names[("leo", "robert")].aggregate == 0
        # one step apart on two 9-point scales and one 10-point scale
        expected = (87.5 + 87.5 + 800 / 9) / 3
        assert abs(by_names[("leo", "sally")].aggregate - expected) < 1e-9

    def test_json_report_to_file(self, tmp_path) -> None:
        config_path = _write_config(tmp_path)
        out_path = tmp_path / "report.json"

        exit_code = main(["--config", str(config_path), "--format", "json", "--output", str(out_path)])

        assert exit_code == 0
        with open(out_path) as f:
            data = json.load(f)
        assert data["title"] == "Risk Alignment Test"
        assert data["n_pairs"] == 10

    def test_answers_csv_is_loaded(self, tmp_path) -> None:
        csv_path = tmp_path / "answers.csv"
        csv_path.write_text("user_id,question_id,answer\nnathan,lie_to_customers,never\n")
        config_path = _write_config(tmp_path, output=str(tmp_path / "out.txt"))
        config = yaml.safe_load(config_path.read_text())
        config["data"]["answers_csv"]["path"] = str(csv_path)
        config_path.write_text(yaml.safe_dump(config))

        report = run_comparison(str(config_path))["report"]

        leo_nathan = [c for c in report.comparisons if (c.user_a.name, c.user_b.name) == ("leo", "nathan")][0]
        assert leo_nathan.aggregate == 100

    def test_unknown_question_set_fails(self, tmp_path) -> None:
        config_path = _write_config(tmp_path)

        assert main(["--config", str(config_path), "--question-set", "nope"]) == 1

    def test_missing_config_fails(self, tmp_path) -> None:
        assert main(["--config", str(tmp_path / "missing.yaml")]) == 1

    def test_percentage_quantiles_fall_back_to_defaults(self, tmp_path) -> None:
        config_path = _write_config(tmp_path, quantiles=[10, 50, 90], output=str(tmp_path / "out.txt"))

        result = run_comparison(str(config_path))

        stats = result["report"].distribution_stats
        assert set(stats.quantiles) == {"p10", "p25", "p50", "p75", "p90"}
        assert main(["--config", str(config_path)]) == 0

    def test_empty_log_level_runs_at_info(self, tmp_path) -> None:
        config_path = _write_config(tmp_path, output=str(tmp_path / "out.txt"))
        config = yaml.safe_load(config_path.read_text())
        config["global"]["log_level"] = None
        config_path.write_text(yaml.safe_dump(config))

        assert main(["--config", str(config_path)]) == 0
        assert logging.getLogger().level == logging.INFO


class TestSetupLogging:
    @pytest.mark.parametrize("log_level", [None, "", 10, "chatty", "basic_format"])
    def test_unusable_levels_fall_back_to_info(self, log_level) -> None:
        setup_logging(log_level)

        assert logging.getLogger().level == logging.INFO

    def test_level_name_is_case_insensitive(self) -> None:
        setup_logging("debug")

        assert logging.getLogger().level == logging.DEBUG
        setup_logging("INFO")
