"""
Command-line runner for survey comparisons.

This is the single entrypoint for comparing every pair of users in a survey.

Usage:
    python -m alignment.run --config configs/config.yaml

The runner performs the following steps:
1. Load and validate configuration
2. Load the survey (questions, users, question sets, answers)
3. Optionally bulk-load extra answers from CSV
4. Compare every pair of users
5. Print the text report or write the JSON report
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def setup_logging(log_level: Any) -> None:
    """Configure logging level from config; unknown or empty levels fall back to INFO."""
    level = getattr(logging, str(log_level or "INFO").upper(), None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.getLogger().setLevel(level)


def _resolve_path(path: str, config_path: str) -> str:
    """Resolve a path against the working directory, then the project root above the config directory."""
    candidate = Path(path)
    if candidate.is_absolute() or candidate.exists():
        return str(candidate)
    return str(Path(config_path).resolve().parent.parent / candidate)


def run_comparison(
    config_path: str,
    question_set_id: Optional[str] = None,
    report_format: Optional[str] = None,
    output_path: Optional[str] = None
) -> Dict[str, Any]:
    """
    Run a full comparison from a configuration file.

    Args:
        config_path: Path to the configuration YAML file
        question_set_id: Compare only this question set (overrides config)
        report_format: "text" or "json" (overrides config)
        output_path: Write the report here instead of stdout (overrides config)

    Returns:
        Dictionary with the report and where it was written
    """
    from .configs import load_config, validate_config, get_config_value, valid_quantiles
    from .data_loading import load_survey, load_answers_csv
    from .comparison import compare_all
    from .evaluation import create_comparison_report

    config = load_config(config_path)
    issues = validate_config(config)
    if issues:
        for issue in issues:
            logger.warning(f"Config issue: {issue}")

    setup_logging(get_config_value(config, "global.log_level", "INFO"))

    survey_path = _resolve_path(get_config_value(config, "data.survey.path"), config_path)
    repository = load_survey(survey_path)

    answers_csv = get_config_value(config, "data.answers_csv.path")
    if answers_csv:
        load_answers_csv(_resolve_path(answers_csv, config_path), repository)

    question_set_id = question_set_id or get_config_value(config, "comparison.question_set")
    question_set = None
    if question_set_id:
        question_set = repository.get_question_set(question_set_id)
        logger.info(f"Comparing on question set {question_set.name!r}")

    quantiles = get_config_value(config, "report.quantiles")
    if not valid_quantiles(quantiles):
        logger.warning("Ignoring report.quantiles; using the default quantiles")
        quantiles = None

    comparisons = compare_all(repository, question_set)
    report = create_comparison_report(
        title=question_set.name if question_set else "All questions",
        users=repository.users,
        comparisons=comparisons,
        quantiles=quantiles
    )

    report_format = report_format or get_config_value(config, "report.format", "text")
    output_path = output_path or get_config_value(config, "report.output")
    round_scores = get_config_value(config, "report.round_scores", True)

    if report_format == "json":
        if output_path:
            report.save(output_path)
        else:
            print(json.dumps(report.to_dict(), indent=2))
    else:
        text = report.summary(round_scores=round_scores)
        if output_path:
            with open(output_path, "w") as f:
                f.write(text + "\n")
            logger.info(f"Saved text report to {output_path}")
        else:
            print(text)

    return {
        "success": True,
        "report": report,
        "output_path": output_path
    }


def main(argv=None):
    """Main entry point for the comparison runner."""
    parser = argparse.ArgumentParser(
        description="Compare every pair of users' survey answers"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="configs/config.yaml",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--question-set",
        type=str,
        default=None,
        help="Compare only the questions of this question set (overrides config)"
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default=None,
        help="Report format (overrides config)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the report to this file instead of stdout"
    )

    args = parser.parse_args(argv)

    try:
        result = run_comparison(
            args.config,
            question_set_id=args.question_set,
            report_format=args.format,
            output_path=args.output
        )
        if result["success"]:
            return 0
        logger.error("Comparison failed!")
        return 1
    except Exception as e:
        logger.exception(f"Comparison failed with error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
