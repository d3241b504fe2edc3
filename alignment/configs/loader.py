"""
Run configuration.

A run is described by one YAML file with four sections:

    global:      logging
    data:        where the survey (and optional extra answers) live
    comparison:  which question set to compare on
    report:      output format, rounding, destination, quantiles

Validation never raises; it collects readable issues so the runner can
log them and carry on with defaults.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List

import yaml

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ["global", "data", "comparison", "report"]
REPORT_FORMATS = ("text", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Read a run configuration file.

    Args:
        filepath: YAML file to read

    Returns:
        Parsed configuration

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file holds no document
        yaml.YAMLError: If the YAML cannot be parsed
    """
    if not Path(filepath).exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(filepath, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")
    return config


def valid_quantiles(quantiles: Any) -> bool:
    """True if ``quantiles`` is unset or a list of fractions in [0, 1]."""
    if quantiles is None:
        return True
    if not isinstance(quantiles, list):
        return False
    return all(
        isinstance(q, (int, float)) and not isinstance(q, bool) and 0 <= q <= 1
        for q in quantiles
    )


def _check_data(section: Dict[str, Any]) -> List[str]:
    survey = section.get("survey") or {}
    if "path" not in survey:
        return ["Missing data.survey.path"]
    return []


def _check_report(section: Dict[str, Any]) -> List[str]:
    issues = []
    fmt = section.get("format", "text")
    if fmt not in REPORT_FORMATS:
        issues.append(f"report.format must be one of {REPORT_FORMATS}, got {fmt!r}")
    round_scores = section.get("round_scores", True)
    if not isinstance(round_scores, bool):
        issues.append(f"report.round_scores must be true or false, got {round_scores!r}")
    quantiles = section.get("quantiles")
    if not valid_quantiles(quantiles):
        issues.append(f"report.quantiles must be a list of fractions in [0, 1], got {quantiles!r}")
    return issues


def _check_global(section: Dict[str, Any]) -> List[str]:
    log_level = section.get("log_level", "INFO")
    if str(log_level).upper() not in LOG_LEVELS:
        return [f"Unknown global.log_level: {log_level}"]
    return []


SECTION_CHECKS: Dict[str, Callable[[Dict[str, Any]], List[str]]] = {
    "data": _check_data,
    "report": _check_report,
    "global": _check_global,
}


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Collect problems with a configuration.

    Returns:
        Issue messages, empty when the configuration is usable as is
    """
    issues = [
        f"Missing required section: {section}"
        for section in REQUIRED_SECTIONS
        if section not in config
    ]

    for name, check in SECTION_CHECKS.items():
        if name in config:
            issues.extend(check(config[name] or {}))

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Look up a nested value by dotted path, e.g. ``"report.format"``.

    Returns ``default`` as soon as a key is missing or a non-mapping is hit.
    """
    value = config
    for key in path.split("."):
        if not isinstance(value, dict) or key not in value:
            return default
        value = value[key]
    return value
