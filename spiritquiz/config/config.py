from __future__ import annotations

"""Configuration loading and validation for the quiz.

This module loads YAML configuration, applies defaults, and validates the
scoring thresholds before they are frozen into a ScoringConfig.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml

from ..scoring.config import ScoringConfig

DEFAULT_SCORING = {
    "secondary_threshold": 0.70,
    "high_confidence_threshold": 1.0,
    "medium_confidence_threshold": 0.6,
}


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        return _load_yaml(Path(path))
    return _load_yaml(Path(__file__).with_name("defaults.yml"))


def _fraction(section: Dict[str, Any], key: str) -> None:
    value = section.get(key)
    try:
        # YAML yes/no load as bools, which are not thresholds.
        f = -1.0 if isinstance(value, bool) else float(value)
    except (TypeError, ValueError):
        f = -1.0
    if not 0.0 <= f <= 1.0:
        print(f"WARNING: {key} must be a number in [0, 1], got {value!r}; using {DEFAULT_SCORING[key]}.")
        f = DEFAULT_SCORING[key]
    section[key] = f


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Out-of-range thresholds fall back to their defaults with a warning; a
    medium threshold above the high one is clamped down to it.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    cfg.setdefault("scoring", {})
    cfg.setdefault("quiz", {})
    cfg.setdefault("stats", {})
    cfg.setdefault("ui", {})

    scoring = cfg["scoring"]
    quiz = cfg["quiz"]
    stats = cfg["stats"]
    ui = cfg["ui"]

    for key, default in DEFAULT_SCORING.items():
        scoring.setdefault(key, default)
        _fraction(scoring, key)

    if scoring["medium_confidence_threshold"] > scoring["high_confidence_threshold"]:
        print("WARNING: medium_confidence_threshold exceeds high_confidence_threshold; clamping.")
        scoring["medium_confidence_threshold"] = scoring["high_confidence_threshold"]

    quiz.setdefault("questions_path", None)
    quiz.setdefault("allow_skip", True)
    quiz.setdefault("allow_unknown", True)

    # None: no snapshot unless --save is given.
    stats.setdefault("session_path", None)
    stats.setdefault("show_summary", True)

    ui.setdefault("explain", False)

    qp = quiz.get("questions_path")
    if qp and not Path(qp).exists():
        print(f"ERROR: Question bank not found at '{qp}'.", file=sys.stderr)
        sys.exit(1)

    return cfg


def scoring_config_from(cfg: Dict[str, Any]) -> ScoringConfig:
    """Freeze the validated `scoring` section into a ScoringConfig."""
    scoring = cfg.get("scoring", {})
    return ScoringConfig(**{k: scoring[k] for k in DEFAULT_SCORING if k in scoring})
