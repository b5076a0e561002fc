from __future__ import annotations

"""Load saved quiz sessions into a results DataFrame."""

from pathlib import Path
from typing import Iterable, List

import pandas as pd

from spiritquiz.results.schema import QuizResult
from spiritquiz.stats.stats import read_session

from .config import AnalyticsConfig

CONFIDENCE_ORDER = ["low", "medium", "high"]


def load_results(sessions_dir: Path, cfg: AnalyticsConfig) -> List[QuizResult]:
    """Read every session snapshot under sessions_dir, sorted by file name.

    Files that are not snapshots are skipped with a warning.
    """
    results: List[QuizResult] = []
    for path in sorted(Path(sessions_dir).glob(cfg.sessions_glob)):
        try:
            _, result = read_session(path)
        except (ValueError, KeyError) as e:
            print(f"WARNING: skipping {path}: {e}")
            continue
        results.append(result)
    return results


def results_frame(results: Iterable[QuizResult]) -> pd.DataFrame:
    """One row per result with consistent dtypes.

    Columns: primary, primary_points, secondary, secondary_points,
    confidence (ordered categorical), damping, answered, skipped, margin.
    """
    rows = []
    for r in results:
        sec = r.secondary
        rows.append(
            {
                "primary": r.primary.archetype,
                "primary_points": r.primary.total_points,
                "secondary": sec.archetype if sec else None,
                "secondary_points": sec.total_points if sec else pd.NA,
                "confidence": r.confidence,
                "damping": r.primary.confidence,
                "answered": r.total_questions_answered,
                "skipped": r.skipped_questions,
            }
        )
    df = pd.DataFrame(
        rows,
        columns=[
            "primary",
            "primary_points",
            "secondary",
            "secondary_points",
            "confidence",
            "damping",
            "answered",
            "skipped",
        ],
    )
    df["primary"] = df["primary"].astype("string")
    df["secondary"] = df["secondary"].astype("string")
    df["primary_points"] = df["primary_points"].astype("Int64")
    df["secondary_points"] = df["secondary_points"].astype("Int64")
    df["confidence"] = pd.Categorical(df["confidence"], categories=CONFIDENCE_ORDER, ordered=True)
    df["damping"] = df["damping"].astype("float32")
    df["answered"] = df["answered"].astype("Int64")
    df["skipped"] = df["skipped"].astype("Int64")
    # Gap to the surfaced secondary; equals primary_points when none is shown.
    df["margin"] = (df["primary_points"] - df["secondary_points"].fillna(0)).astype("Int64")
    return df
