from __future__ import annotations

"""Aggregate metrics over a results DataFrame."""

from typing import Dict

import numpy as np
import pandas as pd

from .config import AnalyticsConfig
from .prepare import CONFIDENCE_ORDER


def archetype_distribution(df: pd.DataFrame, cfg: AnalyticsConfig) -> pd.DataFrame:
    """Count and share of primary results per archetype, top_n rows, highest first."""
    if df.empty:
        return pd.DataFrame({"count": pd.Series(dtype="int64"), "share": pd.Series(dtype="float32")})
    counts = df["primary"].value_counts(sort=True)
    out = counts.to_frame("count")
    out["share"] = (out["count"] / float(len(df))).astype("float32")
    out.index.name = "archetype"
    return out.head(cfg.top_n)


def confidence_breakdown(df: pd.DataFrame) -> pd.DataFrame:
    """Primary archetype x confidence label counts (all labels always present)."""
    table = pd.crosstab(df["primary"], df["confidence"], dropna=False)
    return table.reindex(columns=CONFIDENCE_ORDER, fill_value=0)


def compute_metrics(df: pd.DataFrame, cfg: AnalyticsConfig) -> Dict[str, float]:
    """Headline numbers: sessions, reliable share, mean margin, mean answered, secondary rate."""
    n = len(df)
    if n == 0:
        return {"sessions": 0, "reliable_share": 0.0, "mean_margin": 0.0, "mean_answered": 0.0, "secondary_rate": 0.0}
    reliable = df["confidence"].astype("string").isin(cfg.reliable_levels).to_numpy(dtype=bool)
    margin = df["margin"].astype("float64").to_numpy()
    answered = df["answered"].astype("float64").to_numpy()
    return {
        "sessions": n,
        "reliable_share": float(np.mean(reliable)),
        "mean_margin": float(np.mean(margin)),
        "mean_answered": float(np.mean(answered)),
        "secondary_rate": float(df["secondary"].notna().mean()),
    }
