from __future__ import annotations

"""Matplotlib charts for archetype distribution and confidence breakdown."""

from typing import Optional
import numpy as np
import pandas as pd
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402


def plot_distribution(
    dist: pd.DataFrame,
    *,
    value_col: str = "share",
    save_path: Optional[str | bytes | "os.PathLike[str]"] = None,
) -> None:
    if dist.empty:
        return
    plt.figure()
    plt.bar(dist.index.astype(str), dist[value_col].to_numpy())
    plt.xlabel("Spirit animal")
    plt.ylabel(value_col)
    plt.title(f"Primary results ({value_col})")
    plt.xticks(rotation=30)
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()


def plot_confidence_heatmap(
    breakdown: pd.DataFrame,
    *,
    save_path: Optional[str | bytes | "os.PathLike[str]"] = None,
) -> None:
    if breakdown.empty:
        return
    M = breakdown.to_numpy()
    plt.figure()
    im = plt.imshow(M, aspect="auto", origin="lower")
    plt.colorbar(im, label="results")
    plt.xticks(ticks=np.arange(breakdown.shape[1]), labels=breakdown.columns.astype(str))
    plt.yticks(ticks=np.arange(breakdown.shape[0]), labels=breakdown.index.astype(str))
    plt.title("Confidence by spirit animal")
    plt.xlabel("Confidence")
    plt.ylabel("Spirit animal")
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()
