from __future__ import annotations

"""Batch report over saved quiz sessions.

Reads session snapshots from a directory, tabulates results and writes
charts plus a CSV snapshot into ./reports.
"""

import argparse
from pathlib import Path
from typing import List, Optional

from analytics.config import AnalyticsConfig
from analytics.metrics import archetype_distribution, compute_metrics, confidence_breakdown
from analytics.plots import plot_confidence_heatmap, plot_distribution
from analytics.prepare import load_results, results_frame


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Quiz results report")
    p.add_argument("sessions_dir", type=Path)
    p.add_argument("--out", type=Path, default=Path("reports"))
    args = p.parse_args(argv)

    cfg = AnalyticsConfig()
    if not args.sessions_dir.is_dir():
        print(f"Sessions directory not found: {args.sessions_dir}")
        return 2

    df = results_frame(load_results(args.sessions_dir, cfg))
    if df.empty:
        print("No quiz sessions found.")
        return 1

    outdir = args.out
    outdir.mkdir(exist_ok=True, parents=True)

    dist = archetype_distribution(df, cfg)
    plot_distribution(dist, save_path=outdir / "archetype_share.png")
    plot_confidence_heatmap(confidence_breakdown(df), save_path=outdir / "confidence_heatmap.png")

    for name, value in compute_metrics(df, cfg).items():
        print(f"{name}: {value:.3f}" if isinstance(value, float) else f"{name}: {value}")

    df.to_csv(outdir / "results_snapshot.csv", index=False)
    print(f"Reports saved to: {outdir.resolve()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
