from .config import AnalyticsConfig
from .metrics import archetype_distribution, compute_metrics, confidence_breakdown
from .prepare import load_results, results_frame
from .plots import plot_distribution, plot_confidence_heatmap

__all__ = [
    "AnalyticsConfig",
    "archetype_distribution",
    "compute_metrics",
    "confidence_breakdown",
    "load_results",
    "results_frame",
    "plot_distribution",
    "plot_confidence_heatmap",
]
