import contextlib
import io
import tempfile
import unittest
from pathlib import Path

from analytics.config import AnalyticsConfig
from analytics.metrics import archetype_distribution, compute_metrics, confidence_breakdown
from analytics.prepare import load_results, results_frame
from spiritquiz.results.schema import Response
from spiritquiz.scoring import compute_result
from spiritquiz.stats.stats import write_session


def quiz(points, answered, total=15):
    return [Response(f"q{i}", "A", dict(points)) for i in range(answered)] + [
        Response(f"q{i}", "skip", {}) for i in range(answered, total)
    ]


class AnalyticsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.cfg = AnalyticsConfig()
        self.results = [
            compute_result(quiz({"wolf": 10}, 10)),  # wolf 100, high, no secondary
            compute_result(quiz({"wolf": 10}, 12)),  # wolf 120, high
            compute_result(quiz({"fox": 4, "wolf": 3}, 5)),  # fox 10 / wolf 8, low
        ]
        self.df = results_frame(self.results)

    def test_results_frame(self) -> None:
        self.assertEqual(len(self.df), 3)
        self.assertEqual(list(self.df["primary"]), ["wolf", "wolf", "fox"])
        self.assertEqual(list(self.df["margin"]), [100, 120, 2])
        self.assertEqual(self.df["secondary"].notna().sum(), 1)
        self.assertEqual(list(self.df["confidence"].cat.categories), ["low", "medium", "high"])

    def test_distribution(self) -> None:
        dist = archetype_distribution(self.df, self.cfg)
        self.assertEqual(list(dist.index), ["wolf", "fox"])
        self.assertEqual(list(dist["count"]), [2, 1])
        self.assertAlmostEqual(float(dist.loc["wolf", "share"]), 2 / 3, places=5)
        self.assertEqual(len(archetype_distribution(self.df, AnalyticsConfig(top_n=1))), 1)

    def test_confidence_breakdown(self) -> None:
        table = confidence_breakdown(self.df)
        self.assertEqual(list(table.columns), ["low", "medium", "high"])
        self.assertEqual(int(table.loc["wolf", "high"]), 2)
        self.assertEqual(int(table.loc["fox", "low"]), 1)

    def test_compute_metrics(self) -> None:
        m = compute_metrics(self.df, self.cfg)
        self.assertEqual(m["sessions"], 3)
        self.assertAlmostEqual(m["reliable_share"], 2 / 3)
        self.assertAlmostEqual(m["mean_margin"], (100 + 120 + 2) / 3)
        self.assertAlmostEqual(m["secondary_rate"], 1 / 3)
        self.assertEqual(compute_metrics(results_frame([]), self.cfg)["sessions"], 0)

    def test_load_results_skips_foreign_files(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            for i, r in enumerate(self.results):
                write_session(Path(d) / f"s{i}.json", [], r)
            (Path(d) / "zz_notes.json").write_text("{}", encoding="utf-8")
            with contextlib.redirect_stdout(io.StringIO()) as out:
                loaded = load_results(Path(d), self.cfg)
        self.assertEqual(loaded, self.results)
        self.assertIn("skipping", out.getvalue())


if __name__ == "__main__":
    unittest.main()
