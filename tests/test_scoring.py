import unittest
from unittest import mock

import pydantic

from spiritquiz.results.schema import ArchetypeScore, ConfidenceLevel, Response
from spiritquiz.scoring import (
    NoScoresError,
    ScoringConfig,
    ScoringEngine,
    ValidationError,
    aggregate_scores,
    assemble_result,
    classify_confidence,
    compute_result,
    completion_percentage,
    damping_factor,
    get_archetype_score,
    is_result_reliable,
    rank_scores,
    round_half_up,
    validate_responses,
)
from spiritquiz.scoring import engine as engine_mod


def answered(qid, points, option="A"):
    return Response(question_id=qid, selected_option=option, points=dict(points), timestamp=1700000000000)


def skipped(qid, points=None):
    return Response(question_id=qid, selected_option="skip", points=dict(points or {}))


def wolf_quiz():
    return [answered(f"q{i}", {"wolf": 10}) for i in range(1, 11)] + [skipped(f"q{i}") for i in range(11, 16)]


def fox_wolf_quiz():
    return [answered(f"q{i}", {"fox": 4, "wolf": 3}) for i in range(1, 6)] + [skipped(f"q{i}") for i in range(6, 16)]


class EndToEndTests(unittest.TestCase):
    def test_ten_answers_for_one_archetype(self) -> None:
        result = compute_result(wolf_quiz())
        self.assertEqual(result.primary.archetype, "wolf")
        self.assertEqual(result.primary.total_points, 100)
        self.assertEqual(result.primary.confidence, 1.0)
        self.assertIsNone(result.secondary)
        self.assertEqual(result.confidence, ConfidenceLevel.HIGH)
        # Counts come from damping * 15, not from the ten actual answers.
        self.assertEqual(result.total_questions_answered, 15)
        self.assertEqual(result.skipped_questions, 0)

    def test_partial_quiz_with_close_runner_up(self) -> None:
        result = compute_result(fox_wolf_quiz())
        self.assertEqual(result.primary.archetype, "fox")
        self.assertEqual(result.primary.total_points, 10)
        self.assertEqual(result.primary.confidence, 0.5)
        self.assertIsNotNone(result.secondary)
        self.assertEqual(result.secondary.archetype, "wolf")
        self.assertEqual(result.secondary.total_points, 8)
        self.assertEqual(result.confidence, ConfidenceLevel.LOW)
        self.assertEqual(result.total_questions_answered, 8)
        self.assertEqual(result.skipped_questions, 7)

    def test_wire_mappings_are_accepted(self) -> None:
        wire = [r.to_dict() for r in fox_wolf_quiz()]
        self.assertEqual(compute_result(wire), compute_result(fox_wolf_quiz()))

    def test_deterministic(self) -> None:
        responses = fox_wolf_quiz()
        self.assertEqual(compute_result(responses), compute_result(responses))

    def test_timestamp_is_ignored(self) -> None:
        a = [Response("q1", "A", {"owl": 5}, timestamp=1)]
        b = [Response("q1", "A", {"owl": 5}, timestamp=999999)]
        self.assertEqual(compute_result(a), compute_result(b))

    def test_input_is_not_mutated(self) -> None:
        wire = [{"questionId": "q1", "selectedOption": "B", "points": {"bear": 2}}]
        compute_result(wire)
        self.assertEqual(wire, [{"questionId": "q1", "selectedOption": "B", "points": {"bear": 2}}])


class ValidationTests(unittest.TestCase):
    def assertRejected(self, responses, field=None, index=None):
        with self.assertRaises(ValidationError) as ctx:
            validate_responses(responses)
        if field is not None:
            self.assertEqual(ctx.exception.field, field)
        if index is not None:
            self.assertEqual(ctx.exception.index, index)
        return ctx.exception

    def test_non_list_input(self) -> None:
        for bad in (None, "A", {"questionId": "q1"}, tuple(wolf_quiz())):
            self.assertRejected(bad, field="responses")

    def test_empty_list(self) -> None:
        self.assertRejected([], field="responses")

    def test_missing_question_id(self) -> None:
        self.assertRejected([{"selectedOption": "A", "points": {}}], field="questionId", index=0)
        self.assertRejected([answered("q1", {}), Response("", "A", {})], field="questionId", index=1)

    def test_missing_selection(self) -> None:
        self.assertRejected([{"questionId": "q1", "points": {}}], field="selectedOption")
        self.assertRejected([{"questionId": "q1", "selectedOption": "", "points": {}}], field="selectedOption")

    def test_selection_outside_allowed_set(self) -> None:
        err = self.assertRejected([answered("q1", {"wolf": 1}, option="Z")], field="selectedOption")
        self.assertIn("skip", err.expected)
        self.assertRejected([answered("q1", {"wolf": 1}, option="a")], field="selectedOption")

    def test_points_missing_or_not_mapping(self) -> None:
        self.assertRejected([{"questionId": "q1", "selectedOption": "A"}], field="points")
        self.assertRejected([{"questionId": "q1", "selectedOption": "A", "points": [1, 2]}], field="points")

    def test_bad_point_values(self) -> None:
        self.assertRejected([answered("q1", {"wolf": -1})], field="points.wolf")
        self.assertRejected([answered("q1", {"wolf": "3"})], field="points.wolf")
        self.assertRejected([answered("q1", {"wolf": True})], field="points.wolf")
        self.assertRejected([answered("q1", {"wolf": float("nan")})], field="points.wolf")

    def test_int_too_large_for_float(self) -> None:
        self.assertRejected([answered("q1", {"wolf": 10**400})], field="points.wolf", index=0)

    def test_totals_overflowing_to_infinity(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            compute_result([answered(f"q{i}", {"wolf": 1e308}) for i in range(10)])
        self.assertEqual(ctx.exception.field, "points.wolf")

    def test_large_int_totals_overflowing_float(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            aggregate_scores([answered(f"q{i}", {"owl": 10**308}) for i in range(10)])
        self.assertEqual(ctx.exception.field, "points.owl")

    def test_non_mapping_entry(self) -> None:
        self.assertRejected([answered("q1", {"wolf": 1}), "q2"], field="response", index=1)

    def test_sentinels_and_letters_pass(self) -> None:
        responses = [answered(f"q{i}", {"wolf": 1}, option=o) for i, o in enumerate("ABCDEF")]
        responses.append(Response("q7", "skip", {}))
        responses.append(Response("q8", "unknown", {}))
        validate_responses(responses)

    def test_rejection_happens_before_aggregation(self) -> None:
        with mock.patch.object(engine_mod, "aggregate_scores") as agg:
            with self.assertRaises(ValidationError):
                compute_result([answered("q1", {"wolf": 1}), answered("q2", {"wolf": -5})])
            agg.assert_not_called()


class AggregationTests(unittest.TestCase):
    def test_skip_and_unknown_points_are_ignored(self) -> None:
        base = [answered("q1", {"wolf": 4})]
        noisy = base + [skipped("q2", {"wolf": 50, "fox": 50}), Response("q3", "unknown", {"fox": 99})]
        self.assertEqual(aggregate_scores(base), aggregate_scores(noisy))
        self.assertIsNone(get_archetype_score(aggregate_scores(noisy), "fox"))

    def test_damping_factor(self) -> None:
        self.assertEqual(damping_factor(0), 0.0)
        self.assertEqual(damping_factor(6), 0.6)
        self.assertEqual(damping_factor(10), 1.0)
        self.assertEqual(damping_factor(14), 1.0)

    def test_every_record_carries_the_same_factor(self) -> None:
        scores = aggregate_scores([answered(f"q{i}", {"wolf": 2, "owl": 1, "fox": 3}) for i in range(7)])
        self.assertEqual({s.confidence for s in scores}, {0.7})
        self.assertTrue(all(s.category_breakdown == {} for s in scores))

    def test_first_seen_order(self) -> None:
        scores = aggregate_scores([answered("q1", {"owl": 1}), answered("q2", {"bear": 1, "owl": 2})])
        self.assertEqual([s.archetype for s in scores], ["owl", "bear"])

    def test_zero_point_archetype_is_present(self) -> None:
        scores = aggregate_scores([answered("q1", {"owl": 0, "bear": 3})])
        self.assertEqual(get_archetype_score(scores, "owl").total_points, 0)

    def test_round_half_up(self) -> None:
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(7.5), 8)
        self.assertEqual(round_half_up(2.49), 2)
        # Five answers of one point each: 5 * 0.5 = 2.5 -> 3
        scores = aggregate_scores([answered(f"q{i}", {"deer": 1}) for i in range(5)])
        self.assertEqual(scores[0].total_points, 3)

    def test_damping_monotonicity(self) -> None:
        prev_factor, prev_total = -1.0, -1
        for n in range(1, 14):
            scores = aggregate_scores([answered(f"q{i}", {"wolf": 10}) for i in range(n)])
            factor, total = scores[0].confidence, scores[0].total_points
            self.assertGreaterEqual(factor, prev_factor)
            if n <= 10:
                self.assertGreater(total, prev_total)
                self.assertEqual(total, round_half_up(10 * n * n / 10))
            prev_factor, prev_total = factor, total
        self.assertEqual(prev_factor, 1.0)

    def test_damping_keeps_the_raw_leader(self) -> None:
        responses = [answered("q1", {"lion": 9, "eagle": 8}), answered("q2", {"eagle": 1, "lion": 1})]
        primary, secondary = rank_scores(aggregate_scores(responses))
        self.assertEqual(primary.archetype, "lion")
        self.assertEqual(secondary.archetype, "eagle")


class RankingTests(unittest.TestCase):
    def test_empty_scores_raise(self) -> None:
        with self.assertRaises(NoScoresError):
            rank_scores([])

    def test_all_skipped_raises(self) -> None:
        with self.assertRaises(NoScoresError):
            compute_result([skipped("q1"), Response("q2", "unknown", {})])

    def test_answers_without_points_raise(self) -> None:
        with self.assertRaises(NoScoresError):
            compute_result([answered("q1", {}), answered("q2", {})])

    def test_descending_and_stable(self) -> None:
        scores = [
            ArchetypeScore("owl", 5, 1.0),
            ArchetypeScore("bear", 9, 1.0),
            ArchetypeScore("fox", 5, 1.0),
        ]
        primary, secondary = rank_scores(scores)
        self.assertEqual(primary.archetype, "bear")
        self.assertEqual(secondary.archetype, "owl")
        ranked = ScoringEngine().ranked_scores([answered("q1", {"owl": 5, "fox": 5, "bear": 9})] * 10)
        self.assertEqual([s.archetype for s in ranked], ["bear", "owl", "fox"])

    def test_single_archetype_has_no_candidate(self) -> None:
        primary, secondary = rank_scores([ArchetypeScore("wolf", 3, 0.3)])
        self.assertEqual(primary.archetype, "wolf")
        self.assertIsNone(secondary)

    def test_primary_beats_every_other_total(self) -> None:
        responses = [answered(f"q{i}", {"wolf": i % 3, "fox": (i * 2) % 5, "owl": 2}) for i in range(12)]
        ranked = ScoringEngine().ranked_scores(responses)
        result = compute_result(responses)
        self.assertTrue(all(result.primary.total_points >= s.total_points for s in ranked))


class ConfidenceTests(unittest.TestCase):
    cfg = ScoringConfig()

    def classify(self, factor, primary_pts, secondary_pts=None):
        primary = ArchetypeScore("wolf", primary_pts, factor)
        secondary = ArchetypeScore("fox", secondary_pts, factor) if secondary_pts is not None else None
        return classify_confidence(primary, secondary, self.cfg)

    def test_high_boundary(self) -> None:
        self.assertEqual(self.classify(1.0, 40, 20), "high")
        self.assertEqual(self.classify(1.0, 39, 20), "medium")

    def test_medium_boundary(self) -> None:
        self.assertEqual(self.classify(0.6, 30, 20), "medium")
        self.assertEqual(self.classify(0.6, 29, 20), "low")

    def test_factor_boundaries(self) -> None:
        self.assertEqual(self.classify(0.9, 100, 10), "medium")
        self.assertEqual(self.classify(0.5, 100, 10), "low")
        self.assertEqual(self.classify(0.6, 100, 10), "medium")

    def test_no_secondary_uses_primary_total_as_gap(self) -> None:
        self.assertEqual(self.classify(1.0, 20), "high")
        self.assertEqual(self.classify(1.0, 19), "medium")
        self.assertEqual(self.classify(1.0, 9), "low")

    def test_custom_thresholds(self) -> None:
        cfg = ScoringConfig(high_confidence_threshold=0.8, medium_confidence_threshold=0.4)
        primary = ArchetypeScore("wolf", 50, 0.8)
        self.assertEqual(classify_confidence(primary, None, cfg), "high")
        primary = ArchetypeScore("wolf", 50, 0.4)
        self.assertEqual(classify_confidence(primary, None, cfg), "medium")


class AssemblerTests(unittest.TestCase):
    def test_secondary_threshold_boundary(self) -> None:
        cfg = ScoringConfig(secondary_threshold=0.5)
        primary = ArchetypeScore("wolf", 20, 1.0)
        kept = assemble_result(primary, ArchetypeScore("fox", 10, 1.0), "low", cfg)
        dropped = assemble_result(primary, ArchetypeScore("fox", 9, 1.0), "low", cfg)
        self.assertEqual(kept.secondary.archetype, "fox")
        self.assertIsNone(dropped.secondary)

    def test_default_threshold(self) -> None:
        cfg = ScoringConfig()
        primary = ArchetypeScore("wolf", 10, 0.5)
        self.assertIsNotNone(assemble_result(primary, ArchetypeScore("fox", 8, 0.5), "low", cfg).secondary)
        self.assertIsNone(assemble_result(primary, ArchetypeScore("fox", 6, 0.5), "low", cfg).secondary)

    def test_surfaced_secondary_meets_threshold(self) -> None:
        result = compute_result(fox_wolf_quiz())
        self.assertGreaterEqual(result.secondary.total_points, result.primary.total_points * 0.70)

    def test_counts_from_damping(self) -> None:
        result = assemble_result(ArchetypeScore("wolf", 5, 0.2), None, "low", ScoringConfig())
        self.assertEqual(result.total_questions_answered, 3)
        self.assertEqual(result.skipped_questions, 12)


class EngineTests(unittest.TestCase):
    def test_with_config_returns_new_engine(self) -> None:
        engine = ScoringEngine()
        strict = engine.with_config(secondary_threshold=0.9)
        self.assertEqual(engine.config.secondary_threshold, 0.70)
        self.assertEqual(strict.config.secondary_threshold, 0.9)
        self.assertIsNotNone(engine.score(fox_wolf_quiz()).secondary)
        self.assertIsNone(strict.score(fox_wolf_quiz()).secondary)

    def test_config_is_immutable_and_checked(self) -> None:
        cfg = ScoringConfig()
        with self.assertRaises(pydantic.ValidationError):
            cfg.secondary_threshold = 0.1
        with self.assertRaises(pydantic.ValidationError):
            ScoringConfig(secondary_threshold=1.5)
        with self.assertRaises(pydantic.ValidationError):
            ScoringConfig(high_confidence_threshold=0.5, medium_confidence_threshold=0.7)
        with self.assertRaises(pydantic.ValidationError):
            ScoringEngine().with_config(bogus=1)

    def test_helpers(self) -> None:
        scores = ScoringEngine().ranked_scores(fox_wolf_quiz())
        self.assertEqual(get_archetype_score(scores, "WOLF").total_points, 8)
        self.assertIsNone(get_archetype_score(scores, "bear"))
        self.assertEqual(completion_percentage(wolf_quiz()), 67)
        self.assertEqual(completion_percentage(fox_wolf_quiz(), total_questions=10), 50)
        with self.assertRaises(ValueError):
            completion_percentage(wolf_quiz(), total_questions=0)
        self.assertTrue(is_result_reliable(compute_result(wolf_quiz())))
        self.assertFalse(is_result_reliable(compute_result(fox_wolf_quiz())))


if __name__ == "__main__":
    unittest.main()
