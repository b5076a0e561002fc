from __future__ import annotations

"""CLI entry point for the spirit animal quiz."""

import argparse
import json
import sys
from typing import Callable, Dict, List, Optional

from . import __version__
from .app import explain
from .config.config import load_config, scoring_config_from, validate_config
from .quiz.archetypes import load_archetypes
from .quiz.questions import load_questions
from .quiz.session import QuizSession
from .results.schema import QuizResult
from .scoring.engine import ScoringEngine, completion_percentage, is_result_reliable
from .scoring.errors import ScoringError
from .stats.stats import counts, format_summary, load_responses, write_session

RETAKE_MESSAGE = "Sorry, we couldn't work out your spirit animal. Please retake the quiz from question one."


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="spiritquiz", description="Spirit animal quiz")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    sub = p.add_subparsers(dest="cmd")

    rp = sub.add_parser("run", help="Take the quiz interactively")
    rp.add_argument("--config", default=None, help="Path to YAML config")
    rp.add_argument("--questions", default=None, help="Question bank JSON (overrides config)")
    rp.add_argument("--save", default=None, help="Write the session snapshot here")
    rp.add_argument("--explain", action="store_true")

    sp = sub.add_parser("score", help="Score a saved response list")
    sp.add_argument("--responses", required=True, help="JSON list of responses or a session snapshot")
    sp.add_argument("--config", default=None, help="Path to YAML config")
    sp.add_argument("--json", dest="as_json", action="store_true", help="Print the result as JSON")
    sp.add_argument("--explain", action="store_true")
    return p.parse_args(argv)


def run_quiz(session: QuizSession, ask: Callable[[str], str], inform: Callable[[str], None], *, allow_skip: bool = True, allow_unknown: bool = True) -> None:
    """Walk the session question by question until every question has a response."""
    hints = ["A-F to answer"]
    if allow_skip:
        hints.append("'s' skip")
    if allow_unknown:
        hints.append("'?' not sure")
    hints.append("'b' back")
    prompt = f"Your choice ({', '.join(hints)}): "

    while True:
        q = session.current
        total = len(session.questions)
        inform(f"\nQ{session.index + 1}/{total} [{q.category}] {q.text}")
        for opt in q.options:
            inform(f"  {opt.id}) {opt.text}")
        previous = session.selection(q.id)
        if previous:
            inform(f"  (current: {previous})")

        ans = ask(prompt).strip()
        low = ans.lower()
        if low == "b":
            session.back()
            continue
        if low == "s" and allow_skip:
            session.skip(q.id)
        elif ans == "?" and allow_unknown:
            session.mark_unknown(q.id)
        elif q.option(ans.upper()) is not None:
            session.answer(q.id, ans.upper())
        else:
            inform("Please pick one of the listed options.")
            continue

        explain.trace("response", {"question": q.id, "selection": session.selection(q.id)})
        if not session.advance():
            if session.is_complete:
                return
            # Jump to the first question still missing a response.
            session.index = next(i for i, qq in enumerate(session.questions) if session.selection(qq.id) is None)


def _print_result(result: QuizResult, as_json: bool) -> None:
    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
        return
    print(format_summary(result, load_archetypes()))
    if not is_result_reliable(result):
        print("Tip: answer more questions for a more reliable result.")


def _cmd_run(args: argparse.Namespace) -> int:
    cfg = validate_config(load_config(args.config))
    explain.enable(args.explain or bool(cfg["ui"].get("explain", False)))
    engine = ScoringEngine(scoring_config_from(cfg))

    questions = load_questions(args.questions or cfg["quiz"].get("questions_path"))
    session = QuizSession(questions)
    print(f"Spirit animal quiz: {len(questions)} questions.")
    run_quiz(
        session,
        ask=input,
        inform=print,
        allow_skip=bool(cfg["quiz"].get("allow_skip", True)),
        allow_unknown=bool(cfg["quiz"].get("allow_unknown", True)),
    )

    responses = session.responses
    try:
        result = engine.score(responses)
    except ScoringError as e:
        explain.trace("scoring_failed", {"error": type(e).__name__, "detail": str(e)})
        print(RETAKE_MESSAGE)
        return 1

    actual: Dict[str, int] = counts(responses)
    explain.trace("counts", {**actual, "completion_pct": completion_percentage(responses, len(questions))})
    if cfg["stats"].get("show_summary", True):
        print()
        _print_result(result, as_json=False)

    out_path = args.save or cfg["stats"].get("session_path")
    if out_path:
        write_session(out_path, responses, result)
        print(f"Session saved to {out_path}")
    return 0


def _cmd_score(args: argparse.Namespace) -> int:
    cfg = validate_config(load_config(args.config))
    explain.enable(args.explain or bool(cfg["ui"].get("explain", False)))
    engine = ScoringEngine(scoring_config_from(cfg))
    try:
        responses = load_responses(args.responses)
    except (OSError, ValueError) as e:
        print(f"ERROR: Could not read responses from '{args.responses}': {e}", file=sys.stderr)
        return 1
    try:
        result = engine.score(responses)
    except ScoringError as e:
        print(f"{RETAKE_MESSAGE}\n({e})", file=sys.stderr)
        return 1
    _print_result(result, args.as_json)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    if args.version:
        print(f"spiritquiz {__version__}")
        return 0
    if args.cmd == "run":
        return _cmd_run(args)
    if args.cmd == "score":
        return _cmd_score(args)
    print("usage: spiritquiz {run,score} [options]  (see --help)", file=sys.stderr)
    return 2


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
