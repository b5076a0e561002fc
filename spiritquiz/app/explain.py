from __future__ import annotations

"""Explain Mode tracing for the scoring pipeline.

Off by default. `--explain` turns it on and each pipeline milestone prints
one JSON line to stderr, keeping stdout free for results.
"""

import json
import sys
from typing import Any, Dict

_ENABLED = False


def enable(flag: bool = True) -> None:
    global _ENABLED
    _ENABLED = bool(flag)


def enabled() -> bool:
    return _ENABLED


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if not _ENABLED:
        return
    line = json.dumps(payload or {}, separators=(",", ":"), sort_keys=True, default=str)
    print(f"[EXPLAIN] {event} :: {line}", file=sys.stderr)
