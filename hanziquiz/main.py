from __future__ import annotations

"""CLI entry point: replay recorded gestures through a stroke-order quiz."""

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional, Sequence
from uuid import uuid4

from . import __version__
from .app.explain import enable as xenable
from .app.writer import WriterSession
from .config.config import load_config, validate_config
from .quiz.state import QuizParams
from .stats.stats import format_summary, new_quiz_stats, record_events, to_rows, write_stats
from .storage.store import append_stroke_stats, init_store, validate_records


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="hanziquiz gesture replay")
    p.add_argument("character", nargs="?", help="Character JSON ({strokes, medians, radStrokes})")
    p.add_argument("gestures", nargs="?", help="JSON list of gestures, each a list of [x, y] surface points")
    p.add_argument("--symbol", type=str, default=None, help="Character symbol (default: character file stem)")
    p.add_argument("--config", type=str, default=None, help="Path to YAML config")
    p.add_argument("--leniency", type=float, default=None, help="Override quiz leniency")
    p.add_argument("--accept-backwards", action="store_true", help="Accept strokes drawn in reverse")
    p.add_argument("--start-stroke", type=int, default=None, help="Begin on this stroke number")
    p.add_argument("--stats-out", type=str, default=None, help="Write stats JSON here")
    p.add_argument("--store-dir", type=str, default=None, help="Append per-stroke rows to a Parquet store")
    p.add_argument("--explain", action="store_true", help="Print trace lines at quiz milestones")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    return p.parse_args(argv)


def _load_json(path: str) -> Any:
    try:
        with Path(path).open("r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        print(f"ERROR: File not found: {path}", file=sys.stderr)
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"ERROR: {path} is not valid JSON: {e}", file=sys.stderr)
        sys.exit(1)


def _read_gestures(payload: Any) -> List[List[Any]]:
    if isinstance(payload, dict):
        payload = payload.get("gestures", [])
    if not isinstance(payload, list):
        print("ERROR: gestures must be a list of point lists", file=sys.stderr)
        sys.exit(1)
    return [list(g) for g in payload]


def cli(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.version:
        print(f"hanziquiz {__version__}")
        sys.exit(0)
    if not args.character or not args.gestures:
        print("ERROR: character and gestures files are required", file=sys.stderr)
        sys.exit(2)

    cfg = validate_config(load_config(args.config))
    xenable(args.explain or bool(cfg.get("explain", False)))

    char_data = _load_json(args.character)
    gestures = _read_gestures(_load_json(args.gestures))
    symbol = args.symbol or Path(args.character).stem

    session = WriterSession.from_config(symbol, lambda _symbol: char_data, cfg, cache={})
    state = session.load()
    if state.status != "resolved" or state.character is None:
        print(f"ERROR: Could not load character {symbol!r}: {state.error}", file=sys.stderr)
        sys.exit(1)

    stats = new_quiz_stats(symbol, state.character.stroke_count)
    record_events(session.bus, stats)

    params = QuizParams.from_config(
        cfg,
        leniency=args.leniency,
        accept_backwards_strokes=True if args.accept_backwards else None,
        quiz_start_stroke_num=args.start_stroke,
    )
    session.quiz.start(params)
    started_at = datetime.now(timezone.utc)

    print(f"Quiz for {symbol} ({state.character.stroke_count} strokes), {len(gestures)} gestures.")
    for i, gesture in enumerate(gestures, start=1):
        quiz_state = session.quiz.state
        if not quiz_state.active:
            print(f"Quiz finished; ignoring {len(gestures) - i + 1} remaining gestures.")
            break
        index = quiz_state.index
        result = session.quiz.check(gesture)
        if result is None:
            print(f"G{i}: empty gesture, skipped")
            continue
        outcome = "match" if result.is_match else "no match"
        if result.meta.is_stroke_backwards:
            outcome += " (backwards)"
        print(f"G{i} → stroke {index + 1}: {outcome}")

    stats_cfg = cfg.get("stats", {})
    out_path = args.stats_out or stats_cfg.get("output_path")
    if out_path:
        write_stats(stats, out_path)

    store_dir = args.store_dir or stats_cfg.get("store_dir")
    if store_dir:
        rows = to_rows(stats, session_id=str(uuid4()), session_start=started_at)
        if rows:
            init_store(Path(store_dir))
            append_stroke_stats(validate_records(rows), Path(store_dir))

    if stats_cfg.get("show_summary", True):
        print("\nQuiz Summary:")
        print(format_summary(stats))


if __name__ == "__main__":
    cli()
