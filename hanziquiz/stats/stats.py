from __future__ import annotations

"""Basic quiz stats: JSON-based aggregation and formatting."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from ..app.events import EventBus
from ..storage.schema import StrokeStatsRow


def new_quiz_stats(character: str, stroke_count: int) -> Dict:
    """Create a new, empty stats structure."""
    return {
        "character": character,
        "strokes": int(stroke_count),
        "attempts": 0,
        "mistakes": 0,
        "completed": False,
        "total_mistakes": None,
        "per_stroke": {},
    }


def update_stats(stats: Dict, stroke_num: int, accepted: bool, backwards: bool = False) -> None:
    """Update stats for a single graded stroke."""
    stats["attempts"] = int(stats.get("attempts", 0)) + 1
    if not accepted:
        stats["mistakes"] = int(stats.get("mistakes", 0)) + 1
    per = stats.setdefault("per_stroke", {})
    bucket = per.setdefault(str(stroke_num), {"attempts": 0, "mistakes": 0, "backwards": 0})
    bucket["attempts"] += 1
    bucket["mistakes"] += 0 if accepted else 1
    bucket["backwards"] += 1 if backwards else 0


def mark_complete(stats: Dict, total_mistakes: int) -> None:
    stats["completed"] = True
    stats["total_mistakes"] = int(total_mistakes)


def record_events(bus: EventBus, stats: Dict) -> None:
    """Keep ``stats`` up to date from a session's quiz events."""

    def on_mistake(data: Any) -> None:
        update_stats(stats, data.stroke_num, accepted=False, backwards=data.is_backwards)

    def on_correct(data: Any) -> None:
        update_stats(stats, data.stroke_num, accepted=True, backwards=data.is_backwards)

    def on_complete(summary: Dict[str, Any]) -> None:
        mark_complete(stats, summary["total_mistakes"])

    bus.subscribe("mistake", on_mistake)
    bus.subscribe("correct_stroke", on_correct)
    bus.subscribe("complete", on_complete)


def write_stats(stats: Dict, path: str) -> None:
    """Write stats as JSON to path."""
    p = Path(path)
    with p.open("w", encoding="utf-8") as f:
        json.dump(stats, f, indent=2, ensure_ascii=False)


def format_summary(stats: Dict) -> str:
    """Return a human-readable summary of stats."""
    attempts = int(stats.get("attempts", 0))
    mistakes = int(stats.get("mistakes", 0))
    status = "complete" if stats.get("completed") else "incomplete"
    lines = [f"{stats.get('character', '?')}: {status}, {attempts} attempts, {mistakes} mistakes"]
    if stats.get("completed"):
        lines.append(f"Strokes with mistakes: {stats.get('total_mistakes', 0)}")
    per = stats.get("per_stroke", {})
    for s in sorted(per.keys(), key=int):
        bucket = per[s]
        line = f"Stroke {int(s) + 1}: {bucket.get('mistakes', 0)} mistakes in {bucket.get('attempts', 0)} attempts"
        if bucket.get("backwards"):
            line += f" ({bucket['backwards']} backwards)"
        lines.append(line)
    return "\n".join(lines)


def to_rows(stats: Dict, session_id: str, session_start: datetime) -> List[StrokeStatsRow]:
    """One storage row per attempted stroke."""
    rows: List[StrokeStatsRow] = []
    for s, bucket in (stats.get("per_stroke", {}) or {}).items():
        attempts = int(bucket.get("attempts", 0))
        if attempts <= 0:
            continue
        rows.append(
            StrokeStatsRow(
                session_id=session_id,
                session_start=session_start,
                character=str(stats.get("character", "")),
                stroke_num=int(s),
                attempts=attempts,
                mistakes=int(bucket.get("mistakes", 0)),
                backwards=int(bucket.get("backwards", 0)),
                completed=bool(stats.get("completed", False)),
            )
        )
    return rows
