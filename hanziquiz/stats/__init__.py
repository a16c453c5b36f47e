from .stats import (
    format_summary,
    mark_complete,
    new_quiz_stats,
    record_events,
    to_rows,
    update_stats,
    write_stats,
)

__all__ = [
    "format_summary",
    "mark_complete",
    "new_quiz_stats",
    "record_events",
    "to_rows",
    "update_stats",
    "write_stats",
]
