from .schema import DTYPES, StrokeStatsRow
from .store import (
    init_store,
    validate_records,
    append_stroke_stats,
    load_all,
    query_character,
    export_ndjson,
)

__all__ = [
    "DTYPES",
    "StrokeStatsRow",
    "init_store",
    "validate_records",
    "append_stroke_stats",
    "load_all",
    "query_character",
    "export_ndjson",
]
