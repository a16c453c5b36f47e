from __future__ import annotations

"""Parquet-backed store for per-stroke quiz stats using pandas + pyarrow.

Unit of data: (session × character × stroke) summary rows.
"""

from pathlib import Path

import pandas as pd

from .schema import DTYPES, StrokeStatsRow


DATA_FILE = "stroke_stats.parquet"


def _empty_df() -> pd.DataFrame:
    return pd.DataFrame({k: pd.Series(dtype=v) for k, v in DTYPES.items()})


def _fix_dtypes(df: pd.DataFrame) -> pd.DataFrame:
    for col, dt in DTYPES.items():
        if col not in df.columns:
            df[col] = pd.NA
        df[col] = df[col].astype(dt)
    return df[list(DTYPES.keys())]


def init_store(data_dir: Path) -> None:
    """Ensure data directory and an empty Parquet file with correct schema exist."""
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    stats_path = data_dir / DATA_FILE
    if not stats_path.exists():
        _empty_df().to_parquet(stats_path, engine="pyarrow", compression="zstd")


def validate_records(records: list[StrokeStatsRow]) -> pd.DataFrame:
    """Validate a list of StrokeStatsRow and return a DataFrame with proper dtypes."""
    if not isinstance(records, list):
        raise TypeError("records must be a list[StrokeStatsRow]")
    rows = [StrokeStatsRow.model_validate(r) if not isinstance(r, StrokeStatsRow) else r for r in records]
    if not rows:
        return _empty_df()
    df = pd.DataFrame([r.model_dump() for r in rows])
    return _fix_dtypes(df)


def append_stroke_stats(df_new: pd.DataFrame, data_path: Path) -> None:
    """Append rows to the stroke stats table.

    - Reads existing, concatenates, fixes dtypes, removes exact duplicates, and writes back.
    - Uses pyarrow with zstd compression.
    """
    data_path = Path(data_path)
    f = data_path / DATA_FILE
    if f.exists():
        df_old = pd.read_parquet(f, engine="pyarrow")
    else:
        df_old = _empty_df()
    frames = [_fix_dtypes(frame.copy()) for frame in (df_old, df_new) if not frame.empty]
    combined = pd.concat(frames, ignore_index=True) if frames else _empty_df()
    combined = _fix_dtypes(combined).drop_duplicates()  # exact duplicate rows only
    combined.to_parquet(f, engine="pyarrow", compression="zstd", index=False)


def load_all(data_path: Path) -> pd.DataFrame:
    """Load all stroke stats, ensuring dtypes.

    Adds:
    - miss_rate: float32 = mistakes / attempts
    """
    f = Path(data_path) / DATA_FILE
    if not f.exists():
        return _empty_df().assign(miss_rate=pd.Series(dtype="float32"))
    df = _fix_dtypes(pd.read_parquet(f, engine="pyarrow"))
    # Avoid division warnings; attempts >= 1 by construction
    attempts = df["attempts"].astype("float32").where(df["attempts"] > 0, other=1.0)
    df["miss_rate"] = (df["mistakes"].astype("float32") / attempts).astype("float32")
    return df


def query_character(df: pd.DataFrame, *, character: str) -> pd.DataFrame:
    """Rows for one character ordered by session start and stroke."""
    if not character:
        raise ValueError("character must be non-empty")
    dff = df[df["character"].astype("string") == character]
    return dff.sort_values(["session_start", "stroke_num"]).reset_index(drop=True)


def export_ndjson(df: pd.DataFrame, out_path: Path) -> None:
    """Export a DataFrame to line-delimited JSON (NDJSON) for quick inspection."""
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_json(out_path, orient="records", lines=True, date_format="iso", force_ascii=False)
