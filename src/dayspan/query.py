"""Apply UTC ranges as half-open predicates over stored timestamps."""

from __future__ import annotations

import re
from datetime import datetime

import polars as pl

from dayspan.ranges import UtcRange

_COLUMN_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


def sql_predicate(
    column: str,
    window: UtcRange,
    *,
    start_param: str = "start",
    end_param: str = "end",
) -> tuple[str, dict[str, datetime]]:
    """Return `col >= :start AND col < :end` with UTC bind parameters."""
    name = column.strip()
    if not _COLUMN_RE.match(name):
        raise ValueError(f"invalid column name: {column!r}")
    for param in (start_param, end_param):
        if not _COLUMN_RE.match(param) or "." in param:
            raise ValueError(f"invalid bind parameter name: {param!r}")
    if start_param == end_param:
        raise ValueError("start and end bind parameters must differ")
    clause = f"{name} >= :{start_param} AND {name} < :{end_param}"
    return clause, {start_param: window.start, end_param: window.end}


def filter_frame(frame: pl.DataFrame, column: str, window: UtcRange) -> pl.DataFrame:
    """Keep rows whose `column` falls in `window`.

    Naive datetime columns are read as UTC wall time; zone-aware columns are
    converted to UTC before comparison.
    """
    if column not in frame.columns:
        raise ValueError(f"unknown column: {column}")
    dtype = frame.schema[column]
    if not isinstance(dtype, pl.Datetime):
        raise ValueError(f"column {column} must be a datetime column, got {dtype}")

    expr = pl.col(column)
    if dtype.time_zone is None:
        start = window.start.replace(tzinfo=None)
        end = window.end.replace(tzinfo=None)
    else:
        expr = expr.dt.convert_time_zone("UTC")
        start = window.start
        end = window.end
    return frame.filter((expr >= pl.lit(start)) & (expr < pl.lit(end)))
