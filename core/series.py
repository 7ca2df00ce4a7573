from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

Rows = Union[pd.DataFrame, Iterable[Mapping[str, object]]]


@dataclass(frozen=True)
class LabeledSeries:
    """Ordered (label, value) pairs. Labels may repeat; lookups use the first occurrence."""

    points: Tuple[Tuple[str, float], ...] = ()

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[object, object]]) -> "LabeledSeries":
        return cls(tuple((str(label), float(value)) for label, value in pairs))

    @classmethod
    def from_table(cls, table: Mapping[str, Sequence[object]]) -> "LabeledSeries":
        years = list(table.get("years") or [])
        values = list(table.get("values") or [])
        if len(years) != len(values):
            raise ValueError(f"years/values length mismatch: {len(years)} != {len(values)}")
        return cls.from_pairs(zip(years, values))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Tuple[str, float]]:
        return iter(self.points)

    def labels(self) -> Tuple[str, ...]:
        return tuple(label for label, _ in self.points)

    def values(self) -> Tuple[float, ...]:
        return tuple(value for _, value in self.points)

    def lookup(self) -> Dict[str, float]:
        out: Dict[str, float] = {}
        for label, value in self.points:
            out.setdefault(label, value)
        return out

    def value_for(self, label: str) -> Optional[float]:
        for candidate, value in self.points:
            if candidate == label:
                return value
        return None

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(list(self.points), columns=["label", "value"])


def parse_rows(text: str) -> pd.DataFrame:
    """Parse header-first delimited text into a string-typed frame.

    Missing cells become "", blank lines are skipped, fields beyond the header
    width are dropped (the row itself is kept), and unparsable input yields an
    empty frame instead of raising.
    """
    if not text or not text.strip():
        return pd.DataFrame()
    try:
        header = pd.read_csv(io.StringIO(text), nrows=0, engine="python").columns
        width = len(header)
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            index_col=False,
            engine="python",
            on_bad_lines=lambda fields: fields[:width],
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, csv.Error, ValueError):
        return pd.DataFrame()
    df.columns = [str(c) for c in df.columns]
    return df.fillna("")


def rows_frame(rows: Rows) -> pd.DataFrame:
    if isinstance(rows, pd.DataFrame):
        return rows
    return pd.DataFrame.from_records([dict(r) for r in rows])


# Leading number, like a prefix float parse: "12.5%" -> "12.5".
NUMERIC_PREFIX = r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"


def _numeric_column(values: pd.Series) -> pd.Series:
    text = values.astype(object).map(lambda v: "" if v is None else v if isinstance(v, str) else str(v))
    prefix = text.str.extract(NUMERIC_PREFIX, expand=False)
    out = pd.to_numeric(prefix, errors="coerce").astype("float64")
    out = out.replace([np.inf, -np.inf], np.nan)
    return out.fillna(0.0)


def parse_number(value: object) -> float:
    """Leading numeric text -> float; no numeric prefix, missing or non-finite -> 0.0."""
    if value is None:
        return 0.0
    return float(_numeric_column(pd.Series([value], dtype=object)).iloc[0])


def extract(
    rows: Rows,
    filter_column: str,
    filter_value: str,
    label_column: str,
    data_column: str,
) -> LabeledSeries:
    df = rows_frame(rows)
    if df.empty or filter_column not in df.columns:
        return LabeledSeries()
    selected = df[df[filter_column] == filter_value]
    if selected.empty:
        return LabeledSeries()

    if label_column in selected.columns:
        labels = selected[label_column].fillna("").astype(str).tolist()
    else:
        labels = [""] * len(selected)
    if data_column in selected.columns:
        values = _numeric_column(selected[data_column]).tolist()
    else:
        values = [0.0] * len(selected)
    return LabeledSeries.from_pairs(zip(labels, values))
