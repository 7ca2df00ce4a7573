from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SourceFilters:
    filter_column: str = "Strata"
    filter_value: str = "Total"
    label_column: str = "Year"
    data_column: str = "Percent"


def _as_text(value: object, default: str) -> str:
    if value is None:
        return default
    s = str(value)
    return s if s.strip() else default


def normalize_filters(raw: Optional[dict]) -> SourceFilters:
    raw = raw or {}
    defaults = SourceFilters()
    return SourceFilters(
        filter_column=_as_text(raw.get("filter_column"), defaults.filter_column),
        filter_value=_as_text(raw.get("filter_value"), defaults.filter_value),
        label_column=_as_text(raw.get("label_column"), defaults.label_column),
        data_column=_as_text(raw.get("data_column"), defaults.data_column),
    )
