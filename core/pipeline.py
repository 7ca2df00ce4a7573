from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional

from core.charts import ChartSpec
from core.data import load_dashboard_data, prepare_context
from core.filters import SourceFilters, normalize_filters
from core.series import LabeledSeries
from core.view_combined import combined_spec, compute_combined
from core.view_normalized import compute_normalized, normalized_spec

ViewFn = Callable[..., Dict[str, Any]]

VIEW_COMPUTERS: Dict[str, ViewFn] = {
    "combined-chart": compute_combined,
    "normalized-chart": compute_normalized,
}

SPEC_BUILDERS: Dict[str, Callable[[Dict[str, Any]], ChartSpec]] = {
    "combined-chart": combined_spec,
    "normalized-chart": normalized_spec,
}

VIEW_ALIASES = {"combined": "combined-chart", "normalized": "normalized-chart"}


def resolve_view(view: str) -> str:
    key = VIEW_ALIASES.get(view, view)
    if key not in VIEW_COMPUTERS:
        raise ValueError(f"unknown view {view!r}; expected one of {sorted(VIEW_COMPUTERS)}")
    return key


def compute_view(view: str, filters: SourceFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    return VIEW_COMPUTERS[resolve_view(view)](filters, ctx)


def build_context(
    filters: dict | SourceFilters | None = None,
    *,
    source_path: Optional[Path] = None,
    fallback: Optional[LabeledSeries] = None,
) -> Dict[str, Any]:
    return prepare_context(filters, load_dashboard_data(source_path), fallback=fallback)


def build_spec(
    view: str,
    filters: dict | SourceFilters | None = None,
    *,
    source_path: Optional[Path] = None,
    fallback: Optional[LabeledSeries] = None,
) -> ChartSpec:
    ctx = build_context(filters, source_path=source_path, fallback=fallback)
    return SPEC_BUILDERS[resolve_view(view)](ctx)


def run_view(
    view: str,
    filters: dict | SourceFilters | None = None,
    *,
    source_path: Optional[Path] = None,
    fallback: Optional[LabeledSeries] = None,
) -> Dict[str, Any]:
    f = filters if isinstance(filters, SourceFilters) else normalize_filters(filters)
    ctx = build_context(f, source_path=source_path, fallback=fallback)
    return compute_view(view, f, ctx)
