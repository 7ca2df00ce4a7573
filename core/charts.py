from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

import altair as alt
import pandas as pd

from core.normalize import NormalizedComparison
from core.presentation import (
    COMBINED_VIEW,
    DEPRESSION,
    DIGITAL_MEDIA,
    NORMALIZED_VIEW,
    AxisConfig,
    PresentationConfig,
    SeriesDisplay,
    format_value,
    unit_suffix,
)
from core.reconcile import NamedSeries, ReconciledDataset

alt.data_transformers.disable_max_rows()

FRAME_COLUMNS = ["year", "series", "label", "value", "original", "tooltip"]


@dataclass(frozen=True)
class ChartSpec:
    view: str
    chart_type: str
    title: str
    axis_label: str
    axis: Tuple[str, ...]
    series: Tuple[NamedSeries, ...]
    y_axis_assignment: Dict[str, str]
    axes: Dict[str, AxisConfig]
    display: Dict[str, SeriesDisplay]
    unit_suffixes: Dict[str, str]
    original_values: Dict[str, Tuple[float, ...]] = field(default_factory=dict)
    note: str = ""


def _display_for(name: str, config: PresentationConfig) -> SeriesDisplay:
    return config.series.get(name) or SeriesDisplay(label=name, color="#6b7280", axis_id="y", unit=name)


def _metadata(names: List[str], config: PresentationConfig) -> Dict[str, Any]:
    display = {name: _display_for(name, config) for name in names}
    return {
        "view": config.view,
        "chart_type": config.chart_type,
        "title": config.title,
        "axis_label": config.axis_label,
        "axes": dict(config.axes),
        "display": display,
        "y_axis_assignment": {name: d.axis_id for name, d in display.items()},
        "unit_suffixes": {name: unit_suffix(d.unit) for name, d in display.items()},
        "note": config.note,
    }


def assemble_combined(dataset: ReconciledDataset, config: PresentationConfig = COMBINED_VIEW) -> ChartSpec:
    names = [s.name for s in dataset.series]
    return ChartSpec(axis=dataset.axis, series=dataset.series, **_metadata(names, config))


def assemble_normalized(
    comparison: NormalizedComparison,
    config: PresentationConfig = NORMALIZED_VIEW,
    *,
    names: Tuple[str, str] = (DEPRESSION, DIGITAL_MEDIA),
) -> ChartSpec:
    name_a, name_b = names
    return ChartSpec(
        axis=comparison.axis,
        series=(
            NamedSeries(name=name_a, values=comparison.norm_a),
            NamedSeries(name=name_b, values=comparison.norm_b),
        ),
        original_values={name_a: comparison.orig_a, name_b: comparison.orig_b},
        **_metadata([name_a, name_b], config),
    )


def assemble(
    dataset: Union[ReconciledDataset, NormalizedComparison],
    config: Optional[PresentationConfig] = None,
) -> ChartSpec:
    """Attach display metadata to a reconciled or normalized dataset."""
    if isinstance(dataset, ReconciledDataset):
        return assemble_combined(dataset, config or COMBINED_VIEW)
    if isinstance(dataset, NormalizedComparison):
        return assemble_normalized(dataset, config or NORMALIZED_VIEW)
    raise TypeError(f"cannot assemble chart from {type(dataset).__name__}")


def _tooltip(spec: ChartSpec, unit: str, value: Optional[float], original: Optional[float]) -> str:
    if value is None:
        return ""
    if spec.original_values:
        return f"{value:.1f}% (normalized) - Original: {format_value(original, unit, 1)}"
    return format_value(value, unit)


def chart_frame(spec: ChartSpec) -> pd.DataFrame:
    """Long-form table (one row per year x series) behind both charts and CSV export."""
    records = []
    for s in spec.series:
        display = spec.display[s.name]
        originals = spec.original_values.get(s.name, s.values)
        for year, value, original in zip(spec.axis, s.values, originals):
            records.append(
                {
                    "year": year,
                    "series": s.name,
                    "label": display.label,
                    "value": value,
                    "original": original,
                    "tooltip": _tooltip(spec, display.unit, value, original),
                }
            )
    return pd.DataFrame.from_records(records, columns=FRAME_COLUMNS)


def _scale(axis_cfg: AxisConfig) -> alt.Scale:
    if axis_cfg.min is not None and axis_cfg.max is not None:
        return alt.Scale(domain=[axis_cfg.min, axis_cfg.max])
    if axis_cfg.min is not None:
        return alt.Scale(domainMin=axis_cfg.min)
    return alt.Scale()


def _color(spec: ChartSpec) -> alt.Color:
    labels = [spec.display[s.name].label for s in spec.series]
    colors = [spec.display[s.name].color for s in spec.series]
    return alt.Color(
        "label:N",
        title=None,
        sort=labels,
        scale=alt.Scale(domain=labels, range=colors),
        legend=alt.Legend(orient="top"),
    )


def _tooltips(spec: ChartSpec) -> List[alt.Tooltip]:
    return [
        alt.Tooltip("year:O", title=spec.axis_label),
        alt.Tooltip("label:N", title="Series"),
        alt.Tooltip("tooltip:N", title="Value"),
    ]


def build_chart(spec: ChartSpec, *, height: int = 320) -> alt.TopLevelMixin:
    frame = chart_frame(spec)
    x = alt.X("year:O", title=spec.axis_label, sort=list(spec.axis), axis=alt.Axis(labelAngle=0, grid=False))

    if spec.chart_type == "bar":
        axis_cfg = spec.axes["y"]
        labels = [spec.display[s.name].label for s in spec.series]
        hover = alt.selection_point(name="series_hover", fields=["label"], on="mouseover")
        return (
            alt.Chart(frame)
            .mark_bar()
            .encode(
                x=x,
                xOffset=alt.XOffset("label:N", sort=labels),
                y=alt.Y(
                    "value:Q",
                    title=axis_cfg.title,
                    scale=_scale(axis_cfg),
                    axis=alt.Axis(grid=axis_cfg.grid, gridDash=[4, 4], domain=False, ticks=False),
                ),
                color=_color(spec),
                opacity=alt.condition(hover, alt.value(1), alt.value(0.6)),
                tooltip=_tooltips(spec),
            )
            .add_params(hover)
            .properties(title=spec.title, height=height)
        )

    # Dual axis: one layer per series, y scales resolved independently.
    layers = []
    for s in spec.series:
        axis_cfg = spec.axes[spec.y_axis_assignment[s.name]]
        data = frame[frame["series"] == s.name].dropna(subset=["value"])
        layers.append(
            alt.Chart(data)
            .mark_line(point={"filled": True, "size": 60})
            .encode(
                x=x,
                y=alt.Y(
                    "value:Q",
                    title=axis_cfg.title,
                    scale=_scale(axis_cfg),
                    axis=alt.Axis(orient=axis_cfg.side, grid=axis_cfg.grid, gridDash=[4, 4]),
                ),
                color=_color(spec),
                tooltip=_tooltips(spec),
            )
        )
    return alt.layer(*layers).resolve_scale(y="independent").properties(title=spec.title, height=height)


def to_vega_spec(chart: alt.TopLevelMixin) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()
