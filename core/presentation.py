"""Display metadata for the two chart views.

Nothing here touches numbers; the assembler copies it onto a ChartSpec.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Tuple

ChartType = Literal["line", "bar"]

DEPRESSION = "depression"
DIGITAL_MEDIA = "digital-media"

UNIT_SUFFIXES: Dict[str, str] = {
    DEPRESSION: "%",
    DIGITAL_MEDIA: " hours/day",
}


@dataclass(frozen=True)
class AxisConfig:
    title: str
    side: Literal["left", "right"] = "left"
    min: Optional[float] = None
    max: Optional[float] = None
    grid: bool = True


@dataclass(frozen=True)
class SeriesDisplay:
    label: str
    color: str
    axis_id: str = "y"
    unit: str = ""


@dataclass(frozen=True)
class PresentationConfig:
    view: str
    title: str
    chart_type: ChartType
    axis_label: str = "Year"
    axes: Dict[str, AxisConfig] = field(default_factory=dict)
    series: Dict[str, SeriesDisplay] = field(default_factory=dict)
    note: str = ""


COMBINED_VIEW = PresentationConfig(
    view="combined-chart",
    title="Depression Rates vs. Digital Media Usage Over Time",
    chart_type="line",
    axes={
        "y": AxisConfig(title="Depression Rate (%)", side="left", min=0.0),
        # secondary axis has no gridlines
        "y1": AxisConfig(title="Digital Media Usage (hours/day)", side="right", min=0.0, grid=False),
    },
    series={
        DEPRESSION: SeriesDisplay(label="Depression (%)", color="#ff6384", axis_id="y", unit=DEPRESSION),
        DIGITAL_MEDIA: SeriesDisplay(
            label="Digital Media Usage (hours/day)", color="#36a2eb", axis_id="y1", unit=DIGITAL_MEDIA
        ),
    },
    note=(
        "This chart uses dual Y-axes to compare two different metrics. The left Y-axis (red) shows "
        "depression percentage, while the right Y-axis (blue) shows digital media consumption in hours per day."
    ),
)

NORMALIZED_VIEW = PresentationConfig(
    view="normalized-chart",
    title="Normalized Comparison: Depression vs. Digital Media Usage",
    chart_type="bar",
    axes={"y": AxisConfig(title="Normalized Values (%)", side="left", min=0.0, max=100.0)},
    series={
        DEPRESSION: SeriesDisplay(label="Depression (normalized)", color="#ff6384", axis_id="y", unit=DEPRESSION),
        DIGITAL_MEDIA: SeriesDisplay(
            label="Digital Media Usage (normalized)", color="#36a2eb", axis_id="y", unit=DIGITAL_MEDIA
        ),
    },
    note=(
        "Both datasets have been normalized to a 0-100% scale to allow direct comparison of trends regardless "
        "of their different units and ranges. Red bars show depression rates, blue bars show digital media usage."
    ),
)

VIEWS: Dict[str, PresentationConfig] = {cfg.view: cfg for cfg in (COMBINED_VIEW, NORMALIZED_VIEW)}

VIEW_OPTIONS: Tuple[Dict[str, str], ...] = tuple(
    {"value": cfg.view, "label": label, "title": cfg.title}
    for cfg, label in [(COMBINED_VIEW, "Combined Line Chart"), (NORMALIZED_VIEW, "Normalized Comparison Chart")]
)


def unit_suffix(unit: str) -> str:
    return UNIT_SUFFIXES.get(unit, "")


def format_value(value: Optional[float], unit: str, decimals: Optional[int] = None) -> str:
    if value is None:
        return ""
    text = f"{value:.{decimals}f}" if decimals is not None else f"{value:g}"
    return f"{text}{unit_suffix(unit)}"
