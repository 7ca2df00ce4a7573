from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from core.charts import ChartSpec, assemble_combined, build_chart, to_vega_spec
from core.filters import SourceFilters
from core.presentation import COMBINED_VIEW, DEPRESSION, DIGITAL_MEDIA, PresentationConfig
from core.reconcile import reconcile


def combined_spec(ctx: Dict[str, Any], config: PresentationConfig = COMBINED_VIEW) -> ChartSpec:
    dataset = reconcile(ctx["depression"], DEPRESSION, ctx["digital_media"], DIGITAL_MEDIA)
    return assemble_combined(dataset, config)


def compute_combined(
    filters: SourceFilters,
    ctx: Dict[str, Any],
    *,
    config: PresentationConfig = COMBINED_VIEW,
) -> Dict[str, Any]:
    spec = combined_spec(ctx, config)
    return {
        "view": config.view,
        "title": config.title,
        "filters": asdict(filters),
        "source": {"path": ctx.get("source"), "status": ctx.get("status")},
        "advisories": list(ctx.get("advisories", []) or []),
        "chart": asdict(spec),
        "vega": to_vega_spec(build_chart(spec)),
        "error": None,
    }
