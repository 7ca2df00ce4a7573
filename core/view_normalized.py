from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict

from core.charts import ChartSpec, assemble_normalized, build_chart, to_vega_spec
from core.errors import EmptyIntersection
from core.filters import SourceFilters
from core.normalize import normalize_comparison
from core.presentation import DEPRESSION, DIGITAL_MEDIA, NORMALIZED_VIEW, PresentationConfig

logger = logging.getLogger(__name__)


def normalized_spec(ctx: Dict[str, Any], config: PresentationConfig = NORMALIZED_VIEW) -> ChartSpec:
    """Raises EmptyIntersection when the two series share no years."""
    comparison = normalize_comparison(ctx["depression"], ctx["digital_media"])
    return assemble_normalized(comparison, config, names=(DEPRESSION, DIGITAL_MEDIA))


def compute_normalized(
    filters: SourceFilters,
    ctx: Dict[str, Any],
    *,
    config: PresentationConfig = NORMALIZED_VIEW,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "view": config.view,
        "title": config.title,
        "filters": asdict(filters),
        "source": {"path": ctx.get("source"), "status": ctx.get("status")},
        "advisories": list(ctx.get("advisories", []) or []),
        "chart": None,
        "vega": None,
        "error": None,
    }
    try:
        spec = normalized_spec(ctx, config)
    except EmptyIntersection as exc:
        logger.info("Normalized view unavailable: %s", exc)
        payload["error"] = exc.advisory
        return payload

    payload["chart"] = asdict(spec)
    payload["vega"] = to_vega_spec(build_chart(spec))
    return payload
