from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np
import pandas as pd
from fastapi import FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import MetaListResponse, MetaViewsResponse, SourceFiltersModel
from core.charts import chart_frame
from core.data import available_values, load_dashboard_data, prepare_context
from core.errors import EmptyIntersection
from core.filters import SourceFilters, normalize_filters
from core.pipeline import SPEC_BUILDERS, compute_view, resolve_view
from core.presentation import VIEW_OPTIONS

app = FastAPI(title="Depression vs. Digital Media API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _filters_from_model(model: Optional[SourceFiltersModel]) -> SourceFilters:
    raw = model.model_dump() if model is not None else {}
    return normalize_filters(raw)


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        )
    )


def _error(exc: Exception, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/meta/views", response_model=MetaViewsResponse)
def meta_views():
    return {"views": list(VIEW_OPTIONS)}


@app.get("/meta/strata", response_model=MetaListResponse)
def meta_strata(filter_column: str = Query(default="Strata")):
    try:
        data_ctx = load_dashboard_data()
        return {"values": available_values(data_ctx, filter_column)}
    except Exception as exc:
        logger.exception("meta_strata failed")
        return _error(exc)


@app.get("/meta/years", response_model=MetaListResponse)
def meta_years(
    filter_column: Optional[str] = Query(default=None),
    filter_value: Optional[str] = Query(default=None),
    label_column: Optional[str] = Query(default=None),
    data_column: Optional[str] = Query(default=None),
):
    raw = {
        "filter_column": filter_column,
        "filter_value": filter_value,
        "label_column": label_column,
        "data_column": data_column,
    }
    try:
        ctx = prepare_context(normalize_filters(raw), load_dashboard_data())
        return {"values": sorted(set(ctx["depression"].labels()))}
    except Exception as exc:
        logger.exception("meta_years failed")
        return _error(exc)


def _view_response(view: str, filters: Optional[SourceFiltersModel]) -> JSONResponse:
    try:
        f = _filters_from_model(filters)
        ctx = prepare_context(f, load_dashboard_data())
        return _json(compute_view(view, f, ctx))
    except Exception as exc:
        logger.exception("%s failed", view)
        return _error(exc)


@app.post("/combined")
def combined(filters: Optional[SourceFiltersModel] = None):
    return _view_response("combined-chart", filters)


@app.post("/normalized")
def normalized(filters: Optional[SourceFiltersModel] = None):
    return _view_response("normalized-chart", filters)


@app.post("/export/{view}")
def export_view(view: str, filters: Optional[SourceFiltersModel] = None):
    try:
        key = resolve_view(view)
    except ValueError as exc:
        return _error(exc, status_code=404)

    ctx = prepare_context(_filters_from_model(filters), load_dashboard_data())
    try:
        export_df = chart_frame(SPEC_BUILDERS[key](ctx))
    except EmptyIntersection as exc:
        return JSONResponse(status_code=422, content={"error": exc.advisory, "type": type(exc).__name__})

    export_df = export_df.drop(columns=["tooltip"])
    csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    filename = f"{key}.csv"
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={filename}"})
