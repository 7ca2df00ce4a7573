from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd

from core.errors import DashboardDataError, ParseMalformed, SourceUnavailable
from core.filters import SourceFilters, normalize_filters
from core.series import LabeledSeries, extract, parse_rows

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1]
SOURCE_FILENAME = "adult-depression-lghc-indicator-24.csv"
SOURCE_PATH = DATA_DIR / SOURCE_FILENAME

# Average daily digital media use by US adults, hours/day.
DIGITAL_MEDIA_TABLE: Dict[str, List] = {
    "years": ["2012", "2013", "2014", "2015", "2016", "2017", "2018", "2019", "2020"],
    "values": [4.3, 4.9, 5.3, 5.9, 6.3, 6.5, 6.9, 7.3, 8.1],
}

FALLBACK_DEPRESSION = LabeledSeries()


def digital_media_series() -> LabeledSeries:
    return LabeledSeries.from_table(DIGITAL_MEDIA_TABLE)


def file_signature(path: Path) -> Tuple[str, Optional[float]]:
    try:
        return str(path), path.stat().st_mtime
    except OSError:
        return str(path), None


def load_source_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as exc:
        raise SourceUnavailable(f"{path.name} not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceUnavailable(f"could not read {path.name}: {exc}") from exc


@lru_cache(maxsize=4)
def _load_source_rows_cached(source_sig: Tuple[str, Optional[float]]) -> pd.DataFrame:
    path = Path(source_sig[0])
    rows = parse_rows(load_source_text(path))
    if rows.empty:
        raise ParseMalformed(f"{path.name} contains no rows")
    logger.info("Loaded %d rows from %s", len(rows), path.name)
    return rows


def load_source_rows(path: Path) -> pd.DataFrame:
    return _load_source_rows_cached(file_signature(path)).copy()


def load_dashboard_data(source_path: Optional[Path] = None) -> Dict[str, object]:
    """Read and parse the depression CSV.

    Never raises for data problems: on failure `rows` is empty and the error's
    advisory is recorded so later stages can substitute fallback data.
    """
    path = Path(source_path) if source_path is not None else SOURCE_PATH
    advisories: List[str] = []
    status = "loaded"
    try:
        rows = load_source_rows(path)
    except DashboardDataError as exc:
        logger.warning("Depression source unusable (%s): %s", type(exc).__name__, exc)
        rows = pd.DataFrame()
        advisories.append(exc.advisory)
        status = "unavailable" if isinstance(exc, SourceUnavailable) else "malformed"
    return {
        "source": str(path),
        "status": status,
        "rows": rows,
        "advisories": advisories,
    }


def available_values(data_ctx: Dict[str, object], column: str) -> List[str]:
    rows: pd.DataFrame = data_ctx.get("rows", pd.DataFrame())
    if rows.empty or column not in rows.columns:
        return []
    return sorted(v for v in rows[column].astype(str).unique().tolist() if v)


def prepare_context(
    filters: dict | SourceFilters | None,
    data_ctx: Dict[str, object],
    *,
    fallback: Optional[LabeledSeries] = None,
) -> Dict[str, object]:
    if not isinstance(filters, SourceFilters):
        filters = normalize_filters(filters)
    rows: pd.DataFrame = data_ctx.get("rows", pd.DataFrame())
    advisories: List[str] = list(data_ctx.get("advisories", []) or [])
    status = str(data_ctx.get("status", "loaded"))

    depression = extract(rows, filters.filter_column, filters.filter_value, filters.label_column, filters.data_column)
    if not len(depression):
        if status == "loaded":
            exc = ParseMalformed(f"no rows where {filters.filter_column} == {filters.filter_value!r}")
            logger.warning("Depression extraction empty: %s", exc)
            advisories.append(exc.advisory)
            status = "malformed"
        depression = fallback if fallback is not None else FALLBACK_DEPRESSION

    return {
        "filters": filters,
        "source": data_ctx.get("source"),
        "status": status,
        "depression": depression,
        "digital_media": digital_media_series(),
        "advisories": advisories,
    }
