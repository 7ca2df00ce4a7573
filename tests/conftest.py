"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from core.data import _load_source_rows_cached
from core.series import LabeledSeries

SAMPLE_CSV = """Year,Strata,Strata Name,Frequency,Weighted Frequency,Percent,Lower 95% CL,Upper 95% CL
2012,Total,Total,1520,3950000,13.2,12.4,14.0
2012,Sex,Male,610,1540000,9.1,8.2,10.0
2013,Total,Total,1610,4080000,14.0,13.1,14.9
2013,Sex,Male,640,1600000,9.5,8.6,10.4
2014,Total,Total,1580,,,,
2019,Total,Total,1730,4650000,17.6,16.5,18.7
2021,Total,Total,1900,5120000,18.6,17.4,19.8
"""


@pytest.fixture(autouse=True)
def clear_source_cache():
    """Parsed rows are cached per (path, mtime); start every test cold."""
    _load_source_rows_cached.cache_clear()
    yield
    _load_source_rows_cached.cache_clear()


@pytest.fixture
def sample_csv_text() -> str:
    return SAMPLE_CSV


@pytest.fixture
def sample_csv(tmp_path: Path) -> Path:
    """Write the sample depression CSV to a temp file."""
    path = tmp_path / "adult-depression-lghc-indicator-24.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def disjoint_csv(tmp_path: Path) -> Path:
    """Depression CSV whose years never overlap the digital media table."""
    path = tmp_path / "disjoint.csv"
    path.write_text("Year,Strata,Percent\n2030,Total,20.1\n2031,Total,21.4\n", encoding="utf-8")
    return path


@pytest.fixture
def series_a() -> LabeledSeries:
    return LabeledSeries.from_pairs([("2018", 12.5), ("2019", 13.2), ("2020", 18.6)])


@pytest.fixture
def series_b() -> LabeledSeries:
    return LabeledSeries.from_pairs([("2019", 6.3), ("2020", 6.9), ("2021", 7.3)])
