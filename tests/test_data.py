"""Tests for source loading, fallback substitution and context preparation."""

import os
from pathlib import Path

import pytest

from core import data
from core.data import (
    DIGITAL_MEDIA_TABLE,
    available_values,
    digital_media_series,
    load_dashboard_data,
    load_source_text,
    prepare_context,
)
from core.errors import SourceUnavailable
from core.filters import SourceFilters
from core.series import LabeledSeries


class TestStaticSeries:
    def test_digital_media_table(self) -> None:
        series = digital_media_series()
        assert series.labels() == tuple(DIGITAL_MEDIA_TABLE["years"])
        assert series.values() == (4.3, 4.9, 5.3, 5.9, 6.3, 6.5, 6.9, 7.3, 8.1)


class TestLoadSource:
    """Tests for reading and parsing the depression CSV."""

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(SourceUnavailable, match="not found"):
            load_source_text(tmp_path / "nope.csv")

    def test_loaded(self, sample_csv: Path) -> None:
        ctx = load_dashboard_data(sample_csv)
        assert ctx["status"] == "loaded"
        assert ctx["advisories"] == []
        assert len(ctx["rows"]) == 7

    def test_missing_file_degrades(self, tmp_path: Path) -> None:
        ctx = load_dashboard_data(tmp_path / "nope.csv")
        assert ctx["status"] == "unavailable"
        assert ctx["rows"].empty
        assert ctx["advisories"] == [SourceUnavailable.advisory]

    def test_empty_file_is_malformed(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        ctx = load_dashboard_data(path)
        assert ctx["status"] == "malformed"
        assert ctx["rows"].empty
        assert len(ctx["advisories"]) == 1

    def test_utf8_bom_header(self, tmp_path: Path) -> None:
        path = tmp_path / "bom.csv"
        path.write_text("\ufeffYear,Strata,Percent\n2019,Total,1.5\n", encoding="utf-8")
        ctx = load_dashboard_data(path)
        assert list(ctx["rows"].columns) == ["Year", "Strata", "Percent"]

    def test_default_path(self, monkeypatch: pytest.MonkeyPatch, sample_csv: Path) -> None:
        monkeypatch.setattr(data, "SOURCE_PATH", sample_csv)
        assert load_dashboard_data()["source"] == str(sample_csv)

    def test_reload_after_file_change(self, sample_csv: Path) -> None:
        assert len(load_dashboard_data(sample_csv)["rows"]) == 7
        sample_csv.write_text("Year,Strata,Percent\n2019,Total,1.5\n", encoding="utf-8")
        stat = sample_csv.stat()
        os.utime(sample_csv, (stat.st_atime, stat.st_mtime + 10))
        assert len(load_dashboard_data(sample_csv)["rows"]) == 1

    def test_cached_rows_are_copies(self, sample_csv: Path) -> None:
        first = load_dashboard_data(sample_csv)["rows"]
        first.loc[:, "Percent"] = "0"
        second = load_dashboard_data(sample_csv)["rows"]
        assert second.iloc[0]["Percent"] == "13.2"

    def test_available_values(self, sample_csv: Path) -> None:
        ctx = load_dashboard_data(sample_csv)
        assert available_values(ctx, "Strata") == ["Sex", "Total"]
        assert available_values(ctx, "Missing") == []


class TestPrepareContext:
    """Extraction with fallback substitution."""

    def test_default_filters(self, sample_csv: Path) -> None:
        ctx = prepare_context(None, load_dashboard_data(sample_csv))
        assert ctx["filters"] == SourceFilters()
        assert ctx["depression"].labels() == ("2012", "2013", "2014", "2019", "2021")
        assert ctx["digital_media"] == digital_media_series()
        assert ctx["advisories"] == []
        assert ctx["status"] == "loaded"

    def test_raw_dict_filters(self, sample_csv: Path) -> None:
        ctx = prepare_context({"filter_value": "Sex"}, load_dashboard_data(sample_csv))
        assert ctx["depression"].points == (("2012", 9.1), ("2013", 9.5))

    def test_no_matching_rows_uses_fallback(self, sample_csv: Path) -> None:
        ctx = prepare_context({"filter_value": "Nobody"}, load_dashboard_data(sample_csv))
        assert len(ctx["depression"]) == 0
        assert ctx["status"] == "malformed"
        assert len(ctx["advisories"]) == 1

    def test_padded_filter_value_matches_nothing(self, sample_csv: Path) -> None:
        ctx = prepare_context({"filter_value": " Total"}, load_dashboard_data(sample_csv))
        assert ctx["filters"].filter_value == " Total"
        assert len(ctx["depression"]) == 0
        assert ctx["status"] == "malformed"

    def test_unavailable_source_uses_caller_fallback(self, tmp_path: Path) -> None:
        fallback = LabeledSeries.from_pairs([("2019", 10.0), ("2020", 11.0)])
        ctx = prepare_context(None, load_dashboard_data(tmp_path / "nope.csv"), fallback=fallback)
        assert ctx["depression"] == fallback
        assert ctx["advisories"] == [SourceUnavailable.advisory]
        assert ctx["status"] == "unavailable"
