"""End-to-end tests: CSV file -> view payload."""

from pathlib import Path

import pytest

from core.errors import EmptyIntersection
from core.pipeline import build_spec, resolve_view, run_view
from core.series import LabeledSeries

UNION_AXIS = ("2012", "2013", "2014", "2015", "2016", "2017", "2018", "2019", "2020", "2021")


class TestCombinedView:
    def test_union_axis_with_gaps(self, sample_csv: Path) -> None:
        spec = build_spec("combined", source_path=sample_csv)
        assert spec.axis == UNION_AXIS
        depression, media = spec.series
        assert depression.values == (13.2, 14.0, 0.0, None, None, None, None, 17.6, None, 18.6)
        assert media.values == (4.3, 4.9, 5.3, 5.9, 6.3, 6.5, 6.9, 7.3, 8.1, None)

    def test_payload(self, sample_csv: Path) -> None:
        payload = run_view("combined-chart", source_path=sample_csv)
        assert payload["view"] == "combined-chart"
        assert payload["error"] is None
        assert payload["advisories"] == []
        assert payload["source"]["status"] == "loaded"
        assert payload["filters"]["filter_value"] == "Total"
        assert list(payload["chart"]["axis"]) == list(UNION_AXIS)
        assert "layer" in payload["vega"]

    def test_missing_source_still_renders(self, tmp_path: Path) -> None:
        payload = run_view("combined", source_path=tmp_path / "missing.csv")
        assert payload["error"] is None
        assert payload["advisories"]
        depression, media = payload["chart"]["series"]
        assert all(v is None for v in depression["values"])
        assert list(media["values"]) == [4.3, 4.9, 5.3, 5.9, 6.3, 6.5, 6.9, 7.3, 8.1]

    def test_caller_fallback(self, tmp_path: Path) -> None:
        fallback = LabeledSeries.from_pairs([("2019", 10.0)])
        spec = build_spec("combined", source_path=tmp_path / "missing.csv", fallback=fallback)
        assert spec.series[0].values[spec.axis.index("2019")] == 10.0


class TestNormalizedView:
    def test_intersection_axis(self, sample_csv: Path) -> None:
        spec = build_spec("normalized", source_path=sample_csv)
        assert spec.axis == ("2012", "2013", "2014", "2019")
        assert spec.original_values["depression"] == (13.2, 14.0, 0.0, 17.6)
        assert spec.series[0].values[2] == 0.0
        assert spec.series[0].values[3] == 100.0
        assert spec.series[1].values[0] == 0.0
        assert spec.series[1].values[3] == 100.0

    def test_no_shared_years_reports_error(self, disjoint_csv: Path) -> None:
        payload = run_view("normalized", source_path=disjoint_csv)
        assert payload["error"] == "No overlapping years between the two datasets."
        assert payload["chart"] is None
        assert payload["vega"] is None

    def test_no_shared_years_combined_unaffected(self, disjoint_csv: Path) -> None:
        with pytest.raises(EmptyIntersection):
            build_spec("normalized", source_path=disjoint_csv)
        spec = build_spec("combined", source_path=disjoint_csv)
        assert spec.axis[-2:] == ("2030", "2031")
        assert spec.series[0].values[-2:] == (20.1, 21.4)
        assert spec.series[1].values[-2:] == (None, None)
        assert all(v is None for v in spec.series[0].values[:-2])
        assert all(v is not None for v in spec.series[1].values[:-2])


class TestPipeline:
    @pytest.mark.parametrize("view", ["combined-chart", "normalized-chart"])
    def test_idempotent(self, sample_csv: Path, view: str) -> None:
        assert build_spec(view, source_path=sample_csv) == build_spec(view, source_path=sample_csv)

    @pytest.mark.parametrize("view", ["combined-chart", "normalized-chart"])
    def test_payload_idempotent(self, sample_csv: Path, view: str) -> None:
        assert run_view(view, source_path=sample_csv)["chart"] == run_view(view, source_path=sample_csv)["chart"]

    def test_unknown_view(self) -> None:
        with pytest.raises(ValueError, match="unknown view"):
            resolve_view("pie-chart")
