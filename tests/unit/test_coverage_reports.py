from collections import Counter
from pathlib import Path

from geoenrich.common.fs import read_json
from geoenrich.pipeline.coverage import build_coverage_report, write_coverage_report
from geoenrich.pipeline.enrich import EnrichResult
from geoenrich.pipeline.reports import write_run_summary


def _result(tmp_path: Path) -> EnrichResult:
    return EnrichResult(
        boundary_type="dun",
        output_path=tmp_path / "dun.geojson",
        features_in=4,
        matched=2,
        unmatched=2,
        tabular_available=True,
        feature_keys=[("9_N.01", "Titi Tinggi"), ("9_N.02", "Beseri"), ("9_N.02", "Beseri"), ("", "Unknown")],
        tabular_key_counts=Counter({"9_N.01": 2, "9_N.03": 1}),
    )


def test_coverage_report_splits_keys_by_side(tmp_path: Path):
    report = build_coverage_report(_result(tmp_path), run_id="run-x")

    assert report["keys"] == {
        "common": ["9_N.01"],
        "tabular_only": ["9_N.03"],
        "geometry_only": ["9_N.02"],
    }
    assert report["duplicates"] == {"tabular": {"9_N.01": 2}, "geometry": {"9_N.02": 2}}
    assert report["counts"]["features_without_key"] == 1
    assert report["match_percent"] == 50.0
    assert report["unmatched_samples"][0] == {"join_key": "9_N.02", "name": "Beseri"}


def test_run_summary_marks_partial_failures(tmp_path: Path):
    write_coverage_report(tmp_path, _result(tmp_path), run_id="run-x")

    summary_path = write_run_summary(
        tmp_path,
        run_id="run-x",
        outcomes={
            "dun": {"status": "ok", "output": "dun.geojson"},
            "district": {"status": "failed", "error_code": "MISSING_GEOMETRY"},
        },
    )

    summary = read_json(summary_path)
    assert summary["status"] == "partial"
    assert summary["totals"] == {"features": 4, "matched": 2, "unmatched": 2}
    assert summary["boundary_reports"]["district"]["error_code"] == "MISSING_GEOMETRY"
