"""Join coverage report: which keys matched, and which side each orphan lives on."""

from __future__ import annotations

from collections import Counter
from pathlib import Path

from geoenrich.common.fs import write_json
from geoenrich.pipeline.enrich import EnrichResult

MAX_UNMATCHED_SAMPLES = 20


def _duplicates(counts: Counter) -> dict[str, int]:
    return {key: count for key, count in sorted(counts.items()) if count > 1}


def build_coverage_report(result: EnrichResult, *, run_id: str) -> dict:
    feature_key_counts = Counter(key for key, _name in result.feature_keys if key)
    geometry_keys = set(feature_key_counts)
    tabular_keys = set(result.tabular_key_counts)

    unmatched_samples = []
    for key, name in result.feature_keys:
        if key in tabular_keys:
            continue
        unmatched_samples.append({"join_key": key, "name": name})
        if len(unmatched_samples) >= MAX_UNMATCHED_SAMPLES:
            break

    match_rate = 0.0 if result.features_in == 0 else round((result.matched / result.features_in) * 100, 2)
    return {
        "run_id": run_id,
        "boundary_type": result.boundary_type,
        "tabular_available": result.tabular_available,
        "missing_columns": list(result.missing_columns),
        "counts": {
            "features": result.features_in,
            "matched": result.matched,
            "unmatched": result.unmatched,
            "features_without_key": sum(1 for key, _name in result.feature_keys if not key),
            "tabular_keys": len(tabular_keys),
            "income_areas": result.income_areas,
        },
        "match_percent": match_rate,
        "keys": {
            "common": sorted(geometry_keys & tabular_keys),
            "tabular_only": sorted(tabular_keys - geometry_keys),
            "geometry_only": sorted(geometry_keys - tabular_keys),
        },
        "duplicates": {
            "tabular": _duplicates(result.tabular_key_counts),
            "geometry": _duplicates(feature_key_counts),
        },
        "unmatched_samples": unmatched_samples,
    }


def write_coverage_report(data_dir: Path, result: EnrichResult, *, run_id: str) -> Path:
    out_path = data_dir / "out" / "reports" / f"{result.boundary_type}_coverage.json"
    write_json(out_path, build_coverage_report(result, run_id=run_id))
    return out_path
