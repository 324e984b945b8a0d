"""Run report aggregation."""

from __future__ import annotations

from pathlib import Path

from geoenrich.common.fs import read_json, write_json


def write_run_summary(data_dir: Path, run_id: str, outcomes: dict[str, dict]) -> Path:
    """Aggregate per-boundary outcomes and their coverage reports into one summary."""
    boundary_reports = {}
    totals = {"features": 0, "matched": 0, "unmatched": 0}
    failed = 0

    for boundary_type, outcome in outcomes.items():
        if outcome.get("status") != "ok":
            boundary_reports[boundary_type] = outcome
            failed += 1
            continue

        report_path = data_dir / "out" / "reports" / f"{boundary_type}_coverage.json"
        if not report_path.exists():
            boundary_reports[boundary_type] = {"status": "missing_report"}
            failed += 1
            continue

        counts = read_json(report_path).get("counts", {})
        boundary_reports[boundary_type] = {"status": "ok", "output": outcome.get("output"), "counts": counts}
        for key in totals:
            totals[key] += int(counts.get(key, 0))

    status = "success"
    if failed and failed == len(outcomes):
        status = "error"
    elif failed:
        status = "partial"

    summary_path = data_dir / "out" / "reports" / "run_summary.json"
    payload = {
        "run_id": run_id,
        "status": status,
        "boundary_types": list(outcomes),
        "totals": totals,
        "failed_count": failed,
        "boundary_reports": boundary_reports,
    }
    write_json(summary_path, payload)
    return summary_path
