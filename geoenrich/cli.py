"""CLI entrypoint for the boundary enrichment pipeline."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from geoenrich.common.config_loader import build_pipeline_config, load_all_configs, resolve_boundary_types
from geoenrich.common.constants import BOUNDARY_TYPES, EXIT_HARD_FAIL, EXIT_PARTIAL, EXIT_SUCCESS
from geoenrich.common.errors import PipelineError
from geoenrich.common.ids import generate_run_id
from geoenrich.common.logging import build_logger, log_event
from geoenrich.pipeline.coverage import write_coverage_report
from geoenrich.pipeline.enrich import run_enrich
from geoenrich.pipeline.reports import write_run_summary


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("boundary_type", nargs="?", default="district", choices=[*BOUNDARY_TYPES, "all"])
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--data-dir", default="./data")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    parser.add_argument("--strict", action="store_true")
    return parser.parse_args(argv)


def run_boundary(boundary_type: str, bundle, data_dir: Path, run_id: str, logger: logging.Logger) -> dict:
    config = build_pipeline_config(bundle, boundary_type, data_dir)
    result = run_enrich(config, logger=logger)
    write_coverage_report(data_dir, result, run_id=run_id)
    return {"status": "ok", "output": str(result.output_path)}


def run_command(args: argparse.Namespace) -> int:
    run_id = args.run_id or generate_run_id()
    config_dir = Path(args.config_dir)
    overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None
    data_dir = Path(args.data_dir)

    logger = build_logger(run_id, data_dir=data_dir, level=args.log_level)
    bundle = load_all_configs(config_dir, overlay_config_dir=overlay_config_dir)
    boundary_types = resolve_boundary_types(args.boundary_type)

    outcomes: dict[str, dict] = {}
    log_event(logger, "run start", run_id=run_id, event="RUN_START", status="ok")

    for boundary_type in boundary_types:
        log_event(logger, "boundary start", run_id=run_id, boundary_type=boundary_type, event="BOUNDARY_START", status="ok")
        try:
            outcomes[boundary_type] = run_boundary(boundary_type, bundle, data_dir, run_id, logger)
        except PipelineError as exc:
            outcomes[boundary_type] = {"status": "failed", "error_code": exc.error_code, "error": str(exc)}
            log_event(
                logger,
                f"boundary run failed for {boundary_type}: {exc}",
                level=logging.ERROR,
                run_id=run_id,
                boundary_type=boundary_type,
                event="BOUNDARY_FAIL",
                status="error",
                error_code=exc.error_code,
            )
            if args.strict:
                return EXIT_HARD_FAIL
            continue
        except Exception as exc:
            outcomes[boundary_type] = {"status": "failed", "error_code": "UNEXPECTED_ERROR", "error": str(exc)}
            logger.exception(
                f"unexpected failure for {boundary_type}",
                extra={
                    "run_id": run_id,
                    "boundary_type": boundary_type,
                    "event": "BOUNDARY_FAIL",
                    "status": "error",
                    "error_code": "UNEXPECTED_ERROR",
                },
            )
            if args.strict:
                return EXIT_HARD_FAIL
            continue
        log_event(logger, "boundary end", run_id=run_id, boundary_type=boundary_type, event="BOUNDARY_END", status="ok")

    write_run_summary(data_dir, run_id=run_id, outcomes=outcomes)
    failed = [name for name, outcome in outcomes.items() if outcome["status"] != "ok"]
    log_event(
        logger,
        "run end",
        run_id=run_id,
        event="RUN_END",
        status="error" if failed else "ok",
    )
    if failed:
        return EXIT_PARTIAL
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    try:
        return run_command(args)
    except PipelineError as exc:
        print(f"geoenrich: {exc}", file=sys.stderr)
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
