"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from geoenrich.common.constants import BOUNDARY_TYPES
from geoenrich.common.errors import ConfigError

DATA_SOURCES = ("mock", "file", "api")


def _assert_mapping(obj, ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def validate_boundary_config(cfg: dict, *, boundary_type: str, allow_unknown: bool = False) -> dict:
    ctx = f"boundaries.{boundary_type}"
    _assert_mapping(cfg, ctx)
    required = {"geojson", "csv", "join_key", "output"}
    _assert_required_keys(cfg, required, ctx)
    _assert_no_unknown_keys(cfg, required | {"income_csv"}, ctx, allow_unknown)
    for key in sorted(required):
        if not isinstance(cfg[key], str) or not cfg[key].strip():
            raise ConfigError(f"{ctx}.{key} must be a non-empty string")
    return cfg


def validate_runtime_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "runtime")
    required = {"data_source", "api_base_url", "files", "timeout_seconds", "retry_attempts"}
    _assert_required_keys(cfg, required, "runtime")
    _assert_no_unknown_keys(cfg, required, "runtime", allow_unknown)
    if cfg["data_source"] not in DATA_SOURCES:
        raise ConfigError(f"runtime.data_source must be one of {', '.join(DATA_SOURCES)}")
    _assert_mapping(cfg["files"], "runtime.files")
    _assert_no_unknown_keys(cfg["files"], set(BOUNDARY_TYPES), "runtime.files", allow_unknown=False)
    if int(cfg["retry_attempts"]) < 1:
        raise ConfigError("runtime.retry_attempts must be at least 1")
    return cfg


def validate_boundaries_file(cfg: dict, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "boundaries config")
    _assert_required_keys(cfg, {"boundaries", "runtime"}, "boundaries config")
    _assert_no_unknown_keys(cfg, {"boundaries", "runtime"}, "boundaries config", allow_unknown)

    boundaries = cfg["boundaries"]
    _assert_mapping(boundaries, "boundaries")
    _assert_required_keys(boundaries, set(BOUNDARY_TYPES), "boundaries")
    _assert_no_unknown_keys(boundaries, set(BOUNDARY_TYPES), "boundaries", allow_unknown=False)
    for boundary_type in BOUNDARY_TYPES:
        validate_boundary_config(boundaries[boundary_type], boundary_type=boundary_type, allow_unknown=allow_unknown)

    validate_runtime_config(cfg["runtime"], allow_unknown=allow_unknown)
    return cfg
