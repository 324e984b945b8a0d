"""Configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from geoenrich.common.constants import BOUNDARY_TYPES
from geoenrich.common.errors import ConfigError
from geoenrich.common.fs import read_yaml
from geoenrich.common.models import BoundaryInputs, PipelineConfig
from geoenrich.common.schema import validate_boundaries_file

CONFIG_FILENAME = "boundaries.yml"


@dataclass(frozen=True)
class ConfigBundle:
    boundaries: dict[str, dict]
    runtime: dict


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    base = read_yaml(path) or {}
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path) or {}
    return _deep_merge(base, overlay)


def load_all_configs(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> ConfigBundle:
    overlay_path = (overlay_config_dir / CONFIG_FILENAME) if overlay_config_dir is not None else None
    cfg = _load_yaml_with_overlay(config_dir / CONFIG_FILENAME, overlay_path)
    cfg = validate_boundaries_file(cfg, allow_unknown=allow_unknown)
    return ConfigBundle(boundaries=cfg["boundaries"], runtime=cfg["runtime"])


def resolve_boundary_types(target: str) -> list[str]:
    if target == "all":
        return list(BOUNDARY_TYPES)
    if target not in BOUNDARY_TYPES:
        raise ConfigError(f"Unknown boundary type: {target}")
    return [target]


def build_pipeline_config(bundle: ConfigBundle, boundary_type: str, data_dir: Path) -> PipelineConfig:
    cfg = bundle.boundaries[boundary_type]
    income_csv = cfg.get("income_csv")
    return PipelineConfig(
        boundary_type=boundary_type,
        input_paths=BoundaryInputs(
            geojson=data_dir / cfg["geojson"],
            csv=data_dir / cfg["csv"],
            income_csv=(data_dir / income_csv) if income_csv else None,
        ),
        output_path=data_dir / cfg["output"],
        join_key=cfg["join_key"],
    )
