"""Normalise raw or pre-enriched boundary collections into the enriched property shape."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from geoenrich.common.constants import METRIC_FIELDS, UNKNOWN_NAME
from geoenrich.common.geometry import require_polygonal
from geoenrich.common.keys import first_present, policy_for
from geoenrich.common.numbers import parse_float

TRUE_STRINGS = {"true", "1", "yes"}


@dataclass(frozen=True)
class PropertyMapping:
    id: tuple[str, ...] = ("id", "ID", "code")
    name: tuple[str, ...] = ("name", "NAME", "label")
    population: str = "population"
    avg_income: str = "avg_income"
    competitors: str = "competitors"
    public_services: str = "public_services"
    site_suitability_score: str = "site_suitability_score"
    night_lights: str = "night_lights"


def mapping_for(boundary_type: str) -> PropertyMapping:
    policy = policy_for(boundary_type)
    return PropertyMapping(id=policy.id_fields, name=policy.name_fields)


def _numeric(props: Mapping[str, Any], field: str) -> int | float:
    value = parse_float(props.get(field))
    if value is None:
        return 0
    return int(value) if value.is_integer() else value


def _has_census_data(props: Mapping[str, Any], population: float, avg_income: float) -> bool:
    flag = props.get("hasCensusData")
    if flag is not None:
        if isinstance(flag, str):
            return flag.strip().lower() in TRUE_STRINGS
        return bool(flag)
    # Without the build-time flag a matched record with zero population is
    # indistinguishable from an unmatched one.
    return population > 0 or avg_income > 0


def transform_properties(
    props: Mapping[str, Any],
    mapping: PropertyMapping | None = None,
    *,
    with_state_suffix: bool = False,
) -> dict[str, Any]:
    mapping = mapping or PropertyMapping()
    out: dict[str, Any] = {
        "id": first_present(props, mapping.id),
        "name": first_present(props, mapping.name) or UNKNOWN_NAME,
    }
    for field in METRIC_FIELDS:
        out[field] = _numeric(props, getattr(mapping, field))
    out["hasCensusData"] = _has_census_data(props, out["population"], out["avg_income"])

    state = first_present(props, ("state",))
    if with_state_suffix and state and out["name"] != UNKNOWN_NAME:
        out["name"] = f"{out['name']}, {state}"
    return out


def transform_feature(
    feature: Mapping[str, Any],
    mapping: PropertyMapping | None = None,
    *,
    with_state_suffix: bool = False,
) -> dict:
    """Return a copy of ``feature`` carrying only the enriched property set.

    Raises UnsupportedGeometryError unless the geometry is a Polygon or MultiPolygon.
    """
    geometry = require_polygonal(feature.get("geometry"))
    props = feature.get("properties") or {}
    out = dict(feature)
    out["geometry"] = geometry
    out["properties"] = transform_properties(props, mapping, with_state_suffix=with_state_suffix)
    return out


def transform_feature_collection(
    data: Mapping[str, Any],
    mapping: PropertyMapping | None = None,
    *,
    with_state_suffix: bool = False,
) -> dict:
    features = [
        transform_feature(feature, mapping, with_state_suffix=with_state_suffix)
        for feature in data.get("features", [])
    ]
    return {**data, "features": features}


def rename_properties(data: Mapping[str, Any], renames: Mapping[str, str]) -> dict:
    """Move properties from source names to target names across a collection."""
    features = []
    for feature in data.get("features", []):
        props = dict(feature.get("properties") or {})
        for source, target in renames.items():
            if source not in props:
                continue
            props[target] = props[source]
            if source != target:
                del props[source]
        features.append({**feature, "properties": props})
    return {**data, "features": features}
