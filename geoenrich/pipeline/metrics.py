"""Density-based proxy metrics for features without source values."""

from __future__ import annotations

import math
from typing import Any, Mapping

from geoenrich.common.constants import DEFAULT_AREA_KM2
from geoenrich.common.numbers import clamp, parse_float, round_half_up

NIGHT_LIGHTS_DENSITY = 500.0
SUITABILITY_DENSITY = 1000.0
PEOPLE_PER_COMPETITOR = 5000
PEOPLE_PER_PUBLIC_SERVICE = 10000


def density(population: int, area_km2: float | None) -> float:
    area = area_km2 if area_km2 is not None and area_km2 > 0 else DEFAULT_AREA_KM2
    return population / area


def scaled_score(value: float, reference: float) -> int:
    """Scale so that ``reference`` maps to 50, clamped to 0-100."""
    return clamp(round_half_up((value / reference) * 50), minimum=0, maximum=100)


def existing_metric(props: Mapping[str, Any], field: str) -> int | None:
    """Return a usable pre-existing value for ``field``, or None when absent.

    A present 0 counts as a value and is kept, unlike a falsy-or-computed merge.
    """
    value = parse_float(props.get(field))
    if value is None:
        return None
    return max(round_half_up(value), 0)


def derive_metrics(population: int, area_km2: float | None, props: Mapping[str, Any]) -> dict[str, int]:
    people_per_km2 = density(population, area_km2)
    computed = {
        "competitors": math.floor(population / PEOPLE_PER_COMPETITOR),
        "public_services": math.floor(population / PEOPLE_PER_PUBLIC_SERVICE),
        "site_suitability_score": scaled_score(people_per_km2, SUITABILITY_DENSITY),
        "night_lights": scaled_score(people_per_km2, NIGHT_LIGHTS_DENSITY),
    }
    out = {}
    for field, value in computed.items():
        existing = existing_metric(props, field)
        out[field] = value if existing is None else existing
    return out
