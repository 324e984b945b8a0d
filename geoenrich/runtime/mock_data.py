"""Sample boundary collection served when the runtime source is ``mock``."""

from __future__ import annotations

import copy

_CELL = 0.02

# id, name, population, avg_income, competitors, public_services, site_suitability_score, night_lights, lon, lat
_SAMPLE_ROWS = (
    ("D01", "Central Business District", 150000, 8500, 45, 25, 92, 88, 101.69, 3.14),
    ("D02", "Suburban Heights", 75000, 6200, 15, 12, 78, 65, 101.72, 3.17),
    ("D03", "Industrial Park", 22000, 4800, 8, 5, 55, 42, 101.66, 3.11),
    ("D04", "Lakeside Community", 48000, 7100, 22, 18, 85, 75, 101.63, 3.15),
    ("D05", "Old Town Quarter", 95000, 5300, 38, 20, 68, 58, 101.70, 3.11),
)


def _square(lon: float, lat: float) -> dict:
    east = round(lon + _CELL, 2)
    north = round(lat + _CELL, 2)
    ring = [[lon, lat], [east, lat], [east, north], [lon, north], [lon, lat]]
    return {"type": "Polygon", "coordinates": [ring]}


def _build() -> dict:
    features = []
    for row in _SAMPLE_ROWS:
        feature_id, name, population, income, competitors, services, score, lights, lon, lat = row
        features.append(
            {
                "type": "Feature",
                "properties": {
                    "id": feature_id,
                    "name": name,
                    "population": population,
                    "avg_income": income,
                    "competitors": competitors,
                    "public_services": services,
                    "site_suitability_score": score,
                    "night_lights": lights,
                },
                "geometry": _square(lon, lat),
            }
        )
    return {"type": "FeatureCollection", "features": features}


MOCK_FEATURE_COLLECTION = _build()


def mock_feature_collection() -> dict:
    return copy.deepcopy(MOCK_FEATURE_COLLECTION)
