"""Geometry helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from geoenrich.common.errors import InvalidPayloadError, MissingGeometryError, UnsupportedGeometryError
from geoenrich.common.fs import read_json

POLYGONAL_TYPES = ("Polygon", "MultiPolygon")


def geometry_type(geometry: dict[str, Any] | None) -> str | None:
    if not geometry:
        return None
    return geometry.get("type")


def require_polygonal(geometry: dict[str, Any] | None) -> dict[str, Any]:
    kind = geometry_type(geometry)
    if kind not in POLYGONAL_TYPES:
        raise UnsupportedGeometryError(f"Unsupported geometry type: {kind}. Expected Polygon or MultiPolygon.")
    return geometry


def require_feature_collection(payload: Any, origin: str) -> dict[str, Any]:
    if not isinstance(payload, dict) or payload.get("type") != "FeatureCollection":
        raise InvalidPayloadError(f"Invalid GeoJSON format from {origin}: expected FeatureCollection")
    if not isinstance(payload.get("features"), list):
        raise InvalidPayloadError(f"Invalid GeoJSON format from {origin}: features must be a list")
    return payload


def load_feature_collection(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise MissingGeometryError(f"GeoJSON file not found: {path}")
    try:
        payload = read_json(path)
    except ValueError as exc:
        raise InvalidPayloadError(f"Malformed GeoJSON in {path}") from exc
    return require_feature_collection(payload, str(path))
