"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping

from geoenrich.common.numbers import parse_float, parse_int, round_half_up

POPULATION_COLUMNS = ("population_total", "population")
INCOME_COLUMNS = ("income_avg",)


@dataclass(frozen=True)
class BoundaryInputs:
    geojson: Path
    csv: Path
    income_csv: Path | None = None


@dataclass(frozen=True)
class PipelineConfig:
    boundary_type: str
    input_paths: BoundaryInputs
    output_path: Path
    join_key: str


def required_columns(boundary_type: str, join_key: str) -> list[tuple[str, ...]]:
    """Column groups a tabular header must carry; any one name in a group satisfies it."""
    required: list[tuple[str, ...]] = [(join_key,), ("year",)]
    if boundary_type == "district":
        required.append(("area_km2",))
        required.append(POPULATION_COLUMNS)
    return required


def _first_value(row: Mapping[str, str], columns: tuple[str, ...]) -> str:
    for column in columns:
        value = (row.get(column) or "").strip()
        if value:
            return value
    return ""


@dataclass(frozen=True)
class DemographicRecord:
    boundary_type: str
    key: str
    year: int
    population: int
    area_km2: float | None
    income_avg: int | None

    @classmethod
    def from_row(cls, boundary_type: str, join_key: str, row: Mapping[str, str]) -> "DemographicRecord":
        income = parse_float(_first_value(row, INCOME_COLUMNS))
        return cls(
            boundary_type=boundary_type,
            key=(row.get(join_key) or "").strip(),
            year=parse_int(row.get("year"), default=0),
            population=max(parse_int(_first_value(row, POPULATION_COLUMNS), default=0), 0),
            area_km2=parse_float(row.get("area_km2")),
            income_avg=round_half_up(income) if income is not None and income > 0 else None,
        )


@dataclass(frozen=True)
class EnrichedProperties:
    id: str
    name: str
    population: int = 0
    avg_income: int = 0
    competitors: int = 0
    public_services: int = 0
    site_suitability_score: int = 0
    night_lights: int = 0
    hasCensusData: bool = False

    @classmethod
    def unmatched(cls, feature_id: str, name: str) -> "EnrichedProperties":
        return cls(id=feature_id, name=name)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
