"""Join census records onto boundary features and write the enriched GeoJSON."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from geoenrich.common.fs import write_json
from geoenrich.common.geometry import load_feature_collection
from geoenrich.common.keys import resolve_display_name, resolve_feature_id, resolve_join_key
from geoenrich.common.logging import log_event
from geoenrich.common.models import DemographicRecord, EnrichedProperties, PipelineConfig
from geoenrich.pipeline.income import load_income_index, resolve_income
from geoenrich.pipeline.metrics import derive_metrics
from geoenrich.pipeline.tabular import load_demographic_records


@dataclass
class EnrichResult:
    boundary_type: str
    output_path: Path
    features_in: int = 0
    matched: int = 0
    unmatched: int = 0
    tabular_available: bool = False
    feature_keys: list[tuple[str, str]] = field(default_factory=list)
    tabular_key_counts: Counter = field(default_factory=Counter)
    income_areas: int = 0
    missing_columns: list[str] = field(default_factory=list)


def enrich_properties(
    boundary_type: str,
    props: Mapping[str, Any],
    record: DemographicRecord | None,
    income_index: Mapping[str, int] | None = None,
) -> EnrichedProperties:
    feature_id = resolve_feature_id(boundary_type, props)
    name = resolve_display_name(boundary_type, props)
    if record is None:
        return EnrichedProperties.unmatched(feature_id, name)

    avg_income = record.income_avg
    if avg_income is None and boundary_type == "district" and income_index:
        avg_income = resolve_income(income_index, props)

    return EnrichedProperties(
        id=feature_id,
        name=name,
        population=record.population,
        avg_income=avg_income or 0,
        hasCensusData=True,
        **derive_metrics(record.population, record.area_km2, props),
    )


def enrich_feature(
    boundary_type: str,
    feature: Mapping[str, Any],
    records: Mapping[str, DemographicRecord],
    income_index: Mapping[str, int] | None = None,
) -> tuple[dict, str, bool]:
    props = feature.get("properties") or {}
    key = resolve_join_key(boundary_type, props)
    record = records.get(key) if key else None
    enriched = enrich_properties(boundary_type, props, record, income_index)
    out = dict(feature)
    out["properties"] = {**props, **enriched.to_dict()}
    return out, key, record is not None


def _log_no_matches(
    logger: logging.Logger,
    boundary_type: str,
    features: list[dict],
    feature_keys: list[tuple[str, str]],
    records: Mapping[str, DemographicRecord],
) -> None:
    sample = {
        "features": [
            {"join_key": key, "properties": sorted((feature.get("properties") or {}).keys())}
            for feature, (key, _name) in zip(features[:3], feature_keys[:3])
        ],
        "tabular_keys": list(records)[:5],
    }
    log_event(
        logger,
        "no features matched tabular data",
        level=logging.WARNING,
        boundary_type=boundary_type,
        event="NO_MATCHES",
        status="warn",
        sample=sample,
    )


def run_enrich(config: PipelineConfig, logger: logging.Logger | None = None) -> EnrichResult:
    log = logger or logging.getLogger(__name__)
    boundary_type = config.boundary_type
    inputs = config.input_paths

    collection = load_feature_collection(inputs.geojson)
    features = collection["features"]
    result = EnrichResult(boundary_type=boundary_type, output_path=config.output_path, features_in=len(features))

    census = load_demographic_records(inputs.csv, boundary_type, config.join_key, logger=log)
    records: dict[str, DemographicRecord] = {}
    if census is None:
        log_event(
            log,
            "tabular input missing, passing geometry through",
            boundary_type=boundary_type,
            event="TABULAR_MISSING",
            status="skipped",
            path=str(inputs.csv),
        )
    else:
        records = census.records
        result.tabular_available = True
        result.tabular_key_counts = census.key_counts
        result.missing_columns = census.missing_columns
        log_event(
            log,
            "tabular input loaded",
            boundary_type=boundary_type,
            event="TABULAR_LOADED",
            status="ok",
            path=str(inputs.csv),
            rows_in=census.rows_in + census.dropped,
            rows_out=len(records),
        )

    income_index = None
    if boundary_type == "district":
        income_index = load_income_index(inputs.income_csv)
        if income_index is not None:
            result.income_areas = len(income_index)
            log_event(
                log,
                "income input loaded",
                boundary_type=boundary_type,
                event="INCOME_LOADED",
                status="ok",
                path=str(inputs.income_csv),
                rows_out=len(income_index),
            )

    enriched_features = []
    for feature in features:
        enriched, key, matched = enrich_feature(boundary_type, feature, records, income_index)
        enriched_features.append(enriched)
        result.feature_keys.append((key, enriched["properties"]["name"]))
        if matched:
            result.matched += 1
        else:
            result.unmatched += 1

    if result.matched == 0 and features and records:
        _log_no_matches(log, boundary_type, features, result.feature_keys, records)

    write_json(config.output_path, {**collection, "features": enriched_features})
    log_event(
        log,
        f"enriched {result.matched} of {result.features_in} features",
        boundary_type=boundary_type,
        event="ENRICH_DONE",
        status="ok",
        features_in=result.features_in,
        matched=result.matched,
        unmatched=result.unmatched,
        path=str(config.output_path),
    )
    return result
