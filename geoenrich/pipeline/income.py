"""Household income lookup keyed by area name, with state-level fallback."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping

from geoenrich.common.keys import first_present
from geoenrich.common.numbers import parse_float, round_half_up
from geoenrich.pipeline.tabular import load_table

INCOME_VALUE_COLUMNS = ("income_mean", "income_avg")


def _income_value(row: Mapping[str, str]) -> str:
    for column in INCOME_VALUE_COLUMNS:
        value = (row.get(column) or "").strip()
        if value:
            return value
    return ""


def build_income_index(rows: Iterable[Mapping[str, str]]) -> dict[str, int]:
    """Map area name to rounded mean income.

    District rows always write their area. State rows only fill an area that has
    no value yet, so a district figure is never replaced by a state estimate.
    """
    index: dict[str, int] = {}
    for row in rows:
        area_type = (row.get("area_type") or "").strip()
        area = (row.get("area") or "").strip()
        income = parse_float(_income_value(row))
        if not area or income is None or income <= 0:
            continue
        if area_type == "district":
            index[area] = round_half_up(income)
        elif area_type == "state" and area not in index:
            index[area] = round_half_up(income)
    return index


def load_income_index(path: Path | None) -> dict[str, int] | None:
    if path is None:
        return None
    table = load_table(path)
    if table is None:
        return None
    return build_income_index(table.rows)


def resolve_income(index: Mapping[str, int], props: Mapping[str, Any]) -> int | None:
    """Look up the feature's district name first, then its state name."""
    district = first_present(props, ("district", "name"))
    if district and district in index:
        return index[district]
    state = first_present(props, ("state",))
    if state and state in index:
        return index[state]
    return None
