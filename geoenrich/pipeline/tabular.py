"""Delimited census tables: quote-aware parsing and latest-year selection."""

from __future__ import annotations

import csv
import io
import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping

from geoenrich.common.fs import read_text
from geoenrich.common.logging import log_event
from geoenrich.common.models import DemographicRecord, required_columns
from geoenrich.common.numbers import parse_int


@dataclass
class ParsedTable:
    header: list[str]
    rows: list[dict[str, str]] = field(default_factory=list)
    dropped: int = 0


def parse_table(text: str, delimiter: str = ",") -> ParsedTable:
    """Parse delimited text into header-keyed rows.

    Blank lines, all-empty rows and repeated header rows are skipped. Rows whose
    field count differs from the header's are dropped and counted.
    """
    reader = csv.reader(io.StringIO(text), delimiter=delimiter)
    header: list[str] | None = None
    table = ParsedTable(header=[])

    for raw in reader:
        values = [value.strip() for value in raw]
        if not any(values):
            continue
        if header is None:
            header = values
            table.header = header
            continue
        if values == header:
            continue
        if len(values) != len(header):
            table.dropped += 1
            continue
        table.rows.append(dict(zip(header, values)))

    return table


def load_table(path: Path, delimiter: str = ",") -> ParsedTable | None:
    """Load a delimited file, or None when it does not exist."""
    if not path.exists():
        return None
    return parse_table(read_text(path), delimiter=delimiter)


def load_rows(path: Path, delimiter: str = ",") -> list[dict[str, str]]:
    table = load_table(path, delimiter=delimiter)
    if table is None:
        return []
    return table.rows


def latest_by_key(rows: Iterable[Mapping[str, str]], key_field: str) -> dict[str, Mapping[str, str]]:
    """Keep one row per key: the one with the greatest year.

    A row only replaces the current pick when its year is strictly greater, so
    equal or unparsable years keep the first row seen for the key.
    """
    latest: dict[str, Mapping[str, str]] = {}
    for row in rows:
        key = (row.get(key_field) or "").strip()
        if not key:
            continue
        current = latest.get(key)
        if current is None or parse_int(row.get("year"), default=0) > parse_int(current.get("year"), default=0):
            latest[key] = row
    return latest


def find_missing_columns(header: list[str], boundary_type: str, join_key: str) -> list[str]:
    present = set(header)
    return [
        "|".join(group)
        for group in required_columns(boundary_type, join_key)
        if not any(column in present for column in group)
    ]


@dataclass
class CensusIndex:
    records: dict[str, DemographicRecord]
    rows_in: int = 0
    dropped: int = 0
    key_counts: Counter = field(default_factory=Counter)
    missing_columns: list[str] = field(default_factory=list)


def load_demographic_records(
    path: Path,
    boundary_type: str,
    join_key: str,
    logger: logging.Logger | None = None,
) -> CensusIndex | None:
    """Load, validate and deduplicate a census table; None when the file is absent.

    A header without the join key or year column yields no records. Missing
    area or population columns leave those values absent on every record.
    """
    log = logger or logging.getLogger(__name__)
    table = load_table(path)
    if table is None:
        return None
    if not table.header:
        return CensusIndex(records={})

    if table.dropped:
        log.debug("dropped %d malformed row(s) from %s", table.dropped, path)
    missing = find_missing_columns(table.header, boundary_type, join_key)
    if missing:
        log_event(
            log,
            f"{path} is missing required column(s) for {boundary_type}: {', '.join(missing)}",
            level=logging.WARNING,
            boundary_type=boundary_type,
            event="SCHEMA_DRIFT",
            status="warn",
            path=str(path),
        )
    if join_key in missing or "year" in missing:
        return CensusIndex(records={}, rows_in=len(table.rows), dropped=table.dropped, missing_columns=missing)

    key_counts = Counter((row.get(join_key) or "").strip() for row in table.rows)
    key_counts.pop("", None)
    latest = latest_by_key(table.rows, join_key)
    return CensusIndex(
        records={key: DemographicRecord.from_row(boundary_type, join_key, row) for key, row in latest.items()},
        rows_in=len(table.rows),
        dropped=table.dropped,
        key_counts=key_counts,
        missing_columns=missing,
    )
