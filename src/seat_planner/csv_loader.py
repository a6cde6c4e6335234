"""CSV loading utilities."""
from __future__ import annotations

from pathlib import Path
from typing import IO, Any, List, Tuple

import pandas as pd
from loguru import logger

from .models import (
    Guest,
    Table,
    TableType,
    create_line_table,
    create_round_table,
    create_u_shape_table,
    parse_bool,
    parse_dietary_restrictions,
    parse_optional_str,
)


def _require_columns(df: pd.DataFrame, required: List[str], label: str) -> None:
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise ValueError(f"{label} is missing columns: {', '.join(missing)}")


def _size_cell(row: pd.Series, column: str, name: str, table_type: TableType) -> int:
    """Read a seat count the table type needs; blank or missing cells are errors."""
    value = row.get(column)
    if value is None or pd.isna(value):
        raise ValueError(f"{name}: {column} is required for {table_type.value} tables")
    return int(value)


def load_guests(path: Path | str | IO[Any]) -> List[Guest]:
    """Load guests from ``guests.csv``.

    Duplicate ids are rejected. A ``guest_of`` pointing at an unknown guest
    is kept but logged, since the assignment treats it as no companion.
    """
    df = pd.read_csv(path, dtype={"id": str, "guest_of": str})
    _require_columns(df, ["id", "name"], "guests.csv")
    guests: List[Guest] = []
    for _, row in df.iterrows():
        guests.append(
            Guest(
                id=str(row["id"]).strip(),
                name=str(row["name"]).strip(),
                dietary_restrictions=parse_dietary_restrictions(row.get("dietary_restrictions", "")),
                guest_of=parse_optional_str(row.get("guest_of")),
            )
        )

    ids = [g.id for g in guests]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise ValueError(f"Duplicate guest ids: {', '.join(duplicates)}")
    known = set(ids)
    for g in guests:
        if g.guest_of and g.guest_of not in known:
            logger.warning("Guest {} is listed as guest of unknown id {}", g.name, g.guest_of)
    return guests


def _table_from_row(row: pd.Series) -> Table:
    table_id = str(row["id"]).strip()
    name = str(row["name"]).strip()
    raw_type = str(row["table_type"]).strip().upper().replace("-", "_")
    try:
        table_type = TableType(raw_type)
    except ValueError:
        raise ValueError(f"Unknown table type for {name}: {row['table_type']}") from None

    if table_type == TableType.LINE:
        return create_line_table(
            name,
            _size_cell(row, "seats_per_side", name, table_type),
            single_sided=parse_bool(row.get("single_sided", "false")),
            end_seat_left=parse_bool(row.get("end_seat_left", "false")),
            end_seat_right=parse_bool(row.get("end_seat_right", "false")),
            id=table_id,
        )
    if table_type == TableType.U_SHAPE:
        return create_u_shape_table(
            name,
            _size_cell(row, "top_seats", name, table_type),
            _size_cell(row, "left_seats", name, table_type),
            _size_cell(row, "right_seats", name, table_type),
            id=table_id,
        )
    return create_round_table(name, _size_cell(row, "seat_count", name, table_type), id=table_id)


def load_tables(path: Path | str | IO[Any]) -> List[Table]:
    """Load table definitions.

    Only the size columns matching each row's ``table_type`` are read, and
    those must be filled in:
    ``seat_count`` for ROUND, ``seats_per_side`` plus the optional
    ``single_sided``/``end_seat_left``/``end_seat_right`` flags for LINE and
    ``top_seats``/``left_seats``/``right_seats`` for U_SHAPE.
    """
    df = pd.read_csv(path, dtype={"id": str})
    _require_columns(df, ["id", "name", "table_type"], "tables.csv")
    tables = [_table_from_row(row) for _, row in df.iterrows()]
    ids = [t.id for t in tables]
    if len(set(ids)) != len(ids):
        raise ValueError("Duplicate table ids in tables.csv")
    return tables


def load_all(guests_path: Path | str, tables_path: Path | str) -> Tuple[List[Guest], List[Table]]:
    """Convenience wrapper returning guests and tables."""
    return load_guests(guests_path), load_tables(tables_path)
