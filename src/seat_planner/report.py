"""Per-table occupancy report and dietary summary."""
from __future__ import annotations

from typing import Dict, List, Mapping, Sequence

from .models import DietaryRestriction, Guest, Table

REPORT_FIELDS = ["table", "table_type", "capacity", "seated", "free", "members", "dietary"]


def dietary_summary(guests: Sequence[Guest]) -> Dict[DietaryRestriction, int]:
    """Count guests per restriction, in enum order. ``NONE`` is not counted."""
    counts = {tag: 0 for tag in DietaryRestriction if tag is not DietaryRestriction.NONE}
    for guest in guests:
        for tag in guest.restrictions:
            counts[tag] += 1
    return {tag: n for tag, n in counts.items() if n}


def format_dietary(counts: Mapping[DietaryRestriction, int]) -> str:
    return "|".join(f"{tag.label}:{n}" for tag, n in counts.items())


def compute_table_stats(table: Table, guests_by_id: Mapping[str, Guest]) -> Dict[str, int | str]:
    """Occupancy and dietary needs of one table, members in seat order."""
    seated = [guests_by_id[seat.guest_id] for seat in table.seats if seat.guest_id in guests_by_id]
    return {
        "table": table.name,
        "table_type": table.table_type.value,
        "capacity": table.capacity,
        "seated": len(seated),
        "free": table.capacity - len(seated),
        "members": "|".join(g.name for g in seated),
        "dietary": format_dietary(dietary_summary(seated)),
    }


def build_report(tables: Sequence[Table], guests: Sequence[Guest]) -> List[Dict[str, int | str]]:
    guests_by_id = {g.id: g for g in guests}
    return [compute_table_stats(t, guests_by_id) for t in tables]
