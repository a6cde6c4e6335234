"""Finding two free seats at a table for a host and their companion.

Policy by table type:

    LINE, double-sided  across:  seat i on the top side, seat per_side + i below
                        next-to: two neighbouring seats on the same side
    LINE, single-sided  both relations: two free seats with adjacent indices
    U_SHAPE             both relations: two free seats with adjacent indices
    ROUND               across:  i and (i + n // 2) % n
                        next-to: i and (i + 1) % n

End seats of LINE tables never take part in pair placement. When nothing
matches structurally the first two free seats are used, so a pair at least
shares a table.
"""
from __future__ import annotations

from typing import List, Optional, Set, Tuple

from .models import CompanionPlacement, Table, TableType

SeatPair = Tuple[int, int]


def eligible_positions(table: Table) -> List[int]:
    """Positions that may hold a member of a pair."""
    if table.table_type == TableType.LINE:
        return list(range(table.side_seat_count))
    return [seat.position for seat in table.seats]


def _first_adjacent(empty: List[int], allowed: Set[int] | None = None) -> Optional[SeatPair]:
    """First two consecutive indices in the sorted ``empty`` list."""
    ordered = sorted(empty)
    for a, b in zip(ordered, ordered[1:]):
        if b != a + 1:
            continue
        if allowed is not None and (a not in allowed or b not in allowed):
            continue
        return a, b
    return None


def _line_pair(table: Table, placement: CompanionPlacement, empty: List[int]) -> Optional[SeatPair]:
    if table.single_sided:
        return _first_adjacent(empty)

    per_side = table.per_side
    side = table.side_seat_count
    free = set(empty)
    if placement == CompanionPlacement.ACROSS:
        for i in range(per_side):
            j = per_side + i
            if j < side and i in free and j in free:
                return i, j
        return None

    top = set(range(per_side))
    bottom = set(range(per_side, side))
    return _first_adjacent(empty, top) or _first_adjacent(empty, bottom)


def _round_pair(table: Table, placement: CompanionPlacement, empty: List[int]) -> Optional[SeatPair]:
    n = table.capacity
    free = set(empty)
    offset = n // 2 if placement == CompanionPlacement.ACROSS else 1
    for i in sorted(free):
        j = (i + offset) % n
        if j != i and j in free:
            return i, j
    return None


def find_seat_pair(table: Table, placement: CompanionPlacement) -> Optional[SeatPair]:
    """Return two free seat positions at ``table`` related by ``placement``.

    ``None`` means fewer than two eligible seats are free. ``placement`` of
    ``NONE`` is treated like ``NEXT_TO``.
    """
    eligible = set(eligible_positions(table))
    empty = sorted(pos for pos in table.empty_positions() if pos in eligible)
    if len(empty) < 2:
        return None

    if table.table_type == TableType.LINE:
        pair = _line_pair(table, placement, empty)
    elif table.table_type == TableType.ROUND:
        pair = _round_pair(table, placement, empty)
    else:
        pair = _first_adjacent(empty)

    if pair is None:
        # same table, not necessarily side by side
        pair = (empty[0], empty[1])
    return pair
