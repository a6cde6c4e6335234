"""
Automatic seat assignment.

Guests are seated in two passes: companion pairs first, then everyone else.

    balanced      round-robin over the tables, one guest (or pair) per table
                  before moving on
    sequential    fill a table to capacity before moving to the next one

A pair that cannot be seated together anywhere is split up and both guests
join the queue of singles. Running out of seats is not an error: the result
says how many guests could not be placed.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from .models import (
    AssignmentConfig,
    AssignmentResult,
    CompanionPlacement,
    Guest,
    Table,
)
from .seat_pairs import find_seat_pair

Pair = Tuple[Guest, Guest]


# ----------------------------- reset -----------------------------
def _cleared_guest(guest: Guest) -> Guest:
    return replace(
        guest,
        assigned_table_id=None,
        seat_position=None,
        dietary_restrictions=list(guest.dietary_restrictions),
    )


def _cleared_table(table: Table) -> Table:
    return replace(
        table,
        assigned_guests=[],
        seats=[replace(seat, guest_id=None) for seat in table.seats],
    )


def clear_assignments(
    guests: Sequence[Guest], tables: Sequence[Table]
) -> Tuple[List[Guest], List[Table]]:
    """Return copies of ``guests`` and ``tables`` with every seat emptied."""
    return [_cleared_guest(g) for g in guests], [_cleared_table(t) for t in tables]


# ----------------------------- seat claims -----------------------------
@dataclass(frozen=True)
class SeatClaim:
    """One guest taking one seat.

    Seat, table and guest are updated together in :meth:`apply` so the
    three never disagree.
    """

    table: Table
    position: int
    guest: Guest

    def apply(self) -> None:
        seat = self.table.seats[self.position]
        if seat.guest_id is not None:
            raise ValueError(
                f"Seat {self.position} at {self.table.name} is already taken by {seat.guest_id}"
            )
        seat.guest_id = self.guest.id
        self.table.assigned_guests.append(self.guest.id)
        self.guest.assigned_table_id = self.table.id
        self.guest.seat_position = self.position


# ----------------------------- pairing and ordering -----------------------------
def build_pairs(guests: Sequence[Guest]) -> Tuple[List[Pair], List[Guest]]:
    """Split guests into (host, companion) pairs and singles.

    Guests are walked in order and the first match wins: once a guest is in
    a pair it is not considered again, either as host or as companion.
    Unknown ``guest_of`` ids are ignored.
    """
    by_id: Dict[str, Guest] = {g.id: g for g in guests}
    paired = set()
    pairs: List[Pair] = []
    for guest in guests:
        if guest.id in paired or not guest.guest_of:
            continue
        host = by_id.get(guest.guest_of)
        if host is None or host.id == guest.id or host.id in paired:
            continue
        pairs.append((host, guest))
        paired.update((host.id, guest.id))
    singles = [g for g in guests if g.id not in paired]
    return pairs, singles


def name_sort_key(name: str) -> Tuple[str, str]:
    """Alphabetical, ignoring case first; lowercase sorts before uppercase on ties."""
    return name.casefold(), name.swapcase()


def shuffled(items: Sequence, rng: random.Random) -> list:
    """Uniformly shuffled copy of ``items``."""
    out = list(items)
    rng.shuffle(out)
    return out


# ----------------------------- assignment loops -----------------------------
def _seat_pair(table: Table, positions: Tuple[int, int], pair: Pair) -> None:
    host, companion = pair
    SeatClaim(table, positions[0], host).apply()
    SeatClaim(table, positions[1], companion).apply()
    logger.debug("Seated {} and {} at {} (seats {}, {})", host.name, companion.name, table.name, *positions)


def _assign_balanced(
    pairs: List[Pair], singles: List[Guest], tables: List[Table], placement: CompanionPlacement
) -> int:
    assigned = 0
    pointer = 0
    count = len(tables)
    queue = list(singles)

    for pair in pairs:
        for step in range(count):
            index = (pointer + step) % count
            positions = find_seat_pair(tables[index], placement)
            if positions is not None:
                _seat_pair(tables[index], positions, pair)
                assigned += 2
                pointer = (index + 1) % count
                break
        else:
            logger.debug("No table can seat {} and {} together; seating them separately", pair[0].name, pair[1].name)
            queue.extend(pair)

    for i, guest in enumerate(queue):
        for step in range(count):
            index = (pointer + step) % count
            seat = tables[index].first_empty_seat()
            if seat is not None:
                SeatClaim(tables[index], seat.position, guest).apply()
                assigned += 1
                pointer = (index + 1) % count
                break
        else:
            logger.debug("Every table is full; {} guests left without a seat", len(queue) - i)
            break
    return assigned


def _assign_sequential(
    pairs: List[Pair], singles: List[Guest], tables: List[Table], placement: CompanionPlacement
) -> int:
    assigned = 0
    index = 0
    queue = list(singles)

    for pair in pairs:
        while index < len(tables):
            table = tables[index]
            positions = find_seat_pair(table, placement)
            if positions is None:
                index += 1
                continue
            _seat_pair(table, positions, pair)
            assigned += 2
            if table.is_full():
                index += 1
            break
        else:
            logger.debug("No table can seat {} and {} together; seating them separately", pair[0].name, pair[1].name)
            queue.extend(pair)

    for i, guest in enumerate(queue):
        while index < len(tables):
            table = tables[index]
            seat = table.first_empty_seat()
            if seat is None:
                index += 1
                continue
            SeatClaim(table, seat.position, guest).apply()
            assigned += 1
            if table.is_full():
                index += 1
            break
        else:
            logger.debug("Ran out of tables; {} guests left without a seat", len(queue) - i)
            break
    return assigned


# ----------------------------- result -----------------------------
def count_pairs_together(pairs: Sequence[Pair]) -> int:
    """Pairs whose two members ended up at the same table."""
    return sum(
        1
        for host, companion in pairs
        if host.assigned_table_id is not None
        and host.assigned_table_id == companion.assigned_table_id
    )


def compose_message(assigned: int, unassigned: int, pair_count: int = 0, together: int = 0) -> Tuple[bool, str]:
    """Return ``(success, message)`` for a finished run."""
    if unassigned == 0:
        success, message = True, f"Assigned all {assigned} guests"
    elif assigned > 0:
        success, message = False, f"Assigned {assigned}. {unassigned} couldn't fit"
    else:
        success, message = False, "No capacity available"
    if pair_count:
        noun = "pair" if pair_count == 1 else "pairs"
        message += f" ({together} of {pair_count} {noun} seated together)"
    return success, message


# ----------------------------- entry point -----------------------------
def auto_assign_guests(
    guests: Sequence[Guest],
    tables: Sequence[Table],
    config: Optional[AssignmentConfig] = None,
    rng: Optional[random.Random] = None,
) -> AssignmentResult:
    """Seat ``guests`` at ``tables`` from scratch.

    Existing assignments are ignored and the inputs are never modified: the
    result carries fresh copies of both lists (guests and tables in their
    original order) that callers should use to replace their own.

    ``rng`` drives shuffling when ``config.randomize`` is set; without it a
    generator seeded from ``config.seed`` is used.
    """
    config = config or AssignmentConfig()
    if not guests:
        return AssignmentResult(list(guests), list(tables), False, "No guests to assign", 0)
    if not tables:
        return AssignmentResult(list(guests), list(tables), False, "No tables configured", len(guests))

    working_guests, working_tables = clear_assignments(guests, tables)
    logger.debug("Cleared assignments for {} guests across {} tables", len(working_guests), len(working_tables))

    placement = CompanionPlacement(config.companion_placement)
    if placement == CompanionPlacement.NONE:
        pairs, singles = [], list(working_guests)
    else:
        pairs, singles = build_pairs(working_guests)
    logger.debug("{} companion pairs, {} singles", len(pairs), len(singles))

    if config.randomize:
        rng = rng or random.Random(config.seed)
        pairs = shuffled(pairs, rng)
        singles = shuffled(singles, rng)
    else:
        pairs.sort(key=lambda pair: name_sort_key(pair[0].name))
        singles.sort(key=lambda g: name_sort_key(g.name))

    if config.balance_guests:
        assigned = _assign_balanced(pairs, singles, working_tables, placement)
    else:
        assigned = _assign_sequential(pairs, singles, working_tables, placement)

    unassigned = len(working_guests) - assigned
    together = count_pairs_together(pairs)
    success, message = compose_message(assigned, unassigned, len(pairs), together)
    logger.info(message)

    return AssignmentResult(
        guests=working_guests,
        tables=working_tables,
        success=success,
        message=message,
        unassigned_count=unassigned,
        assigned_count=assigned,
        pair_count=len(pairs),
        pairs_together=together,
    )
