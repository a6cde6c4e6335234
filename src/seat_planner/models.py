"""Data models for seat_planner."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Tuple
import math
import uuid


def parse_pipe_list(value: object) -> List[str]:
    """Split a pipe separated string into a list.

    Empty values such as ``""`` or ``None`` return an empty list.
    ``pandas`` often provides ``float('nan')`` for missing values which is
    also treated as empty.
    """
    if value is None:
        return []
    if isinstance(value, float) and math.isnan(value):
        return []
    text = str(value).strip()
    if not text or text.lower() == "nan":
        return []
    return [part.strip() for part in text.split("|") if part.strip()]


def parse_bool(value: object) -> bool:
    """Parse common truthy strings into bool."""
    return str(value).strip().lower() in ("true", "1", "yes")


def parse_optional_str(value: object) -> Optional[str]:
    """Return a stripped string, or ``None`` for blank and NaN cells."""
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    text = str(value).strip()
    if not text or text.lower() == "nan":
        return None
    return text


class DietaryRestriction(str, Enum):
    VEGETARIAN = "VEGETARIAN"
    VEGAN = "VEGAN"
    PESCATARIAN = "PESCATARIAN"
    LACTOSE_INTOLERANT = "LACTOSE_INTOLERANT"
    NONE = "NONE"

    @property
    def label(self) -> str:
        return DIETARY_RESTRICTION_LABELS[self]

    @classmethod
    def parse(cls, value: str) -> "DietaryRestriction":
        """Accept either the enum value or its label, ignoring case."""
        text = value.strip()
        key = text.upper().replace(" ", "_")
        if key in cls.__members__:
            return cls[key]
        for member, label in DIETARY_RESTRICTION_LABELS.items():
            if label.lower() == text.lower():
                return member
        raise ValueError(f"Unknown dietary restriction: {value}")


DIETARY_RESTRICTION_LABELS = {
    DietaryRestriction.VEGETARIAN: "Vegetarian",
    DietaryRestriction.VEGAN: "Vegan",
    DietaryRestriction.PESCATARIAN: "Pescatarian",
    DietaryRestriction.LACTOSE_INTOLERANT: "Lactose Intolerant",
    DietaryRestriction.NONE: "None",
}


def parse_dietary_restrictions(value: object) -> List[DietaryRestriction]:
    """Parse the ``dietary_restrictions`` column. Empty cells mean ``NONE``."""
    tags = [DietaryRestriction.parse(tag) for tag in parse_pipe_list(value)]
    return tags or [DietaryRestriction.NONE]


class TableType(str, Enum):
    LINE = "LINE"
    U_SHAPE = "U_SHAPE"
    ROUND = "ROUND"


class CompanionPlacement(str, Enum):
    """How a host and their companion should be seated relative to each other."""

    NEXT_TO = "next-to"
    ACROSS = "across"
    NONE = "none"


@dataclass
class Guest:
    """A guest on the list, with their current seat if any."""

    id: str
    name: str
    dietary_restrictions: List[DietaryRestriction] = field(
        default_factory=lambda: [DietaryRestriction.NONE]
    )
    assigned_table_id: Optional[str] = None
    seat_position: Optional[int] = None
    # id of the guest this one is a companion of
    guest_of: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def restrictions(self) -> List[DietaryRestriction]:
        """Restrictions without the ``NONE`` placeholder, duplicates removed."""
        seen: List[DietaryRestriction] = []
        for tag in self.dietary_restrictions:
            if tag is not DietaryRestriction.NONE and tag not in seen:
                seen.append(tag)
        return seen


@dataclass
class Seat:
    position: int
    guest_id: Optional[str] = None
    label: str = ""


@dataclass
class Table:
    """A table on the floor plan.

    ``seats`` is indexed by position. For LINE tables the top side comes
    first, then the bottom side (double-sided only), then the left and right
    end seats.
    """

    id: str
    name: str
    table_type: TableType
    seats: List[Seat] = field(default_factory=list)
    assigned_guests: List[str] = field(default_factory=list)
    single_sided: bool = False
    end_seat_left: bool = False
    end_seat_right: bool = False
    top_seats: int = 0
    left_seats: int = 0
    right_seats: int = 0
    # floor-plan layout, carried through untouched
    position: Tuple[float, float] = (0.0, 0.0)
    rotation: float = 0.0

    @property
    def capacity(self) -> int:
        return len(self.seats)

    @property
    def end_seat_count(self) -> int:
        if self.table_type != TableType.LINE:
            return 0
        return int(self.end_seat_left) + int(self.end_seat_right)

    @property
    def side_seat_count(self) -> int:
        """Seats along the long sides of a LINE table."""
        return self.capacity - self.end_seat_count

    @property
    def per_side(self) -> int:
        side = self.side_seat_count
        if self.single_sided:
            return side
        return math.ceil(side / 2)

    def empty_positions(self) -> List[int]:
        return [seat.position for seat in self.seats if seat.guest_id is None]

    def first_empty_seat(self) -> Optional[Seat]:
        return next((seat for seat in self.seats if seat.guest_id is None), None)

    def is_full(self) -> bool:
        return len(self.assigned_guests) >= self.capacity


@dataclass
class AssignmentConfig:
    """Options for :func:`seat_planner.solver.auto_assign_guests`."""

    balance_guests: bool = True
    randomize: bool = False
    companion_placement: CompanionPlacement = CompanionPlacement.NEXT_TO
    seed: Optional[int] = None


@dataclass
class AssignmentResult:
    """Outcome of an auto-assignment run."""

    guests: List[Guest]
    tables: List[Table]
    success: bool
    message: str
    unassigned_count: int
    assigned_count: int = 0
    pair_count: int = 0
    pairs_together: int = 0


# ----------------------------- factories -----------------------------
def _new_id() -> str:
    return str(uuid.uuid4())


def _check_count(name: str, value: int) -> int:
    if value < 0:
        raise ValueError(f"{name} must not be negative: {value}")
    return value


def make_seat_array(count: int) -> List[Seat]:
    return [Seat(position=i, guest_id=None, label=f"Seat {i + 1}") for i in range(count)]


def create_line_table(
    name: str,
    seats_per_side: int,
    single_sided: bool = False,
    end_seat_left: bool = False,
    end_seat_right: bool = False,
    id: Optional[str] = None,
) -> Table:
    """Build a rectangular table with seats along one or both long sides."""
    _check_count("seats_per_side", seats_per_side)
    side_total = seats_per_side if single_sided else seats_per_side * 2
    total = side_total + int(end_seat_left) + int(end_seat_right)
    return Table(
        id=id or _new_id(),
        name=name,
        table_type=TableType.LINE,
        seats=make_seat_array(total),
        single_sided=single_sided,
        end_seat_left=end_seat_left,
        end_seat_right=end_seat_right,
    )


def create_u_shape_table(
    name: str,
    top_seats: int,
    left_seats: int,
    right_seats: int,
    id: Optional[str] = None,
) -> Table:
    for label, count in (("top_seats", top_seats), ("left_seats", left_seats), ("right_seats", right_seats)):
        _check_count(label, count)
    return Table(
        id=id or _new_id(),
        name=name,
        table_type=TableType.U_SHAPE,
        seats=make_seat_array(top_seats + left_seats + right_seats),
        top_seats=top_seats,
        left_seats=left_seats,
        right_seats=right_seats,
    )


def create_round_table(name: str, seat_count: int, id: Optional[str] = None) -> Table:
    _check_count("seat_count", seat_count)
    return Table(
        id=id or _new_id(),
        name=name,
        table_type=TableType.ROUND,
        seats=make_seat_array(seat_count),
    )


def create_guest(
    name: str,
    dietary_restrictions: Optional[List[DietaryRestriction]] = None,
    guest_of: Optional[str] = None,
    id: Optional[str] = None,
) -> Guest:
    """Build an unassigned guest. An empty restriction list means ``NONE``."""
    if not name or not name.strip():
        raise ValueError("Guest name must not be blank")
    return Guest(
        id=id or _new_id(),
        name=name.strip(),
        dietary_restrictions=list(dietary_restrictions or [DietaryRestriction.NONE]),
        guest_of=guest_of,
        created_at=datetime.now(timezone.utc),
    )
