"""Floor-plan JSON documents.

The document uses the camelCase field names of the planner's saved floor
plans. Layout fields (table position and rotation, guest creation time) are
carried on the models; floor labels and any other top-level keys are kept on
:class:`FloorPlanSchema` and written back unchanged.
"""
from __future__ import annotations

from pathlib import Path
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import DietaryRestriction, Guest, Seat, Table, TableType


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PositionSchema(_CamelModel):
    x: float = 0.0
    y: float = 0.0


class SeatSchema(_CamelModel):
    position: int = Field(ge=0)
    guest_id: Optional[str] = Field(default=None, alias="guestId")
    label: str = ""


class TableSchema(_CamelModel):
    id: str
    name: str
    table_type: TableType = Field(alias="tableType")
    position: PositionSchema = Field(default_factory=PositionSchema)
    rotation: float = 0.0
    # derived from the seats; read for compatibility and rewritten on output
    capacity: Optional[int] = None
    seats: List[SeatSchema] = Field(default_factory=list)
    assigned_guests: List[str] = Field(default_factory=list, alias="assignedGuests")
    single_sided: bool = Field(default=False, alias="singleSided")
    end_seat_left: bool = Field(default=False, alias="endSeatLeft")
    end_seat_right: bool = Field(default=False, alias="endSeatRight")
    top_seats: int = Field(default=0, ge=0, alias="topSeats")
    left_seats: int = Field(default=0, ge=0, alias="leftSeats")
    right_seats: int = Field(default=0, ge=0, alias="rightSeats")

    @field_validator("seats")
    @classmethod
    def positions_are_contiguous(cls, seats: List[SeatSchema]) -> List[SeatSchema]:
        positions = sorted(seat.position for seat in seats)
        if positions != list(range(len(seats))):
            raise ValueError("seat positions must run from 0 without gaps")
        return sorted(seats, key=lambda seat: seat.position)

    def to_model(self) -> Table:
        return Table(
            id=self.id,
            name=self.name,
            table_type=self.table_type,
            seats=[Seat(position=s.position, guest_id=s.guest_id, label=s.label) for s in self.seats],
            assigned_guests=list(self.assigned_guests),
            single_sided=self.single_sided,
            end_seat_left=self.end_seat_left,
            end_seat_right=self.end_seat_right,
            top_seats=self.top_seats,
            left_seats=self.left_seats,
            right_seats=self.right_seats,
            position=(self.position.x, self.position.y),
            rotation=self.rotation,
        )

    @classmethod
    def from_model(cls, table: Table) -> "TableSchema":
        return cls(
            id=table.id,
            name=table.name,
            table_type=table.table_type,
            position=PositionSchema(x=table.position[0], y=table.position[1]),
            rotation=table.rotation,
            capacity=table.capacity,
            seats=[SeatSchema(position=s.position, guest_id=s.guest_id, label=s.label) for s in table.seats],
            assigned_guests=list(table.assigned_guests),
            single_sided=table.single_sided,
            end_seat_left=table.end_seat_left,
            end_seat_right=table.end_seat_right,
            top_seats=table.top_seats,
            left_seats=table.left_seats,
            right_seats=table.right_seats,
        )


class GuestSchema(_CamelModel):
    id: str
    name: str
    dietary_restrictions: List[DietaryRestriction] = Field(
        default_factory=lambda: [DietaryRestriction.NONE], alias="dietaryRestrictions"
    )
    assigned_table_id: Optional[str] = Field(default=None, alias="assignedTableId")
    seat_position: Optional[int] = Field(default=None, alias="seatPosition")
    guest_of: Optional[str] = Field(default=None, alias="guestOf")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @field_validator("dietary_restrictions", mode="before")
    @classmethod
    def parse_restrictions(cls, value: object) -> object:
        if isinstance(value, list):
            return [DietaryRestriction.parse(v) if isinstance(v, str) else v for v in value]
        return value

    def to_model(self) -> Guest:
        return Guest(
            id=self.id,
            name=self.name,
            dietary_restrictions=list(self.dietary_restrictions) or [DietaryRestriction.NONE],
            assigned_table_id=self.assigned_table_id,
            seat_position=self.seat_position if self.assigned_table_id is not None else None,
            guest_of=self.guest_of,
            created_at=self.created_at,
        )

    @classmethod
    def from_model(cls, guest: Guest) -> "GuestSchema":
        return cls(
            id=guest.id,
            name=guest.name,
            dietary_restrictions=list(guest.dietary_restrictions),
            assigned_table_id=guest.assigned_table_id,
            seat_position=guest.seat_position,
            guest_of=guest.guest_of,
            created_at=guest.created_at or datetime.now(timezone.utc),
        )


class FloorPlanSchema(_CamelModel):
    """A whole floor plan. Keys other than the ones below (``id``,
    ``userId``, timestamps) are kept as extras and written back as-is."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = ""
    tables: List[TableSchema] = Field(default_factory=list)
    guests: List[GuestSchema] = Field(default_factory=list)
    labels: List[Dict[str, Any]] = Field(default_factory=list)

    def to_models(self) -> Tuple[List[Guest], List[Table]]:
        return [g.to_model() for g in self.guests], [t.to_model() for t in self.tables]


def read_floor_plan(path: Path | str) -> FloorPlanSchema:
    return FloorPlanSchema.model_validate_json(Path(path).read_text(encoding="utf-8"))


def parse_floor_plan(text: str | bytes) -> Tuple[List[Guest], List[Table]]:
    """Validate a floor-plan JSON document and return its guests and tables."""
    return FloorPlanSchema.model_validate_json(text).to_models()


def load_floor_plan(path: Path | str) -> Tuple[List[Guest], List[Table]]:
    return read_floor_plan(path).to_models()


def dump_floor_plan(
    guests: List[Guest],
    tables: List[Table],
    name: str = "",
    base: Optional[FloorPlanSchema] = None,
) -> str:
    """Serialize guests and tables to a floor-plan JSON document.

    With ``base``, its name, labels and other top-level keys are kept and
    only the tables and guests are replaced.
    """
    table_docs = [TableSchema.from_model(t) for t in tables]
    guest_docs = [GuestSchema.from_model(g) for g in guests]
    if base is None:
        plan = FloorPlanSchema(name=name, tables=table_docs, guests=guest_docs)
    else:
        plan = base.model_copy(update={"tables": table_docs, "guests": guest_docs})
    return plan.model_dump_json(by_alias=True, indent=2)
