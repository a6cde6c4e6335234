"""seat_planner package."""
from loguru import logger

from .models import (
    AssignmentConfig,
    AssignmentResult,
    CompanionPlacement,
    DietaryRestriction,
    Guest,
    Seat,
    Table,
    TableType,
    create_guest,
    create_line_table,
    create_round_table,
    create_u_shape_table,
)
from .csv_loader import load_all, load_guests, load_tables
from .schemas import dump_floor_plan, load_floor_plan, parse_floor_plan, read_floor_plan
from .seat_pairs import find_seat_pair
from .solver import auto_assign_guests, clear_assignments

logger.disable(__name__)

__all__ = [
    "AssignmentConfig",
    "AssignmentResult",
    "CompanionPlacement",
    "DietaryRestriction",
    "Guest",
    "Seat",
    "Table",
    "TableType",
    "create_guest",
    "create_line_table",
    "create_round_table",
    "create_u_shape_table",
    "load_all",
    "load_guests",
    "load_tables",
    "dump_floor_plan",
    "load_floor_plan",
    "parse_floor_plan",
    "read_floor_plan",
    "find_seat_pair",
    "auto_assign_guests",
    "clear_assignments",
]
