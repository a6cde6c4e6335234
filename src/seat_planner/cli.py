"""Command line interface for seat_planner."""
from __future__ import annotations

import argparse
import csv
import sys
from pathlib import Path
from typing import Sequence

from loguru import logger
from pydantic import ValidationError

from .csv_loader import load_all
from .logger_config import configure_logging
from .models import AssignmentConfig, CompanionPlacement
from .report import REPORT_FIELDS, build_report
from .schemas import dump_floor_plan, read_floor_plan
from .solver import auto_assign_guests


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Automatic event seating assignment")
    parser.add_argument("--guests", type=Path, help="Path to guests.csv")
    parser.add_argument("--tables", type=Path, help="Path to tables.csv")
    parser.add_argument("--floor-plan", type=Path,
                        help="Floor-plan JSON with tables and guests, instead of the CSV files.")
    parser.add_argument("--sequential", action="store_true",
                        help="Fill each table before moving to the next instead of balancing.")
    parser.add_argument("--randomize", action="store_true",
                        help="Shuffle guests instead of seating them alphabetically.")
    parser.add_argument("--seed", type=int, help="Random seed used with --randomize.")
    parser.add_argument("--companion-placement", default=CompanionPlacement.NEXT_TO.value,
                        choices=[p.value for p in CompanionPlacement],
                        help="Seat companions next to or across from their host (default: next-to).")
    parser.add_argument("--out-assignments", type=Path,
                        help="Write assignments CSV: guest,table,seat.")
    parser.add_argument("--out-report", type=Path,
                        help="Write per-table report CSV with occupancy and dietary needs.")
    parser.add_argument("--out-floor-plan", type=Path,
                        help="Write the assigned guests and tables as floor-plan JSON.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every seating decision.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by ``seat-planner`` and ``python -m seat_planner.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.floor_plan and not (args.guests and args.tables):
        parser.error("either --floor-plan or both --guests and --tables are required")

    configure_logging(args.verbose)

    plan = None
    try:
        if args.floor_plan:
            plan = read_floor_plan(args.floor_plan)
            guests, tables = plan.to_models()
        else:
            guests, tables = load_all(args.guests, args.tables)
    except (OSError, ValueError, ValidationError) as e:
        logger.error("Could not load input: {}", e)
        return 2

    config = AssignmentConfig(
        balance_guests=not args.sequential,
        randomize=args.randomize,
        companion_placement=CompanionPlacement(args.companion_placement),
        seed=args.seed,
    )
    result = auto_assign_guests(guests, tables, config)

    table_names = {t.id: t.name for t in result.tables}
    seated = sorted(
        (g for g in result.guests if g.assigned_table_id is not None),
        key=lambda g: (table_names[g.assigned_table_id], g.seat_position),
    )
    for guest in seated:
        print(f"{guest.name},{table_names[guest.assigned_table_id]},{guest.seat_position + 1}")

    if args.out_assignments:
        args.out_assignments.parent.mkdir(parents=True, exist_ok=True)
        with args.out_assignments.open("w", newline="") as f:
            w = csv.writer(f)
            w.writerow(["guest", "table", "seat"])
            for guest in seated:
                w.writerow([guest.name, table_names[guest.assigned_table_id], guest.seat_position + 1])

    report = build_report(result.tables, result.guests)
    for s in report:
        print(f"[REPORT] {s['table']} type={s['table_type']} seated={s['seated']}/{s['capacity']} "
              f"dietary={s['dietary'] or '-'}")

    if args.out_report:
        args.out_report.parent.mkdir(parents=True, exist_ok=True)
        with args.out_report.open("w", newline="") as f:
            w = csv.DictWriter(f, fieldnames=REPORT_FIELDS)
            w.writeheader()
            w.writerows(report)

    if args.out_floor_plan:
        args.out_floor_plan.parent.mkdir(parents=True, exist_ok=True)
        args.out_floor_plan.write_text(dump_floor_plan(result.guests, result.tables, base=plan), encoding="utf-8")

    print(result.message)
    return 0 if result.success else 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
