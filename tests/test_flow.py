import io
import json
import pathlib

import pytest

from seat_planner import cli, csv_loader, report, schemas, solver
from seat_planner.models import AssignmentConfig, DietaryRestriction

DATA_DIR = pathlib.Path(__file__).parent / "data"


def test_full_flow():
    guests, tables = csv_loader.load_all(DATA_DIR / "guests.csv", DATA_DIR / "tables.csv")
    assert [t.capacity for t in tables] == [4, 5, 4]

    result = solver.auto_assign_guests(guests, tables)

    # all guests assigned
    assert result.success is True
    assert result.message == "Assigned all 8 guests (2 of 2 pairs seated together)"

    # companions share a table
    by_id = {g.id: g for g in result.guests}
    for g in result.guests:
        if g.guest_of:
            assert g.assigned_table_id == by_id[g.guest_of].assigned_table_id

    # table capacities respected
    for t in result.tables:
        assert len(t.assigned_guests) <= t.capacity

    rows = {r["table"]: r for r in report.build_report(result.tables, result.guests)}
    assert rows["Round 1"]["members"] == "Alice|Bob|Frank"
    assert rows["Banquet"]["seated"] == 3
    assert rows["Banquet"]["free"] == 2
    assert rows["Head"]["dietary"] == "Vegetarian:1|Vegan:1|Lactose Intolerant:1"


def test_load_guests():
    guests = csv_loader.load_guests(DATA_DIR / "guests.csv")
    assert guests[1].guest_of == "g1"
    assert guests[0].guest_of is None
    assert guests[2].dietary_restrictions == [
        DietaryRestriction.VEGAN,
        DietaryRestriction.LACTOSE_INTOLERANT,
    ]
    assert guests[3].dietary_restrictions == [DietaryRestriction.NONE]


def test_load_guests_keeps_unknown_guest_of():
    text = "id,name,guest_of\n1,Alice,99\n2,Bob,1\n"
    guests = csv_loader.load_guests(io.StringIO(text))
    assert [g.guest_of for g in guests] == ["99", "1"]


def test_load_guests_rejects_duplicates():
    with pytest.raises(ValueError, match="Duplicate"):
        csv_loader.load_guests(io.StringIO("id,name\n1,Alice\n1,Bob\n"))


def test_load_guests_requires_columns():
    with pytest.raises(ValueError, match="missing columns"):
        csv_loader.load_guests(io.StringIO("name\nAlice\n"))


def test_load_tables_rejects_unknown_type():
    with pytest.raises(ValueError, match="Unknown table type"):
        csv_loader.load_tables(io.StringIO("id,name,table_type,seat_count\nt1,Oval,OVAL,4\n"))


def test_load_tables_requires_size_column():
    with pytest.raises(ValueError, match="seat_count is required for ROUND tables"):
        csv_loader.load_tables(io.StringIO("id,name,table_type,seat_count\nt1,Round,ROUND,\n"))
    with pytest.raises(ValueError, match="seats_per_side is required for LINE tables"):
        csv_loader.load_tables(io.StringIO("id,name,table_type,seat_count\nt1,Long,LINE,8\n"))
    with pytest.raises(ValueError, match="left_seats is required for U_SHAPE tables"):
        csv_loader.load_tables(io.StringIO("id,name,table_type,top_seats,right_seats\nt1,Head,U_SHAPE,3,2\n"))


def test_cli_rejects_table_without_size(tmp_path):
    tables = tmp_path / "tables.csv"
    tables.write_text("id,name,table_type,seat_count\nt1,Round,ROUND,\n")
    assert cli.main(["--guests", str(DATA_DIR / "guests.csv"), "--tables", str(tables)]) == 2


def test_load_tables_line_flags():
    text = (
        "id,name,table_type,seats_per_side,single_sided,end_seat_left,end_seat_right\n"
        "t1,Bar,line,3,true,false,true\n"
    )
    (table,) = csv_loader.load_tables(io.StringIO(text))
    assert table.single_sided is True
    assert table.end_seat_right is True
    assert table.capacity == 4


def test_floor_plan_flow(tmp_path):
    guests, tables = schemas.load_floor_plan(DATA_DIR / "floor_plan.json")
    result = solver.auto_assign_guests(guests, tables, AssignmentConfig())
    assert result.message == "Assigned all 4 guests (1 of 1 pair seated together)"

    out = tmp_path / "plan.json"
    out.write_text(schemas.dump_floor_plan(result.guests, result.tables))
    reloaded_guests, reloaded_tables = schemas.load_floor_plan(out)
    dave = next(g for g in reloaded_guests if g.name == "Dave")
    assert (dave.assigned_table_id, dave.seat_position) == ("t1", 2)
    assert reloaded_tables[0].seats[2].guest_id == dave.id


def test_cli(tmp_path, capsys):
    out_assign = tmp_path / "out" / "assignments.csv"
    out_report = tmp_path / "out" / "report.csv"
    code = cli.main([
        "--guests", str(DATA_DIR / "guests.csv"),
        "--tables", str(DATA_DIR / "tables.csv"),
        "--out-assignments", str(out_assign),
        "--out-report", str(out_report),
    ])
    assert code == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Dave,Banquet,1"
    assert "[REPORT] Round 1 type=ROUND seated=3/4 dietary=Vegetarian:1" in lines
    assert lines[-1] == "Assigned all 8 guests (2 of 2 pairs seated together)"

    rows = out_assign.read_text().splitlines()
    assert rows[0] == "guest,table,seat"
    assert len(rows) == 9
    assert out_report.read_text().splitlines()[0] == "table,table_type,capacity,seated,free,members,dietary"


def test_cli_sequential(capsys):
    code = cli.main([
        "--guests", str(DATA_DIR / "guests.csv"),
        "--tables", str(DATA_DIR / "tables.csv"),
        "--sequential",
    ])
    assert code == 0
    out = capsys.readouterr().out.splitlines()
    round_one = [line.split(",")[0] for line in out if ",Round 1," in line]
    assert round_one == ["Alice", "Bob", "Dave", "Erin"]


def test_cli_floor_plan(tmp_path, capsys):
    out_plan = tmp_path / "assigned.json"
    code = cli.main(["--floor-plan", str(DATA_DIR / "floor_plan.json"), "--out-floor-plan", str(out_plan)])
    assert code == 0
    guests, _ = schemas.load_floor_plan(out_plan)
    assert all(g.assigned_table_id is not None for g in guests)

    # layout and labels from the input document are written back
    data = json.loads(out_plan.read_text())
    assert data["id"] == "3f0c1c2e-6c1a-4d8e-9d53-5d7c8a1f0b11"
    assert data["labels"][0]["text"] == "Dance floor"
    assert data["tables"][1]["position"] == {"x": 400.0, "y": 80.0}
    assert data["tables"][1]["rotation"] == 90.0


def test_cli_reports_unassigned(tmp_path, capsys):
    tables = tmp_path / "tables.csv"
    tables.write_text("id,name,table_type,seat_count\nt1,Tiny,ROUND,2\n")
    code = cli.main(["--guests", str(DATA_DIR / "guests.csv"), "--tables", str(tables)])
    assert code == 1
    assert capsys.readouterr().out.splitlines()[-1].startswith("Assigned 2. 6 couldn't fit")


def test_cli_bad_input(tmp_path):
    tables = tmp_path / "tables.csv"
    tables.write_text("id,name,table_type,seat_count\nt1,Oval,OVAL,4\n")
    assert cli.main(["--guests", str(DATA_DIR / "guests.csv"), "--tables", str(tables)]) == 2


def test_cli_requires_input():
    with pytest.raises(SystemExit):
        cli.main(["--guests", str(DATA_DIR / "guests.csv")])
