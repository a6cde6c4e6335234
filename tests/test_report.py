from seat_planner.models import DietaryRestriction, Guest, create_line_table
from seat_planner.report import build_report, compute_table_stats, dietary_summary

V = DietaryRestriction.VEGETARIAN
L = DietaryRestriction.LACTOSE_INTOLERANT


def test_dietary_summary_counts_each_guest_once():
    guests = [
        Guest(id="a", name="A", dietary_restrictions=[L, V, V]),
        Guest(id="b", name="B", dietary_restrictions=[V]),
        Guest(id="c", name="C"),
    ]
    assert dietary_summary(guests) == {V: 2, L: 1}


def test_compute_table_stats():
    table = create_line_table("Long", 2, id="t1")
    guests = {
        "a": Guest(id="a", name="Ann", dietary_restrictions=[V], assigned_table_id="t1", seat_position=3),
        "b": Guest(id="b", name="Ben", assigned_table_id="t1", seat_position=0),
    }
    table.seats[3].guest_id = "a"
    table.seats[0].guest_id = "b"
    table.assigned_guests = ["a", "b"]
    assert compute_table_stats(table, guests) == {
        "table": "Long",
        "table_type": "LINE",
        "capacity": 4,
        "seated": 2,
        "free": 2,
        "members": "Ben|Ann",
        "dietary": "Vegetarian:1",
    }


def test_build_report_empty_table():
    (row,) = build_report([create_line_table("Empty", 1, id="t1")], [])
    assert row["seated"] == 0
    assert row["members"] == ""
    assert row["dietary"] == ""
