#!/usr/bin/env python3
"""Tests for maint CLI formatting, table helpers and commands."""

import pytest

from maintenance import (
    MaintenanceRule,
    Reminder,
    ReplacedPart,
    ServiceLogEntry,
    Status,
    TaskCategory,
)
from maint import (
    format_km,
    format_cost,
    format_interval,
    format_remaining,
    format_time_remaining,
    truncate,
    make_status_table,
    make_history_table,
    make_rules_table,
    main,
)


def make_reminder(**overrides):
    fields = dict(
        title="Oil Change",
        due_odometer=50000,
        due_date="2024-06-16",
        status=Status.OK,
        percentage=52.0,
        is_time_based=False,
        priority=3,
        category=TaskCategory.OIL,
        distance_remaining=4800,
        days_remaining=107,
    )
    fields.update(overrides)
    return Reminder(**fields)


class TestFormatKm:
    """Tests for format_km."""

    def test_formats_number(self):
        assert format_km(50000) == "50,000"
        assert format_km(0) == "0"

    def test_none_returns_dash(self):
        assert format_km(None) == "-"


class TestFormatCost:
    """Tests for format_cost."""

    def test_formats_number(self):
        assert format_cost(75.50) == "$75.50"
        assert format_cost(0) == "$0.00"

    def test_none_returns_dash(self):
        assert format_cost(None) == "-"


class TestFormatRemaining:
    """Tests for format_remaining."""

    def test_none_returns_dash(self):
        assert format_remaining(make_reminder(distance_remaining=None)) == "-"

    def test_positive_remaining(self):
        assert format_remaining(make_reminder(distance_remaining=2500)) == "2,500"

    def test_negative_remaining_overdue(self):
        assert format_remaining(make_reminder(distance_remaining=-1500)) == "-1,500"


class TestFormatTimeRemaining:
    """Tests for format_time_remaining."""

    def test_none_returns_dash(self):
        assert format_time_remaining(make_reminder(days_remaining=None)) == "-"

    def test_positive_months_and_days(self):
        assert format_time_remaining(make_reminder(days_remaining=105)) == "3mo 15d"

    def test_positive_days_only(self):
        assert format_time_remaining(make_reminder(days_remaining=14)) == "14d"

    def test_negative_overdue_months(self):
        assert format_time_remaining(make_reminder(days_remaining=-65)) == "-2mo 5d"

    def test_negative_overdue_days_only(self):
        assert format_time_remaining(make_reminder(days_remaining=-10)) == "-10d"


class TestFormatInterval:
    """Tests for format_interval."""

    def test_both_axes(self):
        assert format_interval(MaintenanceRule("Oil Change", 6, 10000)) == "10,000 km / 6 mo"

    def test_single_axis(self):
        assert format_interval(MaintenanceRule("Tire Rotation", 0, 10000)) == "10,000 km"
        assert format_interval(MaintenanceRule("Brake Fluid", 24, 0)) == "24 mo"


class TestTruncate:
    """Tests for truncate."""

    def test_none_returns_dash(self):
        assert truncate(None) == "-"

    def test_short_text_unchanged(self):
        assert truncate("short") == "short"

    def test_long_text_truncated_with_ellipsis(self):
        # max_len=15 → 12 chars + "..." = 15 total
        assert truncate("this is a very long note", max_len=15) == "this is a ve..."


class TestMakeStatusTable:
    """Tests for make_status_table."""

    def test_empty_list_returns_empty_rows(self):
        assert make_status_table([]) == []

    def test_single_reminder_row(self):
        rows = make_status_table([make_reminder()])
        assert rows == [
            [
                "Oil Change",
                "OK",
                "50,000",
                "2024-06-16",
                "4,800",
                "3mo 17d",
                "distance",
                "52%",
            ]
        ]

    def test_time_only_reminder(self):
        reminder = make_reminder(
            title="Battery Check",
            due_odometer=0,
            distance_remaining=None,
            is_time_based=True,
            status=Status.OVERDUE,
            days_remaining=-10,
            percentage=100,
        )
        row = make_status_table([reminder])[0]
        assert row[1] == "OVERDUE"
        assert row[2] == "-"
        assert row[4] == "-"
        assert row[5] == "-10d"
        assert row[6] == "time"


class TestMakeHistoryTable:
    """Tests for make_history_table."""

    def test_converts_entries_to_rows(self):
        entries = [
            ServiceLogEntry(
                "l3",
                "2023-01-10",
                "Brake Pads",
                30000,
                cost=250,
                notes="Front pads replaced",
                parts=[ReplacedPart("Front pads", "Brembo", 120)],
            ),
        ]
        rows = make_history_table(entries)
        assert rows == [
            [
                "2023-01-10",
                "30,000",
                "Brake Pads",
                "$250.00",
                "Front pads",
                "Front pads replaced",
            ]
        ]

    def test_no_parts_or_notes(self):
        rows = make_history_table([ServiceLogEntry("l1", "2023-10-15", "Oil Change", 40000)])
        assert rows[0][4] == "-"
        assert rows[0][5] == "-"


class TestMakeRulesTable:
    """Tests for make_rules_table."""

    def test_rows(self):
        rules = [MaintenanceRule("Oil Change", 6, 10000, 3, TaskCategory.OIL)]
        assert make_rules_table(rules) == [["Oil Change", "10,000 km / 6 mo", 3, "oil"]]


# =============================================================================
# Command tests
# =============================================================================


@pytest.fixture
def vehicle_file(tmp_path):
    path = tmp_path / "civic.yaml"
    path.write_text("""
vehicle:
  id: civic
  name: Honda Civic
  modelYear: 2019
  currentOdometer: 45200
  purchaseDate: '2019-05-01'
history:
  - id: l1
    date: '2023-10-15'
    taskType: Oil Change
    cost: 65
    odometer: 40000
  - id: l2
    date: '2023-06-20'
    taskType: Tire Rotation
    cost: 40
    odometer: 35000
""")
    return path


class TestCommands:
    """Tests for maint subcommands."""

    def test_status(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "status", "--as-of", "2024-03-01"]) == 0
        out = capsys.readouterr().out
        assert "Vehicle: Honda Civic (2019)" in out
        assert "Oil Change" in out
        assert "Spark Plugs" in out

    def test_status_with_rules_file(self, vehicle_file, tmp_path, capsys):
        rules = tmp_path / "rules.yaml"
        rules.write_text("rules:\n  - taskType: Chain Lube\n    distanceInterval: 800\n")

        assert main([str(vehicle_file), "--rules", str(rules), "status"]) == 0
        out = capsys.readouterr().out
        assert "Chain Lube" in out
        assert "Oil Change" not in out

    def test_history(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "history"]) == 0
        out = capsys.readouterr().out
        assert "Total services: 2" in out
        assert "Total cost: $105.00" in out

    def test_rules(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "rules"]) == 0
        assert "Brake Fluid" in capsys.readouterr().out

    def test_usage(self, vehicle_file, capsys):
        """5000 km over 117 days."""
        assert main([str(vehicle_file), "usage"]) == 0
        out = capsys.readouterr().out
        assert "42.7 km/day" in out
        assert "fallback" not in out

    def test_done_preview(self, vehicle_file, capsys):
        before = vehicle_file.read_text()

        assert main([str(vehicle_file), "done", "oil change", "--date", "2024-03-01"]) == 0

        out = capsys.readouterr().out
        assert "Task:     Oil Change" in out
        assert "55,200" in out
        assert "preview" in out
        assert vehicle_file.read_text() == before

    def test_done_unknown_task(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "done", "Flux Capacitor"]) == 1
        assert "Unknown task" in capsys.readouterr().out

    def test_missing_vehicle_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.yaml"), "status"]) == 1
        assert "File not found" in capsys.readouterr().out

    def test_bad_purchase_date(self, tmp_path, capsys):
        path = tmp_path / "civic.yaml"
        path.write_text(
            "vehicle:\n  id: civic\n  name: Civic\n  modelYear: 2019\n"
            "  purchaseDate: soon\n"
        )

        assert main([str(path), "status"]) == 1
        out = capsys.readouterr().out
        assert out.startswith("Error: Schema validation error")
        assert "at path: vehicle.purchaseDate" in out

    def test_bad_as_of_date(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "status", "--as-of", "tomorrow"]) == 1
        assert capsys.readouterr().out.startswith("Error:")
