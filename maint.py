#!/usr/bin/env python3
"""
Unified CLI for vehicle maintenance reminders.

Commands:
  status   - Show reminders ordered by urgency and priority
  history  - View service history
  rules    - List the maintenance rule table
  usage    - Show the estimated daily distance
  done     - Preview marking a reminder as done

Vehicle files are read-only snapshots; nothing is written back.
"""

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

import yaml
from jsonschema import ValidationError
from loguru import logger
from tabulate import tabulate

from maintenance import (
    MaintenanceRule,
    Reminder,
    ServiceLogEntry,
    Status,
    estimate_daily_distance,
    generate_reminders,
    load_rules,
    load_vehicle,
    mark_done,
)
from maintenance.settings import FALLBACK_DAILY_DISTANCE

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[float]) -> str:
    """Format a distance for display."""
    return f"{km:,.0f}" if km is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"${cost:,.2f}" if cost is not None else "-"


def format_remaining(reminder: Reminder) -> str:
    """Format remaining distance for display."""
    if reminder.distance_remaining is None:
        return "-"
    if reminder.distance_remaining < 0:
        return f"-{abs(reminder.distance_remaining):,.0f}"
    return f"{reminder.distance_remaining:,.0f}"


def format_time_remaining(reminder: Reminder) -> str:
    """Format remaining time for display (e.g., '3mo 15d' or '-2mo 5d')."""
    if reminder.days_remaining is None:
        return "-"

    days = abs(reminder.days_remaining)
    sign = "-" if reminder.days_remaining < 0 else ""
    months = days // 30
    remaining_days = days % 30
    if months > 0:
        return f"{sign}{months}mo {remaining_days}d"
    return f"{sign}{days}d"


def format_interval(rule: MaintenanceRule) -> str:
    """Format a rule's intervals as 'X km / Y mo'."""
    interval = []
    if rule.is_distance_governed:
        interval.append(f"{rule.distance_interval:,.0f} km")
    if rule.is_time_governed:
        interval.append(f"{rule.month_interval} mo")
    return " / ".join(interval) if interval else "-"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def parse_date(value: Optional[str]) -> date:
    """Parse a YYYY-MM-DD argument, defaulting to today."""
    return date.fromisoformat(value) if value else date.today()


def configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


# =============================================================================
# Table builders
# =============================================================================


def make_status_table(reminders: List[Reminder]) -> List[List[str]]:
    """Convert reminders to table rows."""
    rows = []
    for reminder in reminders:
        rows.append(
            [
                reminder.title,
                reminder.status.value.upper(),
                format_km(reminder.due_odometer or None),
                reminder.due_date,
                format_remaining(reminder),
                format_time_remaining(reminder),
                "time" if reminder.is_time_based else "distance",
                f"{reminder.percentage:.0f}%",
            ]
        )
    return rows


def make_history_table(entries: List[ServiceLogEntry]) -> List[List[str]]:
    """Convert history entries to table rows."""
    rows = []
    for entry in entries:
        parts = ", ".join(p.name for p in entry.parts) if entry.parts else None
        rows.append(
            [
                entry.date,
                format_km(entry.odometer),
                entry.task_type,
                format_cost(entry.cost),
                truncate(parts),
                truncate(entry.notes),
            ]
        )
    return rows


def make_rules_table(rules: List[MaintenanceRule]) -> List[List[str]]:
    """Convert rules to table rows."""
    return [
        [rule.task_type, format_interval(rule), rule.priority, rule.category.value]
        for rule in rules
    ]


STATUS_HEADERS = [
    "Task",
    "Status",
    "Due (km)",
    "Due (date)",
    "Remaining (km)",
    "Remaining (time)",
    "Binding",
    "Progress",
]


# =============================================================================
# Commands
# =============================================================================


def cmd_status(args):
    """Show reminders ordered by urgency and priority."""
    vehicle = load_vehicle(args.vehicle_file)
    rules = load_rules(args.rules)
    now = parse_date(args.as_of)

    reminders = generate_reminders(vehicle, rules, now)

    overdue = sum(1 for r in reminders if r.status == Status.OVERDUE)
    soon = sum(1 for r in reminders if r.status == Status.SOON)

    print(f"Vehicle: {vehicle.name} ({vehicle.model_year})")
    print(f"Current odometer: {vehicle.current_odometer:,.0f} km (as of {now})")
    print(f"Rules: {len(rules)}  Overdue: {overdue}  Due soon: {soon}")
    print()
    print(
        tabulate(make_status_table(reminders), headers=STATUS_HEADERS, tablefmt="simple")
    )
    return 0


def cmd_history(args):
    """View service history."""
    vehicle = load_vehicle(args.vehicle_file)

    print(f"Vehicle: {vehicle.name} ({vehicle.model_year})")
    print(f"Current odometer: {vehicle.current_odometer:,.0f} km")
    print(f"Total services: {len(vehicle.history)}")
    if vehicle.total_cost > 0:
        print(f"Total cost: {format_cost(vehicle.total_cost)}")
    print()

    if not vehicle.history:
        print("No history entries found.")
        return 0

    headers = ["Date", "Odometer", "Service", "Cost", "Parts", "Notes"]
    print(
        tabulate(make_history_table(vehicle.history), headers=headers, tablefmt="simple")
    )
    return 0


def cmd_rules(args):
    """List the maintenance rule table."""
    rules = load_rules(args.rules)

    print(f"Rules: {len(rules)}")
    print()
    headers = ["Task", "Interval", "Priority", "Category"]
    print(tabulate(make_rules_table(rules), headers=headers, tablefmt="simple"))
    return 0


def cmd_usage(args):
    """Show the estimated daily distance."""
    vehicle = load_vehicle(args.vehicle_file)
    rate = estimate_daily_distance(vehicle.history)

    print(f"Vehicle: {vehicle.name} ({vehicle.model_year})")
    print(f"Estimated usage: {rate:,.1f} km/day ({rate * 365:,.0f} km/year)")
    if rate == FALLBACK_DAILY_DISTANCE:
        print("(fallback - not enough service history to estimate)")
    return 0


def cmd_done(args):
    """Preview marking a reminder as done and the regenerated schedule."""
    vehicle = load_vehicle(args.vehicle_file)
    rules = load_rules(args.rules)
    now = parse_date(args.date)

    reminders = generate_reminders(vehicle, rules, now)
    wanted = args.title.lower()
    reminder = next((r for r in reminders if r.title.lower() == wanted), None)

    if reminder is None:
        print(f"Error: Unknown task '{args.title}'")
        print("\nAvailable tasks:")
        for r in reminders:
            print(f"  {r.title}")
        return 1

    entry = mark_done(vehicle, reminder, now.isoformat(), cost=args.cost, notes=args.notes)

    print(f"Marking done on {vehicle.name}:")
    print(f"  Task:     {entry.task_type}")
    print(f"  Date:     {entry.date}")
    print(f"  Odometer: {entry.odometer:,.0f}")
    if entry.cost:
        print(f"  Cost:     {format_cost(entry.cost)}")
    if entry.notes:
        print(f"  Notes:    {entry.notes}")
    print()

    updated = [r for r in generate_reminders(vehicle, rules, now) if r.title == entry.task_type]
    print("Next due:")
    print(tabulate(make_status_table(updated), headers=STATUS_HEADERS, tablefmt="simple"))
    print()
    print("(preview - vehicle file not changed)")
    return 0


# =============================================================================
# Main
# =============================================================================


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Vehicle maintenance reminders",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s vehicles/civic.yaml status
  %(prog)s vehicles/civic.yaml status --as-of 2024-03-01
  %(prog)s vehicles/civic.yaml --rules my-rules.yaml rules
  %(prog)s vehicles/civic.yaml history
  %(prog)s vehicles/civic.yaml usage
  %(prog)s vehicles/civic.yaml done "Oil Change" --cost 65
""",
    )
    parser.add_argument(
        "vehicle_file",
        type=Path,
        help="Path to vehicle YAML file",
    )
    parser.add_argument(
        "--rules",
        type=Path,
        help="Rule table YAML file (default: $MAINT_RULES_FILE or built-in table)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log scheduling decisions to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Status subcommand
    status_parser = subparsers.add_parser(
        "status", help="Show reminders ordered by urgency and priority"
    )
    status_parser.add_argument(
        "--as-of",
        type=str,
        help="Evaluate as of date YYYY-MM-DD (default: today)",
    )

    subparsers.add_parser("history", help="View service history")
    subparsers.add_parser("rules", help="List the maintenance rule table")
    subparsers.add_parser("usage", help="Show the estimated daily distance")

    # Done subcommand
    done_parser = subparsers.add_parser(
        "done", help="Preview marking a reminder as done"
    )
    done_parser.add_argument(
        "title",
        type=str,
        help="Reminder title (e.g., 'Oil Change')",
    )
    done_parser.add_argument(
        "--date",
        type=str,
        help="Service date in YYYY-MM-DD format (default: today)",
    )
    done_parser.add_argument(
        "--cost",
        type=float,
        default=0,
        help="Cost of service",
    )
    done_parser.add_argument(
        "--notes",
        type=str,
        help="Notes about the service",
    )

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    # Validate input files exist
    if not args.vehicle_file.exists():
        print(f"Error: File not found: {args.vehicle_file}")
        return 1
    if args.rules is not None and not args.rules.exists():
        print(f"Error: File not found: {args.rules}")
        return 1

    handlers = {
        "status": cmd_status,
        "history": cmd_history,
        "rules": cmd_rules,
        "usage": cmd_usage,
        "done": cmd_done,
    }

    # Dispatch to command handler
    try:
        return handlers[args.command](args)
    except yaml.YAMLError as e:
        print(f"Error: YAML parse error: {e}")
    except ValidationError as e:
        print(f"Error: Schema validation error: {e.message}")
        if e.path:
            print(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except ValueError as e:
        print(f"Error: {e}")
    return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
