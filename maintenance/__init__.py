"""
Vehicle maintenance reminder scheduling.

This package predicts when maintenance falls due:
- Status: Urgency levels (OVERDUE, SOON, OK)
- MaintenanceRule: Time/distance interval definitions
- ServiceLogEntry: Service records
- Vehicle: Odometer state and service history
- Reminder: Calculated due point for one rule
- generate_reminders: Ordered reminders for a vehicle
"""

from .status import Status
from .rule import MaintenanceRule, TaskCategory
from .service_log import ServiceLogEntry, ReplacedPart
from .vehicle import Vehicle
from .reminder import Reminder
from .calculations import (
    estimate_daily_distance,
    calc_due_date,
    calc_due_odometer,
    check_status,
)
from .generator import generate_reminders, sort_reminders, mark_done
from .loader import load_rules, load_vehicle

__all__ = [
    "Status",
    "MaintenanceRule",
    "TaskCategory",
    "ServiceLogEntry",
    "ReplacedPart",
    "Vehicle",
    "Reminder",
    "estimate_daily_distance",
    "calc_due_date",
    "calc_due_odometer",
    "check_status",
    "generate_reminders",
    "sort_reminders",
    "mark_done",
    "load_rules",
    "load_vehicle",
]
