"""Reminder generation - one classified, prioritized reminder per rule."""

import math
import uuid
from datetime import date
from typing import List, Optional, Sequence

from loguru import logger

from .calculations import (
    calc_due_date,
    calc_due_odometer,
    check_status,
    distance_percentage,
    estimate_daily_distance,
    predict_date,
    priority_score,
    time_percentage,
)
from .reminder import Reminder
from .rule import MaintenanceRule
from .service_log import ServiceLogEntry
from .vehicle import Vehicle


def calculate_reminder(
    vehicle: Vehicle,
    rule: MaintenanceRule,
    now: date,
    daily_distance: float,
) -> Reminder:
    """
    Calculate the effective due point for a single rule.

    Logic:
    - Time axis: last service date (or purchase date) + monthInterval
    - Distance axis: last service odometer (or aligned odometer) + interval
    - Distance remaining is turned into a predicted date at daily_distance
    - Whichever axis gives the earlier date binds; ties go to distance
    """
    last_service = vehicle.find_last_service(rule.task_type)
    current = vehicle.current_odometer

    if last_service is not None:
        time_reference = last_service.service_date
        last_odometer = last_service.odometer
    else:
        time_reference = vehicle.effective_purchase_date
        last_odometer = None

    time_due = calc_due_date(time_reference, rule.month_interval, now)

    due_odometer = calc_due_odometer(last_odometer, rule.distance_interval, current)
    if due_odometer is None:
        distance_remaining = math.inf
        predicted = None
    else:
        distance_remaining = due_odometer - current
        predicted = predict_date(now, distance_remaining, daily_distance)

    if predicted is not None and (
        not rule.is_time_governed or predicted <= time_due
    ):
        is_time_based = False
        effective_date = predicted
    else:
        is_time_based = True
        effective_date = time_due

    days_remaining = (effective_date - now).days

    if is_time_based:
        percentage = time_percentage(rule.interval_days, days_remaining)
    else:
        percentage = distance_percentage(rule.distance_interval, distance_remaining)

    governed_remaining = distance_remaining if due_odometer is not None else None
    status = check_status(days_remaining, percentage, governed_remaining)

    logger.debug(
        f"{rule.task_type}: {'time' if is_time_based else 'distance'} binds, "
        f"due {effective_date.isoformat()} ({days_remaining}d), {status.value}"
    )

    return Reminder(
        title=rule.task_type,
        due_odometer=due_odometer or 0,
        due_date=effective_date.isoformat(),
        status=status,
        percentage=percentage,
        is_time_based=is_time_based,
        priority=rule.priority,
        category=rule.category,
        distance_remaining=governed_remaining,
        days_remaining=days_remaining,
    )


def sort_reminders(reminders: Sequence[Reminder]) -> List[Reminder]:
    """Order by score descending: overdue, then soon, then ok."""
    return sorted(
        reminders,
        key=lambda r: priority_score(r.status, r.priority, r.percentage),
        reverse=True,
    )


def generate_reminders(
    vehicle: Vehicle,
    rules: Sequence[MaintenanceRule],
    now: Optional[date] = None,
) -> List[Reminder]:
    """
    Calculate and order reminders for every rule.

    Pure for fixed inputs: the vehicle and rules are only read, and a new
    list is returned on every call. now defaults to today.
    """
    if now is None:
        now = date.today()
    daily_distance = estimate_daily_distance(vehicle.history)
    reminders = [
        calculate_reminder(vehicle, rule, now, daily_distance) for rule in rules
    ]
    return sort_reminders(reminders)


def mark_done(
    vehicle: Vehicle,
    reminder: Reminder,
    service_date: str,
    cost: float = 0,
    notes: Optional[str] = None,
    entry_id: Optional[str] = None,
) -> ServiceLogEntry:
    """
    Record a reminder as serviced at the vehicle's current odometer.

    The entry is prepended to the vehicle history; call generate_reminders
    again to get the updated schedule.
    """
    entry = ServiceLogEntry(
        id=entry_id or uuid.uuid4().hex,
        date=service_date,
        task_type=reminder.title,
        odometer=vehicle.current_odometer,
        cost=cost,
        notes=notes,
    )
    vehicle.add_service(entry)
    logger.info(f"Logged {entry.task_type} for {vehicle.name} at {entry.odometer:,.0f} km")
    return entry
