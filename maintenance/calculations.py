"""Helper functions for reminder due-point calculations."""

import math
from datetime import date, timedelta
from typing import Optional, Sequence, Tuple

from dateutil.relativedelta import relativedelta
from loguru import logger

from .service_log import ServiceLogEntry
from .settings import (
    FALLBACK_DAILY_DISTANCE,
    FAR_FUTURE_YEARS,
    MIN_HISTORY_SPAN_DAYS,
    SOON_DAYS,
    SOON_DISTANCE,
    SOON_PERCENTAGE,
)
from .status import Status


def estimate_daily_distance(history: Sequence[ServiceLogEntry]) -> float:
    """
    Estimate average km driven per day from service history.

    Falls back to FALLBACK_DAILY_DISTANCE when there are fewer than two
    entries, the entries span MIN_HISTORY_SPAN_DAYS or less, or the
    odometer did not advance. Always returns a positive rate.
    """
    if len(history) < 2:
        logger.debug(f"Usage rate: {len(history)} history entries, using fallback")
        return FALLBACK_DAILY_DISTANCE

    ordered = sorted(history, key=lambda h: h.service_date)
    first, last = ordered[0], ordered[-1]
    span_days = (last.service_date - first.service_date).days
    distance = last.odometer - first.odometer

    if span_days <= MIN_HISTORY_SPAN_DAYS or distance <= 0:
        logger.debug(
            f"Usage rate: span {span_days}d / {distance:,.0f} km too small, using fallback"
        )
        return FALLBACK_DAILY_DISTANCE
    return distance / span_days


def calc_due_date(reference: date, month_interval: int, now: date) -> date:
    """
    Calculate the time-based due date: reference + interval months.

    Rules with no time interval get a date far enough out that the time
    axis never binds.
    """
    if month_interval <= 0:
        return now + relativedelta(years=FAR_FUTURE_YEARS)
    return reference + relativedelta(months=int(month_interval))


def align_distance_reference(current_odometer: float, interval: float) -> float:
    """Nearest lower multiple of interval, assuming the vehicle is mid-interval."""
    return math.floor(current_odometer / interval) * interval


def calc_due_odometer(
    last_odometer: Optional[float], interval: float, current_odometer: float
) -> Optional[float]:
    """
    Calculate next due odometer reading.

    - With history: last_odometer + interval
    - Without history: aligned reference + interval
    - No distance interval: None
    """
    if interval <= 0:
        return None
    if last_odometer is not None:
        return last_odometer + interval
    return align_distance_reference(current_odometer, interval) + interval


def predict_date(now: date, distance_remaining: float, daily_distance: float) -> date:
    """Convert remaining distance into a calendar date at the given usage rate."""
    if distance_remaining <= 0:
        return now
    return now + timedelta(days=math.ceil(distance_remaining / daily_distance))


def clamp_percentage(fraction: float) -> float:
    return max(0.0, min(1.0, fraction)) * 100


def time_percentage(interval_days: float, days_remaining: int) -> float:
    """Share of the time interval already used up."""
    if interval_days <= 0:
        return 0.0
    return clamp_percentage((interval_days - days_remaining) / interval_days)


def distance_percentage(interval: float, distance_remaining: float) -> float:
    """Share of the distance interval already used up."""
    if interval <= 0:
        return 0.0
    return clamp_percentage((interval - distance_remaining) / interval)


def check_status(
    days_remaining: int,
    percentage: float,
    distance_remaining: Optional[float] = None,
) -> Status:
    """
    Classify urgency.

    distance_remaining is None when the rule is not distance-governed.
    """
    if days_remaining < 0:
        return Status.OVERDUE
    if distance_remaining is not None and distance_remaining < 0:
        return Status.OVERDUE
    if percentage > SOON_PERCENTAGE or days_remaining < SOON_DAYS:
        return Status.SOON
    if distance_remaining is not None and distance_remaining < SOON_DISTANCE:
        return Status.SOON
    return Status.OK


def priority_score(status: Status, priority: int, percentage: float) -> Tuple[int, int, float]:
    """
    Sort key: severity tier, then rule priority, then progress.

    Compared as a tuple so no priority can lift a reminder out of its tier.
    """
    return (status.weight, priority, percentage)
