"""Reminder dataclass for calculated service status."""

from dataclasses import dataclass
from typing import Optional

from .rule import TaskCategory
from .status import Status


@dataclass
class Reminder:
    """Calculated due information for one rule. Recomputed on every call."""

    title: str
    due_odometer: float
    due_date: str
    status: Status
    percentage: float
    is_time_based: bool
    priority: int
    category: TaskCategory = TaskCategory.OTHER
    distance_remaining: Optional[float] = None
    days_remaining: Optional[int] = None

    @property
    def is_due(self) -> bool:
        return self.status in (Status.OVERDUE, Status.SOON)
