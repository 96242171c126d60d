"""MaintenanceRule class for maintenance interval definitions."""

from enum import Enum

from .settings import DAYS_PER_MONTH


class TaskCategory(Enum):
    """Display tag for a rule. Opaque to the scheduling engine."""

    OIL = "oil"
    TIRE = "tire"
    BRAKE = "brake"
    BATTERY = "battery"
    FLUID = "fluid"
    FILTER = "filter"
    OTHER = "other"


class MaintenanceRule:
    """A maintenance rule defining when a task should be performed."""

    def __init__(
            self,
            task_type: str,
            month_interval: int = 0,
            distance_interval: float = 0,
            priority: int = 1,
            category: TaskCategory = TaskCategory.OTHER,
    ):
        self.task_type = task_type
        self.month_interval = month_interval or 0
        self.distance_interval = distance_interval or 0
        self.priority = priority
        self.category = category

    def __repr__(self) -> str:
        return (
            f"MaintenanceRule({self.task_type!r}, months={self.month_interval}, "
            f"km={self.distance_interval}, priority={self.priority})"
        )

    @property
    def is_time_governed(self) -> bool:
        return self.month_interval > 0

    @property
    def is_distance_governed(self) -> bool:
        return self.distance_interval > 0

    @property
    def interval_days(self) -> float:
        """Approximate length of the time interval in days."""
        return self.month_interval * DAYS_PER_MONTH
