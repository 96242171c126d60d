"""ServiceLogEntry class for maintenance records."""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional


@dataclass
class ReplacedPart:
    """A part swapped during a service. Informational only."""

    name: str
    brand: Optional[str] = None
    cost: Optional[float] = None


class ServiceLogEntry:
    """A record of maintenance performed."""

    def __init__(
            self,
            id: str,
            date: str,
            task_type: str,
            odometer: float,
            cost: float = 0,
            notes: Optional[str] = None,
            parts: Optional[List[ReplacedPart]] = None,
    ):
        self.id = id
        self.date = date
        self.task_type = task_type
        self.odometer = odometer
        self.cost = cost
        self.notes = notes
        self.parts = parts or []

    def __repr__(self) -> str:
        return f"ServiceLogEntry({self.task_type!r}, {self.date}, {self.odometer})"

    @property
    def service_date(self) -> date:
        return date.fromisoformat(self.date)

    def matches(self, task_type: str) -> bool:
        """True if this entry's free-text type contains the given task type."""
        return task_type in self.task_type
