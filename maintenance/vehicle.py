"""Vehicle class - the snapshot the reminder engine schedules against."""

from datetime import date
from typing import List, Optional

from .service_log import ServiceLogEntry


class Vehicle:
    """Vehicle identification, odometer state, and service history."""

    def __init__(
        self,
        id: str,
        name: str,
        model_year: int,
        current_odometer: float = 0,
        purchase_date: Optional[str] = None,
        history: Optional[List[ServiceLogEntry]] = None,
    ):
        self.id = id
        self.name = name
        self.model_year = model_year
        self.current_odometer = current_odometer
        self.purchase_date = purchase_date
        # Newest first
        self.history = history if history is not None else []

    @property
    def effective_purchase_date(self) -> date:
        """Purchase date, falling back to January 1 of the model year."""
        if self.purchase_date:
            return date.fromisoformat(self.purchase_date)
        return date(self.model_year, 1, 1)

    @property
    def total_cost(self) -> float:
        return sum(entry.cost or 0 for entry in self.history)

    def find_last_service(self, task_type: str) -> Optional[ServiceLogEntry]:
        """
        Get the last service for a task type.

        History is newest first, so the first entry whose free-text type
        contains the task type wins.
        """
        for entry in self.history:
            if entry.matches(task_type):
                return entry
        return None

    def add_service(self, entry: ServiceLogEntry) -> None:
        """Prepend a service entry and advance the odometer if it is higher."""
        self.history.insert(0, entry)
        self.current_odometer = max(self.current_odometer, entry.odometer)
