"""Status enum for reminder urgency levels."""

from enum import Enum

from .settings import SEVERITY_WEIGHTS


class Status(Enum):
    """Reminder status categories, serialized by their lowercase name."""

    OVERDUE = "overdue"
    SOON = "soon"
    OK = "ok"

    @property
    def weight(self) -> int:
        """Severity weight used when ordering reminders."""
        return SEVERITY_WEIGHTS[self.value]
