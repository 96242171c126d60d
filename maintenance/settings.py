"""Engine constants and configuration lookups."""

import os
from pathlib import Path
from typing import Optional

# Usage-rate estimation
FALLBACK_DAILY_DISTANCE = 45.0  # km/day, ~16,500 km/year
MIN_HISTORY_SPAN_DAYS = 30

# Interval arithmetic
DAYS_PER_MONTH = 30.44
FAR_FUTURE_YEARS = 100

# Status thresholds
SOON_PERCENTAGE = 90
SOON_DAYS = 30
SOON_DISTANCE = 1000  # km

SEVERITY_WEIGHTS = {
    "overdue": 300,
    "soon": 200,
    "ok": 0,
}

DEFAULT_RULES_FILE = Path(__file__).parent / "data" / "default_rules.yaml"
SCHEMA_DIR = Path(__file__).parent / "data"


def rules_file(override: Optional[Path] = None) -> Path:
    """
    Resolve the rule table path.

    An explicit override wins, then the MAINT_RULES_FILE environment
    variable, then the table shipped with the package.
    """
    if override is not None:
        return Path(override)
    env_path = os.environ.get("MAINT_RULES_FILE")
    if env_path:
        return Path(env_path)
    return DEFAULT_RULES_FILE
