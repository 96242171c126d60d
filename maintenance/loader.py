"""YAML loading utilities for rule tables and vehicle snapshots."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from jsonschema import FormatChecker, validate
from loguru import logger

from .rule import MaintenanceRule, TaskCategory
from .service_log import ReplacedPart, ServiceLogEntry
from .settings import SCHEMA_DIR, rules_file
from .vehicle import Vehicle


def load_schema(name: str) -> dict:
    """Load a JSON schema ("vehicle" or "rules") shipped with the package."""
    with open(SCHEMA_DIR / f"{name}_schema.yaml") as fp:
        return yaml.safe_load(fp)


def read_yaml(filename: Union[str, Path]) -> str:
    """
    Read a YAML file and return it as JSON text.

    Unquoted YAML dates come back as date objects; they are written out
    as ISO strings so every date in the model is a string.
    """
    with open(filename, "rb") as fp:
        return json.dumps(yaml.load(fp, Loader=yaml.SafeLoader), default=str)


def _parse_object(
    dct: Dict[str, Any],
) -> Union[MaintenanceRule, ServiceLogEntry, ReplacedPart, Vehicle, list, dict]:
    """Parse dictionary into appropriate object type."""
    # Vehicle object (inside 'vehicle' key)
    if "modelYear" in dct:
        return Vehicle(
            str(dct["id"]),
            dct["name"],
            dct["modelYear"],
            dct.get("currentOdometer", 0),
            dct.get("purchaseDate"),
        )
    # Service log entry
    elif "taskType" in dct and "date" in dct:
        return ServiceLogEntry(
            str(dct["id"]),
            dct["date"],
            dct["taskType"],
            dct["odometer"],
            dct.get("cost", 0),
            dct.get("notes"),
            dct.get("parts"),
        )
    # Rule object
    elif "taskType" in dct:
        return MaintenanceRule(
            dct["taskType"],
            dct.get("monthInterval", 0),
            dct.get("distanceInterval", 0),
            dct.get("priority", 1),
            TaskCategory(dct.get("category", "other")),
        )
    # Replaced part
    elif "name" in dct:
        return ReplacedPart(dct["name"], dct.get("brand"), dct.get("cost"))
    # Top-level snapshot object
    elif "vehicle" in dct:
        vehicle = dct["vehicle"]
        vehicle.history = dct.get("history") or []
        return vehicle
    # Top-level rule table
    elif "rules" in dct:
        return dct["rules"]
    else:
        return dct


def load_rules(filename: Optional[Union[str, Path]] = None) -> List[MaintenanceRule]:
    """
    Load a rule table from a YAML file.

    Uses the table shipped with the package unless a file is given or
    MAINT_RULES_FILE is set. Raises jsonschema.ValidationError on a
    malformed table.
    """
    path = rules_file(filename)
    json_data = read_yaml(path)
    validate(
        instance=json.loads(json_data),
        schema=load_schema("rules"),
        format_checker=FormatChecker(),
    )
    rules = json.loads(json_data, object_hook=_parse_object)
    logger.info(f"Loaded {len(rules)} rules from {path}")
    return rules


def load_vehicle(filename: Union[str, Path]) -> Vehicle:
    """
    Load a read-only vehicle snapshot from a YAML file.

    History is kept in file order, which is expected to be newest first.
    """
    json_data = read_yaml(filename)
    validate(
        instance=json.loads(json_data),
        schema=load_schema("vehicle"),
        format_checker=FormatChecker(),
    )
    vehicle = json.loads(json_data, object_hook=_parse_object)
    logger.info(
        f"Loaded {vehicle.name} with {len(vehicle.history)} history entries from {filename}"
    )
    return vehicle
