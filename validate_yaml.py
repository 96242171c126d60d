#!/usr/bin/env python3
"""Validate vehicle snapshot and rule table YAML files against their schemas."""
import argparse
import json
import sys
from pathlib import Path

import yaml
from jsonschema import FormatChecker, validate, ValidationError

from maintenance.loader import load_schema, read_yaml


def validate_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single YAML file. Returns list of errors."""
    errors = []
    try:
        validate(
            instance=json.loads(read_yaml(filepath)),
            schema=schema,
            format_checker=FormatChecker(),
        )
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except Exception as e:
        errors.append(f"Error: {e}")
    return errors


def main(argv=None):
    """Validate each file given on the command line."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("files", type=Path, nargs="+", help="YAML files to check")
    parser.add_argument(
        "--rules",
        action="store_true",
        help="Validate as rule tables instead of vehicle snapshots",
    )
    args = parser.parse_args(argv)

    schema = load_schema("rules" if args.rules else "vehicle")

    all_valid = True
    for filepath in args.files:
        errors = validate_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
