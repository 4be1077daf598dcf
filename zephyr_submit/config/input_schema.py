"""
Input Schema Module.

Checks the raw action inputs against ``schemas/action_inputs_schema.json``
before any of them is parsed. All violations are reported together.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import jsonschema
from loguru import logger


INPUTS_SCHEMA_PATH = Path(__file__).parent / "schemas" / "action_inputs_schema.json"


class SchemaValidationError(Exception):
    """Raised when the raw inputs violate the inputs schema."""

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []


@lru_cache(maxsize=1)
def load_input_schema() -> Dict[str, Any]:
    """Read the bundled inputs schema; the result is shared, do not mutate it."""
    schema = json.loads(INPUTS_SCHEMA_PATH.read_text(encoding="utf-8"))
    jsonschema.Draft7Validator.check_schema(schema)
    logger.debug(f"Inputs schema loaded from {INPUTS_SCHEMA_PATH.name}")
    return schema


def validate_inputs(values: Mapping[str, str]) -> None:
    """
    Validate raw input values.

    Args:
        values: Mapping of input name to trimmed string value.

    Raises:
        SchemaValidationError: Listing one line per violated input.
    """
    validator = jsonschema.Draft7Validator(load_input_schema())
    problems = [
        (".".join(str(part) for part in error.path) or "inputs", error.message)
        for error in validator.iter_errors(dict(values))
    ]

    if problems:
        lines = [f"  {name}: {message}" for name, message in sorted(problems)]
        raise SchemaValidationError(
            f"{len(lines)} input(s) failed validation:\n" + "\n".join(lines),
            errors=lines,
        )
