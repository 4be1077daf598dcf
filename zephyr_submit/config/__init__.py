"""
Configuration Management Module.

Handles loading and validation of:
- Action inputs from YAML/JSON files, INPUT_* environment variables and CLI overrides.
- JSON-Schema validation of the raw input mapping.
- The typed ActionInputs record used by the submitter.
"""

from zephyr_submit.config.loader import ConfigurationError, InputLoader
from zephyr_submit.config.input_schema import SchemaValidationError, validate_inputs
from zephyr_submit.config.inputs import ActionInputs, parse_boolean, parse_integer

__all__ = [
    "ActionInputs",
    "ConfigurationError",
    "InputLoader",
    "SchemaValidationError",
    "parse_boolean",
    "parse_integer",
    "validate_inputs",
]
