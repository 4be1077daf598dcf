"""
Action Inputs Module.

Turns the raw string mapping collected by InputLoader into a typed, immutable
record. The mapping is validated against the bundled JSON schema first, so
every field is known to be present and well-formed before it is parsed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from loguru import logger

from zephyr_submit.config.loader import ConfigurationError
from zephyr_submit.config.input_schema import SchemaValidationError, validate_inputs
from zephyr_submit.zephyr_client.job_submission import JobSubmission


# GitHub Actions "core.getBooleanInput" convention (YAML 1.2 core schema)
TRUE_VALUES = ("true", "True", "TRUE")
FALSE_VALUES = ("false", "False", "FALSE")

INTEGER_FIELDS = ("releaseId", "jobDetailTcrCatalogTreeId", "projectId", "assignResultsTo")
BOOLEAN_FIELDS = ("isReuse", "timeStamp", "createPackage")


def parse_boolean(name: str, value: str) -> bool:
    """
    Parse a boolean input.

    Args:
        name: Input name, used in the error message.
        value: Raw input value.

    Returns:
        The parsed boolean.

    Raises:
        ConfigurationError: If the value is not one of the accepted literals.
    """
    value = value.strip()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ConfigurationError(
        f'Input does not meet YAML 1.2 "Core Schema" specification: {name}\n'
        f"Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    )


def parse_integer(name: str, value: str) -> int:
    """Parse an integer input, raising ConfigurationError when it is not one."""
    try:
        return int(value.strip(), 10)
    except ValueError as e:
        raise ConfigurationError(f"Input '{name}' is not an integer: {value!r}") from e


@dataclass(frozen=True)
class ActionInputs:
    """
    Typed action inputs, populated once at startup.

    Attributes:
        file_path: Path of the result artifact to upload.
        submission: Job metadata sent as automationJobDetail.
        base_url: Zephyr base URL (e.g., "https://zephyr.example.com").
        api_token: Bearer token; never part of repr().
        timeout_sec: Request timeout, None for the transport default.
    """

    file_path: str
    submission: JobSubmission
    base_url: str
    api_token: str = field(repr=False)
    timeout_sec: Optional[float] = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "ActionInputs":
        """
        Validate and parse a raw input mapping.

        Args:
            raw: Mapping of input name to string value (see InputLoader).

        Returns:
            The populated ActionInputs.

        Raises:
            ConfigurationError: If any input is missing or malformed.
        """
        values = {name: str(value).strip() for name, value in raw.items()}
        # optional input, empty means unset
        if not values.get("timeoutSec"):
            values.pop("timeoutSec", None)

        try:
            validate_inputs(values)
        except SchemaValidationError as e:
            raise ConfigurationError(f"Invalid action inputs: {e}") from e

        parsed: dict[str, Any] = {}
        for name in JobSubmission.field_names():
            if name in INTEGER_FIELDS:
                parsed[name] = parse_integer(name, values[name])
            elif name in BOOLEAN_FIELDS:
                parsed[name] = parse_boolean(name, values[name])
            else:
                parsed[name] = values[name]

        timeout_sec = None
        if "timeoutSec" in values:
            timeout_sec = float(values["timeoutSec"])
            if timeout_sec <= 0:
                raise ConfigurationError(
                    f"Input 'timeoutSec' must be positive: {values['timeoutSec']!r}"
                )

        inputs = cls(
            file_path=values["filePath"],
            submission=JobSubmission(**parsed),
            base_url=values["zephyrBaseUrl"],
            api_token=values["zephyrApiToken"],
            timeout_sec=timeout_sec,
        )
        logger.debug(f"Action inputs parsed: {inputs}")
        return inputs
