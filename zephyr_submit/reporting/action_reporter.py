"""
Action Reporter Module.

The sink through which a submission reports back to the CI pipeline:
informational and error lines, GitHub workflow annotations, step outputs
and the final failure status / exit code.
"""

from __future__ import annotations

import json
import os
import sys
import uuid
from pathlib import Path
from typing import Any, Dict, Optional, TextIO

from loguru import logger

from zephyr_submit.reporting.log_setup import SecretRedactor


def to_command_value(value: Any) -> str:
    """Render an output value: strings verbatim, everything else as compact JSON."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def escape_command_data(text: str) -> str:
    """Escape a workflow command message (``::error::<data>``)."""
    return text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionReporter:
    """
    Reports the outcome of an invocation to the CI environment.

    Attributes:
        outputs: Step outputs set so far.
        exit_code: 0 until set_failed() is called, then 1.
        failure_message: Message passed to set_failed(), if any.
    """

    def __init__(
        self,
        output_file: str | Path | None = None,
        annotations: Optional[bool] = None,
        redactor: Optional[SecretRedactor] = None,
        stream: Optional[TextIO] = None,
    ) -> None:
        """
        Initialize the reporter.

        Args:
            output_file: File receiving step outputs (default: $GITHUB_OUTPUT).
            annotations: Emit ``::error::`` workflow commands
                         (default: when $GITHUB_ACTIONS is "true").
            redactor: Redactor secrets are registered with.
            stream: Stream for workflow commands (default: sys.stdout).
        """
        if output_file is None:
            output_file = os.environ.get("GITHUB_OUTPUT") or None
        if annotations is None:
            annotations = os.environ.get("GITHUB_ACTIONS", "").lower() == "true"

        self.output_file = Path(output_file) if output_file else None
        self.annotations = annotations
        self.redactor = redactor if redactor is not None else SecretRedactor()
        self._stream = stream
        self.outputs: Dict[str, Any] = {}
        self.exit_code = 0
        self.failure_message: Optional[str] = None

    def add_secret(self, value: Optional[str]) -> None:
        """Register a value that must never appear in emitted lines."""
        self.redactor.add(value)

    def info(self, message: str) -> None:
        logger.info(self.redactor.redact(message))

    def error(self, message: str) -> None:
        message = self.redactor.redact(message)
        logger.error(message)
        if self.annotations:
            stream = self._stream or sys.stdout
            stream.write(f"::error::{escape_command_data(message)}\n")
            stream.flush()

    def set_output(self, name: str, value: Any) -> None:
        """
        Set a step output.

        Args:
            name: Output name.
            value: Output value; non-strings are written as compact JSON.
        """
        self.outputs[name] = value
        text = to_command_value(value)

        if self.output_file is None:
            logger.info(f"Output {name}: {self.redactor.redact(text)}")
            return

        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        with open(self.output_file, "a", encoding="utf-8") as f:
            f.write(f"{name}<<{delimiter}\n{text}\n{delimiter}\n")
        logger.debug(f"Output '{name}' written to {self.output_file}")

    def set_failed(self, message: str) -> None:
        """Mark the invocation as failed."""
        self.exit_code = 1
        self.failure_message = message
        self.error(message)
