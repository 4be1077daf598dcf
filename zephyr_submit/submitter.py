"""
Submitter Module.

Runs one end-to-end submission per invocation: parse the inputs, upload the
artifact with its job metadata, report the response or the error. Every
failure is caught here and nowhere else; nothing is retried.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Union

from loguru import logger

from zephyr_submit.config.inputs import ActionInputs
from zephyr_submit.reporting.action_reporter import ActionReporter
from zephyr_submit.zephyr_client.zephyr_client import (
    ZephyrClient,
    ZephyrClientError,
    ZephyrConfig,
)


FAILURE_PREFIX = "Action failed with error: "
RESPONSE_OUTPUT = "response"

InputSource = Union[Mapping[str, Any], ActionInputs, Callable[[], Mapping[str, Any]]]


class SubmissionState(Enum):
    """State of a submission."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class SubmissionResult:
    """
    Outcome of a submission.

    Attributes:
        state: Terminal state (SUCCEEDED or FAILED).
        response: Decoded response body on success.
        error: Failure message on failure.
        status_code: HTTP status when the server answered with an error.
        duration_ms: Wall time of the invocation in milliseconds.
    """

    state: SubmissionState = SubmissionState.PENDING
    response: Any = None
    error: Optional[str] = None
    status_code: Optional[int] = None
    duration_ms: float = 0.0


class Submitter:
    """
    Submits a result artifact to Zephyr's create-and-execute-job endpoint.

    Usage::

        reporter = ActionReporter()
        result = Submitter(reporter).submit(InputLoader().load)
        sys.exit(reporter.exit_code)
    """

    def __init__(
        self,
        reporter: Optional[ActionReporter] = None,
        client_factory: Callable[[ZephyrConfig], ZephyrClient] = lambda c: ZephyrClient(config=c),
    ) -> None:
        self.reporter = reporter or ActionReporter()
        self._client_factory = client_factory

    def submit(self, config: InputSource) -> SubmissionResult:
        """
        Execute exactly one submission.

        Args:
            config: Parsed ActionInputs, a raw input mapping (see InputLoader),
                    or a callable returning one. A callable is invoked inside
                    the failure boundary, so load errors are reported like
                    any other.

        Returns:
            SubmissionResult in state SUCCEEDED or FAILED. The reporter holds
            the ``response`` output or the failure message and exit code.
        """
        result = SubmissionResult()
        start = time.monotonic()

        try:
            if callable(config):
                config = config()
            if isinstance(config, ActionInputs):
                inputs = config
            else:
                # registered before validation so error messages are scrubbed too
                self.reporter.add_secret(str(config.get("zephyrApiToken") or "").strip())
                inputs = ActionInputs.from_mapping(config)
            self.reporter.add_secret(inputs.api_token)
            self._log_inputs(inputs)

            client = self._client_factory(
                ZephyrConfig(
                    base_url=inputs.base_url,
                    api_token=inputs.api_token,
                    timeout_sec=inputs.timeout_sec,
                )
            )
            try:
                data = client.create_and_execute_job(inputs.file_path, inputs.submission)
            finally:
                client.close()

            self.reporter.set_output(RESPONSE_OUTPUT, data)
            result.state = SubmissionState.SUCCEEDED
            result.response = data

        except Exception as e:
            self._report_failure(e, result)

        result.duration_ms = (time.monotonic() - start) * 1000
        logger.debug(f"Submission finished — state={result.state.value}, {result.duration_ms:.0f}ms")
        return result

    def _report_failure(self, error: Exception, result: SubmissionResult) -> None:
        """
        Report a failure and mark the invocation as failed.

        Server rejections log their status and body first; every other error
        logs its message. The failure message never includes the body.

        Args:
            error: The exception that ended the invocation.
            result: Result to update.
        """
        if isinstance(error, ZephyrClientError) and error.has_response:
            self.reporter.error(f"Error Status: {error.status_code}")
            self.reporter.error(f"Error Data: {json.dumps(error.response_body, indent=2)}")
            result.status_code = error.status_code
        else:
            self.reporter.error(f"Error Message: {error}")

        result.state = SubmissionState.FAILED
        result.error = f"{FAILURE_PREFIX}{error}"
        self.reporter.set_failed(result.error)

    def _log_inputs(self, inputs: ActionInputs) -> None:
        job = inputs.submission
        self.reporter.info(f"File path: {inputs.file_path}")
        self.reporter.info(f"Zephyr base URL: {inputs.base_url}")
        self.reporter.info(f"Release ID: {job.releaseId}")
        self.reporter.info(f"Job Name: {job.jobName}")
        self.reporter.info(f"Project ID: {job.projectId}")
        self.reporter.info(f"Cycle Name: {job.cycleName}")
        self.reporter.info(f"Automation Framework: {job.automationFramework}")
