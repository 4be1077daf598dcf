"""
Zephyr Client Module.

Provides integration with the Zephyr (Enterprise) REST API for:
- Building the automation job metadata (JobSubmission).
- Uploading a test-result artifact with the metadata as multipart/form-data.
- Creating and executing the automation job in a single call.
"""

from zephyr_submit.zephyr_client.job_submission import JobSubmission
from zephyr_submit.zephyr_client.zephyr_client import (
    ZephyrClient,
    ZephyrClientError,
    ZephyrConfig,
)

__all__ = [
    "JobSubmission",
    "ZephyrClient",
    "ZephyrClientError",
    "ZephyrConfig",
]
