"""
Reporting Module.

Handles what the pipeline sees from a submission:
- Informational and error lines (loguru).
- GitHub workflow annotations and step outputs.
- Failure status and process exit code.
- Redaction of secrets from every emitted log line.
"""

from zephyr_submit.reporting.action_reporter import ActionReporter
from zephyr_submit.reporting.log_setup import SecretRedactor, configure_logging

__all__ = ["ActionReporter", "SecretRedactor", "configure_logging"]
