"""
Zephyr Automation Job Submitter - Core Source Package.

This package contains the logic for:
- Configuration: Action input loading, schema validation and parsing.
- Zephyr Client: Multipart upload to the create-and-execute-job endpoint.
- Reporting: CI output, failure status and log redaction.
- Submitter: The single end-to-end submission per invocation.
"""

__version__ = "0.1.0"
