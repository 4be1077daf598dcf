"""
Zephyr Automation Job Submitter - Test Suite Package.

Unit tests for configuration, the Zephyr client, reporting, the submitter
and the command-line entry point. No test touches the network.
"""
