#!/usr/bin/env python
"""
CI/CD Pipeline Entry Point.

Submits a test-result artifact to Zephyr's create-and-execute-job endpoint
from a pipeline step. Inputs come from INPUT_* environment variables (as set
by GitHub Actions), an optional YAML/JSON file, and command-line options, in
increasing order of precedence.

Usage:
    zephyr-submit --config zephyr.yaml --file-path build/junit.xml
    INPUT_FILEPATH=junit.xml ... python -m zephyr_submit
"""

from __future__ import annotations

import argparse
import os
import re
import sys
from typing import Dict, List, Optional

from loguru import logger

from zephyr_submit import __version__
from zephyr_submit.config.loader import InputLoader
from zephyr_submit.reporting.action_reporter import ActionReporter
from zephyr_submit.reporting.log_setup import configure_logging
from zephyr_submit.submitter import Submitter


def option_name(input_name: str) -> str:
    """
    Command-line option for an input.

    Examples:
        filePath -> --file-path
        jobDetailTcrCatalogTreeId -> --job-detail-tcr-catalog-tree-id
    """
    return "--" + re.sub(r"(?<!^)(?=[A-Z])", "-", input_name).lower()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for a submission."""
    parser = argparse.ArgumentParser(
        prog="zephyr-submit",
        description="Zephyr Automation — create and execute a job from a result file",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML/JSON file with input values",
    )
    loader = InputLoader()
    for name in loader.input_names:
        parser.add_argument(
            option_name(name),
            dest=name,
            type=str,
            default=None,
            help=f"Value of the '{name}' input (env: {loader.env_var_name(name)})",
        )
    parser.add_argument(
        "--github-output",
        type=str,
        default=None,
        help="File receiving step outputs (default: $GITHUB_OUTPUT)",
    )
    parser.add_argument(
        "--no-annotations",
        action="store_true",
        help="Do not emit ::error:: workflow commands",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit code."""
    args = parse_args(argv)
    redactor = configure_logging(level=args.log_level)

    reporter = ActionReporter(
        output_file=args.github_output,
        annotations=False if args.no_annotations else None,
        redactor=redactor,
    )

    loader = InputLoader()
    overrides: Dict[str, Optional[str]] = {
        name: getattr(args, name) for name in loader.input_names
    }
    # known before the config file is read, so load errors are scrubbed too
    for token in (args.zephyrApiToken, os.environ.get(loader.env_var_name("zephyrApiToken"))):
        reporter.add_secret((token or "").strip())
    logger.info(f"[Zephyr] zephyr-submit {__version__}")

    Submitter(reporter).submit(
        lambda: loader.load(config_file=args.config, overrides=overrides)
    )
    return reporter.exit_code


if __name__ == "__main__":
    sys.exit(main())
