"""
Logging Setup Module.

Configures loguru for command-line runs and scrubs registered secrets from
every record before any sink sees it.
"""

from __future__ import annotations

import sys
from typing import Any, Dict, List, Optional, TextIO

from loguru import logger


REDACTION_MARKER = "***"

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"


class SecretRedactor:
    """Replaces registered secret values in log records."""

    def __init__(self, marker: str = REDACTION_MARKER) -> None:
        self.marker = marker
        self._secrets: List[str] = []

    def add(self, secret: Optional[str]) -> None:
        """Register a secret; empty values are ignored."""
        if secret and secret not in self._secrets:
            self._secrets.append(secret)
            # Longest first so a secret containing another is fully masked
            self._secrets.sort(key=len, reverse=True)

    def redact(self, text: str) -> str:
        for secret in self._secrets:
            text = text.replace(secret, self.marker)
        return text

    def __call__(self, record: Dict[str, Any]) -> None:
        # loguru patcher hook
        record["message"] = self.redact(record["message"])


def configure_logging(
    level: str = "INFO",
    sink: Optional[TextIO | Any] = None,
    redactor: Optional[SecretRedactor] = None,
    colorize: Optional[bool] = None,
) -> SecretRedactor:
    """
    Replace loguru's default handler with a single configured sink.

    Args:
        level: Minimum level to emit.
        sink: Destination stream or callable (default: sys.stderr).
        redactor: Redactor to install as the global patcher (created if None).
        colorize: Force or disable ANSI colours (None: auto-detect).

    Returns:
        The installed redactor, to register secrets with.
    """
    if redactor is None:
        redactor = SecretRedactor()
    logger.remove()
    logger.configure(patcher=redactor)
    logger.add(sys.stderr if sink is None else sink, level=level.upper(), format=LOG_FORMAT, colorize=colorize)
    logger.debug(f"Logging configured — level={level.upper()}")
    return redactor
