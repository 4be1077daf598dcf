"""
Input Loader Module.

Provides the loader that gathers the raw action inputs from:
- An optional YAML or JSON configuration file.
- GitHub Actions style environment variables (INPUT_<NAME>).
- Explicit overrides (typically parsed command-line options).

The result is a flat mapping of input name to trimmed string value. Typing
and validation happen later, in ActionInputs.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml
from loguru import logger


class ConfigurationError(Exception):
    """Raised when the action inputs are invalid or cannot be loaded."""

    pass


class InputLoader:
    """
    Loader for the action inputs.

    Sources are merged in precedence order (later wins): configuration file,
    environment variables, overrides. Only the names listed in
    ``input_names`` are collected; anything else is ignored.

    Attributes:
        input_names: Names of the inputs to collect.
        env_prefix: Prefix of the environment variables holding inputs.
    """

    SUPPORTED_EXTENSIONS = {".yaml", ".yml", ".json"}

    # Inputs understood by the submitter, in the order they are declared.
    INPUT_NAMES: Tuple[str, ...] = (
        "filePath",
        "releaseId",
        "jobName",
        "automationFramework",
        "cycleName",
        "jobDetailTcrCatalogTreeId",
        "projectId",
        "testRepositoryPath",
        "cycleStartDateStr",
        "cycleEndDateStr",
        "isReuse",
        "timeStamp",
        "createPackage",
        "assignResultsTo",
        "phaseName",
        "zephyrBaseUrl",
        "zephyrApiToken",
        "timeoutSec",
    )

    def __init__(
        self,
        input_names: Optional[Tuple[str, ...]] = None,
        env_prefix: str = "INPUT_",
    ) -> None:
        """
        Initialize the input loader.

        Args:
            input_names: Names of the inputs to collect (default: INPUT_NAMES).
            env_prefix: Environment variable prefix (default: "INPUT_").
        """
        self.input_names = input_names or self.INPUT_NAMES
        self.env_prefix = env_prefix

    def load(
        self,
        config_file: str | Path | None = None,
        overrides: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, str]:
        """
        Collect the raw inputs from all sources.

        Args:
            config_file: Optional path to a YAML/JSON file with input values.
            overrides: Values taking precedence over every other source.
                       Entries whose value is None are ignored.
            environ: Environment mapping (default: os.environ).

        Returns:
            Mapping of input name to trimmed string value.

        Raises:
            ConfigurationError: If the file cannot be read or parsed.
            FileNotFoundError: If the configuration file does not exist.
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, str] = {}

        if config_file:
            values.update(self._from_file(Path(config_file)))

        values.update(self._from_environment(environ))

        for name, value in (overrides or {}).items():
            if name in self.input_names and value is not None:
                values[name] = self._to_text(value)

        logger.debug(f"Inputs collected: {sorted(values)}")
        return values

    def env_var_name(self, name: str) -> str:
        """
        Return the environment variable holding an input.

        Examples:
            filePath -> INPUT_FILEPATH
            zephyrApiToken -> INPUT_ZEPHYRAPITOKEN
        """
        return f"{self.env_prefix}{name.replace(' ', '_').upper()}"

    def _from_environment(self, environ: Mapping[str, str]) -> Dict[str, str]:
        values: Dict[str, str] = {}
        for name in self.input_names:
            env_name = self.env_var_name(name)
            if env_name in environ:
                values[name] = self._to_text(environ[env_name])
        return values

    def _from_file(self, file_path: Path) -> Dict[str, str]:
        """Read a YAML or JSON file holding a mapping of input values."""
        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        suffix = file_path.suffix.lower()
        if suffix not in self.SUPPORTED_EXTENSIONS:
            raise ConfigurationError(
                f"Unsupported file format '{suffix}'. "
                f"Supported: {sorted(self.SUPPORTED_EXTENSIONS)}"
            )

        logger.info(f"Loading inputs from: {file_path}")
        try:
            content = file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Failed to read file {file_path}: {e}") from e
        except UnicodeDecodeError as e:
            raise ConfigurationError(
                f"Failed to read file {file_path}: not valid UTF-8 (byte offset {e.start})"
            ) from e

        # parser messages quote the offending line, which may hold the token
        try:
            if suffix in {".yaml", ".yml"}:
                data = yaml.safe_load(content)
            else:
                data = json.loads(content)
        except yaml.YAMLError as e:
            position = self._position(getattr(e, "problem_mark", None))
            raise ConfigurationError(f"Failed to parse {file_path}: invalid YAML{position}") from None
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Failed to parse {file_path}: invalid JSON at line {e.lineno}, column {e.colno}"
            ) from None

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping (dict), "
                f"got {type(data).__name__}: {file_path}"
            )

        return {
            name: self._to_text(value)
            for name, value in data.items()
            if name in self.input_names and value is not None
        }

    @staticmethod
    def _to_text(value: Any) -> str:
        # YAML booleans stringify as True/False, which the boolean parser accepts
        return str(value).strip()

    @staticmethod
    def _position(mark: Any) -> str:
        if mark is None:
            return ""
        return f" at line {mark.line + 1}, column {mark.column + 1}"
