"""
Zephyr REST API Client.

Provides a dedicated client for the Zephyr automation upload API:
- Bearer-token authentication.
- Multipart upload of a result artifact with its job metadata.
- Creating and executing the automation job in one call.

Exactly one POST is issued per call; nothing is retried.
"""

from __future__ import annotations

import json
import mimetypes
import os
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional

import requests
from loguru import logger

from zephyr_submit.zephyr_client.job_submission import JobSubmission


REDACTED_AUTHORIZATION = "Bearer [REDACTED]"

# axios default, kept so the service sees the same Accept header
DEFAULT_ACCEPT = "application/json, text/plain, */*"


class ZephyrClientError(Exception):
    """
    Raised when a Zephyr API operation fails.

    ``status_code`` and ``response_body`` are set only when the server
    answered; transport failures (refused connection, DNS, timeout) carry
    just the message.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body

    @property
    def has_response(self) -> bool:
        """True when the error carries a server response."""
        return self.status_code is not None


@dataclass
class ZephyrConfig:
    """Configuration for the Zephyr API client."""

    base_url: str
    api_token: str = field(default="", repr=False)
    timeout_sec: Optional[float] = None  # None: wait indefinitely
    verify_ssl: bool = True


class ZephyrClient:
    """
    Client for the Zephyr automation upload REST API.

    Usage::

        client = ZephyrClient(
            base_url="https://zephyr.example.com",
            api_token="your-token-here",
        )
        try:
            data = client.create_and_execute_job("results.xml", submission)
        finally:
            client.close()
    """

    ENDPOINTS = {
        "create_and_execute_job": (
            "/flex/services/rest/v4/upload-file/automation/create-and-execute-job"
        ),
    }

    FILE_FIELD = "fileName"
    METADATA_FIELD = "automationJobDetail"

    def __init__(
        self,
        base_url: str = "",
        api_token: str = "",
        timeout_sec: Optional[float] = None,
        verify_ssl: bool = True,
        config: Optional[ZephyrConfig] = None,
    ) -> None:
        """
        Initialize the Zephyr client.

        Args:
            base_url: Zephyr instance base URL.
            api_token: API token sent as a bearer credential.
            timeout_sec: Request timeout in seconds (None: no timeout).
            verify_ssl: Whether to verify SSL certificates.
            config: Optional ZephyrConfig dataclass (overrides individual params).
        """
        if config:
            self._config = replace(config, base_url=config.base_url.rstrip("/"))
        else:
            self._config = ZephyrConfig(
                base_url=base_url.rstrip("/"),
                api_token=api_token,
                timeout_sec=timeout_sec,
                verify_ssl=verify_ssl,
            )

        self._session: Optional[requests.Session] = None
        logger.debug(f"ZephyrClient initialized — url={self._config.base_url}")

    def endpoint_url(self, name: str) -> str:
        return f"{self._config.base_url}{self.ENDPOINTS[name]}"

    def _get_session(self) -> requests.Session:
        """Get or create the HTTP session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.verify = self._config.verify_ssl
        return self._session

    def _auth_headers(self) -> Dict[str, str]:
        return {
            "Accept": DEFAULT_ACCEPT,
            "Authorization": f"Bearer {self._config.api_token}",
        }

    @staticmethod
    def redacted_headers(headers: Mapping[str, str]) -> Dict[str, str]:
        """Return a copy of ``headers`` safe to log."""
        redacted = dict(headers)
        for name in redacted:
            if name.lower() == "authorization":
                redacted[name] = REDACTED_AUTHORIZATION
        return redacted

    @staticmethod
    def decode_body(response: requests.Response) -> Any:
        """Decode a response body: JSON when it parses, text otherwise."""
        try:
            return response.json()
        except ValueError:
            return response.text

    def build_request(
        self,
        file_obj: Any,
        filename: str,
        submission: JobSubmission,
    ) -> requests.PreparedRequest:
        """
        Assemble the multipart/form-data request.

        Args:
            file_obj: Open binary stream of the artifact.
            filename: File name reported for the artifact part.
            submission: Job metadata for the automationJobDetail part.

        Returns:
            Prepared POST request; boundary and Content-Type are set by requests.
        """
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        files = [
            (self.FILE_FIELD, (filename, file_obj, content_type)),
            (self.METADATA_FIELD, (None, submission.to_json().encode("utf-8"))),
        ]
        request = requests.Request(
            method="POST",
            url=self.endpoint_url("create_and_execute_job"),
            headers=self._auth_headers(),
            files=files,
        )
        return request.prepare()

    def _send(self, prepared: requests.PreparedRequest) -> requests.Response:
        """
        Send a prepared request once.

        Raises:
            ZephyrClientError: On a non-2xx status or a transport failure.
        """
        session = self._get_session()
        logger.debug(f"Zephyr API {prepared.method} {prepared.url}")

        try:
            response = session.send(prepared, timeout=self._config.timeout_sec)
        except requests.exceptions.ConnectionError as e:
            logger.debug(f"Zephyr API connection error: {e}")
            raise ZephyrClientError(str(e)) from e
        except requests.exceptions.Timeout as e:
            logger.debug(f"Zephyr API timeout after {self._config.timeout_sec}s: {e}")
            raise ZephyrClientError(str(e)) from e
        except requests.exceptions.RequestException as e:
            logger.debug(f"Zephyr API request error: {e}")
            raise ZephyrClientError(str(e)) from e

        # redirects requests did not follow (and 304) count as failures too
        if not 200 <= response.status_code < 300:
            logger.debug(f"Zephyr API HTTP error: {response.status_code} {response.reason}")
            raise ZephyrClientError(
                f"Request failed with status code {response.status_code}",
                status_code=response.status_code,
                response_body=self.decode_body(response),
            )
        return response

    # ------------------------------------------------------------------
    # Automation Job Operations
    # ------------------------------------------------------------------

    def create_and_execute_job(
        self,
        file_path: str,
        submission: JobSubmission,
    ) -> Any:
        """
        Upload a result artifact and create-and-execute the automation job.

        Args:
            file_path: Path of the result artifact.
            submission: Job metadata.

        Returns:
            Decoded response body (JSON object or text).

        Raises:
            OSError: If the artifact cannot be opened; no request is sent.
            ZephyrClientError: If the request fails.
        """
        logger.info("Payload prepared for Zephyr:")
        logger.info(submission.to_json(indent=2))

        with open(file_path, "rb") as f:
            prepared = self.build_request(f, os.path.basename(file_path), submission)

            logger.info("Request Headers:")
            logger.info(json.dumps(self.redacted_headers(prepared.headers), indent=2))

            logger.info("Sending POST request to Zephyr...")
            response = self._send(prepared)

        data = self.decode_body(response)
        logger.info("Automation job created and executed successfully!")
        logger.info(f"Response Status: {response.status_code}")
        logger.info(f"Response Data: {json.dumps(data, indent=2)}")
        return data

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None:
            self._session.close()
            self._session = None
            logger.debug("Zephyr client session closed")
