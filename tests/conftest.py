"""
Root conftest.py — Shared Pytest fixtures.

Provides fixtures for:
- A sample result artifact and a complete set of action inputs.
- Capturing loguru output.
- Fake HTTP responses and a mocked requests session.
- Decoding the multipart body of a prepared request.
"""

from __future__ import annotations

import json
from email import policy
from email.parser import BytesParser
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional, Tuple
from unittest.mock import MagicMock

import pytest
import requests
from loguru import logger

from zephyr_submit.reporting.action_reporter import ActionReporter
from zephyr_submit.zephyr_client.zephyr_client import ZephyrClient, ZephyrConfig


API_TOKEN = "zph-secret-token-8f3a"
BASE_URL = "https://zephyr.example.com"
ARTIFACT_BYTES = b'<testsuite name="smoke" tests="1"><testcase name="login"/></testsuite>'


# ---------------------------------------------------------------------------
# Input Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def artifact_file(tmp_path: Path) -> Path:
    """Write a small JUnit result file."""
    path = tmp_path / "junit-results.xml"
    path.write_bytes(ARTIFACT_BYTES)
    return path


@pytest.fixture
def raw_inputs(artifact_file: Path) -> Dict[str, str]:
    """Return a complete, valid raw input mapping."""
    return {
        "filePath": str(artifact_file),
        "releaseId": "12",
        "jobName": "nightly-smoke",
        "automationFramework": "JUNIT",
        "cycleName": "Nightly Cycle",
        "jobDetailTcrCatalogTreeId": "345",
        "projectId": "7",
        "testRepositoryPath": "Release 2.0 > Smoke",
        "cycleStartDateStr": "10/19/2026",
        "cycleEndDateStr": "10/26/2026",
        "isReuse": "false",
        "timeStamp": "True",
        "createPackage": "FALSE",
        "assignResultsTo": "3",
        "phaseName": "Smoke Phase",
        "zephyrBaseUrl": BASE_URL,
        "zephyrApiToken": API_TOKEN,
    }


# ---------------------------------------------------------------------------
# Logging Fixtures
# ---------------------------------------------------------------------------


class LogCapture:
    """Collects (level, message) pairs emitted through loguru."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, str]] = []

    def sink(self, message: Any) -> None:
        record = message.record
        self.records.append((record["level"].name, record["message"]))

    @property
    def messages(self) -> List[str]:
        return [message for _, message in self.records]

    def errors(self) -> List[str]:
        return [message for level, message in self.records if level == "ERROR"]

    def index_of(self, text: str) -> int:
        """Index of the first message containing ``text`` (-1 if none)."""
        for i, message in enumerate(self.messages):
            if text in message:
                return i
        return -1

    def contains(self, text: str) -> bool:
        return self.index_of(text) >= 0


@pytest.fixture
def log_capture() -> Generator[LogCapture, None, None]:
    """Capture every loguru record at DEBUG and above."""
    capture = LogCapture()
    handler_id = logger.add(capture.sink, level="DEBUG", format="{message}")
    yield capture
    logger.remove(handler_id)


@pytest.fixture
def reporter(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ActionReporter:
    """ActionReporter writing outputs to a temporary file, no annotations."""
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
    return ActionReporter(output_file=tmp_path / "github_output", annotations=False)


# ---------------------------------------------------------------------------
# HTTP Fixtures
# ---------------------------------------------------------------------------


def make_response(
    status_code: int,
    body: Any = None,
    text: Optional[str] = None,
    url: str = BASE_URL,
) -> requests.Response:
    """Build a requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.reason = "Created" if status_code < 400 else "Bad Request"
    response.encoding = "utf-8"
    if text is not None:
        response._content = text.encode("utf-8")
        response.headers["Content-Type"] = "text/plain"
    else:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    return response


@pytest.fixture
def session() -> MagicMock:
    """Mocked requests.Session answering 201 {"id": 42}."""
    mock_session = MagicMock(spec=requests.Session)
    mock_session.send.return_value = make_response(201, {"id": 42})
    return mock_session


@pytest.fixture
def client_factory(session: MagicMock):
    """Factory producing ZephyrClients bound to the mocked session."""
    created: List[ZephyrClient] = []

    def factory(config: ZephyrConfig) -> ZephyrClient:
        client = ZephyrClient(config=config)
        client._session = session
        created.append(client)
        return client

    factory.created = created  # type: ignore[attr-defined]
    return factory


# ---------------------------------------------------------------------------
# Multipart Decoding
# ---------------------------------------------------------------------------


def decode_multipart(prepared: requests.PreparedRequest) -> List[Dict[str, Any]]:
    """
    Split a prepared multipart/form-data request into its parts.

    Returns:
        One dict per part, in body order: name, filename, content_type, data.
    """
    content_type = prepared.headers["Content-Type"]
    raw = f"Content-Type: {content_type}\r\n\r\n".encode("ascii") + prepared.body
    message = BytesParser(policy=policy.HTTP).parsebytes(raw)

    parts = []
    for part in message.iter_parts():
        parts.append({
            "name": part.get_param("name", header="content-disposition"),
            "filename": part.get_filename(),
            "content_type": part.get("Content-Type"),
            "data": part.get_payload(decode=True),
        })
    return parts


def sent_request(session: MagicMock) -> requests.PreparedRequest:
    """Return the single request passed to session.send."""
    assert session.send.call_count == 1
    return session.send.call_args.args[0]
