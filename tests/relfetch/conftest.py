"""
Shared fixtures for relfetch tests.
"""

import json
import pathlib
from typing import Callable, List

import httpx
import pytest

from relfetch.artifact_resolver import LinkResolver
from relfetch.relfetch_config import DEFAULT_DOWNLOAD_PREFIXES
from relfetch.relfetch_logger import RelfetchLogger


@pytest.fixture
def logger() -> RelfetchLogger:
    return RelfetchLogger()


@pytest.fixture
def resolver(logger) -> LinkResolver:
    return LinkResolver(DEFAULT_DOWNLOAD_PREFIXES, logger)


@pytest.fixture
def write_config(tmp_path) -> Callable[[object], pathlib.Path]:
    """Write a JSON document to <tmp_path>/config.json and return its path."""

    def _write(data) -> pathlib.Path:
        path = tmp_path / "config.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every requested URL."""

    def __init__(self, handler):
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def recording_transport():
    return RecordingTransport
