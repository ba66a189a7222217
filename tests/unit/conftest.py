from __future__ import annotations

from typing import Callable, List

import httpx
import pytest

from qa_suite.api.context import ApiContext
from qa_suite.api.helpers import ApiHelpers

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Handler) -> None:
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


def make_context(**overrides) -> ApiContext:
    base = {
        "base_url": "http://svc/api",
        "default_headers": {"Content-Type": "application/json", "Accept": "application/json"},
        "timeout_ms": 12500,
    }
    base.update(overrides)
    return ApiContext(**base)


@pytest.fixture
def make_helpers():
    """
    make_helpers(handler, **ctx) -> (ApiHelpers, RecordingTransport)
    """

    def _make(handler: Handler, **ctx) -> tuple[ApiHelpers, RecordingTransport]:
        transport = RecordingTransport(handler)
        client = httpx.AsyncClient(transport=transport)
        return ApiHelpers(make_context(**ctx), client), transport

    return _make


_ENV_VARS = (
    "API_URL",
    "API_TIMEOUT",
    "API_TOKEN",
    "API_HEADERS",
    "QA_LOG_LEVEL",
    "LOG_LEVEL",
    "QA_PROJECT",
    "QA_PROJECTS_FILE",
    "REQRES_API_KEY",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unit tests must not see the developer's API_* / QA_* settings."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
