"""
Global test configuration: environment isolation and a stub HttpClient.
"""

from collections.abc import Mapping
import copy
import os
from typing import Any

import pytest

from wpcom_remote.core.exceptions import TransportError
from wpcom_remote.fetch.fetcher import TypedFetcher


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests with no network access")
    config.addinivalue_line(
        "markers", "allow_env_pollution: keep WPCOM_* variables from the real environment"
    )


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_wpcom_env(request, monkeypatch):
    """Ensure a clean WPCOM_* environment for each test.

    Escape hatch: @pytest.mark.allow_env_pollution keeps the current env.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("WPCOM_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("DEBUG", raising=False)


class StubHttpClient:
    """Records requests and answers from a path -> body table.

    A body that is an exception instance is raised instead of returned;
    unknown paths raise a 404 TransportError.
    """

    def __init__(self, responses: Mapping[str, Any] | None = None) -> None:
        self.responses: dict[str, Any] = dict(responses or {})
        self.calls: list[tuple[str, dict[str, str]]] = []

    def respond(self, path: str, body: Any) -> None:
        self.responses[path] = body

    @property
    def paths(self) -> list[str]:
        return [path for path, _ in self.calls]

    async def get(self, path: str, parameters: Mapping[str, str]) -> Any:
        self.calls.append((path, dict(parameters)))
        if path not in self.responses:
            raise TransportError(f"HTTP 404 for {path}")
        body = self.responses[path]
        if isinstance(body, BaseException):
            raise body
        return copy.deepcopy(body)


@pytest.fixture
def stub_http() -> StubHttpClient:
    return StubHttpClient()


@pytest.fixture
def fetcher(stub_http: StubHttpClient) -> TypedFetcher:
    return TypedFetcher(stub_http)
