"""
Test configuration and fixtures for the Leantime MCP server.

Provides:
- A fake Leantime JSON-RPC endpoint served through httpx.MockTransport
- A LeantimeClient wired to that endpoint
- A clean environment without LEANTIME_* variables
"""

import json
import logging
from typing import Any, Dict, List

import httpx
import pytest

from leantime_mcp.client import LeantimeClient
from leantime_mcp.config import API_KEY_ENV, URL_ENV, Config

logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger(__name__)

SERVICE_URL = "https://leantime.test"
API_KEY = "test-api-key"


class FakeLeantime:
    """
    Records JSON-RPC requests and answers them from canned data.

    ``results`` and ``errors`` are keyed by the full method name or by its last
    segment (``getTicket``). Setting ``status_code`` makes every call fail at
    the HTTP level.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.results: Dict[str, Any] = {}
        self.errors: Dict[str, Dict[str, Any]] = {}
        self.status_code = 200

    @property
    def calls(self) -> List[Dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]

    @property
    def last_call(self) -> Dict[str, Any]:
        return self.calls[-1]

    def _lookup(self, table: Dict[str, Any], method: str) -> Any:
        if method in table:
            return table[method]
        return table.get(method.rsplit(".", 1)[-1])

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code >= 400:
            return httpx.Response(self.status_code)

        body = json.loads(request.content)
        error = self._lookup(self.errors, body["method"])
        if error is not None:
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "error": error})
        result = self._lookup(self.results, body["method"])
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})


@pytest.fixture
def config() -> Config:
    return Config(service_url=SERVICE_URL, api_key=API_KEY)


@pytest.fixture
def leantime() -> FakeLeantime:
    return FakeLeantime()


@pytest.fixture
async def client(config: Config, leantime: FakeLeantime):
    """LeantimeClient talking to the fake endpoint."""
    async with LeantimeClient(config, transport=httpx.MockTransport(leantime)) as leantime_client:
        yield leantime_client


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """
    Remove LEANTIME_* variables and run from an empty directory.

    Variables are set before being deleted so monkeypatch restores the
    original state even when python-dotenv writes them during the test.
    """
    for name in (URL_ENV, API_KEY_ENV):
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def result_text(result) -> str:
    """Text of the single content item of a CallToolResult."""
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    return result.content[0].text
