from __future__ import annotations

import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

API_KEY = "test-api-key-12345"
BASE_URL = "http://localhost:3000/api"


class RecordingHandler:
    """MockTransport handler that records requests and replays a canned response."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.responder = responder
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.last.content)


@pytest.fixture()
def echo_handler() -> RecordingHandler:
    def responder(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"ok": True, "path": request.url.path})

    return RecordingHandler(responder)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SECUREPASS_API_KEY", "SECUREPASS_BASE_URL", "SECUREPASS_TIMEOUT_MS", "SECUREPASS_ORIGIN"):
        monkeypatch.delenv(name, raising=False)
