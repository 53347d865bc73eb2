import json
import random
import sys
from pathlib import Path
from typing import Callable, Dict, List
from urllib.parse import urlsplit

import httpx
import pytest
import pytest_asyncio

# Make the flat top-level modules importable when tests run from the repo root
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from storage.history_repository import InMemoryHistoryStore


class FakeApi:
    """Routes requests by ``host + path`` to canned handlers and records them."""

    def __init__(self) -> None:
        self.routes: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, url: str, handler) -> None:
        parts = urlsplit(url)
        self.routes[parts.netloc + parts.path] = handler

    def add_json(self, url: str, payload, status_code: int = 200) -> None:
        self.add(url, lambda request: httpx.Response(status_code, json=payload))

    def add_sequence(self, url: str, responses: List[httpx.Response]) -> None:
        queue = list(responses)

        def _handler(request: httpx.Request) -> httpx.Response:
            return queue.pop(0) if len(queue) > 1 else queue[0]

        self.add(url, _handler)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(request.url.host + request.url.path)
        if handler is None:
            return httpx.Response(404, content=json.dumps({"error": "not found"}).encode())
        return handler(request)

    def calls_to(self, path_fragment: str) -> List[httpx.Request]:
        return [request for request in self.requests if path_fragment in str(request.url)]


@pytest.fixture
def history():
    return InMemoryHistoryStore()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def fake_sleep(sleeps):
    async def _sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return _sleep


@pytest.fixture
def api():
    return FakeApi()


@pytest_asyncio.fixture
async def client(api):
    async with httpx.AsyncClient(transport=httpx.MockTransport(api.handle)) as http_client:
        yield http_client
