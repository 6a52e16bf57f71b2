import json

import httpx
import pytest

from algolia_client import Credentials, SearchClient
from algolia_client.dispatcher import Dispatcher


def ok(body):
    return lambda request: httpx.Response(200, json=body)


def status(code, text=""):
    return lambda request: httpx.Response(code, text=text)


def raw(code, content: bytes):
    return lambda request: httpx.Response(code, content=content)


def network_error(request):
    raise httpx.ConnectError("connection refused", request=request)


def read_timeout(request):
    raise httpx.ReadTimeout("timed out", request=request)


class FakeService:
    """Plays queued responses back; the last one repeats."""

    def __init__(self, *replies):
        self.replies = list(replies) or [ok({})]
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        return reply(request)

    def queue(self, *replies):
        self.replies = list(replies)

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def credentials():
    return Credentials(application_id="appid", api_key="write-key", search_api_key="search-key")


@pytest.fixture
def service():
    return FakeService()


@pytest.fixture
def http_client(service):
    with httpx.Client(transport=httpx.MockTransport(service)) as c:
        yield c


@pytest.fixture
def dispatcher(credentials, http_client):
    return Dispatcher(credentials, http_client)


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def client(credentials, http_client, sleeps):
    return SearchClient(credentials, http_client, sleep=sleeps.append)
