"""Pytest configuration and fixtures."""

import json
import os

# Must be set before anything imports app.dependencies
os.environ.setdefault("CHATWOOT_BASE_URL", "https://chatwoot.test")
os.environ.setdefault("CHATWOOT_ACCOUNT_ID", "7")
os.environ.setdefault("CHATWOOT_INBOX_ID", "3")
os.environ.setdefault("CHATWOOT_API_TOKEN", "test-token")

import httpx
import pytest

from app.config import load_settings
from app.services.chatwoot_service import ChatwootService
from app.services.relay_service import SubmissionRelay

TEST_ENV = {
    "CHATWOOT_BASE_URL": "https://chatwoot.test",
    "CHATWOOT_ACCOUNT_ID": "7",
    "CHATWOOT_INBOX_ID": "3",
    "CHATWOOT_API_TOKEN": "test-token",
}

ACCOUNT_PATH = "/api/v1/accounts/7"


class FakeChatwoot:
    """
    Stands in for the Chatwoot API behind httpx.MockTransport.
    Responses are queued per (method, path); every request is recorded.
    """

    def __init__(self):
        self.requests = []
        self._responses = {}

    def add(self, method, path, status_code=200, json_body=None, content=None):
        if content is None:
            response = httpx.Response(status_code, json=json_body if json_body is not None else {})
        else:
            response = httpx.Response(status_code, content=content)
        self._responses.setdefault((method, ACCOUNT_PATH + path), []).append(response)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._responses.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"error": "unexpected call"})
        return queue.pop(0)

    @property
    def calls(self):
        return [(r.method, r.url.path[len(ACCOUNT_PATH):]) for r in self.requests]

    def body(self, index):
        return json.loads(self.requests[index].content)


@pytest.fixture
def settings():
    return load_settings(TEST_ENV)


@pytest.fixture
def fake_chatwoot():
    return FakeChatwoot()


@pytest.fixture
def chatwoot_service(settings, fake_chatwoot):
    return ChatwootService(settings, transport=httpx.MockTransport(fake_chatwoot.handler))


@pytest.fixture
def relay(chatwoot_service):
    return SubmissionRelay(chatwoot_service)


@pytest.fixture
def client(relay):
    from fastapi.testclient import TestClient

    from app.dependencies import get_relay
    from main import app

    app.dependency_overrides[get_relay] = lambda: relay
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def submission_body():
    return {
        "formSubmission": {
            "id": "sub-123",
            "formName": "Contact Us",
            "timestamp": "2024-05-01T10:00:00Z",
            "fields": [
                {"name": "Name", "value": "Jo"},
                {"name": "Email", "value": "jo@x.com"},
                {"name": "Message", "value": "Hi"},
                {"name": "Topic", "value": "Billing"},
            ],
        },
        "website": {"id": "site-9"},
    }
