"""Shared fixtures: settings, a fake Referencime backend, a wired dispatcher."""

import asyncio
import json

import httpx
import pytest

from referencime.config import Settings
from referencime.gateway import BackendGateway
from referencime.registry import ToolRegistry
from referencime_mcp.dispatcher import Dispatcher

API_URL = "https://api.test/wp-json/easy-links/v1"


class FakeBackend:
    """Stands in for the Referencime API and records every request."""

    def __init__(self, body=None, status=200, error=None):
        self.body = body
        self.status = status
        self.error = error
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status, json=self.body)
        return httpx.Response(self.status, text=self.body or "")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last_request.content)


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def settings():
    return Settings(api_key="test-key", api_url=API_URL, timeout=5.0)


@pytest.fixture
def registry():
    return ToolRegistry.default()


@pytest.fixture
def make_dispatcher(settings, registry):
    """Build a dispatcher whose backend answers with ``body`` / ``status``."""

    def _make(body=None, status=200, error=None):
        backend = FakeBackend(body=body, status=status, error=error)
        gateway = BackendGateway(settings, transport=backend.transport)
        return Dispatcher(registry, gateway), backend

    return _make
