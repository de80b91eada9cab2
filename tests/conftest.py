"""Shared pytest fixtures: a scripted CDS behind ``httpx.MockTransport``."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import httpx
import pytest
import pytest_asyncio

from txnative import TxNative, TxSettings

CDS_HOST = "https://cds.test"


@dataclass(slots=True)
class _Reply:
    status: int
    payload: Any = None
    delay: float = 0.0


class CDSStub:
    """Serve queued replies per path and record every request."""

    def __init__(self) -> None:
        self._routes: dict[str, list[_Reply]] = {}
        self.requests: list[httpx.Request] = []

    def reply(self, path: str, status: int, payload: Any = None, *, delay: float = 0.0, times: int = 1) -> None:
        for _ in range(times):
            self._routes.setdefault(path, []).append(_Reply(status, payload, delay))

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._routes.get(request.url.path)
        if not queue:
            return httpx.Response(404, text="no reply scripted")
        reply = queue.pop(0)
        if reply.delay:
            await asyncio.sleep(reply.delay)
        if reply.payload is None:
            return httpx.Response(reply.status)
        return httpx.Response(reply.status, json=reply.payload)


def _build_settings(**overrides: Any) -> TxSettings:
    values: dict[str, Any] = {
        "token": "abcd",
        "cds_host": CDS_HOST,
        "fetch_timeout": 0,
        "fetch_interval": 0,
    }
    values.update(overrides)
    return TxSettings(**values)


@pytest.fixture
def make_settings():
    return _build_settings


@pytest.fixture
def cds() -> CDSStub:
    return CDSStub()


@pytest_asyncio.fixture
async def http_client(cds: CDSStub):
    async with httpx.AsyncClient(transport=httpx.MockTransport(cds.handler)) as client:
        yield client


@pytest.fixture
def tx(http_client: httpx.AsyncClient) -> TxNative:
    return TxNative(_build_settings(), http_client=http_client)
