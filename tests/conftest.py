"""Shared fixtures for stresser tests."""

import asyncio
from collections.abc import AsyncIterator, Iterator
from dataclasses import dataclass

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer
from aioresponses import aioresponses as aioresponses_cls

TARGET_URL = "http://target.test/health"


@pytest.fixture
def aioresponses() -> Iterator[aioresponses_cls]:
    """Intercept every aiohttp request made during the test."""
    with aioresponses_cls() as mocked:
        yield mocked


@dataclass
class ServerState:
    hits: int = 0
    active: int = 0
    peak: int = 0


@pytest.fixture
async def slow_server() -> AsyncIterator[tuple[TestServer, ServerState]]:
    """Local server that answers 200 after a short delay and tracks overlap."""
    state = ServerState()

    async def handler(request: web.Request) -> web.Response:
        state.hits += 1
        state.active += 1
        state.peak = max(state.peak, state.active)
        try:
            await asyncio.sleep(0.02)
            return web.Response(text="ok")
        finally:
            state.active -= 1

    app = web.Application()
    app.router.add_get("/", handler)
    async with TestServer(app) as server:
        yield server, state
