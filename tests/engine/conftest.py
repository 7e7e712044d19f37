"""Shared fixtures for dispatcher, worker and server tests.

Requires: pip install pytest-asyncio
"""
from __future__ import annotations

import asyncio

import pytest

from graph_engine.config import EngineLimits
from graph_engine.engine.async_protocol import read_response, write_envelope
from graph_engine.engine.dispatcher import Dispatcher
from graph_engine.engine.protocol import EngineRequest, EngineResponse
from graph_engine.engine.server import EngineServer

WORDS = ["hot", "dot", "dog", "lot", "log", "cog"]


@pytest.fixture
def dispatcher() -> Dispatcher:
    return Dispatcher()


@pytest.fixture
def tight_dispatcher() -> Dispatcher:
    """Dispatcher with limits small enough to trip in a test."""
    return Dispatcher(EngineLimits(max_nodes=50, max_stack_depth=5, max_words=10))


def directed_triangle_request(request_id: str | None = None) -> EngineRequest:
    return EngineRequest(
        "DETECT_CYCLES_DIRECTED",
        {"adjacencyList": [[1], [2], [0]]},
        request_id=request_id,
    )


def word_ladder_request(request_id: str | None = None) -> EngineRequest:
    return EngineRequest(
        "FIND_WORD_LADDER",
        {"beginWord": "hit", "endWord": "cog", "wordList": WORDS},
        request_id=request_id,
    )


# ---------------------------------------------------------------------------
# Async server helpers
# ---------------------------------------------------------------------------

async def start_server(dispatcher: Dispatcher | None = None) -> EngineServer:
    """Create and start an EngineServer on an OS-assigned port."""
    srv = EngineServer(host="127.0.0.1", port=0, dispatcher=dispatcher)
    await srv.start()
    await srv.wait_ready()
    return srv


async def exchange(
    reader: asyncio.StreamReader,
    writer: asyncio.StreamWriter,
    request: EngineRequest,
) -> EngineResponse:
    """Send one request on an open connection and read its response."""
    await write_envelope(writer, request)
    return await read_response(reader)
