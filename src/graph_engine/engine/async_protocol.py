"""Envelope I/O over asyncio streams.

The frame header is decoded by protocol.frame_length, so the size limit
and the error it raises are shared with the blocking helpers.  Outgoing
envelopes are framed by their own to_bytes().
"""
from __future__ import annotations

import asyncio

from graph_engine.engine.protocol import (
    HEADER_SIZE,
    EngineResponse,
    Envelope,
    frame_length,
)


async def read_frame(reader: asyncio.StreamReader) -> bytes:
    """Return the body of the next frame; IncompleteReadError on EOF."""
    length = frame_length(await reader.readexactly(HEADER_SIZE))
    return await reader.readexactly(length)


async def read_response(reader: asyncio.StreamReader) -> EngineResponse:
    return EngineResponse.from_bytes(await read_frame(reader))


async def write_envelope(writer: asyncio.StreamWriter, message: Envelope) -> None:
    writer.write(message.to_bytes())
    await writer.drain()
