"""Asyncio TCP server that exposes the dispatcher over the wire protocol.

Architecture:
    Single event loop.
    asyncio.start_server() accepts connections.
    Each connection is a coroutine reading length-prefixed requests
    until the client closes it, answering each one in order.
    Dispatch itself is synchronous CPU work, so it runs on a one-thread
    executor: the loop keeps accepting and reading while a search runs,
    and searches from all connections still execute one at a time.

A request that fails to decode (bad JSON, not an object, no kind) gets
an ERROR response and the connection stays open.  An oversized frame
header leaves the stream out of sync, so that connection is closed.

stop() closes the listener and every open connection, then waits for
the search already running (if any) without blocking the loop.  A
request that arrives on a connection after stop() is never dispatched.
"""
from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor

from graph_engine.engine.async_protocol import read_frame, write_envelope
from graph_engine.engine.dispatcher import Dispatcher
from graph_engine.engine.protocol import EngineRequest, EngineResponse
from graph_engine.errors import InvalidInputError

log = logging.getLogger(__name__)


class EngineServer:
    """Asyncio TCP front end for a Dispatcher.

    Args:
        host: Bind address (default "127.0.0.1").
        port: Bind port (default 0 = OS picks a free port).
        dispatcher: the Dispatcher to serve (default: a new one).
    """

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 0,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        self._host = host
        self._port = port
        self._dispatcher = dispatcher or Dispatcher()
        self._executor: ThreadPoolExecutor | None = None
        self._server: asyncio.AbstractServer | None = None
        self._writers: set[asyncio.StreamWriter] = set()
        self._requests_processed: int = 0
        self._ready = asyncio.Event()
        self._bound_port: int = 0

    @property
    def address(self) -> tuple[str, int]:
        """Return (host, port) the server is bound to."""
        return (self._host, self._bound_port)

    @property
    def requests_processed(self) -> int:
        """Total requests answered (only updated on the event loop)."""
        return self._requests_processed

    async def start(self) -> None:
        """Bind the socket and start accepting connections."""
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="graph-engine"
        )
        self._server = await asyncio.start_server(
            self._handle_connection,
            self._host,
            self._port,
        )
        # Grab the actual bound port (important when port=0)
        socks = self._server.sockets
        if socks:
            self._bound_port = socks[0].getsockname()[1]
        log.info("Graph engine listening on %s:%d", self._host, self._bound_port)
        self._ready.set()

    async def serve_forever(self) -> None:
        if self._server is None:
            await self.start()
        await self._server.serve_forever()

    async def stop(self) -> None:
        """Stop accepting, drop open connections, let the running search finish."""
        self._ready.clear()
        # Cleared first: handlers check it before dispatching.
        executor, self._executor = self._executor, None
        server, self._server = self._server, None
        if server is not None:
            server.close()
        for writer in list(self._writers):
            writer.close()
        if server is not None:
            await server.wait_closed()
        if executor is not None:
            await asyncio.get_running_loop().run_in_executor(
                None, executor.shutdown, True
            )
            log.info("Graph engine stopped after %d requests", self._requests_processed)

    async def wait_ready(self, timeout: float = 5.0) -> None:
        """Wait until the server is accepting connections."""
        await asyncio.wait_for(self._ready.wait(), timeout=timeout)

    async def _handle_connection(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ) -> None:
        loop = asyncio.get_running_loop()
        self._writers.add(writer)
        try:
            while True:
                body = await read_frame(reader)
                executor = self._executor
                if executor is None:
                    log.debug("Server stopping, dropping connection")
                    break
                try:
                    req = EngineRequest.from_bytes(body)
                except InvalidInputError as exc:
                    log.warning("Undecodable request: %s", exc)
                    resp = EngineResponse.error(str(exc), code=exc.code)
                else:
                    resp = await loop.run_in_executor(
                        executor, self._dispatcher.dispatch, req
                    )
                if writer.is_closing():
                    break
                self._requests_processed += 1
                await write_envelope(writer, resp)
        except asyncio.IncompleteReadError:
            log.debug("Client closed connection")
        except ConnectionError:
            log.debug("Client connection reset")
        except ValueError as exc:
            log.warning("Dropping connection: %s", exc)
        except Exception:
            log.exception("Error handling connection")
        finally:
            self._writers.discard(writer)
            try:
                writer.close()
                await writer.wait_closed()
            except (ConnectionError, OSError):
                pass
