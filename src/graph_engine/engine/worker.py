"""In-process engine worker: one background thread, one request at a time.

Architecture:
    Caller thread: submit() returns a Future immediately
    Worker thread: ThreadPoolExecutor(max_workers=1) runs dispatch()
    Per-request flow: dispatch -> resolve future -> bump counter

With a single worker thread, requests never overlap: a slow word
ladder search holds up everything queued behind it.  There is no
cancellation or timeout.  A host that needs requests to run side by
side creates several EngineWorker instances.

Callers on an event loop use `await worker.request(...)`, which wraps
the same future without blocking the loop.
"""
from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from graph_engine.engine.dispatcher import Dispatcher
from graph_engine.engine.protocol import EngineRequest, EngineResponse, RequestKind

log = logging.getLogger(__name__)


class EngineWorker:
    """Runs requests on a dedicated background thread.

    Args:
        dispatcher: the Dispatcher to run requests through (default: a
            new one with default limits).

    Usage:
        with EngineWorker() as worker:
            future = worker.detect_cycles_directed([[1], [2], [0]])
            response = future.result()
    """

    def __init__(self, dispatcher: Dispatcher | None = None) -> None:
        self._dispatcher = dispatcher or Dispatcher()
        self._executor: ThreadPoolExecutor | None = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="graph-engine"
        )
        self._requests_processed = 0
        self._lock = threading.Lock()

    def submit(self, request: EngineRequest) -> Future[EngineResponse]:
        """Queue *request*; the returned future resolves to its response.

        Raises RuntimeError if the worker has been closed.
        """
        with self._lock:
            if self._executor is None:
                raise RuntimeError("Engine worker is closed")
            return self._executor.submit(self._run, request)

    async def request(self, request: EngineRequest) -> EngineResponse:
        """Await the response to *request* from a coroutine."""
        return await asyncio.wrap_future(self.submit(request))

    def _run(self, request: EngineRequest) -> EngineResponse:
        try:
            return self._dispatcher.dispatch(request)
        finally:
            with self._lock:
                self._requests_processed += 1

    # ---- convenience wrappers, one per request kind ------------------------

    def find_eulerian_path(
        self, adjacency_list: list[list[int]]
    ) -> Future[EngineResponse]:
        return self.submit(EngineRequest(
            RequestKind.FIND_EULERIAN_PATH.value,
            {"adjacencyList": adjacency_list},
        ))

    def detect_cycles_directed(
        self, adjacency_list: list[list[int]]
    ) -> Future[EngineResponse]:
        return self.submit(EngineRequest(
            RequestKind.DETECT_CYCLES_DIRECTED.value,
            {"adjacencyList": adjacency_list},
        ))

    def detect_cycles_undirected(
        self, adjacency_list: list[list[int]]
    ) -> Future[EngineResponse]:
        return self.submit(EngineRequest(
            RequestKind.DETECT_CYCLES_UNDIRECTED.value,
            {"adjacencyList": adjacency_list},
        ))

    def find_word_ladder(
        self, begin_word: str, end_word: str, word_list: list[str]
    ) -> Future[EngineResponse]:
        payload: dict[str, Any] = {
            "beginWord": begin_word,
            "endWord": end_word,
            "wordList": word_list,
        }
        return self.submit(
            EngineRequest(RequestKind.FIND_WORD_LADDER.value, payload)
        )

    # ---- lifecycle ---------------------------------------------------------

    def close(self) -> None:
        """Finish queued requests, then stop the worker thread."""
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True, cancel_futures=False)
            log.debug("Engine worker stopped after %d requests", self.requests_processed)

    @property
    def closed(self) -> bool:
        return self._executor is None

    @property
    def requests_processed(self) -> int:
        """Total requests handled (thread-safe read)."""
        with self._lock:
            return self._requests_processed

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    def __enter__(self) -> EngineWorker:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
