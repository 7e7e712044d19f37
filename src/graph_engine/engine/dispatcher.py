"""Request dispatcher: route a tagged request to its algorithm.

The central routing logic:
  1. Look up the request kind in the handler table
  2. Pull the algorithm's arguments out of the payload
  3. Run the algorithm on request-scoped state
  4. Wrap the result in the matching response kind

Every failure comes back as an ERROR response, never as an exception:
an unknown kind, a payload the algorithm rejects, a search that hits a
configured limit, and, as a last resort, an unexpected bug.

Thread safety: Dispatcher holds only its (immutable) limits. Each
dispatch() builds fresh graphs, visited arrays and queues, so one
instance can be shared by the worker, the server and direct callers.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable

from graph_engine.config import DEFAULT_LIMITS, EngineLimits
from graph_engine.engine.protocol import (
    EngineRequest,
    EngineResponse,
    RequestKind,
    ResponseKind,
)
from graph_engine.errors import EngineError, InvalidInputError
from graph_engine.graph.adjacency import Graph
from graph_engine.graph.cycle_detector import (
    detect_directed_cycle,
    detect_undirected_cycle,
)
from graph_engine.graph.eulerian import find_eulerian_path
from graph_engine.words.word_ladder import find_word_ladder

log = logging.getLogger(__name__)


def _require(payload: dict[str, Any], key: str) -> Any:
    if key not in payload:
        raise InvalidInputError(f"Payload is missing '{key}'")
    return payload[key]


class Dispatcher:
    """Routes requests to the four graph searches.

    Usage:
        dispatcher = Dispatcher()
        response = dispatcher.dispatch(
            EngineRequest("DETECT_CYCLES_DIRECTED", {"adjacencyList": [[1], [0]]})
        )
    """

    def __init__(self, limits: EngineLimits | None = None) -> None:
        self._limits = limits or DEFAULT_LIMITS
        self._handlers: dict[
            RequestKind, tuple[ResponseKind, Callable[[dict[str, Any]], dict[str, Any]]]
        ] = {
            RequestKind.FIND_EULERIAN_PATH: (
                ResponseKind.EULERIAN_PATH_RESULT, self._eulerian_path,
            ),
            RequestKind.DETECT_CYCLES_DIRECTED: (
                ResponseKind.DIRECTED_CYCLES_RESULT, self._directed_cycles,
            ),
            RequestKind.DETECT_CYCLES_UNDIRECTED: (
                ResponseKind.UNDIRECTED_CYCLES_RESULT, self._undirected_cycles,
            ),
            RequestKind.FIND_WORD_LADDER: (
                ResponseKind.WORD_LADDER_RESULT, self._word_ladder,
            ),
        }

    @property
    def limits(self) -> EngineLimits:
        return self._limits

    def dispatch(self, request: EngineRequest) -> EngineResponse:
        """Run *request* and return its response (possibly an ERROR)."""
        start_ns = time.perf_counter_ns()
        try:
            kind = RequestKind(request.kind)
        except ValueError:
            log.warning("Unknown request kind %r (id=%s)", request.kind, request.request_id)
            return EngineResponse.error(
                f"Unknown message type: {request.kind}",
                code="UNKNOWN_REQUEST",
                request_id=request.request_id,
            )

        response_kind, handler = self._handlers[kind]
        try:
            payload = handler(request.payload)
        except EngineError as exc:
            log.warning(
                "Rejected %s (id=%s): %s", kind.value, request.request_id, exc
            )
            return EngineResponse.error(
                str(exc), code=exc.code, request_id=request.request_id
            )
        except Exception:
            log.exception("Error handling %s (id=%s)", kind.value, request.request_id)
            return EngineResponse.error(
                f"Internal error while handling {kind.value}",
                code="INTERNAL_ERROR",
                request_id=request.request_id,
            )

        elapsed_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
        log.debug(
            "Handled %s (id=%s) in %.3f ms", kind.value, request.request_id, elapsed_ms
        )
        return EngineResponse(
            kind=response_kind.value,
            payload=payload,
            request_id=request.request_id,
        )

    def dispatch_dict(self, obj: Any) -> dict[str, Any]:
        """Dispatch a plain JSON-style object and return one."""
        try:
            request = EngineRequest.from_dict(obj)
        except InvalidInputError as exc:
            request_id = obj.get("id") if isinstance(obj, dict) else None
            return EngineResponse.error(
                str(exc), code=exc.code, request_id=request_id
            ).to_dict()
        return self.dispatch(request).to_dict()

    # ---- handlers --------------------------------------------------------

    def _graph(self, payload: dict[str, Any]) -> Graph:
        return Graph.from_adjacency_list(
            _require(payload, "adjacencyList"), self._limits
        )

    def _eulerian_path(self, payload: dict[str, Any]) -> dict[str, Any]:
        return find_eulerian_path(self._graph(payload), self._limits).to_payload()

    def _directed_cycles(self, payload: dict[str, Any]) -> dict[str, Any]:
        return detect_directed_cycle(self._graph(payload), self._limits).to_payload()

    def _undirected_cycles(self, payload: dict[str, Any]) -> dict[str, Any]:
        return detect_undirected_cycle(self._graph(payload), self._limits).to_payload()

    def _word_ladder(self, payload: dict[str, Any]) -> dict[str, Any]:
        return find_word_ladder(
            _require(payload, "beginWord"),
            _require(payload, "endWord"),
            _require(payload, "wordList"),
            self._limits,
        ).to_payload()
