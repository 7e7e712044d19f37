"""Request dispatch and the worker/server boundaries around it.

The Dispatcher maps a tagged request to one of the graph searches and
returns a tagged response.  EngineWorker runs it on a background thread
for in-process callers; EngineServer exposes it over length-prefixed
JSON on TCP.
"""
from graph_engine.engine.protocol import (
    EngineRequest,
    EngineResponse,
    RequestKind,
    ResponseKind,
    recv_request,
    recv_response,
    send_envelope,
)
from graph_engine.engine.dispatcher import Dispatcher
from graph_engine.engine.server import EngineServer
from graph_engine.engine.worker import EngineWorker

__all__ = [
    "Dispatcher",
    "EngineRequest",
    "EngineResponse",
    "EngineServer",
    "EngineWorker",
    "RequestKind",
    "ResponseKind",
    "recv_request",
    "recv_response",
    "send_envelope",
]
