"""Request/response envelopes and the JSON-over-TCP framing.

Message format:
    4 bytes: message length (big-endian uint32)
    N bytes: JSON payload (UTF-8)

Request payload:
    {
        "kind": "DETECT_CYCLES_DIRECTED",
        "payload": {"adjacencyList": [[1], [2], [0]]},
        "id": "req-17"
    }

Response payload:
    {
        "kind": "DIRECTED_CYCLES_RESULT",
        "payload": {"hasCycle": true, "cyclePath": [0, 1, 2]},
        "id": "req-17"
    }

"id" is optional.  When present it is echoed back unchanged so a
client with several requests in flight can match up the replies; the
engine itself still answers them one at a time, in order.
"""
from __future__ import annotations

import json
import socket
import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from graph_engine.errors import InvalidInputError

HEADER_SIZE = 4          # 4 bytes, big-endian uint32
MAX_MESSAGE_SIZE = 16 * 1024 * 1024  # 16 MB safety limit


class RequestKind(str, Enum):
    FIND_EULERIAN_PATH = "FIND_EULERIAN_PATH"
    DETECT_CYCLES_DIRECTED = "DETECT_CYCLES_DIRECTED"
    DETECT_CYCLES_UNDIRECTED = "DETECT_CYCLES_UNDIRECTED"
    FIND_WORD_LADDER = "FIND_WORD_LADDER"


class ResponseKind(str, Enum):
    EULERIAN_PATH_RESULT = "EULERIAN_PATH_RESULT"
    DIRECTED_CYCLES_RESULT = "DIRECTED_CYCLES_RESULT"
    UNDIRECTED_CYCLES_RESULT = "UNDIRECTED_CYCLES_RESULT"
    WORD_LADDER_RESULT = "WORD_LADDER_RESULT"
    ERROR = "ERROR"


def _frame(obj: dict[str, Any]) -> bytes:
    payload = json.dumps(obj, separators=(",", ":")).encode("utf-8")
    return struct.pack("!I", len(payload)) + payload


def _load(data: bytes) -> Any:
    try:
        return json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidInputError(f"Message is not valid JSON: {exc}") from None


@dataclass(frozen=True, slots=True)
class EngineRequest:
    """A tagged request.

    *kind* is kept as the raw string so an unrecognised tag can still be
    carried to the dispatcher and answered with an ERROR response.
    """
    kind: str
    payload: dict[str, Any] = field(default_factory=dict)
    request_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        obj: dict[str, Any] = {"kind": self.kind, "payload": self.payload}
        if self.request_id is not None:
            obj["id"] = self.request_id
        return obj

    @classmethod
    def from_dict(cls, obj: Any) -> EngineRequest:
        if not isinstance(obj, dict):
            raise InvalidInputError(
                f"Request must be a JSON object, got {type(obj).__name__}"
            )
        kind = obj.get("kind")
        if not isinstance(kind, str):
            raise InvalidInputError("Request is missing a string 'kind'")
        payload = obj.get("payload", {})
        if not isinstance(payload, dict):
            raise InvalidInputError(
                f"Request payload must be a JSON object, "
                f"got {type(payload).__name__}"
            )
        request_id = obj.get("id")
        return cls(
            kind=kind,
            payload=payload,
            request_id=None if request_id is None else str(request_id),
        )

    def to_bytes(self) -> bytes:
        """Serialize to wire format: 4-byte length prefix + JSON payload."""
        return _frame(self.to_dict())

    @classmethod
    def from_bytes(cls, data: bytes) -> EngineRequest:
        """Deserialize from JSON bytes (without length prefix)."""
        return cls.from_dict(_load(data))


@dataclass(frozen=True, slots=True)
class EngineResponse:
    """A tagged response: an algorithm result or an ERROR."""
    kind: str
    payload: dict[str, Any]
    request_id: str | None = None

    @classmethod
    def error(
        cls, message: str, code: str, request_id: str | None = None
    ) -> EngineResponse:
        return cls(
            kind=ResponseKind.ERROR.value,
            payload={"message": message, "code": code},
            request_id=request_id,
        )

    @property
    def is_error(self) -> bool:
        return self.kind == ResponseKind.ERROR.value

    def to_dict(self) -> dict[str, Any]:
        obj: dict[str, Any] = {"kind": self.kind, "payload": self.payload}
        if self.request_id is not None:
            obj["id"] = self.request_id
        return obj

    @classmethod
    def from_dict(cls, obj: Any) -> EngineResponse:
        if not isinstance(obj, dict) or not isinstance(obj.get("kind"), str):
            raise InvalidInputError("Response must be an object with a 'kind'")
        return cls(
            kind=obj["kind"],
            payload=obj.get("payload") or {},
            request_id=obj.get("id"),
        )

    def to_bytes(self) -> bytes:
        """Serialize to wire format: 4-byte length prefix + JSON payload."""
        return _frame(self.to_dict())

    @classmethod
    def from_bytes(cls, data: bytes) -> EngineResponse:
        """Deserialize from JSON bytes (without length prefix)."""
        return cls.from_dict(_load(data))


Envelope = Union[EngineRequest, EngineResponse]


def frame_length(header: bytes) -> int:
    """Decode a frame header into the body length that follows it.

    Raises ValueError for a body above MAX_MESSAGE_SIZE.  The stream is
    out of sync after that, so the caller should drop the connection.
    """
    (length,) = struct.unpack("!I", header)
    if length > MAX_MESSAGE_SIZE:
        raise ValueError(f"Frame of {length} bytes exceeds limit {MAX_MESSAGE_SIZE}")
    return length


# ---- blocking sockets ---------------------------------------------------

def _recv_exactly(sock: socket.socket, n: int) -> bytes:
    buf = bytearray(n)
    view = memoryview(buf)
    got = 0
    while got < n:
        count = sock.recv_into(view[got:])
        if count == 0:
            raise ConnectionError(f"Peer closed after {got} of {n} bytes")
        got += count
    return bytes(buf)


def recv_frame(sock: socket.socket) -> bytes:
    """Return the body of the next frame on *sock*, header stripped.

    Raises:
        ConnectionError: if the peer closes mid-frame
        ValueError: if the header announces an oversized body
    """
    return _recv_exactly(sock, frame_length(_recv_exactly(sock, HEADER_SIZE)))


def recv_request(sock: socket.socket) -> EngineRequest:
    return EngineRequest.from_bytes(recv_frame(sock))


def recv_response(sock: socket.socket) -> EngineResponse:
    return EngineResponse.from_bytes(recv_frame(sock))


def send_envelope(sock: socket.socket, message: Envelope) -> None:
    sock.sendall(message.to_bytes())
