"""
JSON-RPC request envelope.

Every request carries id 1.  Replies are never matched by id: the sender
reads the next frame after each write, so callers must not overlap calls
on one connection.  Pipelining would need per-call ids and a table of
pending replies keyed by id.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from .errors import SerializationError

JSONRPC_VERSION = "2.0"
REQUEST_ID = 1
METHOD_BLXR_TX = "blxr_tx"


@dataclass(frozen=True)
class Request:
    method: str
    params: dict[str, Any] = field(default_factory=dict)
    id: int = REQUEST_ID
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "jsonrpc": self.jsonrpc,
            "id": self.id,
            "method": self.method,
        }
        if self.params:
            payload["params"] = self.params
        return payload


def blxr_tx_request(raw_tx: str) -> Request:
    """Build the ``blxr_tx`` request relaying one raw transaction."""
    return Request(method=METHOD_BLXR_TX, params={"transaction": raw_tx})


def encode_request(request: Request) -> str:
    """
    Serialize a request to compact JSON text.

    The text is also checked to be valid UTF-8 so that it can go out as a
    single websocket text frame.

    Raises:
        SerializationError: If the request cannot be encoded
    """
    try:
        text = json.dumps(request.to_dict(), separators=(",", ":"), ensure_ascii=False)
        text.encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Cannot encode {request.method} request: {exc}") from exc
    return text
