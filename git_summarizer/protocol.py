"""
Line-delimited JSON-RPC codec for the MCP stdio transport.

One request object per input line, one response object per output line.
Only the subset of JSON-RPC 2.0 the server needs is modelled: no batches,
no server-initiated requests.
"""

from __future__ import annotations

import json
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, ValidationError

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"

METHOD_NOT_FOUND = -32601


class MessageParseError(ValueError):
    """Raised when an input line is not a well-formed request."""


class InvalidParamsError(ValueError):
    """Raised when a method's params do not match the expected shape."""


class JsonRpcRequest(BaseModel):
    """A decoded request or notification."""

    jsonrpc: str
    method: str
    params: Any = None
    id: Any = None

    @property
    def is_notification(self) -> bool:
        return self.id is None


class RpcError(BaseModel):
    """Transport-level error object."""

    code: int
    message: str


Outcome = Union[dict[str, Any], RpcError]


class JsonRpcResponse(BaseModel):
    """A decoded response line (client side and tests)."""

    jsonrpc: str = JSONRPC_VERSION
    id: Any
    result: Any = None
    error: RpcError | None = None

    def outcome(self) -> Outcome:
        if self.error is not None:
            return self.error
        return self.result


class InitializeOptions(BaseModel):
    model_config = ConfigDict(extra="allow")

    commitFormat: str | None = None


class InitializeParams(BaseModel):
    """initialize params; fields other than ``options`` are kept but unused."""

    model_config = ConfigDict(extra="allow")

    options: InitializeOptions | None = None


class CallToolParams(BaseModel):
    name: str
    arguments: Any = None


def method_not_found() -> RpcError:
    return RpcError(code=METHOD_NOT_FOUND, message="Method not found")


def _reject_constant(name: str) -> Any:
    raise MessageParseError(f"Non-standard JSON constant: {name}")


def _loads(line: str) -> Any:
    try:
        return json.loads(line.rstrip("\r\n"), parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MessageParseError(str(e)) from e


def decode(line: str) -> JsonRpcRequest:
    """
    Parse one input line into a request.

    Raises:
        MessageParseError: invalid JSON, a non-object value, or a missing
            or mistyped ``jsonrpc``/``method`` field. NaN and Infinity are not
            JSON and are rejected.
    """
    data = _loads(line)
    try:
        return JsonRpcRequest.model_validate(data)
    except ValidationError as e:
        raise MessageParseError(str(e)) from e


def decode_response(line: str) -> JsonRpcResponse:
    data = _loads(line)
    try:
        return JsonRpcResponse.model_validate(data)
    except ValidationError as e:
        raise MessageParseError(str(e)) from e


def encode(request_id: Any, outcome: Outcome) -> str:
    """Serialize a response as a single JSON line, newline-terminated."""
    message: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "id": request_id}
    if isinstance(outcome, RpcError):
        message["error"] = outcome.model_dump()
    else:
        message["result"] = outcome
    return json.dumps(message, separators=(",", ":"), allow_nan=False) + "\n"


def parse_call_params(params: Any) -> CallToolParams:
    """
    Validate tools/call params.

    Raises:
        InvalidParamsError: params absent, not an object, or without a
            string ``name``.
    """
    try:
        return CallToolParams.model_validate(params)
    except ValidationError as e:
        raise InvalidParamsError(f"Invalid tools/call params: {e}") from e


def parse_initialize_params(params: Any) -> InitializeParams | None:
    """Validate initialize params; malformed params yield None."""
    if params is None:
        return None
    try:
        return InitializeParams.model_validate(params)
    except ValidationError:
        return None
