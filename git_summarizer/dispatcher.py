"""Method dispatch for the MCP handshake, tool listing and tool calls."""

from __future__ import annotations

from collections.abc import Callable
import logging
from typing import Any

from mcp.types import Implementation, InitializeResult, ServerCapabilities, ToolsCapability

from git_summarizer import SERVER_NAME, __version__
from git_summarizer.catalog import build_tools, dump_tool
from git_summarizer.executor import ToolExecutor, dump_result
from git_summarizer.protocol import (
    PROTOCOL_VERSION,
    JsonRpcRequest,
    Outcome,
    method_not_found,
    parse_call_params,
    parse_initialize_params,
)
from git_summarizer.state import ConfigurationState

logger = logging.getLogger("git-summarizer.dispatch")

Handler = Callable[[JsonRpcRequest, Any], Any]


class Dispatcher:
    """Routes a request's ``method`` to its handler.

    ``dispatch`` returns the result payload, an RpcError, or None when no
    response must be written. Handlers run for notifications as well; the
    caller drops their payload because there is no id to answer.
    """

    def __init__(self, state: ConfigurationState, executor: ToolExecutor):
        self.state = state
        self.executor = executor
        self.handlers: dict[str, Handler] = {
            "initialize": self._handle_initialize,
            "notifications/initialized": self._handle_initialized,
            "tools/list": self._handle_list_tools,
            "tools/call": self._handle_call_tool,
        }

    def dispatch(self, request: JsonRpcRequest, correlation_id: str | None = None) -> Outcome | None:
        """
        Run the handler for ``request.method``.

        Raises:
            InvalidParamsError: tools/call params are malformed. Not turned
                into a result; the transport decides what to do with it.
        """
        handler = self.handlers.get(request.method)
        if handler is None:
            if request.is_notification:
                logger.debug(f"Ignoring unknown notification: {request.method}")
                return None
            logger.warning(
                f"Method not found: {request.method}",
                extra={"correlation_id": correlation_id, "method": request.method},
            )
            return method_not_found()
        return handler(request, correlation_id)

    def _handle_initialize(self, request: JsonRpcRequest, correlation_id: str | None) -> dict[str, Any]:
        params = parse_initialize_params(request.params)
        if params is not None and params.options is not None:
            commit_format = params.options.commitFormat
            if commit_format is not None:
                self.state.set(commit_format)
                logger.info(
                    "Commit format overridden by client",
                    extra={"correlation_id": correlation_id, "method": request.method},
                )

        result = InitializeResult(
            protocolVersion=PROTOCOL_VERSION,
            capabilities=ServerCapabilities(tools=ToolsCapability(listChanged=True)),
            serverInfo=Implementation(name=SERVER_NAME, version=__version__),
        )
        return result.model_dump(mode="json", by_alias=True, exclude_none=True)

    def _handle_initialized(self, request: JsonRpcRequest, correlation_id: str | None) -> None:
        logger.info("Client confirmed initialization", extra={"correlation_id": correlation_id})
        return None

    def _handle_list_tools(self, request: JsonRpcRequest, correlation_id: str | None) -> dict[str, Any]:
        tools = build_tools(self.state.get())
        return {"tools": [dump_tool(t) for t in tools]}

    def _handle_call_tool(self, request: JsonRpcRequest, correlation_id: str | None) -> dict[str, Any]:
        params = parse_call_params(request.params)
        logger.info(
            f"call_tool: {params.name}",
            extra={"correlation_id": correlation_id, "tool": params.name},
        )
        return dump_result(self.executor.call(params, correlation_id))
