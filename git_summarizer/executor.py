"""Tool invocation for tools/call: run the backend, shape the content envelope."""

from __future__ import annotations

import logging
import time
from typing import Any, Protocol

from mcp.types import CallToolResult, TextContent

from git_summarizer.catalog import EXECUTE_COMMIT, GET_STAGED_DIFF
from git_summarizer.prompts import UNKNOWN_TOOL_MESSAGE
from git_summarizer.protocol import CallToolParams
from git_summarizer.tools.git import GitError

logger = logging.getLogger("git-summarizer.executor")


class VcsBackend(Protocol):
    """The two operations the tools need. Failures raise GitError."""

    def get_staged_diff(self) -> str: ...

    def commit(self, message: str) -> str: ...


def text_result(text: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


def dump_result(result: CallToolResult) -> dict[str, Any]:
    """Wire form of a tool result: ``{"content": [...], "isError": bool}``."""
    return result.model_dump(mode="json", by_alias=True, exclude_none=True)


def commit_message(arguments: Any) -> str:
    """Extract ``arguments.message``; anything missing or non-string becomes ""."""
    if isinstance(arguments, dict):
        message = arguments.get("message")
        if isinstance(message, str):
            return message
    return ""


class ToolExecutor:
    """Maps tool names to backend calls.

    Backend failures never escape: they come back as ``isError`` results so
    the calling agent can read them.
    """

    def __init__(self, backend: VcsBackend):
        self.backend = backend
        self.tool_handlers = {
            GET_STAGED_DIFF: self._handle_get_staged_diff,
            EXECUTE_COMMIT: self._handle_execute_commit,
        }

    def call(self, params: CallToolParams, correlation_id: str | None = None) -> CallToolResult:
        name = params.name
        handler = self.tool_handlers.get(name)
        if handler is None:
            logger.warning(
                f"Unknown tool: {name}", extra={"correlation_id": correlation_id, "tool": name}
            )
            return text_result(UNKNOWN_TOOL_MESSAGE, is_error=True)

        start_time = time.time()
        error_msg = None
        try:
            result = text_result(handler(params.arguments))
        except GitError as e:
            error_msg = str(e)
            result = text_result(error_msg, is_error=True)
        except Exception as e:
            error_msg = str(e)
            logger.exception(
                f"Tool {name} failed: {e}", extra={"correlation_id": correlation_id, "tool": name}
            )
            result = text_result(error_msg, is_error=True)

        latency_ms = (time.time() - start_time) * 1000
        logger.info(
            f"call_tool done: {name}",
            extra={
                "correlation_id": correlation_id,
                "tool": name,
                "latency_ms": round(latency_ms, 2),
                "status": "error" if result.isError else "ok",
                "error": error_msg,
            },
        )
        return result

    def _handle_get_staged_diff(self, arguments: Any) -> str:
        return self.backend.get_staged_diff()

    def _handle_execute_commit(self, arguments: Any) -> str:
        return self.backend.commit(commit_message(arguments))
