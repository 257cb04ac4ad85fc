"""Tool catalog for the git-summarizer MCP server."""

from __future__ import annotations

from mcp.types import Tool

from git_summarizer.prompts import (
    COMMIT_MESSAGE_DESCRIPTION,
    EXECUTE_COMMIT_DESCRIPTION,
    render_staged_diff_description,
)
from git_summarizer.state import ServerConfiguration

GET_STAGED_DIFF = "get_staged_diff"
EXECUTE_COMMIT = "execute_commit"

TOOL_NAMES = (GET_STAGED_DIFF, EXECUTE_COMMIT)


def build_tools(config: ServerConfiguration) -> list[Tool]:
    """
    Build the tool list for the given configuration.

    Called on every tools/list so the get_staged_diff description always
    carries the current commit format template.
    """
    return [
        Tool(
            name=GET_STAGED_DIFF,
            description=render_staged_diff_description(config.commit_format_template),
            inputSchema={
                "type": "object",
                "properties": {},
            },
        ),
        Tool(
            name=EXECUTE_COMMIT,
            description=EXECUTE_COMMIT_DESCRIPTION,
            inputSchema={
                "type": "object",
                "properties": {
                    "message": {
                        "type": "string",
                        "description": COMMIT_MESSAGE_DESCRIPTION,
                    },
                },
                "required": ["message"],
            },
        ),
    ]


def dump_tool(tool: Tool) -> dict:
    """Wire form of a tool descriptor (camelCase keys, unset fields omitted)."""
    return tool.model_dump(mode="json", by_alias=True, exclude_none=True)
