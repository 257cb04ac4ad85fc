#!/usr/bin/env python3
"""
Git Summarizer MCP Server - staged diff summarization and commit over stdio.

Run with: python -m git_summarizer.server

Tools:
- get_staged_diff: staged changes plus commit format instructions
- execute_commit: commit the staged tree with a confirmed message
"""  # noqa: I001

from __future__ import annotations

import logging
import sys
from typing import TextIO

from git_summarizer.config import AppConfig, ConfigError, load_config
from git_summarizer.dispatcher import Dispatcher
from git_summarizer.executor import ToolExecutor, VcsBackend
from git_summarizer.observability import LOGGER_NAME, generate_correlation_id, setup_logging
from git_summarizer.protocol import InvalidParamsError, MessageParseError, decode, encode
from git_summarizer.state import ConfigurationState
from git_summarizer.tools.git import GitBackend

logger = logging.getLogger(LOGGER_NAME)


class GitSummarizerServer:
    """Line-delimited JSON-RPC server over a pair of text streams."""

    def __init__(self, config: AppConfig, backend: VcsBackend | None = None):
        self.config = config
        self.state = ConfigurationState(config.commit.format)
        self.backend = backend or GitBackend(config.git.repo_path, config.git.git_binary)
        self.executor = ToolExecutor(self.backend)
        self.dispatcher = Dispatcher(self.state, self.executor)

    def handle_line(self, line: str) -> str | None:
        """
        Process one input line and return the response line, if any.

        Malformed lines are logged and yield None. Malformed tools/call params
        raise InvalidParamsError.
        """
        cid = generate_correlation_id()
        logger.debug(f"Request: {line.rstrip()}", extra={"correlation_id": cid})

        try:
            request = decode(line)
        except MessageParseError as e:
            logger.warning(f"Dropping malformed line: {e}", extra={"correlation_id": cid})
            return None

        outcome = self.dispatcher.dispatch(request, cid)
        if outcome is None or request.is_notification:
            return None

        output = encode(request.id, outcome)
        logger.debug(f"Response: {output.rstrip()}", extra={"correlation_id": cid})
        return output

    def run(self, reader: TextIO, writer: TextIO) -> None:
        """Serve until end of input; one response is written and flushed per request."""
        logger.info("Starting git-summarizer MCP server (stdio transport)")
        for line in iter(reader.readline, ""):
            try:
                output = self.handle_line(line)
            except InvalidParamsError as e:
                logger.error(f"Aborted request: {e}")
                continue
            if output is not None:
                writer.write(output)
                writer.flush()
        logger.info("Input closed, shutting down")


def main():
    """Entry point for the git-summarizer MCP server."""
    import argparse

    parser = argparse.ArgumentParser(description="Git Summarizer MCP Server")
    parser.add_argument(
        "--config",
        "-c",
        help="Path to git-summarizer.toml config file",
        default=None,
    )
    parser.add_argument(
        "--log-level",
        "-l",
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Override log level",
    )
    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"git-summarizer: {e}", file=sys.stderr)
        sys.exit(2)

    if args.log_level:
        config.server.log_level = args.log_level

    serve(config)


def serve(config: AppConfig) -> None:
    """Set up logging and run the server on the process's stdio."""
    log = setup_logging(config)
    log.info(f"Config loaded: repo={config.git.repo_path}, log_format={config.logging.format}")

    if not config.enabled:
        log.warning("Server disabled in config, exiting")
        sys.exit(0)

    sys.stdin.reconfigure(encoding="utf-8", errors="replace")
    sys.stdout.reconfigure(encoding="utf-8")

    server = GitSummarizerServer(config)
    server.run(sys.stdin, sys.stdout)


if __name__ == "__main__":
    main()
