"""Git Summarizer - MCP server that turns staged git changes into commits."""

__version__ = "0.1.0"
SERVER_NAME = "git-summarizer"
