"""CLI for the git-summarizer MCP server."""

from __future__ import annotations

import json
from pathlib import Path

from rich.console import Console
from rich.table import Table
import typer

app = typer.Typer(
    name="git-summarizer",
    help="Git Summarizer MCP server CLI",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def _load(config_path: Path | None):
    from git_summarizer.config import ConfigError, load_config

    try:
        return load_config(config_path)
    except ConfigError as e:
        err_console.print(f"[red]✗[/] {e}")
        raise typer.Exit(2) from None


@app.command()
def serve(
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Path to git-summarizer.toml"
    ),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help="Override log level"),
) -> None:
    """Run the MCP server on stdin/stdout."""
    from git_summarizer.server import serve as run_server

    config = _load(config_path)
    if log_level:
        config.server.log_level = log_level
    run_server(config)


@app.command()
def tools(
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Path to git-summarizer.toml"
    ),
    commit_format: str | None = typer.Option(
        None, "--format", "-f", help="Commit format template to render into descriptions"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the tools/list payload as JSON"),
) -> None:
    """Show the tool catalog as a client would see it."""
    from git_summarizer.catalog import build_tools, dump_tool
    from git_summarizer.state import ServerConfiguration

    config = _load(config_path)
    template = commit_format if commit_format is not None else config.commit.format
    catalog = build_tools(ServerConfiguration(commit_format_template=template))

    if as_json:
        typer.echo(json.dumps({"tools": [dump_tool(t) for t in catalog]}, ensure_ascii=False, indent=2))
        return

    table = Table(title="Tools")
    table.add_column("Name", style="bold", no_wrap=True)
    table.add_column("Required", no_wrap=True)
    table.add_column("Description")
    for tool in catalog:
        required = ", ".join(tool.inputSchema.get("required", [])) or "-"
        table.add_row(tool.name, required, tool.description or "")
    console.print(table)


@app.command()
def diff(
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Path to git-summarizer.toml"
    ),
) -> None:
    """Print the staged diff the get_staged_diff tool would return."""
    from git_summarizer.tools.git import GitBackend, GitError

    config = _load(config_path)
    backend = GitBackend(config.git.repo_path, config.git.git_binary)
    try:
        text = backend.get_staged_diff()
    except GitError as e:
        err_console.print(f"[yellow]![/] {e}")
        raise typer.Exit(1) from None
    typer.echo(text, nl=False)


def main() -> None:
    """Entry point for git-summarizer CLI."""
    app()


if __name__ == "__main__":
    main()
