"""Process-wide server configuration, mutable through the initialize handshake."""

from __future__ import annotations

from dataclasses import dataclass
from threading import Lock

from git_summarizer.prompts import DEFAULT_COMMIT_FORMAT


@dataclass(frozen=True)
class ServerConfiguration:
    """Snapshot of the runtime-tunable settings."""

    commit_format_template: str


class ConfigurationState:
    """Lock-guarded holder for the current ServerConfiguration.

    Created once per server and injected into the dispatcher. Readers get an
    immutable snapshot.
    """

    def __init__(self, template: str = DEFAULT_COMMIT_FORMAT):
        self._lock = Lock()
        self._current = ServerConfiguration(commit_format_template=template)

    def get(self) -> ServerConfiguration:
        with self._lock:
            return self._current

    def set(self, template: str) -> None:
        with self._lock:
            self._current = ServerConfiguration(commit_format_template=template)
