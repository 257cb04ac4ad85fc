"""Pytest fixtures for git-summarizer."""

from __future__ import annotations

from pathlib import Path
import shutil
import subprocess

import pytest

from git_summarizer.tools.git import GitError, NoStagedChangesError


@pytest.fixture(autouse=True)
def hermetic_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Autouse: each test runs in its own tmp cwd with no GIT_SUMMARIZER_* overrides.
    """
    monkeypatch.chdir(tmp_path)
    for name in (
        "GIT_SUMMARIZER_CONFIG",
        "GIT_SUMMARIZER_ENABLED",
        "GIT_SUMMARIZER_LOG_LEVEL",
        "GIT_SUMMARIZER_LOG_FORMAT",
        "GIT_SUMMARIZER_REPO",
        "GIT_SUMMARIZER_GIT",
        "GIT_SUMMARIZER_COMMIT_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


class FakeBackend:
    """Records calls; returns canned results or raises the configured error."""

    def __init__(self):
        self.diff = "diff --git a/a.txt b/a.txt\n+hello\n"
        self.diff_error: Exception | None = None
        self.commit_error: Exception | None = None
        self.messages: list[str] = []
        self.diff_calls = 0

    def get_staged_diff(self) -> str:
        self.diff_calls += 1
        if self.diff_error is not None:
            raise self.diff_error
        return self.diff

    def commit(self, message: str) -> str:
        self.messages.append(message)
        if self.commit_error is not None:
            raise self.commit_error
        return "Commit successful: 0123456789abcdef0123456789abcdef01234567"


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def no_staged_backend(fake_backend: FakeBackend) -> FakeBackend:
    fake_backend.diff_error = NoStagedChangesError()
    return fake_backend


@pytest.fixture
def failing_backend(fake_backend: FakeBackend) -> FakeBackend:
    fake_backend.diff_error = GitError("fatal: not a git repository")
    fake_backend.commit_error = GitError("fatal: not a git repository")
    return fake_backend


def _git(repo: Path, *args: str) -> str:
    return subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, encoding="utf-8", check=True
    ).stdout


@pytest.fixture
def git_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An empty git repository with a local identity."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmp_path / "gitconfig"))
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "config", "user.name", "Test User")
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "commit.gpgsign", "false")
    return repo


@pytest.fixture
def git():
    """Helper to run git commands in a test repository."""
    return _git
