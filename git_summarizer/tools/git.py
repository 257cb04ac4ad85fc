"""
Git backend for the git-summarizer MCP tools.

Drives the ``git`` executable through subprocess:
- get_staged_diff: patch text of the index against HEAD (or the empty tree)
- commit: commit the index tree as-is, no hooks, message stored verbatim
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from git_summarizer.prompts import NO_STAGED_CHANGES_MESSAGE

logger = logging.getLogger("git-summarizer.git")


class GitError(RuntimeError):
    """Raised when a git operation fails."""


class NoStagedChangesError(GitError):
    """Raised when the index has no changes relative to HEAD."""

    def __init__(self, message: str = NO_STAGED_CHANGES_MESSAGE):
        super().__init__(message)


class GitBackend:
    """Staged-diff and commit operations against one repository."""

    def __init__(self, repo_path: str | Path = ".", git_binary: str = "git"):
        self.repo_path = Path(repo_path)
        self.git_binary = git_binary

    def _run(self, args: list[str], input_text: str | None = None) -> str:
        cmd = [self.git_binary, *args]
        logger.debug(f"Running: {' '.join(cmd)} (cwd={self.repo_path})")
        try:
            result = subprocess.run(
                cmd,
                cwd=self.repo_path,
                input=input_text,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as e:
            raise GitError(f"git executable not found: {self.git_binary}") from e
        except NotADirectoryError as e:
            raise GitError(f"Repository path is not a directory: {self.repo_path}") from e

        if result.returncode != 0:
            detail = result.stderr.strip() or result.stdout.strip()
            raise GitError(detail or f"git {' '.join(args)} failed with exit code {result.returncode}")
        return result.stdout

    def _ensure_repository(self) -> None:
        if not self.repo_path.is_dir():
            raise GitError(f"Repository path does not exist: {self.repo_path}")
        self._run(["rev-parse", "--git-dir"])

    def _has_head(self) -> bool:
        try:
            self._run(["rev-parse", "--verify", "--quiet", "HEAD^{commit}"])
        except GitError:
            return False
        return True

    def get_staged_diff(self) -> str:
        """
        Return the staged change set as a patch.

        Compares the index with HEAD; in a repository without commits git
        compares against the empty tree.

        Raises:
            NoStagedChangesError: nothing is staged
            GitError: not a repository, or git failed
        """
        self._ensure_repository()
        diff = self._run(
            ["-c", "core.quotePath=false", "diff", "--cached", "--patch", "--no-color", "--no-ext-diff"]
        )
        if not diff:
            raise NoStagedChangesError()
        return diff

    def commit(self, message: str) -> str:
        """
        Commit the current index with ``message``.

        HEAD becomes the parent when it exists; otherwise this is the initial
        commit. No hooks run (hooksPath points at the null device). Empty
        messages and unchanged trees are accepted. The author and committer
        identity comes from git configuration.

        Returns:
            Confirmation text naming the new commit id.
        """
        self._ensure_repository()
        initial = not self._has_head()
        self._run(
            [
                "-c",
                f"core.hooksPath={os.devnull}",
                "commit",
                "--quiet",
                "--no-verify",
                "--allow-empty",
                "--allow-empty-message",
                "--cleanup=verbatim",
                "--file=-",
            ],
            input_text=message,
        )
        commit_id = self._run(["rev-parse", "HEAD"]).strip()
        logger.info(f"Created {'initial ' if initial else ''}commit {commit_id}")
        return f"Commit successful: {commit_id}"
