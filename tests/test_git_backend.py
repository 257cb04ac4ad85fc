"""Tests for the subprocess git backend against real repositories."""

from __future__ import annotations

import os

import pytest

from git_summarizer.prompts import NO_STAGED_CHANGES_MESSAGE
from git_summarizer.tools.git import GitBackend, GitError, NoStagedChangesError


def test_nothing_staged_in_empty_repo(git_repo):
    with pytest.raises(NoStagedChangesError) as exc:
        GitBackend(git_repo).get_staged_diff()
    assert str(exc.value) == NO_STAGED_CHANGES_MESSAGE


def test_unstaged_changes_are_not_reported(git_repo):
    (git_repo / "a.txt").write_text("hello\n")
    with pytest.raises(NoStagedChangesError):
        GitBackend(git_repo).get_staged_diff()


def test_staged_file_without_head(git_repo, git):
    (git_repo / "a.txt").write_text("hello\n")
    git(git_repo, "add", "a.txt")
    diff = GitBackend(git_repo).get_staged_diff()
    assert "a.txt" in diff
    assert "+hello" in diff


def test_initial_and_followup_commit(git_repo, git):
    backend = GitBackend(git_repo)
    (git_repo / "a.txt").write_text("one\n")
    git(git_repo, "add", "a.txt")

    first = backend.commit("feat: initial")
    first_id = git(git_repo, "rev-parse", "HEAD").strip()
    assert first == f"Commit successful: {first_id}"
    assert git(git_repo, "rev-list", "--parents", "-n", "1", "HEAD").split() == [first_id]

    (git_repo / "a.txt").write_text("two\n")
    git(git_repo, "add", "a.txt")
    diff = backend.get_staged_diff()
    assert "-one" in diff and "+two" in diff

    backend.commit("fix: second\n\nbody line")
    parents = git(git_repo, "rev-list", "--parents", "-n", "1", "HEAD").split()
    assert parents[1] == first_id
    assert git(git_repo, "log", "-1", "--format=%B", "HEAD").rstrip("\n") == "fix: second\n\nbody line"

    with pytest.raises(NoStagedChangesError):
        backend.get_staged_diff()


def test_empty_message_is_accepted(git_repo, git):
    (git_repo / "a.txt").write_text("x\n")
    git(git_repo, "add", "a.txt")
    result = GitBackend(git_repo).commit("")
    assert result.startswith("Commit successful: ")
    assert git(git_repo, "log", "-1", "--format=%B", "HEAD").strip() == ""


def test_commit_message_stored_verbatim(git_repo, git):
    (git_repo / "a.txt").write_text("x\n")
    git(git_repo, "add", "a.txt")
    message = "feat: 中文\n\n# not a comment\nLog: 变更"
    GitBackend(git_repo).commit(message)
    assert git(git_repo, "log", "-1", "--format=%B", "HEAD").rstrip("\n") == message


def test_not_a_repository(tmp_path, git_repo):
    plain = tmp_path / "plain"
    plain.mkdir()
    with pytest.raises(GitError) as exc:
        GitBackend(plain).get_staged_diff()
    assert not isinstance(exc.value, NoStagedChangesError)


def test_missing_repo_path(tmp_path):
    with pytest.raises(GitError):
        GitBackend(tmp_path / "missing").commit("x")


def test_missing_git_binary(tmp_path):
    with pytest.raises(GitError) as exc:
        GitBackend(tmp_path, git_binary="definitely-not-git-xyz").get_staged_diff()
    assert "git executable not found" in str(exc.value)


@pytest.mark.skipif(os.name == "nt", reason="shell hooks need a POSIX shell")
def test_repository_hooks_do_not_run(git_repo, git):
    hooks = git_repo / ".git" / "hooks"
    hooks.mkdir(exist_ok=True)
    marker = git_repo.parent / "post-commit-ran"
    for name, body in (
        ("prepare-commit-msg", 'printf INJECTED >> "$1"\n'),
        ("commit-msg", "exit 1\n"),
        ("post-commit", f'touch "{marker}"\n'),
    ):
        hook = hooks / name
        hook.write_text("#!/bin/sh\n" + body)
        hook.chmod(0o755)

    (git_repo / "a.txt").write_text("x\n")
    git(git_repo, "add", "a.txt")
    GitBackend(git_repo).commit("feat: exact")

    assert git(git_repo, "log", "-1", "--format=%B", "HEAD").rstrip("\n") == "feat: exact"
    assert not marker.exists()
