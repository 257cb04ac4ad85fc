"""Git Summarizer tools - version-control backend."""

from git_summarizer.tools.git import (  # noqa: F401
    GitBackend,
    GitError,
    NoStagedChangesError,
)
