"""Public interface for the GitHub adapter."""

from __future__ import annotations

from .client import GitHubAPIError, GitHubClient
from .schema import CommitDetailPayload, FilePayload, PullRequestCommitPayload
from .translator import STATUS_TO_KIND, parse_change_records, translate_files

__all__ = [
    "STATUS_TO_KIND",
    "CommitDetailPayload",
    "FilePayload",
    "GitHubAPIError",
    "GitHubClient",
    "PullRequestCommitPayload",
    "parse_change_records",
    "translate_files",
]
