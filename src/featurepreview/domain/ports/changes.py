"""Ports for reading pull request diffs from the code host."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from featurepreview.domain.types import ChangeRecord, PullRequestNumber


@runtime_checkable
class PullRequestChanges(Protocol):
    """Query service for files changed by a pull request."""

    def changed_files(self, pr_number: PullRequestNumber) -> list[ChangeRecord]:
        """Every file changed across the full pull request history."""
        ...

    def latest_commit_files(self, pr_number: PullRequestNumber) -> list[ChangeRecord]:
        """Files touched by the most recent commit; empty when there are no commits."""
        ...


@runtime_checkable
class PullRequestCommenter(Protocol):
    def post_comment(self, pr_number: PullRequestNumber, body: str) -> None: ...


__all__ = ["PullRequestChanges", "PullRequestCommenter"]
