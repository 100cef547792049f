"""Pydantic models describing the GitHub REST payloads we consume."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GitHubBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class FilePayload(GitHubBaseModel):
    """Entry of ``pulls/{n}/files`` and of ``commits/{sha}.files``."""

    filename: str
    status: str
    sha: str | None = None
    previous_filename: str | None = None
    additions: int = 0
    deletions: int = 0


class CommitSummary(GitHubBaseModel):
    message: str = ""


class PullRequestCommitPayload(GitHubBaseModel):
    sha: str
    commit: CommitSummary = Field(default_factory=CommitSummary)


class CommitDetailPayload(GitHubBaseModel):
    sha: str
    files: list[FilePayload] | None = None


class IssueCommentPayload(GitHubBaseModel):
    id: int
    html_url: str | None = None


class ErrorResponse(GitHubBaseModel):
    message: str
    documentation_url: str | None = None
