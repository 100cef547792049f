"""HTTP client for the GitHub pull request endpoints."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import TypeAdapter

from featurepreview.adapters.http_client import RateLimitedClient

from .schema import (
    CommitDetailPayload,
    ErrorResponse,
    FilePayload,
    IssueCommentPayload,
    PullRequestCommitPayload,
)
from .translator import translate_files

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from featurepreview.config.github import GitHubConfig
    from featurepreview.config.http import HttpClientConfig
    from featurepreview.domain.types import ChangeRecord, PullRequestNumber

log = getLogger(__name__)

_FILES_ADAPTER = TypeAdapter(list[FilePayload])
_COMMITS_ADAPTER = TypeAdapter(list[PullRequestCommitPayload])


class GitHubAPIError(RuntimeError):
    """Raised when the GitHub API returns an unexpected response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _default_client_factory(config: HttpClientConfig) -> RateLimitedClient:
    return RateLimitedClient(config)


@dataclass(slots=True)
class GitHubClient:
    """Pull request queries and comments for one repository."""

    config: GitHubConfig
    repository: str
    client_factory: Callable[[HttpClientConfig], RateLimitedClient] = field(
        default=_default_client_factory
    )

    def changed_files(self, pr_number: PullRequestNumber) -> list[ChangeRecord]:
        payloads = asyncio.run(self._list_pull_request_files_async(pr_number))
        log.info(f"Found {len(payloads)} changed files from GitHub API")
        return translate_files(payloads)

    def latest_commit_files(self, pr_number: PullRequestNumber) -> list[ChangeRecord]:
        return translate_files(asyncio.run(self._latest_commit_files_async(pr_number)))

    def post_comment(self, pr_number: PullRequestNumber, body: str) -> None:
        comment = asyncio.run(self._create_issue_comment_async(pr_number, body))
        log.info("Posted comment %s on pull request #%s", comment.html_url or comment.id, pr_number)

    async def _list_pull_request_files_async(
        self, pr_number: PullRequestNumber
    ) -> list[FilePayload]:
        log.info("Getting changed files from GitHub API...")
        async with self.client_factory(self.config.http) as client:
            items = await self._paginate(
                client,
                f"/repos/{self.repository}/pulls/{pr_number}/files",
            )
        return _FILES_ADAPTER.validate_python(items)

    async def _latest_commit_files_async(self, pr_number: PullRequestNumber) -> list[FilePayload]:
        async with self.client_factory(self.config.http) as client:
            commits = _COMMITS_ADAPTER.validate_python(
                await self._paginate(client, f"/repos/{self.repository}/pulls/{pr_number}/commits")
            )
            if not commits:
                log.info("Pull request #%s has no commits", pr_number)
                return []

            latest = commits[-1]
            payload = await self._get_json(client, f"/repos/{self.repository}/commits/{latest.sha}")
            detail = CommitDetailPayload.model_validate(payload)
        log.info("Latest commit %s touches %s files", latest.sha, len(detail.files or ()))
        return detail.files or []

    async def _create_issue_comment_async(
        self, pr_number: PullRequestNumber, body: str
    ) -> IssueCommentPayload:
        async with self.client_factory(self.config.http) as client:
            response = await client.post(
                f"/repos/{self.repository}/issues/{pr_number}/comments",
                json={"body": body},
            )
            payload = self._checked_payload(response)
        return IssueCommentPayload.model_validate(payload)

    async def _paginate(self, client: RateLimitedClient, path: str) -> list[object]:
        """Collect every page of a list endpoint by following ``Link: rel="next"``."""

        items: list[object] = []
        url: str | None = path
        params: dict[str, int] | None = {"per_page": self.config.page_size}
        while url is not None:
            response = await client.get(url, params=params)
            payload = self._checked_payload(response)
            if not isinstance(payload, list):
                raise GitHubAPIError(f"Unexpected GitHub response payload for {path}")
            items.extend(payload)
            url = response.links.get("next", {}).get("url")
            # the next link already carries the query string
            params = None
        return items

    async def _get_json(self, client: RateLimitedClient, path: str) -> object:
        return self._checked_payload(await client.get(path))

    @staticmethod
    def _checked_payload(response: httpx.Response) -> object:
        if response.is_error:
            try:
                error = ErrorResponse.model_validate(response.json())
                message = error.message
            except ValueError:
                message = response.text or response.reason_phrase
            log.error(f"GitHub API error {response.status_code}: {message}")
            raise GitHubAPIError(message, status_code=response.status_code)
        return response.json()

