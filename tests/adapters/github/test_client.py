from __future__ import annotations

import json
from typing import TYPE_CHECKING

import httpx
import pytest

from featurepreview.adapters.github import GitHubAPIError, GitHubClient
from featurepreview.adapters.github.schema import FilePayload
from featurepreview.adapters.github.translator import parse_change_records, translate_files
from featurepreview.adapters.http_client import RateLimitedClient
from featurepreview.config.github import GitHubConfig
from featurepreview.config.http import HttpClientConfig
from featurepreview.domain.types import ChangeKind, ChangeRecord

if TYPE_CHECKING:
    from collections.abc import Callable

API = "https://api.github.com"
REPOSITORY = "acme/storefront"

type Handler = Callable[[httpx.Request], httpx.Response]


def _client(handler: Handler) -> GitHubClient:
    http = HttpClientConfig(
        name="github",
        base_url=API,
        default_headers={"Authorization": "Bearer token"},
    )

    def factory(config: HttpClientConfig) -> RateLimitedClient:
        return RateLimitedClient(config, transport=httpx.MockTransport(handler))

    return GitHubClient(
        config=GitHubConfig(token="token", http=http, page_size=2),
        repository=REPOSITORY,
        client_factory=factory,
    )


def test_changed_files_follows_pagination_links() -> None:
    seen: list[httpx.URL] = []
    next_page = f"{API}/repos/{REPOSITORY}/pulls/42/files?per_page=2&page=2"

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        assert request.headers["Authorization"] == "Bearer token"
        if request.url.params.get("page") == "2":
            return httpx.Response(200, json=[{"filename": "schemas/c.gql", "status": "removed"}])
        return httpx.Response(
            200,
            json=[
                {"filename": "schemas/a.graphql", "status": "modified"},
                {"filename": "schemas/b.graphql", "status": "renamed"},
            ],
            headers={"Link": f'<{next_page}>; rel="next"'},
        )

    records = _client(handler).changed_files(42)

    assert [url.path for url in seen] == [f"/repos/{REPOSITORY}/pulls/42/files"] * 2
    assert seen[0].params["per_page"] == "2"
    assert records == [
        ChangeRecord("schemas/a.graphql", ChangeKind.MODIFIED),
        ChangeRecord("schemas/b.graphql", ChangeKind.DELETED),
        ChangeRecord("schemas/b.graphql", ChangeKind.ADDED),
        ChangeRecord("schemas/c.gql", ChangeKind.DELETED),
    ]


def test_latest_commit_files_reads_last_commit() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/pulls/42/commits"):
            return httpx.Response(200, json=[{"sha": "aaa"}, {"sha": "bbb"}])
        assert request.url.path == f"/repos/{REPOSITORY}/commits/bbb"
        return httpx.Response(
            200,
            json={
                "sha": "bbb",
                "files": [{"filename": "schemas/products.graphql", "status": "modified"}],
            },
        )

    assert _client(handler).latest_commit_files(42) == [
        ChangeRecord("schemas/products.graphql", ChangeKind.MODIFIED)
    ]


def test_latest_commit_files_without_commits_is_empty() -> None:
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(request.url.path)
        return httpx.Response(200, json=[])

    assert _client(handler).latest_commit_files(42) == []
    assert requested == [f"/repos/{REPOSITORY}/pulls/42/commits"]


def test_latest_commit_without_files_is_empty() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/commits"):
            return httpx.Response(200, json=[{"sha": "aaa"}])
        return httpx.Response(200, json={"sha": "aaa"})

    assert _client(handler).latest_commit_files(42) == []


def test_error_response_raises_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "Not Found"})

    with pytest.raises(GitHubAPIError, match="Not Found") as exc_info:
        _client(handler).changed_files(42)

    assert exc_info.value.status_code == 404


def test_post_comment_sends_body_to_issue_comments() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(201, json={"id": 7, "html_url": "https://github.com/c/7"})

    _client(handler).post_comment(42, "### deployed")

    (request,) = captured
    assert request.method == "POST"
    assert request.url.path == f"/repos/{REPOSITORY}/issues/42/comments"
    assert json.loads(request.content) == {"body": "### deployed"}


@pytest.mark.parametrize(
    ("status", "kind"),
    [
        ("added", ChangeKind.ADDED),
        ("removed", ChangeKind.DELETED),
        ("modified", ChangeKind.MODIFIED),
        ("copied", ChangeKind.COPIED),
        ("changed", ChangeKind.TYPE_CHANGED),
        ("unchanged", ChangeKind.UNMERGED),
        ("something-new", ChangeKind.UNKNOWN),
    ],
)
def test_status_mapping(status: str, kind: ChangeKind) -> None:
    payload = FilePayload(filename="schemas/a.graphql", status=status)

    assert parse_change_records(payload) == [ChangeRecord("schemas/a.graphql", kind)]


def test_rename_uses_reported_filename_for_both_records() -> None:
    payload = FilePayload(
        filename="schemas/new.graphql",
        status="renamed",
        previous_filename="schemas/old.graphql",
    )

    assert translate_files([payload]) == [
        ChangeRecord("schemas/new.graphql", ChangeKind.DELETED),
        ChangeRecord("schemas/new.graphql", ChangeKind.ADDED),
    ]
