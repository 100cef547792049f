"""GitHub REST API configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import first_env_var
from .http import HttpClientConfig, RateLimit

GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
GITHUB_TIMEOUT_SECONDS = 30.0
GITHUB_PAGE_SIZE = 100


@dataclass(frozen=True)
class GitHubConfig:
    """Holds GitHub API configuration values."""

    token: str = field(repr=False)
    http: HttpClientConfig
    page_size: int = GITHUB_PAGE_SIZE


def get_github_config(token: str, *, http: HttpClientConfig | None = None) -> GitHubConfig:
    api_url = first_env_var("GITHUB_API_URL") or GITHUB_API_URL
    return GitHubConfig(
        token=token,
        http=http
        or HttpClientConfig(
            name="github",
            base_url=api_url,
            timeout_seconds=GITHUB_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {token}",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
            },
        ),
    )
