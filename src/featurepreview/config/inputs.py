"""Invocation inputs: lifecycle event selection, credentials and pull request context.

Values come from explicit arguments first and fall back to the environment the
GitHub Actions runner provides (``INPUT_*`` variables, ``GITHUB_EVENT_PATH``,
``GITHUB_REPOSITORY``, ``GITHUB_WORKSPACE``).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from featurepreview.domain.types import LifecycleEvent

from .env import env_flag, first_env_var, require_env_vars
from .errors import ConfigurationError, LifecycleSelectionError, MissingConfigurationError
from .manifest import DEFAULT_MANIFEST_PATH

API_KEY_ENV_VARS = ("INPUT_COSMO_API_KEY", "COSMO_API_KEY")
GITHUB_TOKEN_ENV_VARS = ("INPUT_GITHUB_TOKEN", "GITHUB_TOKEN")


def resolve_lifecycle_event(*, create: bool, update: bool, destroy: bool) -> LifecycleEvent:
    """Return the single selected event or raise ``LifecycleSelectionError``."""

    if not (create or update or destroy):
        raise LifecycleSelectionError(
            "Please provide at least one action type to perform. "
            "Either create, update, or destroy."
        )
    if sum((create, update, destroy)) != 1:
        raise LifecycleSelectionError(
            'Exactly one of "create", "update", or "destroy" must be true.'
        )
    if create:
        return LifecycleEvent.CREATE
    return LifecycleEvent.UPDATE if update else LifecycleEvent.DESTROY


def _workspace_from_environment() -> Path:
    workspace = first_env_var("GITHUB_WORKSPACE")
    return Path(workspace).resolve() if workspace else Path.cwd()


@dataclass(frozen=True, slots=True)
class ActionInputs:
    """Everything one invocation needs before talking to any remote service."""

    event: LifecycleEvent
    config_path: Path
    api_key: str = field(repr=False)
    github_token: str = field(repr=False)
    workspace: Path = field(default_factory=Path.cwd)

    @classmethod
    def from_environment(
        cls,
        *,
        config_path: str | None = None,
        create: bool | None = None,
        update: bool | None = None,
        destroy: bool | None = None,
        api_key: str | None = None,
        github_token: str | None = None,
        workspace: Path | None = None,
    ) -> ActionInputs:
        event = resolve_lifecycle_event(
            create=env_flag("INPUT_CREATE") if create is None else create,
            update=env_flag("INPUT_UPDATE") if update is None else update,
            destroy=env_flag("INPUT_DESTROY") if destroy is None else destroy,
        )

        resolved_api_key = api_key or first_env_var(*API_KEY_ENV_VARS)
        resolved_token = github_token or first_env_var(*GITHUB_TOKEN_ENV_VARS)
        missing: list[str] = []
        if not resolved_api_key:
            missing.append("cosmo_api_key")
        if not resolved_token:
            missing.append("github_token")
        if missing or resolved_api_key is None or resolved_token is None:
            raise MissingConfigurationError(f"Missing configuration for: {', '.join(missing)}")

        root = workspace.resolve() if workspace else _workspace_from_environment()
        raw_path = config_path or first_env_var("INPUT_CONFIG_PATH") or DEFAULT_MANIFEST_PATH
        manifest_path = Path(raw_path)
        if not manifest_path.is_absolute():
            manifest_path = root / manifest_path

        return cls(
            event=event,
            config_path=manifest_path,
            api_key=resolved_api_key,
            github_token=resolved_token,
            workspace=root,
        )


@dataclass(frozen=True, slots=True)
class PullRequestContext:
    """Repository and pull request the invocation acts on."""

    repository: str
    pr_number: int

    @classmethod
    def from_environment(
        cls,
        *,
        repository: str | None = None,
        pr_number: int | None = None,
    ) -> PullRequestContext:
        resolved_repository = (
            repository or require_env_vars(("GITHUB_REPOSITORY",))["GITHUB_REPOSITORY"]
        )
        if "/" not in resolved_repository:
            raise ConfigurationError(
                f"Invalid repository '{resolved_repository}' (expected 'owner/name')"
            )

        resolved_number = pr_number if pr_number is not None else _pr_number_from_event()
        return cls(repository=resolved_repository, pr_number=resolved_number)


def _pr_number_from_event() -> int:
    event_path = require_env_vars(("GITHUB_EVENT_PATH",))["GITHUB_EVENT_PATH"]
    try:
        payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Could not read event payload {event_path}: {exc}") from exc

    pull_request = payload.get("pull_request") if isinstance(payload, dict) else None
    number = pull_request.get("number") if isinstance(pull_request, dict) else None
    if not isinstance(number, int):
        raise ConfigurationError("This action only works with pull_requests.")
    return number
