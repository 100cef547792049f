"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, first_env_var, require_env_vars
from .errors import (
    ConfigurationError,
    CredentialError,
    LifecycleSelectionError,
    ManifestChangedError,
    ManifestError,
    MissingConfigurationError,
)
from .github import GitHubConfig, get_github_config
from .http import HttpClientConfig, RateLimit
from .inputs import ActionInputs, PullRequestContext, resolve_lifecycle_event
from .logging import configure_logging
from .manifest import DEFAULT_MANIFEST_PATH, Manifest, load_manifest
from .wgc import WgcConfig, get_wgc_config

__all__ = [
    "DEFAULT_MANIFEST_PATH",
    "ActionInputs",
    "ConfigurationError",
    "CredentialError",
    "GitHubConfig",
    "HttpClientConfig",
    "LifecycleSelectionError",
    "Manifest",
    "ManifestChangedError",
    "ManifestError",
    "MissingConfigurationError",
    "PullRequestContext",
    "RateLimit",
    "WgcConfig",
    "configure_logging",
    "env_flag",
    "first_env_var",
    "get_github_config",
    "get_wgc_config",
    "load_manifest",
    "require_env_vars",
    "resolve_lifecycle_event",
]
