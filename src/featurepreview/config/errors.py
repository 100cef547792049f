"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration values are absent or blank."""


class ManifestError(ConfigurationError):
    """Raised when the preview manifest is missing or does not describe any resources."""


class LifecycleSelectionError(ConfigurationError):
    """Raised when not exactly one of create, update or destroy is selected."""


class ManifestChangedError(ConfigurationError):
    """Raised when the manifest was modified within the lifetime of a pull request."""


class CredentialError(ConfigurationError):
    """Raised when the composition backend rejects the configured API key."""
