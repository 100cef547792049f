"""Configuration for the ``wgc`` command-line client."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import first_env_var

WGC_BINARY = "wgc"
WGC_API_KEY_ENV_VAR = "COSMO_API_KEY"


@dataclass(frozen=True, slots=True)
class WgcConfig:
    """Holds the ``wgc`` executable and the credential handed to each invocation."""

    api_key: str = field(repr=False)
    binary: str = WGC_BINARY
    timeout_seconds: float | None = None


def get_wgc_config(api_key: str) -> WgcConfig:
    return WgcConfig(api_key=api_key, binary=first_env_var("WGC_BINARY") or WGC_BINARY)
