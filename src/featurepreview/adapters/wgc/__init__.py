"""Public interface for the ``wgc`` adapter."""

from __future__ import annotations

from .client import WgcGateway
from .runner import CommandResult, CommandRunner, WgcExecutionError, run_command
from .schema import CommandOutput, FeatureFlagListing, GraphErrorPayload
from .translator import (
    exit_code_outcome,
    extract_json,
    parse_feature_flag_names,
    structured_outcome,
)

__all__ = [
    "CommandOutput",
    "CommandResult",
    "CommandRunner",
    "FeatureFlagListing",
    "GraphErrorPayload",
    "WgcExecutionError",
    "WgcGateway",
    "exit_code_outcome",
    "extract_json",
    "parse_feature_flag_names",
    "run_command",
    "structured_outcome",
]
