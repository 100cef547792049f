"""Translate ``wgc`` results into remote outcomes."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from featurepreview.domain.reconciliation.outcomes import (
    CommandFailed,
    CompositionFailed,
    DeploymentFailed,
    GraphError,
    Succeeded,
)

from .schema import CommandOutput, FeatureFlagListing, FeatureFlagListOutput, GraphErrorPayload

if TYPE_CHECKING:
    from collections.abc import Sequence

    from featurepreview.domain.reconciliation.outcomes import RemoteOutcome

    from .runner import CommandResult

_LISTING_ADAPTER = TypeAdapter(list[FeatureFlagListing])

# Phrases the backend uses when a delete targets something that is already gone.
_ABSENT_RESOURCE_MARKERS = ("not found", "does not exist", "doesn't exist", "could not find")


def extract_json(text: str) -> object | None:
    """Parse ``text`` as JSON, tolerating log lines printed before the document."""

    stripped = text.strip()
    if not stripped:
        return None
    try:
        return json.loads(stripped)
    except json.JSONDecodeError:
        pass
    starts = [index for index in (stripped.find("{"), stripped.find("[")) if index >= 0]
    if not starts:
        return None
    try:
        return json.loads(stripped[min(starts) :])
    except json.JSONDecodeError:
        return None


def _graph_errors(payloads: Sequence[GraphErrorPayload]) -> tuple[GraphError, ...]:
    return tuple(
        GraphError(
            message=payload.message,
            federated_graph_name=payload.federated_graph_name,
            feature_flag=payload.feature_flag,
            namespace=payload.namespace,
        )
        for payload in payloads
    )


def _failure_detail(result: CommandResult) -> str:
    detail = result.stderr.strip() or result.stdout.strip()
    return detail or f"wgc returned no usable output (exit status {result.returncode})"


def structured_outcome(target: str, result: CommandResult) -> RemoteOutcome:
    """Outcome of a command invoked with ``--json``."""

    payload = extract_json(result.stdout)
    try:
        output = CommandOutput.model_validate(payload)
    except ValidationError:
        return CommandFailed(target=target, message=_failure_detail(result))

    if output.succeeded:
        return Succeeded(target=target, message=output.message or None)
    if output.composition_errors:
        return CompositionFailed(
            target=target,
            message=output.message,
            errors=_graph_errors(output.composition_errors),
        )
    if output.deployment_errors:
        return DeploymentFailed(
            target=target,
            message=output.message,
            errors=_graph_errors(output.deployment_errors),
        )
    return CommandFailed(target=target, message=output.message or _failure_detail(result))


def exit_code_outcome(
    target: str,
    result: CommandResult,
    *,
    tolerate_absent: bool = False,
) -> RemoteOutcome:
    """Outcome of a command without structured output."""

    if result.returncode == 0:
        return Succeeded(target=target)
    detail = _failure_detail(result)
    if tolerate_absent and any(marker in detail.lower() for marker in _ABSENT_RESOURCE_MARKERS):
        return Succeeded(target=target, message=f"{target} was already absent")
    return CommandFailed(target=target, message=detail)


def parse_feature_flag_names(result: CommandResult) -> list[str] | None:
    """Names from ``feature-flag list --json`` or ``None`` when unusable."""

    if result.returncode != 0:
        return None
    payload = extract_json(result.stdout)
    try:
        if isinstance(payload, list):
            listings = _LISTING_ADAPTER.validate_python(payload)
        else:
            listings = FeatureFlagListOutput.model_validate(payload).feature_flags
    except ValidationError:
        return None
    return [listing.name for listing in listings]
