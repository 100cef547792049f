"""Core value types shared across the preview reconciler."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

type PullRequestNumber = int
type FeatureSubgraphName = str
type FeatureFlagName = str

ROUTING_URL_PR_PLACEHOLDER = "{PR_NUMBER}"


class ChangeKind(StrEnum):
    """Git-style change classification of a file touched by a pull request."""

    ADDED = "A"
    COPIED = "C"
    DELETED = "D"
    MODIFIED = "M"
    RENAMED = "R"
    TYPE_CHANGED = "T"
    UNMERGED = "U"
    UNKNOWN = "X"


class LifecycleEvent(StrEnum):
    """Pull request lifecycle event handled by a single invocation."""

    CREATE = "create"
    UPDATE = "update"
    DESTROY = "destroy"


@dataclass(frozen=True, slots=True)
class ChangeRecord:
    """One file touched by a pull request, as reported by the code host."""

    path: str
    kind: ChangeKind


@dataclass(frozen=True, slots=True)
class SubgraphConfig:
    """Base subgraph declared in the manifest.

    ``schema_path`` is absolute, resolved against the manifest's directory.
    ``routing_url`` may embed ``{PR_NUMBER}``.
    """

    name: str
    schema_path: Path
    routing_url: str

    def routing_url_for(self, pr_number: PullRequestNumber) -> str:
        return self.routing_url.replace(ROUTING_URL_PR_PLACEHOLDER, str(pr_number))


@dataclass(frozen=True, slots=True)
class FeatureFlagConfig:
    """Feature flag declared in the manifest."""

    name: str
    labels: tuple[str, ...] = ()


def feature_subgraph_name(
    subgraph_name: str,
    namespace: str,
    pr_number: PullRequestNumber,
) -> FeatureSubgraphName:
    """Derive the PR-scoped feature subgraph name; the join key for every remote call."""

    return f"{subgraph_name}-{namespace}-{pr_number}"


def feature_flag_name(flag_name: str, pr_number: PullRequestNumber) -> FeatureFlagName:
    return f"{flag_name}-{pr_number}"


__all__ = [
    "ROUTING_URL_PR_PLACEHOLDER",
    "ChangeKind",
    "ChangeRecord",
    "FeatureFlagConfig",
    "FeatureFlagName",
    "FeatureSubgraphName",
    "LifecycleEvent",
    "PullRequestNumber",
    "SubgraphConfig",
    "feature_flag_name",
    "feature_subgraph_name",
]
