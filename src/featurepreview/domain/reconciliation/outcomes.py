"""Tagged outcome variants for remote operations.

Every gateway call returns exactly one variant. Composition and deployment
failures keep their structured errors so reporting can point at the failing
federated graph; ``CommandFailed`` covers everything without structured detail
(non-zero exit, missing or malformed output).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Literal


class OutcomeStatus(StrEnum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True, slots=True, kw_only=True)
class GraphError:
    """Composition or deployment error reported for one federated graph."""

    message: str
    federated_graph_name: str | None = None
    feature_flag: str | None = None
    namespace: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Succeeded:
    target: str
    message: str | None = None
    status: Literal[OutcomeStatus.SUCCESS] = OutcomeStatus.SUCCESS


@dataclass(frozen=True, slots=True, kw_only=True)
class CompositionFailed:
    target: str
    message: str
    errors: tuple[GraphError, ...]
    status: Literal[OutcomeStatus.FAILURE] = OutcomeStatus.FAILURE

    def __post_init__(self) -> None:
        if not self.errors:
            raise ValueError("Composition failure must include at least one error")


@dataclass(frozen=True, slots=True, kw_only=True)
class DeploymentFailed:
    target: str
    message: str
    errors: tuple[GraphError, ...]
    status: Literal[OutcomeStatus.FAILURE] = OutcomeStatus.FAILURE

    def __post_init__(self) -> None:
        if not self.errors:
            raise ValueError("Deployment failure must include at least one error")


@dataclass(frozen=True, slots=True, kw_only=True)
class CommandFailed:
    target: str
    message: str
    status: Literal[OutcomeStatus.FAILURE] = OutcomeStatus.FAILURE


type FailedOutcome = CompositionFailed | DeploymentFailed | CommandFailed
type RemoteOutcome = Succeeded | FailedOutcome


def is_success(outcome: RemoteOutcome) -> bool:
    return outcome.status is OutcomeStatus.SUCCESS
