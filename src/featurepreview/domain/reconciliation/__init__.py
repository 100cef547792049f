"""Reconciliation core for pull request preview environments.

Flow per invocation:
1) the change classifier filters the pull request diff to schema files
2) the revert detector finds schema files restored by the latest push (update only)
3) the engine plans publish/delete/create/update operations for the event
4) the plan is executed sequentially against the resource gateway
5) the run report feeds the pull request comment and step outputs
"""

from __future__ import annotations

from .engine import ReconciliationEngine
from .outcomes import (
    CommandFailed,
    CompositionFailed,
    DeploymentFailed,
    FailedOutcome,
    GraphError,
    OutcomeStatus,
    RemoteOutcome,
    Succeeded,
    is_success,
)
from .plan import (
    ExecutedOperation,
    FeatureSubgraphRecord,
    PlannedOperation,
    PlanOperation,
    ReconciliationPlan,
    RunReport,
)

__all__ = [
    "CommandFailed",
    "CompositionFailed",
    "DeploymentFailed",
    "ExecutedOperation",
    "FailedOutcome",
    "FeatureSubgraphRecord",
    "GraphError",
    "OutcomeStatus",
    "PlanOperation",
    "PlannedOperation",
    "ReconciliationEngine",
    "ReconciliationPlan",
    "RemoteOutcome",
    "RunReport",
    "Succeeded",
    "is_success",
]
