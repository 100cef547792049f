"""Reconciliation plan types.

A plan is the ordered list of remote operations one invocation intends to run.
It is recomputed from the pull request diff and live remote queries on every
run and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from .outcomes import Succeeded, is_success

if TYPE_CHECKING:
    from featurepreview.domain.types import LifecycleEvent

    from .outcomes import FailedOutcome, RemoteOutcome


class PlanOperation(StrEnum):
    PUBLISH_SUBGRAPH = "publish_subgraph"
    DELETE_SUBGRAPH = "delete_subgraph"
    CREATE_FLAG = "create_flag"
    UPDATE_FLAG = "update_flag"
    DELETE_FLAG = "delete_flag"


@dataclass(frozen=True, slots=True, kw_only=True)
class FeatureSubgraphRecord:
    """Feature subgraph derived from one configured base subgraph."""

    feature_subgraph_name: str
    schema_path: str
    routing_url: str
    base_subgraph_name: str

    def to_output(self) -> dict[str, str]:
        return {
            "featureSubgraphName": self.feature_subgraph_name,
            "schemaPath": self.schema_path,
            "routingUrl": self.routing_url,
            "baseSubgraphName": self.base_subgraph_name,
        }


@dataclass(frozen=True, slots=True, kw_only=True)
class PlannedOperation:
    """One remote call.

    ``subgraph`` is set for subgraph operations. Flag operations carry the
    labels and feature subgraph names they will be created or updated with.
    """

    operation: PlanOperation
    target: str
    subgraph: FeatureSubgraphRecord | None = None
    labels: tuple[str, ...] = ()
    feature_subgraphs: tuple[str, ...] = ()


@dataclass(slots=True)
class ReconciliationPlan:
    """Aggregate plan for one reconciliation run."""

    event: LifecycleEvent
    operations: list[PlannedOperation] = field(default_factory=list["PlannedOperation"])

    def add(self, operation: PlannedOperation) -> None:
        self.operations.append(operation)

    def of(self, *operations: PlanOperation) -> list[PlannedOperation]:
        return [item for item in self.operations if item.operation in operations]

    def targets(self, *operations: PlanOperation) -> list[str]:
        return [item.target for item in self.of(*operations)]

    def __len__(self) -> int:
        return len(self.operations)


@dataclass(slots=True, kw_only=True)
class ExecutedOperation:
    planned: PlannedOperation
    outcome: RemoteOutcome


@dataclass(slots=True)
class RunReport:
    """What one invocation attempted and how each attempt ended."""

    plan: ReconciliationPlan
    executed: list[ExecutedOperation] = field(default_factory=list["ExecutedOperation"])

    def record(self, planned: PlannedOperation, outcome: RemoteOutcome) -> None:
        self.executed.append(ExecutedOperation(planned=planned, outcome=outcome))

    @property
    def feature_subgraphs(self) -> list[str]:
        """Feature subgraph names the flags of this run reference."""

        return self.plan.targets(PlanOperation.PUBLISH_SUBGRAPH)

    @property
    def deployed_flags(self) -> list[str]:
        return [
            item.planned.target
            for item in self._flag_results()
            if is_success(item.outcome)
        ]

    @property
    def failed_flags(self) -> dict[str, FailedOutcome]:
        failed: dict[str, FailedOutcome] = {}
        for item in self._flag_results():
            match item.outcome:
                case Succeeded():
                    continue
                case failure:
                    failed[item.planned.target] = failure
        return failed

    @property
    def failures(self) -> list[ExecutedOperation]:
        return [item for item in self.executed if not is_success(item.outcome)]

    @property
    def to_deploy(self) -> list[FeatureSubgraphRecord]:
        return [
            item.subgraph
            for item in self.plan.of(PlanOperation.PUBLISH_SUBGRAPH)
            if item.subgraph is not None
        ]

    @property
    def to_destroy(self) -> list[FeatureSubgraphRecord]:
        return [
            item.subgraph
            for item in self.plan.of(PlanOperation.DELETE_SUBGRAPH)
            if item.subgraph is not None
        ]

    def _flag_results(self) -> list[ExecutedOperation]:
        return [
            item
            for item in self.executed
            if item.planned.operation in {PlanOperation.CREATE_FLAG, PlanOperation.UPDATE_FLAG}
        ]
