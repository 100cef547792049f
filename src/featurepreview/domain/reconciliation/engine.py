"""Decision core mapping pull request diffs to feature subgraph and flag operations.

Nothing is remembered between runs. Each invocation re-derives the resources it
owns from the deterministic naming scheme, the pull request's changed files and
live queries against the composition backend.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from featurepreview.domain.paths import resolve_path
from featurepreview.domain.types import LifecycleEvent, feature_flag_name, feature_subgraph_name

from .outcomes import is_success
from .plan import (
    FeatureSubgraphRecord,
    PlannedOperation,
    PlanOperation,
    ReconciliationPlan,
    RunReport,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from featurepreview.domain.ports.resources import FeatureResourceGateway
    from featurepreview.domain.types import FeatureFlagConfig, PullRequestNumber, SubgraphConfig

    from .outcomes import RemoteOutcome

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine:
    """Plan and execute the remote operations for one lifecycle event of one pull request."""

    gateway: FeatureResourceGateway
    namespace: str
    subgraphs: Sequence[SubgraphConfig]
    feature_flags: Sequence[FeatureFlagConfig]
    pr_number: PullRequestNumber
    workspace: Path = field(default_factory=Path.cwd)

    def reconcile(
        self,
        event: LifecycleEvent,
        changed_schema_files: Sequence[str],
        reverted_schema_files: Sequence[str] = (),
    ) -> RunReport:
        """Plan ``event`` from the given diff and run it."""

        match event:
            case LifecycleEvent.CREATE:
                plan = self.plan_create(changed_schema_files)
            case LifecycleEvent.UPDATE:
                plan = self.plan_update(changed_schema_files, reverted_schema_files)
            case LifecycleEvent.DESTROY:
                plan = self.plan_destroy(changed_schema_files)
        return self.execute(plan)

    def matched_subgraphs(self, schema_files: Iterable[str]) -> list[FeatureSubgraphRecord]:
        """Feature subgraphs for changed files that belong to a configured subgraph.

        The first configured subgraph whose schema path equals the changed file
        wins. Each derived name appears once.
        """

        by_path: dict[str, SubgraphConfig] = {}
        for subgraph in self.subgraphs:
            by_path.setdefault(resolve_path(subgraph.schema_path, workspace=self.workspace), subgraph)

        records: dict[str, FeatureSubgraphRecord] = {}
        for schema_file in schema_files:
            subgraph = by_path.get(resolve_path(schema_file, workspace=self.workspace))
            if subgraph is None:
                continue
            name = feature_subgraph_name(subgraph.name, self.namespace, self.pr_number)
            records.setdefault(
                name,
                FeatureSubgraphRecord(
                    feature_subgraph_name=name,
                    schema_path=str(subgraph.schema_path),
                    routing_url=subgraph.routing_url_for(self.pr_number),
                    base_subgraph_name=subgraph.name,
                ),
            )
        return list(records.values())

    def plan_create(self, changed_schema_files: Sequence[str]) -> ReconciliationPlan:
        plan = ReconciliationPlan(event=LifecycleEvent.CREATE)
        published = self._add_publishes(plan, changed_schema_files)
        if not published:
            log.info("No subgraphs found to create feature subgraphs.")
            return plan

        for flag in self.feature_flags:
            plan.add(self._flag_operation(PlanOperation.CREATE_FLAG, flag, published))
        return plan

    def plan_update(
        self,
        changed_schema_files: Sequence[str],
        reverted_schema_files: Sequence[str] = (),
    ) -> ReconciliationPlan:
        plan = ReconciliationPlan(event=LifecycleEvent.UPDATE)
        for record in self.matched_subgraphs(reverted_schema_files):
            plan.add(
                PlannedOperation(
                    operation=PlanOperation.DELETE_SUBGRAPH,
                    target=record.feature_subgraph_name,
                    subgraph=record,
                )
            )

        published = self._add_publishes(plan, changed_schema_files)
        if not published:
            log.info("No changes found in subgraphs to update feature subgraphs.")
            return plan

        existing = self.gateway.list_feature_flags(namespace=self.namespace)
        if existing is None:
            log.warning(
                "Could not list feature flags in namespace %s; assuming they exist",
                self.namespace,
            )
        for flag in self.feature_flags:
            name = feature_flag_name(flag.name, self.pr_number)
            operation = PlanOperation.UPDATE_FLAG
            if existing is not None and name not in existing:
                log.info("Feature flag %s does not exist yet; creating it", name)
                operation = PlanOperation.CREATE_FLAG
            plan.add(self._flag_operation(operation, flag, published))
        return plan

    def plan_destroy(self, changed_schema_files: Sequence[str]) -> ReconciliationPlan:
        """Flags first, then every feature subgraph this pull request could have created."""

        plan = ReconciliationPlan(event=LifecycleEvent.DESTROY)
        for flag in self.feature_flags:
            plan.add(
                PlannedOperation(
                    operation=PlanOperation.DELETE_FLAG,
                    target=feature_flag_name(flag.name, self.pr_number),
                )
            )
        for record in self.matched_subgraphs(changed_schema_files):
            plan.add(
                PlannedOperation(
                    operation=PlanOperation.DELETE_SUBGRAPH,
                    target=record.feature_subgraph_name,
                    subgraph=record,
                )
            )
        return plan

    def execute(self, plan: ReconciliationPlan) -> RunReport:
        """Run ``plan`` in order; a failed operation never stops the ones after it."""

        report = RunReport(plan=plan)
        for planned in plan.operations:
            outcome = self._dispatch(planned)
            if is_success(outcome):
                log.info("%s %s succeeded", planned.operation, planned.target)
            else:
                log.error("%s %s failed: %s", planned.operation, planned.target, outcome.message)
            report.record(planned, outcome)
        return report

    def _add_publishes(
        self,
        plan: ReconciliationPlan,
        changed_schema_files: Sequence[str],
    ) -> tuple[str, ...]:
        records = self.matched_subgraphs(changed_schema_files)
        for record in records:
            plan.add(
                PlannedOperation(
                    operation=PlanOperation.PUBLISH_SUBGRAPH,
                    target=record.feature_subgraph_name,
                    subgraph=record,
                )
            )
        return tuple(record.feature_subgraph_name for record in records)

    def _flag_operation(
        self,
        operation: PlanOperation,
        flag: FeatureFlagConfig,
        feature_subgraphs: tuple[str, ...],
    ) -> PlannedOperation:
        return PlannedOperation(
            operation=operation,
            target=feature_flag_name(flag.name, self.pr_number),
            labels=flag.labels,
            feature_subgraphs=feature_subgraphs,
        )

    def _dispatch(self, planned: PlannedOperation) -> RemoteOutcome:
        gateway = self.gateway
        match planned.operation:
            case PlanOperation.PUBLISH_SUBGRAPH:
                record = planned.subgraph
                if record is None:
                    raise ValueError(f"Publish of {planned.target} has no subgraph record")
                return gateway.publish_feature_subgraph(
                    planned.target,
                    subgraph=record.base_subgraph_name,
                    routing_url=record.routing_url,
                    schema_path=record.schema_path,
                    namespace=self.namespace,
                )
            case PlanOperation.DELETE_SUBGRAPH:
                return gateway.delete_subgraph(planned.target, namespace=self.namespace)
            case PlanOperation.CREATE_FLAG:
                return gateway.create_feature_flag(
                    planned.target,
                    namespace=self.namespace,
                    labels=planned.labels,
                    feature_subgraphs=planned.feature_subgraphs,
                    enabled=True,
                )
            case PlanOperation.UPDATE_FLAG:
                return gateway.update_feature_flag(
                    planned.target,
                    namespace=self.namespace,
                    labels=planned.labels,
                    feature_subgraphs=planned.feature_subgraphs,
                )
            case PlanOperation.DELETE_FLAG:
                return gateway.delete_feature_flag(planned.target, namespace=self.namespace)
