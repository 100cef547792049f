"""Reusable fakes for the ports the reconciler talks through."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from featurepreview.domain.ports import (
    FeatureResourceGateway,
    PullRequestChanges,
    PullRequestCommenter,
)
from featurepreview.domain.reconciliation import CommandFailed, PlanOperation, Succeeded

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from featurepreview.domain.reconciliation import RemoteOutcome
    from featurepreview.domain.types import ChangeRecord

LIST_FLAGS = "list_flags"
WHOAMI = "whoami"


@dataclass(slots=True)
class GatewayCall:
    operation: str
    name: str
    options: dict[str, object] = field(default_factory=dict[str, object])


class FakeGateway(FeatureResourceGateway):
    """In-memory resource gateway recording every call in order."""

    def __init__(
        self,
        *,
        existing_flags: Iterable[str] = (),
        outcomes: dict[tuple[str, str], RemoteOutcome] | None = None,
        listing_fails: bool = False,
        authenticated: bool = True,
    ) -> None:
        self.existing_flags = list(existing_flags)
        self.outcomes = outcomes or {}
        self.listing_fails = listing_fails
        self.authenticated = authenticated
        self.calls: list[GatewayCall] = []

    def publish_feature_subgraph(
        self,
        name: str,
        *,
        subgraph: str,
        routing_url: str,
        schema_path: str,
        namespace: str,
    ) -> RemoteOutcome:
        return self._record(
            PlanOperation.PUBLISH_SUBGRAPH,
            name,
            subgraph=subgraph,
            routing_url=routing_url,
            schema_path=schema_path,
            namespace=namespace,
        )

    def delete_subgraph(self, name: str, *, namespace: str) -> RemoteOutcome:
        return self._record(PlanOperation.DELETE_SUBGRAPH, name, namespace=namespace)

    def create_feature_flag(
        self,
        name: str,
        *,
        namespace: str,
        labels: Sequence[str],
        feature_subgraphs: Sequence[str],
        enabled: bool = True,
    ) -> RemoteOutcome:
        return self._record(
            PlanOperation.CREATE_FLAG,
            name,
            namespace=namespace,
            labels=tuple(labels),
            feature_subgraphs=tuple(feature_subgraphs),
            enabled=enabled,
        )

    def update_feature_flag(
        self,
        name: str,
        *,
        namespace: str,
        labels: Sequence[str],
        feature_subgraphs: Sequence[str],
    ) -> RemoteOutcome:
        return self._record(
            PlanOperation.UPDATE_FLAG,
            name,
            namespace=namespace,
            labels=tuple(labels),
            feature_subgraphs=tuple(feature_subgraphs),
        )

    def delete_feature_flag(self, name: str, *, namespace: str) -> RemoteOutcome:
        return self._record(PlanOperation.DELETE_FLAG, name, namespace=namespace)

    def list_feature_flags(self, *, namespace: str) -> list[str] | None:
        self.calls.append(GatewayCall(LIST_FLAGS, namespace))
        if self.listing_fails:
            return None
        return list(self.existing_flags)

    def whoami(self) -> RemoteOutcome:
        self.calls.append(GatewayCall(WHOAMI, "auth whoami"))
        if self.authenticated:
            return Succeeded(target="auth whoami")
        return CommandFailed(target="auth whoami", message="invalid api key")

    @property
    def mutations(self) -> list[GatewayCall]:
        return [call for call in self.calls if call.operation not in {LIST_FLAGS, WHOAMI}]

    def names(self, operation: str) -> list[str]:
        return [call.name for call in self.calls if call.operation == operation]

    def call(self, operation: str, name: str) -> GatewayCall:
        return next(
            call for call in self.calls if call.operation == operation and call.name == name
        )

    def _record(self, operation: str, name: str, **options: object) -> RemoteOutcome:
        self.calls.append(GatewayCall(operation, name, options))
        return self.outcomes.get((operation, name), Succeeded(target=name))


class FakePullRequestChanges(PullRequestChanges):
    def __init__(
        self,
        changed: Iterable[ChangeRecord] = (),
        latest_commit: Iterable[ChangeRecord] = (),
    ) -> None:
        self._changed = list(changed)
        self._latest_commit = list(latest_commit)
        self.calls: list[tuple[str, int]] = []

    def changed_files(self, pr_number: int) -> list[ChangeRecord]:
        self.calls.append(("changed_files", pr_number))
        return list(self._changed)

    def latest_commit_files(self, pr_number: int) -> list[ChangeRecord]:
        self.calls.append(("latest_commit_files", pr_number))
        return list(self._latest_commit)


class FakeCommenter(PullRequestCommenter):
    def __init__(self) -> None:
        self.comments: list[tuple[int, str]] = []

    def post_comment(self, pr_number: int, body: str) -> None:
        self.comments.append((pr_number, body))
