"""Port for the remote composition backend that owns all durable state."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from featurepreview.domain.reconciliation.outcomes import RemoteOutcome


@runtime_checkable
class FeatureResourceGateway(Protocol):
    """Create/update/delete/list/publish primitives on the composition backend.

    Calls are issued one at a time and return a structured outcome instead of
    raising for remote failures. Deleting an absent resource succeeds.
    """

    def publish_feature_subgraph(
        self,
        name: str,
        *,
        subgraph: str,
        routing_url: str,
        schema_path: str,
        namespace: str,
    ) -> RemoteOutcome: ...

    def delete_subgraph(self, name: str, *, namespace: str) -> RemoteOutcome: ...

    def create_feature_flag(
        self,
        name: str,
        *,
        namespace: str,
        labels: Sequence[str],
        feature_subgraphs: Sequence[str],
        enabled: bool = True,
    ) -> RemoteOutcome: ...

    def update_feature_flag(
        self,
        name: str,
        *,
        namespace: str,
        labels: Sequence[str],
        feature_subgraphs: Sequence[str],
    ) -> RemoteOutcome: ...

    def delete_feature_flag(self, name: str, *, namespace: str) -> RemoteOutcome: ...

    def list_feature_flags(self, *, namespace: str) -> list[str] | None:
        """Names of existing feature flags, or ``None`` when the listing failed."""
        ...

    def whoami(self) -> RemoteOutcome: ...


__all__ = ["FeatureResourceGateway"]
