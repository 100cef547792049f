from __future__ import annotations

from featurepreview.domain.reconciliation import (
    CommandFailed,
    CompositionFailed,
    DeploymentFailed,
    GraphError,
)
from featurepreview.domain.reporting import failure_row, render_report

SUBGRAPHS = ["products-prod-preview-42", "reviews-prod-preview-42"]


def _composition_failure(flag: str, *, error_flag: str) -> CompositionFailed:
    return CompositionFailed(
        target=flag,
        message="Failed to update the feature flag",
        errors=(
            GraphError(
                message="Type Query has conflicting fields:\nproducts",
                federated_graph_name="storefront",
                feature_flag=error_flag,
                namespace="prod-preview",
            ),
        ),
    )


def test_all_flags_deployed() -> None:
    body = render_report(["preview-42", "mobile-42"], SUBGRAPHS, {})

    assert body is not None
    assert "The following feature flags have been deployed" in body
    assert "| preview-42 | products-prod-preview-42, reviews-prod-preview-42 |" in body
    assert "| mobile-42 | products-prod-preview-42, reviews-prod-preview-42 |" in body
    assert "'X-Feature-Flag' header" in body
    assert "failed to deploy" not in body


def test_all_flags_failed() -> None:
    body = render_report(
        [],
        SUBGRAPHS,
        {
            "preview-42": _composition_failure("preview-42", error_flag="preview-42"),
            "mobile-42": CommandFailed(target="mobile-42", message="wgc exited with status 1"),
        },
    )

    assert body is not None
    assert "have been deployed" not in body
    assert "| Feature Flag | Federated Graph | Error |" in body
    assert "| preview-42 | storefront | Type Query has conflicting fields:<br>products |" in body
    assert "| mobile-42 | - | wgc exited with status 1 |" in body


def test_mixed_outcomes_render_both_tables() -> None:
    body = render_report(
        ["mobile-42"],
        SUBGRAPHS[:1],
        {"preview-42": _composition_failure("preview-42", error_flag="preview-42")},
    )

    assert body is not None
    deployed_at = body.index("have been deployed")
    failed_at = body.index("failed to deploy")
    assert deployed_at < failed_at
    assert "| mobile-42 | products-prod-preview-42 |" in body


def test_nothing_attempted_renders_nothing() -> None:
    assert render_report([], SUBGRAPHS, {}) is None


def test_composition_failure_without_matching_error_points_to_compositions_page() -> None:
    outcome = _composition_failure("preview-42", error_flag="other-7")

    assert failure_row("preview-42", outcome) == (
        "preview-42",
        "-",
        "Failed to update the feature flag. Please check the compositions page for more details.",
    )


def test_deployment_failure_uses_matching_deployment_error() -> None:
    outcome = DeploymentFailed(
        target="preview-42",
        message="Failed to deploy",
        errors=(
            GraphError(
                message="Router config upload failed",
                federated_graph_name="storefront",
                feature_flag="preview-42",
            ),
        ),
    )

    assert failure_row("preview-42", outcome) == (
        "preview-42",
        "storefront",
        "Router config upload failed",
    )
    assert failure_row("mobile-42", outcome) == ("mobile-42", "-", "Failed to deploy")


def test_pipe_characters_are_escaped_in_cells() -> None:
    body = render_report(
        [],
        SUBGRAPHS,
        {"preview-42": CommandFailed(target="preview-42", message="a | b")},
    )

    assert body is not None
    assert "| preview-42 | - | a \\| b |" in body
