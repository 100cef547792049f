"""Markdown rendering of a run's feature flag outcomes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .reconciliation.outcomes import CommandFailed, CompositionFailed, DeploymentFailed

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from .reconciliation.outcomes import FailedOutcome, GraphError
    from .reconciliation.plan import RunReport

FEATURE_FLAG_HEADER = "X-Feature-Flag"

_DEPLOYED_HEADING = "### The following feature flags have been deployed:"
_DEPLOYED_USAGE = (
    "#### To query any of these feature flags, pass the feature flag name to the "
    f"'{FEATURE_FLAG_HEADER}' header when making a request."
)
_FAILED_HEADING = "### The following feature flags failed to deploy in these federated graphs:"


def _cell(text: str) -> str:
    return text.replace("\n", "<br>").replace("|", "\\|")


def _matching_error(errors: Sequence[GraphError], flag: str) -> GraphError | None:
    return next((error for error in errors if error.feature_flag == flag), None)


def failure_row(flag: str, outcome: FailedOutcome) -> tuple[str, str, str]:
    """Return ``(flag, federated graph, message)`` for one failed flag."""

    match outcome:
        case CompositionFailed(errors=errors, message=message):
            error = _matching_error(errors, flag)
            if error is None:
                return flag, "-", f"{message}. Please check the compositions page for more details."
            return flag, error.federated_graph_name or "-", error.message
        case DeploymentFailed(errors=errors, message=message):
            error = _matching_error(errors, flag)
            if error is None:
                return flag, "-", message
            return flag, error.federated_graph_name or "-", error.message
        case CommandFailed(message=message):
            return flag, "-", message


def render_deployed_table(deployed_flags: Sequence[str], feature_subgraphs: Sequence[str]) -> str:
    rows = [f"| {name} | {', '.join(feature_subgraphs)} |" for name in deployed_flags]
    return "\n".join(["| Feature Flag | Feature Subgraphs |", "| --- | --- |", *rows])


def render_failed_table(failed_flags: Mapping[str, FailedOutcome]) -> str:
    rows = [
        "| {} | {} | {} |".format(*(_cell(value) for value in failure_row(name, outcome)))
        for name, outcome in failed_flags.items()
    ]
    return "\n".join(
        ["| Feature Flag | Federated Graph | Error |", "| --- | --- | --- |", *rows]
    )


def render_report(
    deployed_flags: Sequence[str],
    feature_subgraphs: Sequence[str],
    failed_flags: Mapping[str, FailedOutcome],
) -> str | None:
    """Render the pull request comment, or ``None`` when no flag operation was attempted."""

    sections: list[str] = []
    if deployed_flags:
        sections.extend(
            [
                _DEPLOYED_HEADING,
                render_deployed_table(deployed_flags, feature_subgraphs),
                _DEPLOYED_USAGE,
            ]
        )
    if failed_flags:
        sections.extend([_FAILED_HEADING, render_failed_table(failed_flags)])
    if not sections:
        return None
    return "\n\n".join(sections) + "\n"


def render_run_report(report: RunReport) -> str | None:
    return render_report(report.deployed_flags, report.feature_subgraphs, report.failed_flags)
