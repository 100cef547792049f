"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from featurepreview.adapters.actions import append_step_summary, set_outputs
from featurepreview.adapters.github import GitHubClient
from featurepreview.adapters.wgc import WgcGateway
from featurepreview.config import (
    CredentialError,
    ManifestChangedError,
    get_github_config,
    get_wgc_config,
    load_manifest,
)
from featurepreview.domain.changes import filter_schema_files, manifest_changed
from featurepreview.domain.reconciliation import ReconciliationEngine, is_success
from featurepreview.domain.reporting import render_run_report
from featurepreview.domain.reverts import detect_reverted_schema_files
from featurepreview.domain.types import LifecycleEvent

if TYPE_CHECKING:
    from pathlib import Path

    from featurepreview.config import ActionInputs, Manifest, PullRequestContext
    from featurepreview.domain.ports import (
        FeatureResourceGateway,
        PullRequestChanges,
        PullRequestCommenter,
    )
    from featurepreview.domain.reconciliation import RunReport

log = getLogger(__name__)

OUTPUT_TO_DEPLOY = "feature_subgraphs_to_deploy"
OUTPUT_TO_DESTROY = "feature_subgraphs_to_destroy"


@dataclass(slots=True)
class PreviewRunResult:
    """Outcome of one lifecycle-event invocation."""

    event: LifecycleEvent
    manifest: Manifest
    report: RunReport
    changed_schema_files: list[str] = field(default_factory=list[str])
    reverted_schema_files: list[str] = field(default_factory=list[str])
    comment: str | None = None

    @property
    def outputs(self) -> dict[str, list[dict[str, str]]]:
        return {
            OUTPUT_TO_DEPLOY: [record.to_output() for record in self.report.to_deploy],
            OUTPUT_TO_DESTROY: [record.to_output() for record in self.report.to_destroy],
        }


def run_preview(
    inputs: ActionInputs,
    pull_request: PullRequestContext,
    *,
    changes: PullRequestChanges | None = None,
    gateway: FeatureResourceGateway | None = None,
    commenter: PullRequestCommenter | None = None,
    output_path: Path | None = None,
    summary_path: Path | None = None,
) -> PreviewRunResult:
    """Reconcile the preview resources of one pull request for one lifecycle event.

    Precondition failures raise before any remote mutation. Per-item remote
    failures are recorded in the report and do not raise.
    """

    manifest = load_manifest(inputs.config_path)
    pr_number = pull_request.pr_number
    workspace = inputs.workspace

    if changes is None or commenter is None:
        github = GitHubClient(
            config=get_github_config(inputs.github_token),
            repository=pull_request.repository,
        )
        changes = changes or github
        commenter = commenter or github
    effective_gateway = gateway or WgcGateway(config=get_wgc_config(inputs.api_key))

    log.info(
        "Starting %s for %s#%s with manifest %s",
        inputs.event,
        pull_request.repository,
        pr_number,
        manifest.path,
    )

    records = changes.changed_files(pr_number)
    changed_schema_files = filter_schema_files(records, workspace=workspace)
    log.info("Changed schema files: %s", changed_schema_files)

    reverted_schema_files: list[str] = []
    if inputs.event is LifecycleEvent.UPDATE:
        latest_commit = changes.latest_commit_files(pr_number)
        if manifest_changed(
            [*records, *latest_commit],
            manifest_path=manifest.path,
            workspace=workspace,
        ):
            raise ManifestChangedError(
                "Cosmo config file is changed. Please close and reopen the pr."
            )
        reverted_schema_files = detect_reverted_schema_files(
            latest_commit,
            changed_schema_files,
            workspace=workspace,
        )

    _ensure_authenticated(effective_gateway)

    engine = ReconciliationEngine(
        gateway=effective_gateway,
        namespace=manifest.namespace,
        subgraphs=manifest.subgraphs,
        feature_flags=manifest.feature_flags,
        pr_number=pr_number,
        workspace=workspace,
    )
    report = engine.reconcile(inputs.event, changed_schema_files, reverted_schema_files)

    result = PreviewRunResult(
        event=inputs.event,
        manifest=manifest,
        report=report,
        changed_schema_files=changed_schema_files,
        reverted_schema_files=reverted_schema_files,
        comment=render_run_report(report),
    )
    set_outputs(result.outputs, output_path=output_path)

    if result.comment is not None:
        append_step_summary(result.comment, summary_path=summary_path)
        if inputs.event is not LifecycleEvent.DESTROY:
            commenter.post_comment(pr_number, result.comment)

    log.info(
        "Finished %s: operations=%s, failures=%s, deployed_flags=%s",
        inputs.event,
        len(report.plan),
        len(report.failures),
        report.deployed_flags,
    )
    return result


def _ensure_authenticated(gateway: FeatureResourceGateway) -> None:
    outcome = gateway.whoami()
    if not is_success(outcome):
        raise CredentialError(f"Could not authenticate with the API key: {outcome.message}")
