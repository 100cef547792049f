from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from featurepreview.domain.reconciliation import ReconciliationPlan, RunReport
from featurepreview.domain.types import LifecycleEvent
from featurepreview.ui import cli

if TYPE_CHECKING:
    from featurepreview.config import ActionInputs, PullRequestContext


class _Result:
    def __init__(self, event: LifecycleEvent) -> None:
        self.report = RunReport(plan=ReconciliationPlan(event=event))


@pytest.fixture
def credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COSMO_API_KEY", "cosmo-key")
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
    monkeypatch.setenv("GITHUB_REPOSITORY", "acme/storefront")


@pytest.mark.usefixtures("credentials")
def test_main_runs_preview_with_parsed_inputs(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    captured: list[tuple[ActionInputs, PullRequestContext]] = []

    def fake_run_preview(inputs: ActionInputs, pull_request: PullRequestContext) -> _Result:
        captured.append((inputs, pull_request))
        return _Result(inputs.event)

    monkeypatch.setattr(cli, "run_preview", fake_run_preview)

    cli.main(["--update", "--pr-number", "42", "--workspace", str(tmp_path)])

    ((inputs, pull_request),) = captured
    assert inputs.event is LifecycleEvent.UPDATE
    assert inputs.config_path == tmp_path.resolve() / ".github" / "cosmo.yaml"
    assert pull_request.repository == "acme/storefront"
    assert pull_request.pr_number == 42


@pytest.mark.usefixtures("credentials")
def test_main_exits_2_on_lifecycle_misconfiguration(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(cli, "run_preview", _unexpected_run)

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--create", "--destroy", "--pr-number", "42"])

    assert exc_info.value.code == 2
    assert "::error::Exactly one of" in capsys.readouterr().out


@pytest.mark.usefixtures("credentials")
def test_main_exits_2_on_missing_manifest(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--create", "--pr-number", "42", "--workspace", str(tmp_path)])

    assert exc_info.value.code == 2
    assert "does not exist" in capsys.readouterr().out


@pytest.mark.usefixtures("credentials")
def test_main_exits_1_on_unexpected_failure(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def failing_run(inputs: ActionInputs, pull_request: PullRequestContext) -> _Result:
        raise RuntimeError("GitHub is down")

    monkeypatch.setattr(cli, "run_preview", failing_run)

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--destroy", "--pr-number", "42"])

    assert exc_info.value.code == 1
    assert "::error::GitHub is down" in capsys.readouterr().out


def _unexpected_run(inputs: ActionInputs, pull_request: PullRequestContext) -> _Result:
    raise AssertionError("run_preview must not be called")
