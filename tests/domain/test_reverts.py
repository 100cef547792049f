from __future__ import annotations

from pathlib import Path

from featurepreview.domain.reverts import detect_reverted_schema_files
from featurepreview.domain.types import ChangeKind, ChangeRecord

WORKSPACE = Path("/repo")


def test_schema_modified_in_latest_commit_but_absent_from_diff_is_reverted() -> None:
    latest = [ChangeRecord("schemas/products.graphql", ChangeKind.MODIFIED)]

    assert detect_reverted_schema_files(latest, [], workspace=WORKSPACE) == [
        "/repo/schemas/products.graphql"
    ]


def test_schema_still_in_cumulative_diff_is_not_reverted() -> None:
    latest = [ChangeRecord("schemas/products.graphql", ChangeKind.MODIFIED)]

    assert (
        detect_reverted_schema_files(
            latest,
            ["/repo/schemas/products.graphql"],
            workspace=WORKSPACE,
        )
        == []
    )


def test_only_modified_schema_files_count() -> None:
    latest = [
        ChangeRecord("schemas/new.graphql", ChangeKind.ADDED),
        ChangeRecord("schemas/old.graphql", ChangeKind.DELETED),
        ChangeRecord("src/app.py", ChangeKind.MODIFIED),
    ]

    assert detect_reverted_schema_files(latest, [], workspace=WORKSPACE) == []


def test_no_latest_commit_files_means_nothing_reverted() -> None:
    assert detect_reverted_schema_files([], ["/repo/schemas/a.graphql"], workspace=WORKSPACE) == []
