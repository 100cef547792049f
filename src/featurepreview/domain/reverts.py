"""Detection of schema files reverted by the latest push.

A file touched earlier in the pull request and restored to its base content in
the most recent commit shows up as ``modified`` in that commit but is absent
from the cumulative pull request diff. Whatever was published for it in an
earlier run must be torn down, since no later diff will revisit it.

Only the single latest commit is inspected: a revert spread across several
trailing commits is not detected.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .changes import ChangedFiles, filter_changed_files
from .types import ChangeKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from .types import ChangeRecord

log = getLogger(__name__)


def detect_reverted_schema_files(
    latest_commit_files: Iterable[ChangeRecord],
    changed_schema_files: Sequence[str],
    *,
    workspace: Path,
) -> list[str]:
    """Return schema files modified in the latest commit but no longer in the PR diff.

    ``changed_schema_files`` is the cumulative filter result for the same run.
    An empty ``latest_commit_files`` (no commits, or a commit without files)
    yields an empty result.
    """

    modified = filter_changed_files(
        ChangedFiles.classify(latest_commit_files),
        workspace=workspace,
        kinds=(ChangeKind.MODIFIED,),
    )
    still_changed = set(changed_schema_files)
    reverted = [path for path in modified if path not in still_changed]
    log.info(
        "Schema files modified in latest commit: %s; reverted: %s",
        modified,
        reverted,
    )
    return reverted
