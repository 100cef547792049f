"""Change classification for pull request file diffs."""

from __future__ import annotations

from dataclasses import dataclass, field
from glob import escape
from logging import getLogger
from typing import TYPE_CHECKING

from .paths import matches_any, resolve_path
from .types import ChangeKind, ChangeRecord

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

log = getLogger(__name__)

SCHEMA_FILE_PATTERNS: tuple[str, ...] = ("*.graphql", "*.gql", "*.graphqls")


def _empty_buckets() -> dict[ChangeKind, list[str]]:
    return {kind: [] for kind in ChangeKind}


@dataclass(slots=True)
class ChangedFiles:
    """Changed paths bucketed by change kind, in ``ChangeKind`` declaration order."""

    buckets: dict[ChangeKind, list[str]] = field(default_factory=_empty_buckets)

    @classmethod
    def classify(cls, records: Iterable[ChangeRecord]) -> ChangedFiles:
        changed = cls()
        for record in records:
            changed.buckets[record.kind].append(record.path)
        return changed

    def paths(self, kind: ChangeKind) -> list[str]:
        return list(self.buckets[kind])

    def __len__(self) -> int:
        return sum(len(paths) for paths in self.buckets.values())


def filter_changed_files(
    changed: ChangedFiles,
    *,
    workspace: Path,
    patterns: Sequence[str] = SCHEMA_FILE_PATTERNS,
    kinds: Iterable[ChangeKind] | None = None,
) -> list[str]:
    """Return normalised absolute paths matching ``patterns``.

    Every change-kind bucket is considered unless ``kinds`` restricts it. An
    empty ``patterns`` keeps every path. Order is preserved and duplicates
    (a rename lands in both the added and deleted buckets) are dropped.
    """

    selected = tuple(kinds) if kinds is not None else tuple(ChangeKind)
    matched: dict[str, None] = {}
    for kind in selected:
        for path in changed.buckets[kind]:
            resolved = resolve_path(path, workspace=workspace)
            if not patterns or matches_any(resolved, patterns):
                matched.setdefault(resolved)
    return list(matched)


def filter_schema_files(records: Iterable[ChangeRecord], *, workspace: Path) -> list[str]:
    return filter_changed_files(ChangedFiles.classify(records), workspace=workspace)


def manifest_changed(
    records: Iterable[ChangeRecord],
    *,
    manifest_path: Path,
    workspace: Path,
) -> bool:
    """Whether the manifest itself is among ``records``."""

    sentinel = escape(resolve_path(manifest_path, workspace=workspace))
    hits = filter_changed_files(
        ChangedFiles.classify(records),
        workspace=workspace,
        patterns=(sentinel,),
    )
    if hits:
        log.warning("Manifest %s is part of the pull request diff", manifest_path)
    return bool(hits)
