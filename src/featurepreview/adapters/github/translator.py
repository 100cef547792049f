"""Translate GitHub file payloads into change records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from featurepreview.domain.types import ChangeKind, ChangeRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .schema import FilePayload

STATUS_TO_KIND: dict[str, ChangeKind] = {
    "added": ChangeKind.ADDED,
    "removed": ChangeKind.DELETED,
    "modified": ChangeKind.MODIFIED,
    "renamed": ChangeKind.RENAMED,
    "copied": ChangeKind.COPIED,
    "changed": ChangeKind.TYPE_CHANGED,
    "unchanged": ChangeKind.UNMERGED,
}


def parse_change_records(file_payload: FilePayload) -> list[ChangeRecord]:
    """Map one file payload to records; a rename becomes a deletion plus an addition."""

    kind = STATUS_TO_KIND.get(file_payload.status, ChangeKind.UNKNOWN)
    if kind is ChangeKind.RENAMED:
        return [
            ChangeRecord(path=file_payload.filename, kind=ChangeKind.DELETED),
            ChangeRecord(path=file_payload.filename, kind=ChangeKind.ADDED),
        ]
    return [ChangeRecord(path=file_payload.filename, kind=kind)]


def translate_files(file_payloads: Iterable[FilePayload]) -> list[ChangeRecord]:
    return [record for payload in file_payloads for record in parse_change_records(payload)]
