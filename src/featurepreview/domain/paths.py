"""Path normalisation shared by the change classifier and the engine.

Changed files arrive repository-relative with forward slashes while subgraph
schema paths are resolved by the manifest loader. Both sides go through
``resolve_path`` so comparisons are separator-insensitive on every platform.
"""

from __future__ import annotations

import os
import re
from fnmatch import fnmatchcase
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

_REPEATED_FORWARD = re.compile(r"//+")
_REPEATED_BACKWARD = re.compile(r"\\\\+")
_UNC_PREFIX = re.compile(r"^\\\\+[^\\]")


def is_windows() -> bool:
    return os.name == "nt"


def normalize_separators(path: str, *, windows: bool | None = None) -> str:
    """Collapse redundant separators and use the host's separator.

    On Windows forward slashes become backslashes and a leading UNC ``\\\\``
    prefix is preserved.
    """

    if windows is None:
        windows = is_windows()
    if not windows:
        return _REPEATED_FORWARD.sub("/", path)

    converted = path.replace("/", "\\")
    is_unc = _UNC_PREFIX.match(converted) is not None
    collapsed = _REPEATED_BACKWARD.sub(r"\\", converted)
    return ("\\" if is_unc else "") + collapsed


def resolve_path(path: str | Path, *, workspace: Path) -> str:
    """Return ``path`` as a canonical absolute string anchored at ``workspace``.

    Symlinks are resolved the same way ``Path.resolve`` resolves manifest paths.
    """

    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = workspace / candidate
    return normalize_separators(os.path.realpath(candidate))


def matches_any(path: str, patterns: Iterable[str]) -> bool:
    """Match ``path`` against shell-style patterns; ``*`` also spans separators."""

    return any(fnmatchcase(path, pattern) for pattern in patterns)
