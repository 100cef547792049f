"""GitHub Actions runner integration: step outputs, summaries and annotations."""

from __future__ import annotations

import json
import os
import sys
import uuid
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)


def _escape_annotation(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def error_annotation(message: str, *, stream: TextIO | None = None) -> None:
    """Emit an ``::error::`` workflow command so the failure shows on the run page."""

    print(f"::error::{_escape_annotation(message)}", file=stream or sys.stdout)  # noqa: T201


def _env_path(name: str) -> Path | None:
    value = os.getenv(name, "").strip()
    return Path(value) if value else None


def set_outputs(outputs: Mapping[str, object], *, output_path: Path | None = None) -> None:
    """Write step outputs; values that are not strings are serialised as JSON.

    Without ``$GITHUB_OUTPUT`` (local runs) the outputs are only logged.
    """

    path = output_path or _env_path("GITHUB_OUTPUT")
    rendered = {
        name: value if isinstance(value, str) else json.dumps(value)
        for name, value in outputs.items()
    }
    if path is None:
        for name, value in rendered.items():
            log.info("Output %s=%s", name, value)
        return

    with path.open("a", encoding="utf-8") as handle:
        for name, value in rendered.items():
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            handle.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


def append_step_summary(markdown: str, *, summary_path: Path | None = None) -> None:
    path = summary_path or _env_path("GITHUB_STEP_SUMMARY")
    if path is None:
        return
    with path.open("a", encoding="utf-8") as handle:
        handle.write(markdown if markdown.endswith("\n") else f"{markdown}\n")
