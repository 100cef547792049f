"""Process execution boundary for the ``wgc`` binary."""

from __future__ import annotations

import subprocess
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass


class WgcExecutionError(RuntimeError):
    """Raised when the ``wgc`` binary cannot be started at all."""


@dataclass(frozen=True, slots=True)
class CommandResult:
    returncode: int
    stdout: str
    stderr: str


type CommandRunner = Callable[[Sequence[str], Mapping[str, str]], CommandResult]


def run_command(
    argv: Sequence[str],
    env: Mapping[str, str],
    *,
    timeout: float | None = None,
) -> CommandResult:
    """Run ``argv`` to completion with separately captured output channels."""

    try:
        completed = subprocess.run(  # noqa: S603
            list(argv),
            env=dict(env),
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise WgcExecutionError(f"Could not find the '{argv[0]}' executable") from exc
    except subprocess.TimeoutExpired as exc:
        return CommandResult(returncode=-1, stdout="", stderr=f"Timed out after {exc.timeout}s")
    return CommandResult(
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )
