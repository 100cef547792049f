"""Resource gateway backed by the ``wgc`` command-line client."""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, field
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from featurepreview.config.wgc import WGC_API_KEY_ENV_VAR

from .runner import CommandRunner, run_command
from .translator import exit_code_outcome, parse_feature_flag_names, structured_outcome

if TYPE_CHECKING:
    from collections.abc import Sequence

    from featurepreview.config.wgc import WgcConfig
    from featurepreview.domain.reconciliation.outcomes import RemoteOutcome

    from .runner import CommandResult

log = getLogger(__name__)


def _default_runner(config: WgcConfig) -> CommandRunner:
    return partial(run_command, timeout=config.timeout_seconds)


@dataclass(slots=True)
class WgcGateway:
    """One ``wgc`` process per operation, awaited before the next one starts.

    The API key is handed to each child process explicitly; the parent's
    environment is never modified.
    """

    config: WgcConfig
    runner: CommandRunner | None = None
    base_env: dict[str, str] = field(default_factory=lambda: dict(os.environ))

    def publish_feature_subgraph(
        self,
        name: str,
        *,
        subgraph: str,
        routing_url: str,
        schema_path: str,
        namespace: str,
    ) -> RemoteOutcome:
        result = self._run(
            "feature-subgraph",
            "publish",
            name,
            "--subgraph",
            subgraph,
            "--routing-url",
            routing_url,
            "--schema",
            schema_path,
            "-n",
            namespace,
        )
        return exit_code_outcome(name, result)

    def delete_subgraph(self, name: str, *, namespace: str) -> RemoteOutcome:
        result = self._run("subgraph", "delete", name, "-n", namespace, "-f")
        return exit_code_outcome(name, result, tolerate_absent=True)

    def create_feature_flag(
        self,
        name: str,
        *,
        namespace: str,
        labels: Sequence[str],
        feature_subgraphs: Sequence[str],
        enabled: bool = True,
    ) -> RemoteOutcome:
        args = self._flag_args("create", name, namespace, labels, feature_subgraphs)
        if enabled:
            args.append("--enabled")
        return structured_outcome(name, self._run(*args, "--json"))

    def update_feature_flag(
        self,
        name: str,
        *,
        namespace: str,
        labels: Sequence[str],
        feature_subgraphs: Sequence[str],
    ) -> RemoteOutcome:
        args = self._flag_args("update", name, namespace, labels, feature_subgraphs)
        return structured_outcome(name, self._run(*args, "--json"))

    def delete_feature_flag(self, name: str, *, namespace: str) -> RemoteOutcome:
        result = self._run("feature-flag", "delete", name, "-n", namespace, "-f")
        return exit_code_outcome(name, result, tolerate_absent=True)

    def list_feature_flags(self, *, namespace: str) -> list[str] | None:
        names = parse_feature_flag_names(
            self._run("feature-flag", "list", "-n", namespace, "--json")
        )
        if names is None:
            log.warning("Could not parse feature flags listed in namespace %s", namespace)
        return names

    def whoami(self) -> RemoteOutcome:
        return exit_code_outcome("auth whoami", self._run("auth", "whoami"))

    @staticmethod
    def _flag_args(
        action: str,
        name: str,
        namespace: str,
        labels: Sequence[str],
        feature_subgraphs: Sequence[str],
    ) -> list[str]:
        args = ["feature-flag", action, name, "-n", namespace]
        if labels:
            args.extend(["--label", *labels])
        args.extend(["--feature-subgraphs", *feature_subgraphs])
        return args

    def _run(self, *args: str) -> CommandResult:
        argv = [self.config.binary, *args]
        log.info("Running %s", shlex.join(argv))
        env = {**self.base_env, WGC_API_KEY_ENV_VAR: self.config.api_key}
        runner = self.runner or _default_runner(self.config)
        result = runner(argv, env)
        if result.stderr.strip():
            log.debug("wgc stderr: %s", result.stderr.strip())
        return result
