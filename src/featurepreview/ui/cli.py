from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, NoReturn

from dotenv import load_dotenv

from featurepreview.adapters.actions import error_annotation
from featurepreview.app import run_preview
from featurepreview.config import (
    ActionInputs,
    ConfigurationError,
    PullRequestContext,
    configure_logging,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Preview subgraph changes of a pull request with feature flags"
    )
    parser.add_argument(
        "--config-path",
        type=str,
        default=None,
        help="Path to the manifest (defaults to $INPUT_CONFIG_PATH or .github/cosmo.yaml)",
    )
    parser.add_argument(
        "--create",
        action="store_true",
        default=None,
        help="Create the feature flags and feature subgraphs",
    )
    parser.add_argument(
        "--update",
        action="store_true",
        default=None,
        help="Update the feature subgraphs and flag membership",
    )
    parser.add_argument(
        "--destroy",
        action="store_true",
        default=None,
        help="Destroy the feature flags and feature subgraphs",
    )
    parser.add_argument(
        "--pr-number",
        type=int,
        default=None,
        help="Pull request number (defaults to the number in $GITHUB_EVENT_PATH)",
    )
    parser.add_argument(
        "--repository",
        type=str,
        default=None,
        help="Repository as owner/name (defaults to $GITHUB_REPOSITORY)",
    )
    parser.add_argument(
        "--workspace",
        type=str,
        default=None,
        help="Repository checkout root (defaults to $GITHUB_WORKSPACE or the current directory)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(list(argv))


def _fail(message: str, code: int) -> NoReturn:
    error_annotation(message)
    sys.exit(code)


def _workspace(value: str | None) -> Path | None:
    if value is None:
        return None
    return Path(value).expanduser().resolve()


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        inputs = ActionInputs.from_environment(
            config_path=parsed_args.config_path,
            create=parsed_args.create,
            update=parsed_args.update,
            destroy=parsed_args.destroy,
            workspace=_workspace(parsed_args.workspace),
        )
        pull_request = PullRequestContext.from_environment(
            repository=parsed_args.repository,
            pr_number=parsed_args.pr_number,
        )
    except ConfigurationError as exc:
        log.exception("Invalid configuration")
        _fail(str(exc), 2)

    try:
        result = run_preview(inputs, pull_request)
    except ConfigurationError as exc:
        log.exception("Preview run aborted")
        _fail(str(exc), 2)
    except Exception as exc:
        log.exception("Fatal error during preview run")
        _fail(str(exc), 1)

    for failure in result.report.failures:
        log.warning(
            "%s %s failed: %s",
            failure.planned.operation,
            failure.planned.target,
            failure.outcome.message,
        )


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
