import argparse
import asyncio
import logging
import os
from typing import List, Optional

from .config import load_config
from .errors import PreviewError
from .event import DEFAULT_EVENT_PATH, load_event
from .flyctl import get_fly_client
from .github_output import write_outputs
from .logging_config import configure_logging
from .state import PreviewDeps, PreviewState
from .workflow import run_preview_workflow

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="fly-pr-preview",
        description="Deploy (or destroy) a Fly.io preview app for a pull request.",
    )
    parser.add_argument(
        "--event-path",
        default=os.environ.get("GITHUB_EVENT_PATH") or DEFAULT_EVENT_PATH,
        help="Path to the pull_request event JSON",
    )
    parser.add_argument("--flyctl-bin", default=None, help="flyctl executable")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level, force=True)

    try:
        event = load_event(args.event_path)
        config = load_config(event)
    except PreviewError as exc:
        logger.error("%s", exc)
        return 1

    if config.working_path:
        # flyctl runs, and the config path resolves, from the requested directory.
        try:
            os.chdir(config.working_path)
        except OSError as exc:
            logger.error("Cannot change to INPUT_PATH %s: %s", config.working_path, exc)
            return 1

    deps = PreviewDeps(config=config, fly=get_fly_client(cli_bin=args.flyctl_bin))
    state = PreviewState(event=event)
    try:
        state = asyncio.run(run_preview_workflow(state, deps))
    except PreviewError as exc:
        logger.error("%s", exc)
        return getattr(exc, "exit_code", 1)

    if state.result is not None:
        write_outputs(state.result.as_outputs(), config.output_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
