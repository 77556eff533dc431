from __future__ import annotations

from fly_pr_preview.flyctl.base import CommandResult, FlyClient
from fly_pr_preview.flyctl.cli_client import FlyctlClient


def get_fly_client(*, cli_bin: str | None = None) -> FlyClient:
    return FlyctlClient(cli_bin=cli_bin)


__all__ = [
    "CommandResult",
    "FlyClient",
    "FlyctlClient",
    "get_fly_client",
]
