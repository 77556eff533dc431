from __future__ import annotations

import logging

from pydantic_graph import GraphRunContext

from fly_pr_preview.flyctl.base import CommandResult
from fly_pr_preview.state import ActionRecord, PreviewDeps, PreviewState

logger = logging.getLogger(__name__)

PreviewContext = GraphRunContext[PreviewState, PreviewDeps]


def allow_fail(ctx: PreviewContext, desc: str, result: CommandResult) -> CommandResult:
    """Record a best-effort command; a failure is logged and the run continues."""
    ctx.state.best_effort.append(
        ActionRecord(desc=desc, ok=result.ok, rc=result.rc, stderr=result.stderr)
    )
    if not result.ok:
        logger.warning(
            "[best-effort] %s failed (rc=%s): %s",
            desc,
            result.rc,
            (result.stderr or "").splitlines()[-1] if result.stderr else "",
        )
    return result
