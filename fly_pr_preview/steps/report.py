from __future__ import annotations

import logging

from pydantic_graph import BaseNode, End

from fly_pr_preview.errors import FlyCommandError
from fly_pr_preview.github_output import PreviewResult
from fly_pr_preview.steps.types import PreviewContext

logger = logging.getLogger(__name__)


class ReportStatus(BaseNode):
    async def run(self, ctx: PreviewContext) -> BaseNode | End:
        cfg = ctx.deps.config
        result = ctx.deps.fly.status_json(cfg.app).check()
        try:
            status = result.json()
        except ValueError as exc:
            raise FlyCommandError(
                f"flyctl status returned invalid JSON: {exc}", returncode=1
            ) from exc
        if status is None:
            status = {}
        if not isinstance(status, dict):
            raise FlyCommandError(
                f"flyctl status returned {type(status).__name__}, expected an object",
                returncode=1,
            )

        ctx.state.result = PreviewResult.from_status(cfg.app, status)
        logger.info("[report] %s -> %s", cfg.app, ctx.state.result.url)
        return End(ctx.state.result)
