from __future__ import annotations

import logging

from pydantic_graph import BaseNode, End

from fly_pr_preview.steps.types import PreviewContext

logger = logging.getLogger(__name__)


class ScaleApp(BaseNode):
    async def run(self, ctx: PreviewContext) -> BaseNode | End:
        cfg = ctx.deps.config
        for kind, value in (("vm", cfg.vm), ("memory", cfg.memory), ("count", cfg.count)):
            if not value:
                continue
            ctx.deps.fly.scale(cfg.app, kind, value).check()
            logger.info("[scale] %s=%s", kind, value)

        from .report import ReportStatus

        return ReportStatus()
