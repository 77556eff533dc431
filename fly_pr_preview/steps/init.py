from __future__ import annotations

import logging

from pydantic_graph import BaseNode, End

from fly_pr_preview.errors import PreviewInputError
from fly_pr_preview.event import check_app_name
from fly_pr_preview.fly_config import require_config
from fly_pr_preview.steps.types import PreviewContext

logger = logging.getLogger(__name__)


class InitPreview(BaseNode):
    async def run(self, ctx: PreviewContext) -> BaseNode | End:
        cfg = ctx.deps.config
        event = ctx.state.event
        check_app_name(cfg.app, event.number)

        if event.closed:
            logger.info("[init] pr=%s closed; tearing down %s", event.number, cfg.app)
            from .teardown import TeardownPreview

            return TeardownPreview()

        if not cfg.image:
            raise PreviewInputError("An image is required to deploy (input `image`).")
        require_config(cfg.config_path)
        ctx.state.secrets = cfg.parse_secrets()

        logger.info(
            "[init] pr=%s action=%s; deploying %s to %s",
            event.number,
            event.action or "-",
            cfg.app,
            cfg.region,
        )
        from .ensure_app import EnsureApp

        return EnsureApp()
