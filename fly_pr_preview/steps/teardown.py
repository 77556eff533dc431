from __future__ import annotations

import logging

from pydantic_graph import BaseNode, End

from fly_pr_preview.steps.types import PreviewContext, allow_fail

logger = logging.getLogger(__name__)


def detach_postgres(ctx: PreviewContext, app: str, cluster: str) -> bool:
    result = ctx.deps.fly.postgres_detach(app, cluster)
    return allow_fail(ctx, f"detach {cluster} from {app}", result).ok


def destroy_app(ctx: PreviewContext, app: str) -> bool:
    # A missing app is the common case here and is not an error.
    result = ctx.deps.fly.destroy_app(app)
    return allow_fail(ctx, f"destroy {app}", result).ok


class TeardownPreview(BaseNode):
    """PR closed: detach the shared cluster (if any) and destroy the app."""

    async def run(self, ctx: PreviewContext) -> BaseNode | End:
        cfg = ctx.deps.config
        if cfg.postgres:
            detach_postgres(ctx, cfg.app, cfg.postgres)
        destroyed = destroy_app(ctx, cfg.app)
        logger.info("[teardown] app=%s destroyed=%s", cfg.app, destroyed)
        return End(None)
