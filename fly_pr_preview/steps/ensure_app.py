from __future__ import annotations

import logging

from pydantic_graph import BaseNode, End

from fly_pr_preview.fly_config import backup_config
from fly_pr_preview.git_urls import configure_git_token_auth
from fly_pr_preview.steps.teardown import destroy_app, detach_postgres
from fly_pr_preview.steps.types import PreviewContext, allow_fail

logger = logging.getLogger(__name__)


def auto_database_name(app: str) -> str:
    return f"{app}-db"


def create_app(ctx: PreviewContext, app: str, org: str) -> None:
    """
    Create `app` in `org` without deploying it.

    If `flyctl launch` also created and attached a Postgres cluster
    `{app}-db`, that cluster is detached and destroyed; a shared cluster is
    attached explicitly later instead.
    """
    cfg = ctx.deps.config
    fly = ctx.deps.fly

    if cfg.github_token:
        configure_git_token_auth(cfg.github_token)

    allow_fail(ctx, f"launch {app}", fly.launch(app, region=cfg.region, org=org))

    auto_db = auto_database_name(app)
    if fly.postgres_users_list(auto_db).ok:
        logger.info("[create] removing auto-attached cluster %s", auto_db)
        detach_postgres(ctx, app, auto_db)
        destroy_app(ctx, auto_db)


class EnsureApp(BaseNode):
    """Destroy-then-create so every deploy starts from an empty app."""

    async def run(self, ctx: PreviewContext) -> BaseNode | End:
        cfg = ctx.deps.config
        ctx.state.config_backup = backup_config(cfg.config_path)

        ctx.state.app_existed = ctx.deps.fly.status(cfg.app).ok
        if ctx.state.app_existed:
            logger.info("[ensure] %s exists; recreating", cfg.app)
            destroy_app(ctx, cfg.app)
        else:
            logger.info("[ensure] %s not found; creating", cfg.app)
        create_app(ctx, cfg.app, cfg.org)

        from .configure import ConfigureHost

        return ConfigureHost()
