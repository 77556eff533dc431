from __future__ import annotations

import logging

from pydantic_graph import BaseNode, End

from fly_pr_preview.fly_config import restore_config
from fly_pr_preview.secrets import (
    DATABASE_URL,
    PHX_HOST,
    drop_user_sql,
    postgres_user_for_app,
    secret_names,
)
from fly_pr_preview.steps.types import PreviewContext, allow_fail

logger = logging.getLogger(__name__)


class ConfigureHost(BaseNode):
    async def run(self, ctx: PreviewContext) -> BaseNode | End:
        cfg = ctx.deps.config
        fly = ctx.deps.fly

        listing = fly.list_secrets(cfg.app).check()
        ctx.state.secret_names = secret_names(listing.stdout)

        # PHX_HOST is (re)set on every deploy, whether or not it is listed.
        fly.set_secrets(cfg.app, {PHX_HOST: cfg.host}).check()
        logger.info("[secrets] %s=%s", PHX_HOST, cfg.host)

        return AttachDatabase()


class AttachDatabase(BaseNode):
    """Attach the app to the shared cluster unless it already has a database."""

    async def run(self, ctx: PreviewContext) -> BaseNode | End:
        cfg = ctx.deps.config
        fly = ctx.deps.fly

        if DATABASE_URL in ctx.state.secret_names:
            logger.info("[database] %s already set; skipping attach", DATABASE_URL)
        elif not cfg.postgres:
            logger.info("[database] no shared cluster configured")
        else:
            user = postgres_user_for_app(cfg.app)
            allow_fail(
                ctx,
                f"drop user {user} on {cfg.postgres}",
                fly.postgres_connect(cfg.postgres, drop_user_sql(user, cfg.database)),
            )
            allow_fail(
                ctx,
                f"attach {cfg.postgres} to {cfg.app}",
                fly.postgres_attach(cfg.app, cfg.postgres, database=cfg.database),
            )

        return RestoreConfig()


class RestoreConfig(BaseNode):
    async def run(self, ctx: PreviewContext) -> BaseNode | End:
        restore_config(ctx.deps.config.config_path, ctx.state.config_backup)
        from .deploy import ImportSecrets

        return ImportSecrets()
