from __future__ import annotations

import logging
import time

from pydantic_graph import BaseNode, End

from fly_pr_preview.steps.types import PreviewContext

logger = logging.getLogger(__name__)

DEPLOY_STRATEGY = "immediate"


def cache_bust() -> str:
    return str(int(time.time()))


class ImportSecrets(BaseNode):
    async def run(self, ctx: PreviewContext) -> BaseNode | End:
        cfg = ctx.deps.config
        secrets = ctx.state.secrets
        if secrets:
            ctx.deps.fly.import_secrets(cfg.app, secrets).check()
            logger.info("[secrets] imported %d secret(s)", len(secrets))
        return DeployApp()


class DeployApp(BaseNode):
    """
    Deploy the image with build credentials for private GitHub repositories.

    - GITHUB_TOKEN is passed as a build secret so the build can clone them.
    - CACHEBUST changes on every deploy so the layer configuring git with
      that token is never served from cache; the token expires after each run.
    """

    async def run(self, ctx: PreviewContext) -> BaseNode | End:
        cfg = ctx.deps.config
        build_secrets = {"GITHUB_TOKEN": cfg.github_token} if cfg.github_token else {}
        ctx.deps.fly.deploy(
            cfg.app,
            config=cfg.config_path,
            regions=cfg.region,
            image=cfg.image or "",
            strategy=DEPLOY_STRATEGY,
            build_secrets=build_secrets,
            build_args={"CACHEBUST": cache_bust()},
        ).check()
        logger.info("[deploy] %s deployed", cfg.app)

        from .scale import ScaleApp

        return ScaleApp()
