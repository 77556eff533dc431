from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from fly_pr_preview.errors import PreviewInputError
from fly_pr_preview.event import PullRequestEvent, check_app_name, default_app_name
from fly_pr_preview.secrets import parse_secrets_payload

logger = logging.getLogger(__name__)

DEFAULT_REGION = "iad"
DEFAULT_ORG = "personal"
DEFAULT_CONFIG_PATH = "fly.toml"
DEFAULT_PLATFORM_DOMAIN = "fly.dev"


@dataclass(frozen=True)
class PreviewConfig:
    """
    Everything one run needs, resolved once from the action inputs.

    Fallback chains:
    - region: INPUT_REGION -> FLY_REGION -> "iad"
    - org: INPUT_ORG -> FLY_ORG -> "personal"
    - config_path: INPUT_CONFIG -> "fly.toml"
    - database: INPUT_DATABASE -> app
    """

    app: str
    region: str = DEFAULT_REGION
    org: str = DEFAULT_ORG
    image: Optional[str] = None
    config_path: str = DEFAULT_CONFIG_PATH
    database: str = ""
    # Shared Postgres cluster; enables attach/detach.
    postgres: Optional[str] = None
    # Raw INPUT_SECRETS; parsed only when deploying. Never logged.
    secrets_payload: Optional[str] = None
    vm: Optional[str] = None
    memory: Optional[str] = None
    count: Optional[str] = None
    github_token: Optional[str] = None
    platform_domain: str = DEFAULT_PLATFORM_DOMAIN
    output_path: Optional[str] = None
    working_path: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.database:
            object.__setattr__(self, "database", self.app)

    @property
    def host(self) -> str:
        return f"{self.app}.{self.platform_domain}"

    def parse_secrets(self) -> Dict[str, str]:
        try:
            return parse_secrets_payload(self.secrets_payload)
        except ValueError as exc:
            raise PreviewInputError(str(exc)) from exc


def _env(environ: Mapping[str, str], *names: str) -> Optional[str]:
    """First non-blank value among `names`; empty strings count as unset."""
    for name in names:
        value = (environ.get(name) or "").strip()
        if value:
            return value
    return None


def load_config(
    event: PullRequestEvent, environ: Mapping[str, str] | None = None
) -> PreviewConfig:
    env = os.environ if environ is None else environ

    repository = _env(env, "GITHUB_REPOSITORY") or ""
    app = _env(env, "INPUT_NAME") or default_app_name(event.number, repository)
    check_app_name(app, event.number)

    cfg = PreviewConfig(
        app=app,
        region=_env(env, "INPUT_REGION", "FLY_REGION") or DEFAULT_REGION,
        org=_env(env, "INPUT_ORG", "FLY_ORG") or DEFAULT_ORG,
        image=_env(env, "INPUT_IMAGE"),
        config_path=_env(env, "INPUT_CONFIG") or DEFAULT_CONFIG_PATH,
        database=_env(env, "INPUT_DATABASE") or app,
        postgres=_env(env, "INPUT_POSTGRES"),
        secrets_payload=env.get("INPUT_SECRETS"),
        vm=_env(env, "INPUT_VM"),
        memory=_env(env, "INPUT_MEMORY"),
        count=_env(env, "INPUT_COUNT"),
        github_token=_env(env, "GITHUB_TOKEN"),
        platform_domain=_env(env, "FLY_APP_DOMAIN") or DEFAULT_PLATFORM_DOMAIN,
        output_path=_env(env, "GITHUB_OUTPUT"),
        working_path=_env(env, "INPUT_PATH"),
    )
    logger.info(
        "[config] app=%s region=%s org=%s config=%s database=%s postgres=%s secrets=%s",
        cfg.app,
        cfg.region,
        cfg.org,
        cfg.config_path,
        cfg.database,
        cfg.postgres or "-",
        "set" if (cfg.secrets_payload or "").strip() else "-",
    )
    return cfg
