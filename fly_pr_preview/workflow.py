import logging

from pydantic_graph import Graph

from fly_pr_preview.logging_config import ensure_logging_configured
from fly_pr_preview.state import PreviewDeps, PreviewState
from fly_pr_preview.steps import (
    AttachDatabase,
    ConfigureHost,
    DeployApp,
    EnsureApp,
    ImportSecrets,
    InitPreview,
    ReportStatus,
    RestoreConfig,
    ScaleApp,
    TeardownPreview,
)

logger = logging.getLogger(__name__)


def build_preview_graph() -> Graph:
    return Graph(
        nodes=[
            InitPreview,
            TeardownPreview,
            EnsureApp,
            ConfigureHost,
            AttachDatabase,
            RestoreConfig,
            ImportSecrets,
            DeployApp,
            ScaleApp,
            ReportStatus,
        ],
        state_type=PreviewState,
    )


async def run_preview_workflow(state: PreviewState, deps: PreviewDeps) -> PreviewState:
    ensure_logging_configured()
    graph = build_preview_graph()
    result = await graph.run(InitPreview(), state=state, deps=deps)
    final_state = result.state if hasattr(result, "state") else state
    failed = final_state.failed_best_effort()
    if failed:
        logger.info(
            "[workflow] %d best-effort command(s) failed: %s",
            len(failed),
            ", ".join(a.desc for a in failed),
        )
    return final_state
