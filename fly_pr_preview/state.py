from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from fly_pr_preview.config import PreviewConfig
from fly_pr_preview.event import PullRequestEvent
from fly_pr_preview.flyctl.base import FlyClient
from fly_pr_preview.github_output import PreviewResult


@dataclass(frozen=True)
class ActionRecord:
    desc: str
    ok: bool
    rc: Optional[int] = None
    stderr: str = ""


@dataclass(frozen=True)
class PreviewDeps:
    """Immutable collaborators shared by every step of one run."""

    config: PreviewConfig
    fly: FlyClient


@dataclass
class PreviewState:
    """
    Mutable state of one preview run.

    Nothing here outlives the process; every run starts from scratch.
    """

    event: PullRequestEvent
    # Whether the app existed before this run recreated it.
    app_existed: Optional[bool] = None
    config_backup: Optional[Path] = None
    # Secret names present right after (re)creating the app.
    secret_names: set[str] = field(default_factory=set)
    # Parsed bulk secrets for the deploy; empty on teardown.
    secrets: Dict[str, str] = field(default_factory=dict)
    # Best-effort commands, in order; failures here never abort the run.
    best_effort: List[ActionRecord] = field(default_factory=list)
    result: Optional[PreviewResult] = None

    def failed_best_effort(self) -> List[ActionRecord]:
        return [a for a in self.best_effort if not a.ok]
