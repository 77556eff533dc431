from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from fly_pr_preview.errors import PreviewInputError

logger = logging.getLogger(__name__)

DEFAULT_EVENT_PATH = "/github/workflow/event.json"

CLOSED_ACTION = "closed"


@dataclass(frozen=True)
class PullRequestEvent:
    number: int
    action: str

    @property
    def closed(self) -> bool:
        return self.action == CLOSED_ACTION


def _parse_number(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and raw.strip().isdigit():
        return int(raw.strip())
    return None


def parse_event(payload: Mapping[str, Any]) -> PullRequestEvent:
    number = _parse_number(payload.get("number"))
    if number is None:
        raise PreviewInputError("This action only supports pull_request actions.")
    action = payload.get("action")
    return PullRequestEvent(number=number, action=str(action or ""))


def load_event(path: str | Path) -> PullRequestEvent:
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise PreviewInputError(f"Event file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise PreviewInputError(f"Event file is not valid JSON: {path}") from exc
    if not isinstance(payload, dict):
        raise PreviewInputError("This action only supports pull_request actions.")
    event = parse_event(payload)
    logger.info("[event] pr=%s action=%s", event.number, event.action or "-")
    return event


def normalize_repo_name(repository: str) -> str:
    """`Owner/Repo` -> `owner-repo`."""
    return repository.replace("/", "-").lower()


def default_app_name(number: int, repository: str) -> str:
    return f"pr-{number}-{normalize_repo_name(repository)}"


def check_app_name(app: str, number: int) -> None:
    """Refuse to touch an app whose name does not carry the PR number."""
    if str(number) not in app:
        raise PreviewInputError(
            "For safety, this action requires the app's name to contain the PR number."
        )
