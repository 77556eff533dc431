from __future__ import annotations

import json
from pathlib import Path

import pytest

from fly_pr_preview.errors import PreviewInputError
from fly_pr_preview.event import (
    check_app_name,
    default_app_name,
    load_event,
    normalize_repo_name,
    parse_event,
)


def test_parse_event_reads_number_and_action() -> None:
    event = parse_event({"number": 42, "action": "opened", "pull_request": {}})
    assert event.number == 42
    assert event.action == "opened"
    assert not event.closed


def test_parse_event_closed() -> None:
    assert parse_event({"number": 7, "action": "closed"}).closed


@pytest.mark.parametrize("payload", [{}, {"number": None}, {"number": ""}, {"number": True}, {"number": "abc"}])
def test_parse_event_without_pr_number_is_rejected(payload: dict) -> None:
    with pytest.raises(PreviewInputError, match="only supports pull_request"):
        parse_event(payload)


def test_parse_event_accepts_numeric_string() -> None:
    assert parse_event({"number": "15", "action": "reopened"}).number == 15


def test_load_event_from_file(tmp_path: Path) -> None:
    path = tmp_path / "event.json"
    path.write_text(json.dumps({"number": 3, "action": "synchronize"}), encoding="utf-8")
    event = load_event(path)
    assert (event.number, event.action) == (3, "synchronize")


def test_load_event_missing_file(tmp_path: Path) -> None:
    with pytest.raises(PreviewInputError, match="not found"):
        load_event(tmp_path / "nope.json")


def test_load_event_non_pr_payload(tmp_path: Path) -> None:
    path = tmp_path / "event.json"
    path.write_text(json.dumps({"ref": "refs/heads/main"}), encoding="utf-8")
    with pytest.raises(PreviewInputError):
        load_event(path)


def test_normalize_repo_name() -> None:
    assert normalize_repo_name("MyOrg/My.App") == "myorg-my.app"


def test_default_app_name_scenario() -> None:
    app = default_app_name(42, "myorg/myapp")
    assert app == "pr-42-myorg-myapp"
    check_app_name(app, 42)


@pytest.mark.parametrize("number", [0, 1, 9, 42, 1000, 987654321])
@pytest.mark.parametrize("repository", ["", "a/b", "Org/Repo-With-Digits-123"])
def test_default_app_name_contains_pr_number(number: int, repository: str) -> None:
    assert str(number) in default_app_name(number, repository)


def test_check_app_name_rejects_foreign_app() -> None:
    with pytest.raises(PreviewInputError, match="contain the PR number"):
        check_app_name("staging", 42)
