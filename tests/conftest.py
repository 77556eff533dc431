from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Tuple

import pytest

from fly_pr_preview.flyctl.base import CommandResult


class FakeFly:
    """In-memory FlyClient that records every call in order.

    `rcs` maps a method name to the return code it should report;
    `stdouts` maps a method name to the stdout it should return.
    """

    def __init__(self) -> None:
        self.calls: List[Tuple[Any, ...]] = []
        # Defaults: the app does not exist yet and launch created no cluster.
        self.rcs: Dict[str, int] = {"status": 1, "postgres_users_list": 1}
        self.stdouts: Dict[str, str] = {
            "list_secrets": "NAME\tDIGEST\tCREATED AT\n",
            "status_json": json.dumps(
                {"ID": "app-id-123", "Name": "pr", "Hostname": "pr.fly.dev"}
            ),
        }

    def _result(self, method: str, *call: Any) -> CommandResult:
        self.calls.append((method, *call))
        return CommandResult(
            args=(method,),
            rc=self.rcs.get(method, 0),
            stdout=self.stdouts.get(method, ""),
            stderr="boom" if self.rcs.get(method, 0) else "",
        )

    def methods(self) -> List[str]:
        return [c[0] for c in self.calls]

    def status(self, app: str) -> CommandResult:
        return self._result("status", app)

    def status_json(self, app: str) -> CommandResult:
        return self._result("status_json", app)

    def launch(self, app: str, *, region: str, org: str) -> CommandResult:
        return self._result("launch", app, region, org)

    def destroy_app(self, app: str) -> CommandResult:
        return self._result("destroy_app", app)

    def list_secrets(self, app: str) -> CommandResult:
        return self._result("list_secrets", app)

    def set_secrets(self, app: str, secrets: Mapping[str, str]) -> CommandResult:
        return self._result("set_secrets", app, dict(secrets))

    def import_secrets(self, app: str, secrets: Mapping[str, str]) -> CommandResult:
        return self._result("import_secrets", app, dict(secrets))

    def postgres_users_list(self, app: str) -> CommandResult:
        return self._result("postgres_users_list", app)

    def postgres_connect(self, cluster: str, sql: str) -> CommandResult:
        return self._result("postgres_connect", cluster, sql)

    def postgres_attach(self, app: str, cluster: str, *, database: str) -> CommandResult:
        return self._result("postgres_attach", app, cluster, database)

    def postgres_detach(self, app: str, cluster: str) -> CommandResult:
        return self._result("postgres_detach", app, cluster)

    def deploy(self, app: str, **kwargs: Any) -> CommandResult:
        return self._result("deploy", app, kwargs)

    def scale(self, app: str, kind: str, value: str) -> CommandResult:
        return self._result("scale", app, kind, value)


@pytest.fixture
def fly() -> FakeFly:
    return FakeFly()


@pytest.fixture(autouse=True)
def _isolated_git_config(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmp_path / "gitconfig"))
