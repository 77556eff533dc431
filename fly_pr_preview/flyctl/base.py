from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from fly_pr_preview.errors import FlyCommandError


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one flyctl invocation.

    Best-effort call sites look at `ok`; call sites that must succeed call
    `check()`, which turns a failure into `FlyCommandError`.
    """

    args: tuple[str, ...]
    rc: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.rc == 0

    def check(self) -> CommandResult:
        if not self.ok:
            verb = " ".join(self.args[:2])
            raise FlyCommandError(
                f"flyctl {verb} failed (rc={self.rc}): {self.stderr.strip()}",
                returncode=self.rc,
                stderr=self.stderr,
            )
        return self

    def json(self) -> Any:
        out = self.stdout.strip()
        return None if not out else json.loads(out)


class FlyClient(Protocol):
    """
    Narrow interface over the `flyctl` operations the preview workflow needs.

    Methods never raise on a non-zero exit status; the caller decides whether
    a failure is fatal (`CommandResult.check()`) or best-effort.
    """

    def status(self, app: str) -> CommandResult: ...

    def status_json(self, app: str) -> CommandResult: ...

    def launch(self, app: str, *, region: str, org: str) -> CommandResult: ...

    def destroy_app(self, app: str) -> CommandResult: ...

    def list_secrets(self, app: str) -> CommandResult: ...

    def set_secrets(self, app: str, secrets: Mapping[str, str]) -> CommandResult: ...

    def import_secrets(self, app: str, secrets: Mapping[str, str]) -> CommandResult: ...

    def postgres_users_list(self, app: str) -> CommandResult: ...

    def postgres_connect(self, cluster: str, sql: str) -> CommandResult: ...

    def postgres_attach(
        self, app: str, cluster: str, *, database: str
    ) -> CommandResult: ...

    def postgres_detach(self, app: str, cluster: str) -> CommandResult: ...

    def deploy(
        self,
        app: str,
        *,
        config: str,
        regions: str,
        image: str,
        strategy: str,
        build_secrets: Mapping[str, str],
        build_args: Mapping[str, str],
    ) -> CommandResult: ...

    def scale(self, app: str, kind: str, value: str) -> CommandResult: ...
