from __future__ import annotations

import io
import logging
import os
import shlex
import subprocess
import sys
from subprocess import PIPE, STDOUT
from typing import Mapping, Sequence

import pexpect

from fly_pr_preview.flyctl.base import CommandResult

logger = logging.getLogger(__name__)

REDACTED = "***"
DETACH_PROMPT = "Select the attachment that you would like to detach"


def _redact(args: Sequence[str], secret_values: Sequence[str]) -> list[str]:
    hidden = [v for v in secret_values if v]
    out: list[str] = []
    for arg in args:
        for value in hidden:
            if value in arg:
                arg = arg.replace(value, REDACTED)
        out.append(arg)
    return out


def _fmt(args: Sequence[str], secret_values: Sequence[str] = ()) -> str:
    return " ".join(shlex.quote(a) for a in _redact(args, secret_values))


def _kv_flags(flag: str, values: Mapping[str, str]) -> list[str]:
    flags: list[str] = []
    for key, value in values.items():
        flags.extend([flag, f"{key}={value}"])
    return flags


def _run_streaming_process(command: list[str]) -> tuple[int, str]:
    proc = subprocess.Popen(
        command,
        stdout=PIPE,
        stderr=STDOUT,
        text=True,
        bufsize=1,
    )
    assert proc.stdout is not None  # for type checkers
    chunks: list[str] = []
    for line in proc.stdout:
        chunks.append(line)
        sys.stdout.write(line)
        sys.stdout.flush()
    rc = proc.wait()
    return rc, "".join(chunks)


def _run_interactive(cli_bin: str, args: list[str], prompt: str) -> CommandResult:
    """Run under a pseudo-terminal and answer `prompt` with Enter."""
    transcript = io.StringIO()
    try:
        child = pexpect.spawn(cli_bin, args, encoding="utf-8", timeout=None)
    except pexpect.ExceptionPexpect as exc:
        return CommandResult(args=tuple(args), rc=127, stderr=str(exc))
    child.logfile_read = transcript
    if child.expect([prompt, pexpect.EOF]) == 0:
        child.send("\r")
        child.expect(pexpect.EOF)
    child.close()
    if child.exitstatus is not None:
        rc = child.exitstatus
    elif child.signalstatus is not None:
        rc = 128 + child.signalstatus
    else:
        rc = 1
    # The terminal merges stderr into the transcript.
    return CommandResult(args=tuple(args), rc=rc, stdout=transcript.getvalue())


class FlyctlClient:
    """
    Runs `flyctl` on the host.

    Requirements:
    - `flyctl` must be available on PATH, or set env `FLYCTL_BIN`.
    - Authentication is flyctl's own (`FLY_API_TOKEN` in the environment).

    Commands block until flyctl exits; there is no timeout.
    """

    def __init__(self, *, cli_bin: str | None = None) -> None:
        self._cli_bin = cli_bin or os.environ.get("FLYCTL_BIN") or "flyctl"

    def _run(
        self,
        args: Sequence[str],
        *,
        input_text: str | None = None,
        stream: bool = False,
        secret_values: Sequence[str] = (),
    ) -> CommandResult:
        command = [self._cli_bin, *args]
        logger.info("+ flyctl %s", _fmt(args, secret_values))
        try:
            if stream:
                rc, output = _run_streaming_process(command)
                return CommandResult(args=tuple(args), rc=rc, stdout=output)

            proc = subprocess.run(
                command,
                input=input_text,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as exc:
            # Same status a shell reports for a missing command.
            return CommandResult(args=tuple(args), rc=127, stderr=str(exc))
        return CommandResult(
            args=tuple(args),
            rc=proc.returncode,
            stdout=proc.stdout or "",
            stderr=(proc.stderr or "").strip(),
        )

    def status(self, app: str) -> CommandResult:
        return self._run(["status", "--app", app])

    def status_json(self, app: str) -> CommandResult:
        return self._run(["status", "--app", app, "--json"])

    def launch(self, app: str, *, region: str, org: str) -> CommandResult:
        return self._run(
            [
                "launch",
                "--no-deploy",
                "--copy-config",
                "--name",
                app,
                "--region",
                region,
                "--org",
                org,
                "--remote-only",
                "--ha=false",
            ],
            stream=True,
        )

    def destroy_app(self, app: str) -> CommandResult:
        return self._run(["apps", "destroy", app, "-y"])

    def list_secrets(self, app: str) -> CommandResult:
        return self._run(["secrets", "list", "--app", app])

    def set_secrets(self, app: str, secrets: Mapping[str, str]) -> CommandResult:
        pairs = [f"{k}={v}" for k, v in secrets.items()]
        return self._run(
            ["secrets", "set", "--app", app, *pairs],
            secret_values=list(secrets.values()),
        )

    def import_secrets(self, app: str, secrets: Mapping[str, str]) -> CommandResult:
        payload = "".join(f"{k}={v}\n" for k, v in secrets.items())
        return self._run(["secrets", "import", "--app", app], input_text=payload)

    def postgres_users_list(self, app: str) -> CommandResult:
        return self._run(["postgres", "users", "list", "--app", app])

    def postgres_connect(self, cluster: str, sql: str) -> CommandResult:
        return self._run(["postgres", "connect", "-a", cluster], input_text=sql)

    def postgres_attach(self, app: str, cluster: str, *, database: str) -> CommandResult:
        return self._run(
            [
                "postgres",
                "attach",
                "--app",
                app,
                cluster,
                "--database-name",
                database,
                "--yes",
            ]
        )

    def postgres_detach(self, app: str, cluster: str) -> CommandResult:
        # flyctl only prompts on a terminal; accept the default attachment.
        args = ["postgres", "detach", cluster, "--app", app]
        logger.info("+ flyctl %s", _fmt(args))
        return _run_interactive(self._cli_bin, args, DETACH_PROMPT)

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
    ) -> CommandResult:
        args = [
            "deploy",
            "--config",
            config,
            "--app",
            app,
            "--regions",
            regions,
            "--image",
            image,
            "--strategy",
            strategy,
            *_kv_flags("--build-secret", build_secrets),
            *_kv_flags("--build-arg", build_args),
        ]
        return self._run(
            args, stream=True, secret_values=list(build_secrets.values())
        )

    def scale(self, app: str, kind: str, value: str) -> CommandResult:
        return self._run(["scale", "--app", app, kind, value])
