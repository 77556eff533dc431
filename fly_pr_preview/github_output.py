from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreviewResult:
    """Facts about the deployed app handed back to the GitHub workflow."""

    hostname: str
    url: str
    id: str
    name: str

    @classmethod
    def from_status(cls, app: str, status: Mapping[str, Any]) -> PreviewResult:
        hostname = str(status.get("Hostname") or "")
        return cls(
            hostname=hostname,
            url=f"https://{hostname}",
            id=str(status.get("ID") or ""),
            name=app,
        )

    def as_outputs(self) -> dict[str, str]:
        return asdict(self)


def write_outputs(outputs: Mapping[str, str], path: Optional[str]) -> None:
    """Append `key=value` lines to the step output file (`GITHUB_OUTPUT`)."""
    for key, value in outputs.items():
        logger.info("[output] %s=%s", key, value)
    if not path:
        logger.warning("[output] GITHUB_OUTPUT not set; outputs only logged")
        return
    with Path(path).open("a", encoding="utf-8") as f:
        for key, value in outputs.items():
            f.write(f"{key}={value}\n")
