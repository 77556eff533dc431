from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Optional

from fly_pr_preview.errors import PreviewInputError

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".bak"


def backup_path(config_path: str) -> Path:
    return Path(f"{config_path}{BACKUP_SUFFIX}")


def require_config(config_path: str) -> Path:
    src = Path(config_path)
    if not src.is_file():
        raise PreviewInputError(f"Fly config {config_path} not found (input `config`).")
    return src


def backup_config(config_path: str) -> Path:
    """
    Copy the app config aside before `flyctl launch`, which rewrites its
    `[build.args]` section.
    """
    src = require_config(config_path)
    dst = backup_path(config_path)
    shutil.copyfile(src, dst)
    logger.info("[config] backed up %s -> %s", src, dst)
    return dst


def restore_config(config_path: str, backup: Optional[Path]) -> None:
    if backup is None or not backup.exists():
        return
    shutil.copyfile(backup, config_path)
    logger.info("[config] restored %s from %s", config_path, backup)
