from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def configure_logging(level: str | int = "INFO", *, force: bool = False) -> None:
    """Configure root logging for CLI runs.

    `force=True` replaces handlers installed by anything imported earlier.
    """
    global _configured
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved
    logging.basicConfig(level=level, format=DEFAULT_FORMAT, force=force)
    _configured = True


def ensure_logging_configured() -> None:
    if _configured or logging.getLogger().handlers:
        return
    configure_logging()
