from __future__ import annotations


class PreviewError(RuntimeError):
    """Base error for the preview workflow."""

    exit_code = 1


class PreviewInputError(PreviewError):
    """Invalid event or configuration; raised before any side effect."""


class FlyCommandError(PreviewError):
    """A flyctl command that must succeed returned a non-zero status."""

    def __init__(self, message: str, *, returncode: int, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr

    @property
    def exit_code(self) -> int:
        return self.returncode or 1
