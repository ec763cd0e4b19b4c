from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class AppError(Exception):
    """A controlled, user-facing error.

    Raised only when no provider can be built. Per-category failures and
    missing processes are reported inside the document instead.

    Not frozen: ``contextlib`` assigns ``__traceback__`` on exceptions it
    re-raises.
    """

    exit_code: int
    code: str
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code} ({self.exit_code}): {self.message}"
