"""Storage failures surfaced to the command driver."""

from __future__ import annotations

import os
from typing import Optional


class StorageError(RuntimeError):
    """Raised when the backing file cannot be read, written, or decoded."""

    def __init__(
        self, message: str, *, path: Optional[os.PathLike[str] | str] = None
    ) -> None:
        super().__init__(message)
        self.path = None if path is None else os.fspath(path)


__all__ = ["StorageError"]
