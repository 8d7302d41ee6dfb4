from __future__ import annotations
from typing import Protocol


class ILocalFileStore(Protocol):
    """Local filesystem primitives used after an upload."""

    async def remove(self, path: str) -> None:
        """Delete the file at path.

        Raises CleanupError if the path does not exist or cannot be removed.
        """
        ...
