from __future__ import annotations

import aiofiles.os

from app.application.interfaces.file_store import ILocalFileStore
from app.core.exceptions import CleanupError


class LocalFileStore(ILocalFileStore):
    """Deletes files on the local disk without blocking the event loop."""

    async def remove(self, path: str) -> None:
        try:
            await aiofiles.os.remove(path)
        except OSError as e:
            raise CleanupError(f"{e.strerror or e}: {path}", local_path=path) from e
