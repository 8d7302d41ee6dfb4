from __future__ import annotations
from typing import Any, Dict, Protocol


class IMediaUploader(Protocol):
    """Uploads a local file to a remote media host and returns the provider response."""

    async def upload(self, local_path: str, **options: Any) -> Dict[str, Any]:
        """Upload the file at local_path.

        options are passed through to the provider untouched (e.g. resource_type).
        Raises UploadError when the provider call fails.
        """
        ...
