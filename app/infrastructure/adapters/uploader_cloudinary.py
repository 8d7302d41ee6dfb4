from __future__ import annotations
import asyncio
from typing import Any, Dict, Optional

import cloudinary.uploader

from app.application.interfaces.uploader import IMediaUploader
from app.core.config import CloudinaryCredentials, settings
from app.core.exceptions import UploadError


class CloudinaryUploader(IMediaUploader):
    """Uploader backed by the Cloudinary SDK.

    Credentials are forwarded on every call instead of being written into the
    SDK's global config, so several accounts can coexist in one process.
    """

    def __init__(
        self,
        credentials: CloudinaryCredentials,
        *,
        folder: Optional[str] = None,
    ) -> None:
        self.credentials = credentials
        self.folder = settings.cloudinary_folder if folder is None else folder

    async def upload(self, local_path: str, **options: Any) -> Dict[str, Any]:
        call_options: Dict[str, Any] = dict(self.credentials.as_upload_options())
        if self.folder:
            call_options["folder"] = self.folder
        call_options.update(options)

        def _upload_sync() -> Dict[str, Any]:
            return cloudinary.uploader.upload(local_path, **call_options)

        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, _upload_sync)
        except Exception as e:
            raise UploadError(str(e), local_path=local_path) from e
