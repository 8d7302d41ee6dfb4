from __future__ import annotations

from typing import Any, Dict, Optional

from app.application.use_cases.upload_and_cleanup import UploadAndCleanupUseCase
from app.infrastructure.adapters import CloudinaryUploader, LocalFileStore
from app.core.config import CloudinaryCredentials, Settings, settings


def get_upload_use_case(
    *,
    credentials: Optional[CloudinaryCredentials] = None,
    source: Optional[Settings] = None,
) -> UploadAndCleanupUseCase:
    """Assemble the upload-and-cleanup use case from concrete adapters.

    Credentials default to the ones read from settings at startup.
    """
    source = source or settings
    credentials = credentials or CloudinaryCredentials.from_settings(source)
    return UploadAndCleanupUseCase(
        uploader=CloudinaryUploader(credentials, folder=source.cloudinary_folder),
        file_store=LocalFileStore(),
        credentials=credentials,
        resource_type=source.cloudinary_resource_type,
    )


async def upload_on_cloudinary(
    local_file_path: Optional[str],
    *,
    credentials: Optional[CloudinaryCredentials] = None,
) -> Optional[Dict[str, Any]]:
    """Upload a file to Cloudinary and delete the local copy.

    Returns the Cloudinary response, or None if the upload failed for any
    reason. Never raises.
    """
    result = await get_upload_use_case(credentials=credentials).execute(local_file_path)
    return result.response
