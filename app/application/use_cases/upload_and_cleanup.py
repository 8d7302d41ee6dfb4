from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from app.application.interfaces import ILocalFileStore, IMediaUploader
from app.core.config import CloudinaryCredentials


logger = logging.getLogger(__name__)


class UploadFailureReason(str, Enum):
    INVALID_INPUT = "invalid-input"
    UPLOAD_FAILED = "upload-failed"
    CLEANUP_FAILED = "cleanup-failed"


class CleanupOutcome(str, Enum):
    DELETED = "deleted"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class UploadResult:
    """Outcome of a single upload-and-cleanup attempt.

    ``reason`` reflects the upload only; a failed delete after a successful
    upload keeps ``ok`` true and shows up in ``reasons`` as CLEANUP_FAILED.
    """

    response: Optional[Dict[str, Any]] = None
    reason: Optional[UploadFailureReason] = None
    cleanup: CleanupOutcome = CleanupOutcome.SKIPPED
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.response is not None

    @property
    def reasons(self) -> List[UploadFailureReason]:
        found = [self.reason] if self.reason else []
        if self.cleanup is CleanupOutcome.FAILED:
            found.append(UploadFailureReason.CLEANUP_FAILED)
        return found


class UploadAndCleanupUseCase:
    """Upload a local file to the media host, then delete it locally.

    The local file is removed whether or not the upload succeeded. Nothing is
    raised to the caller; failures come back as an UploadResult and in logs.
    """

    def __init__(
        self,
        uploader: IMediaUploader,
        file_store: ILocalFileStore,
        credentials: CloudinaryCredentials,
        *,
        resource_type: str = "auto",
        upload_options: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.uploader = uploader
        self.file_store = file_store
        self.credentials = credentials
        self.resource_type = resource_type
        self.upload_options = dict(upload_options or {})

    async def execute(self, local_path: Optional[str]) -> UploadResult:
        if not local_path:
            logger.error("No file path provided for upload.")
            return UploadResult(reason=UploadFailureReason.INVALID_INPUT)

        logger.info("Starting Cloudinary upload for file: %s", local_path)

        try:
            response = await self.uploader.upload(
                local_path, resource_type=self.resource_type, **self.upload_options
            )
            url = response.get("url")
        except Exception as e:  # noqa: BLE001
            return await self._handle_failure(local_path, e)

        logger.info("File successfully uploaded to Cloudinary: %s", url)

        cleanup = await self._remove_local(local_path, "after successful upload")
        return UploadResult(response=response, cleanup=cleanup)

    async def _handle_failure(self, local_path: str, error: Exception) -> UploadResult:
        logger.error("Cloudinary upload failed: %s", error)

        cleanup = await self._remove_local(local_path, "after upload failure")

        logger.info("Debug Info:")
        logger.info("Cloudinary Config: %s", self.credentials.masked())
        logger.info("Local File Path: %s", local_path)
        logger.info(
            "Error Stack: %s",
            "".join(traceback.format_exception(type(error), error, error.__traceback__)),
        )

        return UploadResult(
            reason=UploadFailureReason.UPLOAD_FAILED,
            cleanup=cleanup,
            error=str(error),
        )

    async def _remove_local(self, local_path: str, when: str) -> CleanupOutcome:
        try:
            await self.file_store.remove(local_path)
        except Exception as e:  # noqa: BLE001
            logger.error("Failed to delete local file: %s", e)
            return CleanupOutcome.FAILED
        logger.info("Local file deleted %s.", when)
        return CleanupOutcome.DELETED
