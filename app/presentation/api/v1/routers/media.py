import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from app.application.use_cases.upload_and_cleanup import UploadAndCleanupUseCase
from app.core.config import settings
from app.presentation.api.v1.dependencies.media import get_upload_use_case
from app.presentation.api.v1.schemas.media import MediaUploadResponse
from utils.upload_utils import save_upload_file

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/media")


@router.post("", response_model=MediaUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_media(
    file: UploadFile = File(...),
    use_case: UploadAndCleanupUseCase = Depends(get_upload_use_case),
):
    """Stage the uploaded file locally, push it to Cloudinary, then drop the local copy."""
    local_path = await save_upload_file(
        file, settings.upload_temp_dir, max_size=settings.upload_max_file_size
    )

    result = await use_case.execute(local_path)
    if not result.ok:
        logger.warning("Upload of %s failed: %s", file.filename, result.error)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "error": "Upload failed",
                "reason": result.reason.value if result.reason else None,
                "details": result.error,
                "file_name": file.filename,
            },
        )

    response = result.response
    return MediaUploadResponse(
        url=response.get("url"),
        secure_url=response.get("secure_url"),
        public_id=response.get("public_id"),
        resource_type=response.get("resource_type"),
        response=response,
    )
