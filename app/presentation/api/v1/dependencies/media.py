from fastapi import Depends, Request

from app.application.use_cases.upload_and_cleanup import UploadAndCleanupUseCase
from app.core.config import CloudinaryCredentials
from app.infrastructure.adapters.bundles.media import get_upload_use_case as build_upload_use_case


def get_credentials(request: Request) -> CloudinaryCredentials:
    """Credentials built once in the app lifespan; read from settings if the lifespan did not run."""
    creds = getattr(request.app.state, "cloudinary_credentials", None)
    return creds or CloudinaryCredentials.from_settings()


def get_upload_use_case(
    credentials: CloudinaryCredentials = Depends(get_credentials),
) -> UploadAndCleanupUseCase:
    """Compose the UploadAndCleanupUseCase at Presentation layer."""
    return build_upload_use_case(credentials=credentials)
