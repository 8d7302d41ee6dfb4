from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel


class MediaUploadResponse(BaseModel):
    url: Optional[str] = None
    secure_url: Optional[str] = None
    public_id: Optional[str] = None
    resource_type: Optional[str] = None
    response: Dict[str, Any]


class HealthStatus(BaseModel):
    status: str
    cloudinary_configured: bool
    timestamp: datetime
