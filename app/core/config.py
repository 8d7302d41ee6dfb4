"""
Application configuration using Pydantic Settings
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings

from app.core.exceptions import ConfigurationError

SECRET_MASK = "****"


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # API Settings
    api_title: str = "Media Upload API"
    api_description: str = "Uploads local media to Cloudinary and cleans up after itself"
    api_version: str = "1.0.0"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    max_requests_per_minute: int = 30

    # Cloudinary Settings
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    cloudinary_resource_type: str = "auto"  # let Cloudinary detect image/video/raw
    cloudinary_folder: str = ""
    """
    Cloudinary account configuration.
    cloudinary_cloud_name: account identifier
    cloudinary_api_key: API key
    cloudinary_api_secret: API secret, never logged in plaintext
    """

    # Upload Settings
    upload_temp_dir: str = "public/temp"
    upload_max_file_size: int = 100 * 1024 * 1024  # 100MB

    # Stale Upload Sweep Settings
    sweep_on_startup: bool = True
    stale_upload_max_age_hours: float = 1.0

    # Logging Settings
    log_level: str = "INFO"
    log_format: str = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"
    log_file: str = "data/app.log"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


class CloudinaryCredentials(BaseModel):
    """Immutable Cloudinary account credentials.

    Built once at startup and handed to whichever component talks to
    Cloudinary, instead of being read from the environment at call time.
    """

    cloud_name: str = ""
    api_key: str = ""
    api_secret: str = ""

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, source: Optional[Settings] = None) -> "CloudinaryCredentials":
        source = source or settings
        return cls(
            cloud_name=source.cloudinary_cloud_name,
            api_key=source.cloudinary_api_key,
            api_secret=source.cloudinary_api_secret,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def masked(self) -> Dict[str, Any]:
        """Credentials safe to log: the secret is replaced by a fixed marker.

        Example:
            >>> CloudinaryCredentials(cloud_name="demo", api_key="1", api_secret="s").masked()
            {'cloud_name': 'demo', 'api_key': '1', 'api_secret': '****'}
            >>> CloudinaryCredentials(cloud_name="demo").masked()["api_secret"] is None
            True
        """
        return {
            "cloud_name": self.cloud_name or None,
            "api_key": self.api_key or None,
            "api_secret": SECRET_MASK if self.api_secret else None,
        }

    def as_upload_options(self) -> Dict[str, str]:
        """Per-call SDK options carrying these credentials."""
        return {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
        }

    def require_configured(self) -> None:
        for key in ("cloud_name", "api_key", "api_secret"):
            if not getattr(self, key):
                raise ConfigurationError(
                    f"Cloudinary credential '{key}' is not configured",
                    config_key=f"cloudinary_{key}",
                )

    def __repr__(self) -> str:
        return f"CloudinaryCredentials({self.masked()!r})"

    __str__ = __repr__


# Global settings instance
settings = Settings()
