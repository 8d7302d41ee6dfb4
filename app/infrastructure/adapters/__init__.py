from .uploader_cloudinary import CloudinaryUploader
from .local_file_store import LocalFileStore

__all__ = [
    "CloudinaryUploader",
    "LocalFileStore",
]
