from .uploader import IMediaUploader
from .file_store import ILocalFileStore

__all__ = [
    "IMediaUploader",
    "ILocalFileStore",
]
