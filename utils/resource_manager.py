"""
Cleanup of local upload leftovers
"""

import os
import time
import logging
from typing import List, Optional

from app.core.config import settings

logger = logging.getLogger(__name__)


def sweep_stale_uploads(
    directory: Optional[str] = None, max_age_hours: Optional[float] = None
) -> List[str]:
    """Remove files left behind in the upload temp directory.

    A file ends up here when both its upload and its local delete failed.
    Only regular files older than max_age_hours are removed, so uploads still
    in flight are left alone. Subdirectories are not descended into.

    Returns the paths that were removed.
    """
    if directory is None:
        directory = settings.upload_temp_dir
    if max_age_hours is None:
        max_age_hours = settings.stale_upload_max_age_hours

    removed: List[str] = []
    if not os.path.isdir(directory):
        return removed

    current_time = time.time()
    max_age_seconds = max_age_hours * 3600

    try:
        entries = os.listdir(directory)
    except OSError as e:
        logger.warning("Failed to list upload directory %s: %s", directory, str(e))
        return removed

    for item in entries:
        path = os.path.join(directory, item)
        if not os.path.isfile(path):
            continue
        try:
            age_seconds = current_time - os.path.getmtime(path)
            if age_seconds <= max_age_seconds:
                continue
            os.remove(path)
            removed.append(path)
            logger.info(
                "🧹 Removed stale upload: %s (age: %.1fh)", path, age_seconds / 3600
            )
        except (OSError, PermissionError) as e:
            logger.warning("Failed to remove stale upload %s: %s", path, str(e))

    if removed:
        logger.info("✅ Swept %d stale upload(s) from %s", len(removed), directory)
    return removed
