"""
File organization service.

Moves processed resumes into the success or failed directory. Moves are
plain renames; a failure is logged and never aborts the run.
"""

import asyncio
import os
import logging
from typing import Optional

from core.config import Settings
from core.exceptions import OrganizeError

logger = logging.getLogger(__name__)


def unique_target_path(target_dir: str, file_name: str) -> str:
    """
    Return a path in ``target_dir`` that does not exist yet.

    ``cv.pdf`` becomes ``cv_1.pdf``, ``cv_2.pdf``, ... on collisions.
    """
    target_path = os.path.join(target_dir, file_name)
    stem, ext = os.path.splitext(file_name)
    counter = 1

    while os.path.exists(target_path):
        target_path = os.path.join(target_dir, f"{stem}_{counter}{ext}")
        counter += 1

    return target_path


def move_file(file_path: str, target_dir: str) -> str:
    """
    Rename ``file_path`` into ``target_dir`` without overwriting anything.

    Raises:
        OrganizeError: If the rename fails (permissions, cross-device, ...)
    """
    target_path = unique_target_path(target_dir, os.path.basename(file_path))
    try:
        os.rename(file_path, target_path)
    except OSError as e:
        raise OrganizeError(f"Error moving file {file_path}: {e}") from e
    return target_path


class FileOrganizer:
    """Sorts processed files into success/failed folders."""

    def __init__(self, success_dir: str, failed_dir: str, enabled: bool = True):
        self.success_dir = success_dir
        self.failed_dir = failed_dir
        self.enabled = enabled
        # Probing for a free name and renaming must not interleave between jobs
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "FileOrganizer":
        return cls(settings.success_dir, settings.failed_dir, settings.organize_files)

    def ensure_directories(self) -> None:
        """Create the success and failed directories if missing."""
        if not self.enabled:
            return

        for directory in (self.success_dir, self.failed_dir):
            if not os.path.isdir(directory):
                os.makedirs(directory, exist_ok=True)
                logger.info(f"✅ Created directory: {directory}")

    async def organize(self, file_path: str, succeeded: bool) -> Optional[str]:
        """
        Move a processed file according to its verdict. Never raises.

        Returns:
            The new path, or None when organization is disabled or the move failed
        """
        if not self.enabled:
            return None

        target_dir = self.success_dir if succeeded else self.failed_dir
        file_name = os.path.basename(file_path)

        async with self._lock:
            try:
                target_path = await asyncio.to_thread(move_file, file_path, target_dir)
            except OrganizeError as e:
                logger.error(str(e))
                return None

        status = "✓ Success" if succeeded else "✗ Failed"
        logger.info(
            f"{status}: Moved {file_name} to {'success' if succeeded else 'failed'} folder"
        )
        return target_path
