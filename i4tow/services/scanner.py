"""Photo and subdirectory discovery for album sources."""
import logging
from pathlib import Path
from typing import List

from ..protocols import IPhotoScanner

logger = logging.getLogger(__name__)

PHOTO_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".heic", ".webp", ".gif"})


def is_photo_file(filename: str) -> bool:
    """True if filename carries an allowed photo extension (any case)."""
    dot = filename.rfind(".")
    if dot == -1:
        return False
    return filename[dot:].lower() in PHOTO_EXTENSIONS


class PhotoScanner(IPhotoScanner):
    """Lists photos and album subdirectories directly under a folder."""

    @staticmethod
    def list_photos(directory: Path) -> List[str]:
        """
        Collect photo filenames (non-recursive).

        Args:
            directory: Folder to scan

        Returns:
            Sorted filenames; empty if the folder does not exist
        """
        photos = []
        for entry in _iter_entries(directory):
            try:
                if entry.is_file() and is_photo_file(entry.name):
                    photos.append(entry.name)
            except OSError as exc:
                logger.debug("Skipping %s: %s", entry, exc)
        return sorted(photos)

    @staticmethod
    def list_subdirectories(directory: Path) -> List[str]:
        """Sorted names of subdirectories, hidden ones excluded."""
        subdirs = []
        for entry in _iter_entries(directory):
            if entry.name.startswith("."):
                continue
            try:
                if entry.is_dir():
                    subdirs.append(entry.name)
            except OSError as exc:
                logger.debug("Skipping %s: %s", entry, exc)
        return sorted(subdirs)


def _iter_entries(directory: Path) -> List[Path]:
    directory = Path(directory)
    try:
        return list(directory.iterdir())
    except OSError:
        # Missing or unreadable folders scan as empty
        return []
