"""Decides which folders become albums."""
import os
from pathlib import Path
from typing import List, Optional

from ..models import AlbumRequest, GitHubCredentials, PublishMode
from ..protocols import IPhotoScanner
from ..services.naming import sanitize_repo_name
from ..services.scanner import PhotoScanner


class BatchPlanner:
    """Turns a root folder plus mode flags into album requests."""

    def __init__(self, scanner: Optional[IPhotoScanner] = None):
        self._scanner = scanner or PhotoScanner()

    def plan(
        self,
        root: Path,
        credentials: GitHubCredentials,
        mode: Optional[PublishMode] = None,
    ) -> List[AlbumRequest]:
        """
        Plan albums for root.

        Single album when forced, or when root holds photos and either has no
        subdirectories or batch is not forced. Otherwise one album per
        subdirectory that holds at least one photo.

        Args:
            root: Folder given by the user
            credentials: Token and target account
            mode: Mode flags

        Returns:
            Requests in processing order; empty if nothing qualifies
        """
        root = Path(root)
        mode = mode or PublishMode()
        has_photos = bool(self._scanner.list_photos(root))
        subdirs = self._scanner.list_subdirectories(root)

        if mode.force_single or (has_photos and (not subdirs or not mode.force_batch)):
            return [self._request(root, credentials, mode)]

        if not (mode.force_batch or subdirs):
            return []

        requests = []
        for subdir in subdirs:
            path = root / subdir
            if self._scanner.list_photos(path):
                requests.append(self._request(path, credentials, mode))
        return requests

    @staticmethod
    def _request(
        path: Path, credentials: GitHubCredentials, mode: PublishMode
    ) -> AlbumRequest:
        # abspath collapses "." and ".." without following symlinks
        name = path.name
        if name in ("", ".", ".."):
            name = Path(os.path.abspath(path)).name
        return AlbumRequest(
            source_dir=path,
            repo_name_hint=sanitize_repo_name(name),
            credentials=credentials,
            mode=mode,
        )
