"""
i4tow - publish folders of photos as GitHub-hosted albums.

Each album is a repository created from the i4tow album template, filled with
the folder's photos and deployed by the template's own GitHub Actions.

Usage:
    from i4tow import AlbumOrchestrator, GitHubCredentials, PublishMode

    credentials = GitHubCredentials(token=token, username="octocat")

    async with AlbumOrchestrator() as orchestrator:
        orchestrator.on("progress", lambda event: print(event))

        # One folder, one album
        result = await orchestrator.create_album(path, "Holidays", credentials)

        # Every photo subfolder becomes its own album
        results = await orchestrator.process_directory(
            root, credentials, PublishMode(force_batch=True)
        )
"""
from .models import (
    AlbumRequest,
    AlbumResult,
    GitHubCredentials,
    ProgressEvent,
    PublishConfig,
    PublishMode,
    PublishStatus,
)
from .orchestrator import AlbumOrchestrator, BatchPlanner
from .services.naming import prefix_repo_name, sanitize_repo_name
from .services.scanner import PhotoScanner, is_photo_file

__version__ = "0.1.0"
__all__ = [
    # Main
    "AlbumOrchestrator",
    "BatchPlanner",
    # Models
    "AlbumRequest",
    "AlbumResult",
    "GitHubCredentials",
    "ProgressEvent",
    "PublishConfig",
    "PublishMode",
    "PublishStatus",
    # Helpers
    "PhotoScanner",
    "is_photo_file",
    "prefix_repo_name",
    "sanitize_repo_name",
]
