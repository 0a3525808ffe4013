"""Template staging - turn a fresh template clone into an album workspace."""
import asyncio
import logging
import shutil
import tempfile
from pathlib import Path
from typing import Awaitable, Callable, Optional, Sequence

from ..models import PublishConfig
from ..protocols import IGitTransport, IStagingEngine

logger = logging.getLogger(__name__)

StepCallback = Callable[[str, Optional[str]], Awaitable[None]]


class TemplateStagingEngine(IStagingEngine):
    """
    Builds the working tree pushed to an album repository.

    Each album gets its own workspace; workspaces are never shared.
    """

    def __init__(self, git: IGitTransport, config: Optional[PublishConfig] = None):
        self._git = git
        self._config = config or PublishConfig()

    def create_workspace(self) -> Path:
        root = self._config.workspace_root
        if root is not None:
            Path(root).mkdir(parents=True, exist_ok=True)
        return Path(tempfile.mkdtemp(prefix="i4tow-", dir=str(root) if root else None))

    async def stage_album(
        self,
        workspace: Path,
        template_url: str,
        photos: Sequence[str],
        source_dir: Path,
        progress: Optional[StepCallback] = None,
    ) -> Path:
        """
        Clone the template and copy photos into it.

        Args:
            workspace: Empty directory owned by this album
            template_url: Template repository to clone (depth 1)
            photos: Photo filenames found in source_dir
            source_dir: Album source folder
            progress: Awaited with (step, detail) before cleaning and before copying

        Returns:
            Directory the photos were copied to
        """
        workspace = Path(workspace)
        await self._git.shallow_clone(template_url, workspace)

        if progress is not None:
            await progress("Preparing album", "Cleaning template files")
        await asyncio.to_thread(self.strip_template, workspace)

        if progress is not None:
            await progress("Copying photos", f"{len(photos)} files")
        return await asyncio.to_thread(self._copy_photos, workspace, photos, Path(source_dir))

    def _copy_photos(self, workspace: Path, photos: Sequence[str], source_dir: Path) -> Path:
        photos_dir = workspace / self._config.photos_subpath
        photos_dir.mkdir(parents=True, exist_ok=True)
        for photo in photos:
            shutil.copyfile(source_dir / photo, photos_dir / photo)

        logger.debug("Copied %d photos to %s", len(photos), photos_dir)
        return photos_dir

    def strip_template(self, workspace: Path) -> None:
        """Remove the clone's history and the template's demo content."""
        for relative in (".git", *self._config.template_cleanup_paths):
            target = workspace / relative
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            elif target.exists() or target.is_symlink():
                target.unlink()

    def remove_workspace(self, workspace: Optional[Path]) -> None:
        if workspace is None:
            return
        shutil.rmtree(workspace, ignore_errors=True)
