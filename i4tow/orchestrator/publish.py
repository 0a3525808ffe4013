"""Album publish handler - one source folder to one deployed repository."""
import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, List, Optional

from ..models import AlbumRequest, AlbumResult, PublishConfig
from ..protocols import (
    IGitTransport,
    IPhotoScanner,
    IRepositoryClient,
    ISecretClient,
    IStagingEngine,
)
from ..services.errors import NO_PHOTOS_MESSAGE, classify_failure
from ..services.naming import (
    album_url,
    authenticated_remote_url,
    prefix_repo_name,
    redact,
    repo_url,
)
from ..utils.events import EventEmitter

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class PublishStep(Enum):
    """States of one album publish, in order."""
    VALIDATE = "validate"
    DRY_RUN = "dry_run"
    CREATE_REPO = "create_repo"
    STAGE_CONTENT = "stage_content"
    COMMIT_AND_PUSH = "commit_and_push"
    PROVISION_SECRET = "provision_secret"
    CLEANUP = "cleanup"
    SUCCEEDED = "succeeded"


class PublishHandler:
    """
    Drives the per-album sequence.

    validate -> dry run check -> create repo -> stage content -> commit and push
    -> provision secret -> cleanup. Any failure ends the album with a failed
    result except the secret step, which only adds a warning.
    """

    def __init__(
        self,
        scanner: IPhotoScanner,
        repositories: IRepositoryClient,
        secrets: ISecretClient,
        staging: IStagingEngine,
        git: IGitTransport,
        config: Optional[PublishConfig] = None,
        events: Optional[EventEmitter] = None,
        sleep: Optional[Sleep] = None,
    ):
        """
        Initialize publish handler.

        Args:
            scanner: PhotoScanner
            repositories: GitHubRepositoryClient
            secrets: SecretProvisioningClient
            staging: TemplateStagingEngine
            git: GitTransport used for commit and push
            config: PublishConfig
            events: Progress observer; advisory only
            sleep: Awaitable delay, replaced by a no-op in tests
        """
        self._scanner = scanner
        self._repositories = repositories
        self._secrets = secrets
        self._staging = staging
        self._git = git
        self._config = config or PublishConfig()
        self._events = events or EventEmitter()
        self._sleep = sleep or asyncio.sleep

    async def publish(self, request: AlbumRequest) -> AlbumResult:
        """Publish one album. Never raises for remote or git failures."""
        config = self._config
        name = prefix_repo_name(request.repo_name_hint, config.repo_prefix)
        owner = request.credentials.username
        token = request.credentials.token

        photos = self._scanner.list_photos(request.source_dir)
        if not photos:
            return AlbumResult.fail(name, NO_PHOTOS_MESSAGE, photo_count=0)

        if request.mode.dry_run:
            return AlbumResult.ok(
                name=name,
                repo_url=repo_url(owner, name),
                album_url=album_url(config.album_url_base, name),
                photo_count=len(photos),
            )

        step = PublishStep.CREATE_REPO
        workspace: Optional[Path] = None
        warnings: List[str] = []
        try:
            await self._progress("Creating repository", name)
            outcome = await self._repositories.create_repository(name, token, owner)
            if not outcome.success:
                return AlbumResult.fail(
                    name, outcome.error or "Failed to create repository", len(photos)
                )
            if outcome.already_existed:
                await self._progress("Repository exists", "Using existing repository")
            else:
                await self._progress("Waiting for GitHub", "Repository provisioning...")
                await self._sleep(config.provisioning_delay)

            step = PublishStep.STAGE_CONTENT
            workspace = self._staging.create_workspace()
            await self._progress("Downloading template", config.template_label)
            await self._staging.stage_album(
                workspace,
                config.template_url,
                photos,
                request.source_dir,
                progress=self._progress,
            )

            step = PublishStep.COMMIT_AND_PUSH
            await self._progress("Uploading to GitHub", f"Pushing to {owner}/{name}")
            await self._git.init_repository(
                workspace,
                authenticated_remote_url(owner, name, token),
                config.default_branch,
            )
            await self._git.commit_all(workspace, f"{len(photos)} photos added via i4tow")
            await self._push_with_retry(workspace, token)

            step = PublishStep.PROVISION_SECRET
            await self._progress("Setting up Actions", "Creating deploy token...")
            secret = await self._secrets.provision_secret(
                owner, name, config.secret_name, token, token
            )
            if not secret.success:
                warning = f"Could not create deploy secret: {secret.error}"
                warnings.append(warning)
                await self._progress("Warning", warning)

            step = PublishStep.CLEANUP
            self._staging.remove_workspace(workspace)
            workspace = None

            step = PublishStep.SUCCEEDED
            result = AlbumResult.ok(
                name=name,
                repo_url=repo_url(owner, name),
                album_url=album_url(config.album_url_base, name),
                photo_count=len(photos),
                warnings=tuple(warnings),
            )
            await self._progress("Done", result.album_url)
            return result

        except Exception as exc:
            classified = classify_failure(exc)
            message = redact(classified.message, token)
            logger.warning(
                "Publishing %s failed at %s (%s): %s",
                name,
                step.value,
                classified.kind.value,
                redact(str(exc), token),
            )
            return AlbumResult.fail(name, message, photo_count=len(photos))
        finally:
            self._staging.remove_workspace(workspace)

    async def _push_with_retry(self, workspace: Path, token: str = "") -> int:
        """Push, retrying while the new repository becomes visible. Returns attempts used."""
        max_attempts = max(1, self._config.max_push_attempts)
        attempt = 0
        while True:
            attempt += 1
            try:
                await self._git.push(workspace, self._config.default_branch)
                return attempt
            except Exception as exc:
                if attempt >= max_attempts:
                    raise
                logger.info(
                    "Push attempt %d/%d failed: %s", attempt, max_attempts, redact(str(exc), token)
                )
                await self._progress("Retrying push", f"Attempt {attempt + 1}/{max_attempts}...")
                await self._sleep(self._config.push_retry_delay)

    async def _progress(self, step: str, detail: Optional[str] = None) -> None:
        await self._events.progress(step, detail)
