"""Core orchestrator - coordinates album publishing."""
from pathlib import Path
from typing import Callable, List, Optional

import httpx

from ..models import AlbumRequest, AlbumResult, GitHubCredentials, PublishConfig, PublishMode
from ..protocols import IGitTransport
from ..services.api_client import GitHubAPIClient
from ..services.git_transport import GitTransport
from ..services.repository import GitHubRepositoryClient
from ..services.scanner import PhotoScanner
from ..services.secrets import SecretProvisioningClient
from ..services.staging import TemplateStagingEngine
from ..utils.events import ALBUM_COMPLETE, ALBUM_START, EventEmitter

from .planner import BatchPlanner
from .publish import PublishHandler, Sleep


class AlbumOrchestrator:
    """
    Publishes photo folders as album repositories using injected services.

    Albums are processed one after another; a failed album never stops the
    rest of a batch.

    Usage:
        async with AlbumOrchestrator() as orchestrator:
            orchestrator.on("progress", print)
            results = await orchestrator.process_directory(path, credentials)
    """

    def __init__(
        self,
        config: Optional[PublishConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        git: Optional[IGitTransport] = None,
        sleep: Optional[Sleep] = None,
    ):
        """
        Initialize orchestrator with dependencies.

        Args:
            config: Publish configuration
            transport: httpx transport override (tests)
            git: Git transport override (tests)
            sleep: Delay function override (tests)
        """
        self._config = config or PublishConfig()
        self._transport = transport
        self._git = git or GitTransport()
        self._sleep = sleep
        self._events = EventEmitter()
        self._scanner = PhotoScanner()
        self._planner = BatchPlanner(self._scanner)

        # Initialized in __aenter__
        self._api_client: Optional[GitHubAPIClient] = None
        self._handler: Optional[PublishHandler] = None

    async def __aenter__(self):
        """Initialize services and handler."""
        self._api_client = GitHubAPIClient(
            self._config.api_url,
            timeout=self._config.request_timeout,
            user_agent=self._config.user_agent,
            transport=self._transport,
        )
        await self._api_client.__aenter__()

        self._handler = PublishHandler(
            scanner=self._scanner,
            repositories=GitHubRepositoryClient(
                self._api_client, private=self._config.private_repos
            ),
            secrets=SecretProvisioningClient(self._api_client),
            staging=TemplateStagingEngine(self._git, self._config),
            git=self._git,
            config=self._config,
            events=self._events,
            sleep=self._sleep,
        )
        return self

    async def __aexit__(self, *args):
        """Cleanup resources."""
        if self._api_client:
            await self._api_client.__aexit__(*args)

    def on(self, event_name: str, callback: Callable) -> None:
        """Subscribe to progress, album_start or album_complete."""
        self._events.on(event_name, callback)

    def plan(
        self,
        root: Path,
        credentials: GitHubCredentials,
        mode: Optional[PublishMode] = None,
    ) -> List[AlbumRequest]:
        return self._planner.plan(root, credentials, mode)

    async def publish(self, request: AlbumRequest) -> AlbumResult:
        """Publish a single planned album."""
        assert self._handler is not None
        await self._events.emit(ALBUM_START, request)
        result = await self._handler.publish(request)
        await self._events.emit(ALBUM_COMPLETE, result)
        return result

    async def create_album(
        self,
        source_dir: Path,
        repo_name: str,
        credentials: GitHubCredentials,
        mode: Optional[PublishMode] = None,
    ) -> AlbumResult:
        """Publish source_dir as one album named after repo_name."""
        request = AlbumRequest(
            source_dir=Path(source_dir),
            repo_name_hint=repo_name,
            credentials=credentials,
            mode=mode or PublishMode(),
        )
        return await self.publish(request)

    async def process_directory(
        self,
        root: Path,
        credentials: GitHubCredentials,
        mode: Optional[PublishMode] = None,
    ) -> List[AlbumResult]:
        """Plan root and publish every album sequentially."""
        results = []
        for request in self.plan(root, credentials, mode):
            results.append(await self.publish(request))
        return results
