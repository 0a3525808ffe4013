"""
Protocols (Interfaces) for Dependency Inversion.

Small interfaces so the publish handler can run against fakes.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Optional,
    Protocol,
    Sequence,
    runtime_checkable,
)

from .models import RepoCreationOutcome, SecretProvisionOutcome


@runtime_checkable
class IPhotoScanner(Protocol):
    """Interface for directory scanning."""

    def list_photos(self, directory: Path) -> List[str]:
        """Photo filenames directly inside directory."""
        ...

    def list_subdirectories(self, directory: Path) -> List[str]:
        """Visible subdirectory names directly inside directory."""
        ...


@runtime_checkable
class IAPIClient(Protocol):
    """Interface for GitHub REST calls."""

    async def get(self, endpoint: str, token: str) -> Any:
        ...

    async def post(self, endpoint: str, token: str, json: Dict) -> Any:
        ...

    async def put(self, endpoint: str, token: str, json: Dict) -> Any:
        ...


@runtime_checkable
class IGitTransport(Protocol):
    """Interface for version-control operations."""

    async def shallow_clone(self, url: str, dest: Path) -> None:
        ...

    async def init_repository(self, path: Path, remote_url: str, branch: str) -> None:
        ...

    async def commit_all(self, path: Path, message: str) -> None:
        ...

    async def push(self, path: Path, branch: str) -> None:
        ...


class IRepositoryClient(ABC):
    """Interface for remote repository creation."""

    @abstractmethod
    async def create_repository(
        self, name: str, token: str, account: str
    ) -> RepoCreationOutcome:
        """Create name under account; an existing repository counts as success."""
        pass


class ISecretClient(ABC):
    """Interface for Actions secret provisioning."""

    @abstractmethod
    async def provision_secret(
        self, owner: str, repo: str, secret_name: str, value: str, token: str
    ) -> SecretProvisionOutcome:
        """Encrypt and upload value. Never raises."""
        pass


class IStagingEngine(ABC):
    """Interface for building the album workspace."""

    @abstractmethod
    def create_workspace(self) -> Path:
        pass

    @abstractmethod
    async def stage_album(
        self,
        workspace: Path,
        template_url: str,
        photos: Sequence[str],
        source_dir: Path,
        progress: Optional[Callable[[str, Optional[str]], Awaitable[None]]] = None,
    ) -> Path:
        """Clone the template into workspace and copy photos in."""
        pass

    @abstractmethod
    def remove_workspace(self, workspace: Optional[Path]) -> None:
        """Best-effort removal. Never raises."""
        pass
