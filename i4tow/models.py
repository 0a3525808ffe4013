"""
Models for i4tow.

Immutable dataclasses shared by the services, the orchestrator and the CLI.
"""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple


DEFAULT_TEMPLATE_URL = "https://github.com/rathnasorg/i4tow-album.git"


class PublishStatus(Enum):
    """Album publish status."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class GitHubCredentials:
    """Token plus the account (user or org) that will own the repositories."""
    token: str
    username: str


@dataclass(frozen=True)
class PublishMode:
    """Mode flags for one run."""
    dry_run: bool = False
    force_single: bool = False
    force_batch: bool = False

    @property
    def label(self) -> str:
        if self.force_single:
            return "single"
        if self.force_batch:
            return "batch"
        return "auto"


@dataclass(frozen=True)
class AlbumRequest:
    """Immutable input to one album publish."""
    source_dir: Path
    repo_name_hint: str
    credentials: GitHubCredentials
    mode: PublishMode = PublishMode()


@dataclass(frozen=True)
class AlbumResult:
    """Immutable result of one album attempt."""
    name: str
    repo_url: str = ""
    album_url: str = ""
    status: PublishStatus = PublishStatus.SUCCESS
    error: Optional[str] = None
    photo_count: int = 0
    warnings: Tuple[str, ...] = ()

    @property
    def success(self) -> bool:
        return self.status == PublishStatus.SUCCESS

    @classmethod
    def ok(
        cls,
        name: str,
        repo_url: str,
        album_url: str,
        photo_count: int,
        warnings: Tuple[str, ...] = (),
    ):
        return cls(
            name=name,
            repo_url=repo_url,
            album_url=album_url,
            status=PublishStatus.SUCCESS,
            photo_count=photo_count,
            warnings=tuple(warnings),
        )

    @classmethod
    def fail(cls, name: str, error: str, photo_count: int = 0):
        return cls(
            name=name,
            status=PublishStatus.FAILED,
            error=error,
            photo_count=photo_count,
        )


@dataclass(frozen=True)
class ProgressEvent:
    """Advisory notification emitted while an album is published."""
    step: str
    detail: Optional[str] = None

    def __str__(self) -> str:
        if self.detail:
            return f"{self.step}: {self.detail}"
        return self.step


@dataclass(frozen=True)
class RepoCreationOutcome:
    """Created and already-existing repositories are both usable."""
    success: bool
    already_existed: bool = False
    error: Optional[str] = None

    @classmethod
    def created(cls):
        return cls(success=True)

    @classmethod
    def existing(cls):
        return cls(success=True, already_existed=True)

    @classmethod
    def failed(cls, error: str):
        return cls(success=False, error=error)


@dataclass(frozen=True)
class SecretProvisionOutcome:
    """Result of uploading an Actions secret. Failure is never fatal."""
    success: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls):
        return cls(success=True)

    @classmethod
    def failed(cls, error: str):
        return cls(success=False, error=error)


@dataclass(frozen=True)
class PublishConfig:
    """Immutable configuration for publish operations."""
    template_url: str = DEFAULT_TEMPLATE_URL
    template_cleanup_paths: Tuple[str, ...] = ("temp-demo-files",)
    photos_subpath: str = "public/photos/raw2"
    repo_prefix: str = "i4tow-"
    album_url_base: str = "https://rathnasorg.github.io/i4tow/a"
    api_url: str = "https://api.github.com"
    user_agent: str = "i4tow-cli"
    default_branch: str = "main"
    secret_name: str = "DEPLOY_TOKEN"
    private_repos: bool = False
    request_timeout: float = 30.0
    provisioning_delay: float = 3.0  # seconds, new repos only
    push_retry_delay: float = 2.0
    max_push_attempts: int = 3
    workspace_root: Optional[Path] = None  # system temp dir when unset

    @property
    def template_label(self) -> str:
        """owner/name of the template, for display."""
        label = self.template_url.rstrip("/")
        if label.endswith(".git"):
            label = label[: -len(".git")]
        return "/".join(label.split("/")[-2:])
