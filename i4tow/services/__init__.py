"""Services for i4tow."""
from .api_client import GitHubAPIClient
from .errors import ClassifiedError, ErrorKind, GitHubAPIError
from .git_transport import GitTransport
from .repository import GitHubRepositoryClient
from .scanner import PhotoScanner, is_photo_file
from .secrets import SecretProvisioningClient, encrypt_secret
from .staging import TemplateStagingEngine

__all__ = [
    "GitHubAPIClient",
    "GitHubAPIError",
    "ClassifiedError",
    "ErrorKind",
    "GitTransport",
    "GitHubRepositoryClient",
    "PhotoScanner",
    "is_photo_file",
    "SecretProvisioningClient",
    "encrypt_secret",
    "TemplateStagingEngine",
]
