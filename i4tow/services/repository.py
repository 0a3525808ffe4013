"""
GitHub Repository Client - Single Responsibility: create album repositories.

"Created" and "already exists" both leave the repository usable, so both are
reported as success.
"""
import logging

import httpx

from ..models import RepoCreationOutcome
from ..protocols import IAPIClient, IRepositoryClient
from .errors import (
    INVALID_TOKEN_MESSAGE,
    NETWORK_MESSAGE,
    GitHubAPIError,
    classify_api_error,
    is_already_exists,
)

logger = logging.getLogger(__name__)


class GitHubRepositoryClient(IRepositoryClient):
    """Creates repositories under a personal account or an organization."""

    def __init__(self, api_client: IAPIClient, private: bool = False):
        """
        Initialize repository client.

        Args:
            api_client: GitHub API client
            private: Create private repositories
        """
        self._api = api_client
        self._private = private

    async def get_authenticated_login(self, token: str) -> str:
        """Login of the token owner. Raises GitHubAPIError on a bad token."""
        response = await self._api.get("/user", token)
        login = response.json()["login"]
        if not isinstance(login, str) or not login:
            raise ValueError(f"Unexpected login in /user response: {login!r}")
        return login

    async def create_repository(
        self, name: str, token: str, account: str
    ) -> RepoCreationOutcome:
        try:
            login = await self.get_authenticated_login(token)
        except httpx.TransportError as exc:
            logger.warning("Could not reach GitHub: %s", exc)
            return RepoCreationOutcome.failed(NETWORK_MESSAGE)
        except (GitHubAPIError, KeyError, TypeError, ValueError) as exc:
            logger.debug("Token check failed: %s", exc)
            return RepoCreationOutcome.failed(INVALID_TOKEN_MESSAGE)

        if account.lower() == login.lower():
            endpoint = "/user/repos"
        else:
            endpoint = f"/orgs/{account}/repos"

        try:
            response = await self._api.post(
                endpoint, token, json={"name": name, "private": self._private}
            )
        except (GitHubAPIError, httpx.TransportError) as exc:
            if is_already_exists(exc):
                logger.info("Repository %s/%s already exists", account, name)
                return RepoCreationOutcome.existing()
            classified = classify_api_error(exc, account)
            logger.warning("Repository creation failed (%s): %s", classified.kind.value, exc)
            return RepoCreationOutcome.failed(classified.message)

        try:
            full_name = response.json().get("full_name")
        except ValueError:
            full_name = None
        if not full_name:
            return RepoCreationOutcome.failed("Repository creation failed - no repo returned")

        logger.info("Created repository %s", full_name)
        return RepoCreationOutcome.created()
