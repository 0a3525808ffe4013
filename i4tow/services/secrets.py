"""Actions secret provisioning with sealed-box encryption."""
import base64
import logging

import httpx
from nacl import exceptions as nacl_exceptions
from nacl.public import PublicKey, SealedBox

from ..models import SecretProvisionOutcome
from ..protocols import IAPIClient, ISecretClient
from .errors import GitHubAPIError

logger = logging.getLogger(__name__)


def encrypt_secret(public_key_b64: str, value: str) -> str:
    """Seal value for the repository's public key, base64 encoded."""
    public_key = PublicKey(base64.b64decode(public_key_b64))
    sealed = SealedBox(public_key).encrypt(value.encode("utf-8"))
    return base64.b64encode(sealed).decode("ascii")


class SecretProvisioningClient(ISecretClient):
    """Creates or updates repository Actions secrets."""

    def __init__(self, api_client: IAPIClient):
        self._api = api_client

    async def provision_secret(
        self, owner: str, repo: str, secret_name: str, value: str, token: str
    ) -> SecretProvisionOutcome:
        base = f"/repos/{owner}/{repo}/actions/secrets"

        try:
            response = await self._api.get(f"{base}/public-key", token)
            key_data = response.json()
            encrypted_value = encrypt_secret(key_data["key"], value)
            key_id = key_data["key_id"]
        except (
            GitHubAPIError,
            httpx.HTTPError,
            KeyError,
            TypeError,
            ValueError,
            nacl_exceptions.CryptoError,
        ) as exc:
            logger.debug("Public key lookup for %s/%s failed: %s", owner, repo, exc)
            return SecretProvisionOutcome.failed("Failed to get repository public key")

        try:
            await self._api.put(
                f"{base}/{secret_name}",
                token,
                json={"encrypted_value": encrypted_value, "key_id": key_id},
            )
        except GitHubAPIError as exc:
            return SecretProvisionOutcome.failed(exc.message or "Failed to create secret")
        except httpx.HTTPError as exc:
            return SecretProvisionOutcome.failed(str(exc) or "Failed to create secret")

        logger.info("Secret %s set on %s/%s", secret_name, owner, repo)
        return SecretProvisionOutcome.ok()
