"""
Root Platform Client

Thin authenticated client for the two claim operations the intake service
needs: updating claim blocks and creating claim attachments.

API Reference:
- https://docs.rootplatform.com/reference/update-multiple-block-states
- https://docs.rootplatform.com/reference/claim-create-attachment
"""
import logging
from typing import Dict, Optional, Protocol
from urllib.parse import quote

import httpx

from intake.core.config import Settings
from intake.core.errors import ConfigurationError, RemoteApiError
from intake.core.models import Attachment, RemoteCallResult

logger = logging.getLogger(__name__)


class RemoteClaimClient(Protocol):
    """The platform operations used by the submission handler."""

    async def update_claim_blocks(self, claim_id: str, blocks: Dict[str, str]) -> RemoteCallResult:
        ...

    async def upload_attachment(self, claim_id: str, attachment: Attachment) -> RemoteCallResult:
        ...


class RootClaimClient:
    """
    httpx implementation of RemoteClaimClient.

    Every call carries the bearer key from Settings. One attempt per call,
    no retries.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the client.

        Args:
            settings: Service settings holding the base URL and API key
            transport: Optional httpx transport (used to mock the platform)

        Raises:
            ConfigurationError: If the API key is empty
        """
        if not settings.root_api_key:
            raise ConfigurationError("ROOT_API_KEY not set in env.")

        self.base_url = settings.root_api_base_url.rstrip("/")
        client_kwargs = {
            "headers": {
                "Authorization": f"Bearer {settings.root_api_key}",
                "Content-Type": "application/json",
            },
            "transport": transport,
        }
        if settings.root_api_timeout:
            client_kwargs["timeout"] = settings.root_api_timeout
        self._client = httpx.AsyncClient(**client_kwargs)
        logger.info(f"Root API client initialized for {self.base_url}")

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, body: dict) -> RemoteCallResult:
        url = f"{self.base_url}{path}"
        response = await self._client.request(method, url, json=body)

        if not response.is_success:
            logger.error(f"Root API {method} {path} failed with status {response.status_code}")
            raise RemoteApiError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError:
            data = {}

        return RemoteCallResult(
            status_code=response.status_code,
            body=data if isinstance(data, dict) else {"data": data}
        )

    async def update_claim_blocks(self, claim_id: str, blocks: Dict[str, str]) -> RemoteCallResult:
        """
        Update block states on a claim.

        PATCH /claims/{claim_id}/blocks with the block keys and their values.
        """
        path = f"/claims/{quote(claim_id, safe='')}/blocks"
        return await self._request("PATCH", path, dict(blocks))

    async def upload_attachment(self, claim_id: str, attachment: Attachment) -> RemoteCallResult:
        """
        Create an attachment on a claim.

        POST /claims/{claim_id}/attachments. The file travels as base64 in JSON.
        """
        path = f"/claims/{quote(claim_id, safe='')}/attachments"
        return await self._request("POST", path, attachment.to_upload_body())
