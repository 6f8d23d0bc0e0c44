import time
import logging
from typing import Optional

import httpx
from fastapi import Request

from frameboard.core.auth import SignInVerifier
from frameboard.core.config import Settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """The storage provider refused or failed a request."""


class StorageClient:
    """Thin client for the Pinata upload API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        jwt: Optional[str],
        uploads_url: str = "https://uploads.pinata.cloud/v3",
        gateway_url: Optional[str] = None,
    ):
        self.http_client = http_client
        self.jwt = jwt
        self.uploads_url = uploads_url.rstrip("/")
        self.gateway_url = gateway_url

    async def create_signed_url(self, expires: int = 60) -> str:
        """Return a signed URL allowing one public upload for `expires` seconds."""
        payload = {
            "date": int(time.time()),
            "expires": expires,
            "network": "public",
        }
        try:
            res = await self.http_client.post(
                f"{self.uploads_url}/files/sign",
                json=payload,
                headers={"Authorization": f"Bearer {self.jwt}"},
            )
            res.raise_for_status()
            url = res.json()["data"]
        except httpx.HTTPStatusError as e:
            raise StorageError(
                f"Pinata returned {e.response.status_code}: {e.response.text}"
            ) from e
        except (httpx.HTTPError, ValueError, KeyError) as e:
            raise StorageError(f"Failed to create signed upload URL: {e}") from e

        logger.info(f"Issued signed upload URL valid for {expires}s")
        return url


def init_services(settings: Settings, http_client: httpx.AsyncClient) -> dict:
    """Build the external clients once, at process start."""
    return {
        "storage": StorageClient(
            http_client,
            jwt=settings.pinata_jwt,
            uploads_url=settings.pinata_uploads_url,
            gateway_url=settings.gateway_url,
        ),
        "verifier": SignInVerifier(http_client, hub_url=settings.hub_url),
    }


def get_storage(request: Request) -> StorageClient:
    return request.app.state.storage
