"""Cloudinary adapter for avatar and cover images.

Talks to the Cloudinary upload API over httpx. Every call carries a
``timestamp`` and a ``signature`` produced by the Cloudinary SDK's
``api_sign_request``.
"""

import re
import time
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import httpx
import structlog
from cloudinary.utils import api_sign_request
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from vidtube_auth.domain.interfaces.media import IAssetStorage
from vidtube_auth.domain.value_objects.assets import AssetUpload, StoredAsset

logger = structlog.get_logger(__name__)

_VERSION_SEGMENT = re.compile(r"^v\d+$")


def public_id_from_url(url: str) -> Optional[str]:
    """Derive the public id of an image from its delivery URL.

    ``https://res.cloudinary.com/demo/image/upload/v1712/vidtube/abc.png``
    yields ``vidtube/abc``.
    """
    if not url:
        return None
    path = urlparse(url).path
    marker = "/upload/"
    if marker not in path:
        return None
    segments = [segment for segment in path.split(marker, 1)[1].split("/") if segment]
    if segments and _VERSION_SEGMENT.match(segments[0]):
        segments = segments[1:]
    if not segments:
        return None
    segments[-1] = segments[-1].rsplit(".", 1)[0]
    return "/".join(segments) or None


class CloudinaryAssetStorage(IAssetStorage):
    """`IAssetStorage` backed by the Cloudinary image API.

    Failures are logged and reported as ``None``/``False``; transport errors
    are retried with exponential backoff before giving up.
    """

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        base_url: str = "https://api.cloudinary.com/v1_1",
        folder: str = "",
        timeout: float = 30.0,
        max_upload_bytes: Optional[int] = None,
        client: Optional[httpx.AsyncClient] = None,
        max_attempts: int = 3,
        retry_wait: Optional[wait_base] = None,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.base_url = base_url.rstrip("/")
        self.folder = folder
        self.timeout = timeout
        self.max_upload_bytes = max_upload_bytes
        self.max_attempts = max_attempts
        self.retry_wait = retry_wait or wait_exponential(multiplier=0.5, max=4)
        self._client = client

    @classmethod
    def from_settings(cls, settings, client: Optional[httpx.AsyncClient] = None) -> "CloudinaryAssetStorage":
        return cls(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET.get_secret_value(),
            base_url=settings.CLOUDINARY_API_BASE_URL,
            folder=settings.CLOUDINARY_UPLOAD_FOLDER,
            timeout=settings.MEDIA_UPLOAD_TIMEOUT_SECONDS,
            max_upload_bytes=settings.MEDIA_MAX_UPLOAD_BYTES,
            client=client,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout))
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def public_id_from_url(self, url: str) -> Optional[str]:
        return public_id_from_url(url)

    async def upload(self, asset: AssetUpload) -> Optional[StoredAsset]:
        if asset.is_empty:
            return None
        if self.max_upload_bytes is not None and len(asset.content) > self.max_upload_bytes:
            logger.warning("media_upload_too_large", size=len(asset.content))
            return None

        params: Dict[str, Any] = {"timestamp": int(time.time())}
        if self.folder:
            params["folder"] = self.folder
        files = {"file": (asset.filename or "upload", asset.content, asset.content_type)}

        data = await self._call_api("image/upload", params, files=files)
        if not data or not data.get("secure_url") or not data.get("public_id"):
            return None
        logger.info("media_uploaded", public_id=data["public_id"])
        return StoredAsset(url=data["secure_url"], public_id=data["public_id"])

    async def delete(self, public_id: str) -> bool:
        if not public_id:
            return False
        params = {"public_id": public_id, "timestamp": int(time.time())}
        data = await self._call_api("image/destroy", params)
        deleted = bool(data) and data.get("result") == "ok"
        if not deleted:
            logger.warning("media_delete_failed", public_id=public_id, result=(data or {}).get("result"))
        return deleted

    async def _call_api(
        self,
        endpoint: str,
        params: Dict[str, Any],
        files: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """POST a signed request to the Cloudinary API.

        Returns:
            The decoded JSON body, or None on any failure.
        """
        if not self.is_configured:
            logger.error("media_host_not_configured")
            return None

        url = f"{self.base_url}/{self.cloud_name}/{endpoint}"
        payload = {key: str(value) for key, value in params.items()}
        payload["api_key"] = self.api_key
        payload["signature"] = api_sign_request(params, self.api_secret)
        client = await self._get_client()

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=self.retry_wait,
                retry=retry_if_exception_type(httpx.TransportError),
                reraise=True,
            ):
                with attempt:
                    response = await client.post(url, data=payload, files=files)
        except httpx.HTTPError as e:
            logger.error("media_api_unreachable", endpoint=endpoint, error_type=type(e).__name__)
            return None

        if response.status_code >= 400:
            logger.error(
                "media_api_error",
                endpoint=endpoint,
                status_code=response.status_code,
                error=_error_message(response),
            )
            return None
        try:
            return response.json()
        except ValueError:
            logger.error("media_api_invalid_response", endpoint=endpoint)
            return None


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        return response.json().get("error", {}).get("message")
    except (ValueError, AttributeError):
        return None
