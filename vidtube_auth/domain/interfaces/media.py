"""Port for the external image host."""

from abc import ABC, abstractmethod
from typing import Optional

from vidtube_auth.domain.value_objects.assets import AssetUpload, StoredAsset


class IAssetStorage(ABC):
    """Uploads and deletes images on the media host.

    Implementations report failures through their return values and leave it
    to the calling service to decide which error to raise.
    """

    @abstractmethod
    async def upload(self, asset: AssetUpload) -> Optional[StoredAsset]:
        """Uploads an image.

        Returns:
            The stored asset, or ``None`` if the host rejected the upload.
        """
        raise NotImplementedError

    @abstractmethod
    async def delete(self, public_id: str) -> bool:
        """Deletes an image by its public id. Returns True on success."""
        raise NotImplementedError

    @abstractmethod
    def public_id_from_url(self, url: str) -> Optional[str]:
        """Derives the public id of a previously uploaded image from its URL."""
        raise NotImplementedError

    async def close(self) -> None:
        """Releases network resources held by the client."""
        return None
