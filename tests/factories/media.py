"""In-memory stand-in for the media host."""

from itertools import count
from typing import Dict, List, Optional

from vidtube_auth.domain.interfaces.media import IAssetStorage
from vidtube_auth.domain.value_objects.assets import AssetUpload, StoredAsset
from vidtube_auth.infrastructure.media.cloudinary import public_id_from_url

BASE_URL = "https://res.cloudinary.com/test-cloud/image/upload"


class FakeAssetStorage(IAssetStorage):
    """Keeps uploaded assets in a dict. Uploads or deletes can be made to fail."""

    def __init__(self, fail_uploads: bool = False, fail_deletes: bool = False):
        self.fail_uploads = fail_uploads
        self.fail_deletes = fail_deletes
        self.assets: Dict[str, AssetUpload] = {}
        self.deleted: List[str] = []
        self._ids = count(1)

    async def upload(self, asset: AssetUpload) -> Optional[StoredAsset]:
        if self.fail_uploads:
            return None
        public_id = f"vidtube/asset{next(self._ids)}"
        self.assets[public_id] = asset
        return StoredAsset(url=f"{BASE_URL}/v1700000000/{public_id}.png", public_id=public_id)

    async def delete(self, public_id: str) -> bool:
        if self.fail_deletes or public_id not in self.assets:
            return False
        del self.assets[public_id]
        self.deleted.append(public_id)
        return True

    def public_id_from_url(self, url: str) -> Optional[str]:
        return public_id_from_url(url)
