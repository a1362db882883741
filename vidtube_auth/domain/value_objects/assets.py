"""Media asset value objects."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AssetUpload:
    """An image received from a client, ready to be sent to the media host."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def is_empty(self) -> bool:
        return not self.content


@dataclass(frozen=True)
class StoredAsset:
    """An image accepted by the media host."""

    url: str
    public_id: str
