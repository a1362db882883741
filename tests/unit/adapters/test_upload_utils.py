import io

import pytest
from fastapi import UploadFile

from vidtube_auth.adapters.api.v1.auth.utils import to_asset_upload
from vidtube_auth.core.exceptions import ValidationError


def _upload(content: bytes, size=None) -> UploadFile:
    return UploadFile(io.BytesIO(content), size=size, filename="avatar.png")


@pytest.mark.asyncio
async def test_reads_file_within_limit():
    asset = await to_asset_upload(_upload(b"12345678", size=8), max_bytes=8)

    assert asset.content == b"12345678"
    assert asset.filename == "avatar.png"
    assert asset.content_type == "application/octet-stream"


@pytest.mark.asyncio
async def test_missing_or_empty_file_is_none():
    assert await to_asset_upload(None) is None
    assert await to_asset_upload(_upload(b"", size=0)) is None


@pytest.mark.asyncio
async def test_declared_size_over_limit_is_rejected_before_reading(mocker):
    upload = _upload(b"x" * 9, size=9)
    read = mocker.spy(upload, "read")

    with pytest.raises(ValidationError, match="8 byte limit"):
        await to_asset_upload(upload, max_bytes=8)
    read.assert_not_called()


@pytest.mark.asyncio
async def test_undeclared_size_over_limit_is_rejected():
    with pytest.raises(ValidationError):
        await to_asset_upload(_upload(b"x" * 9), max_bytes=8)
