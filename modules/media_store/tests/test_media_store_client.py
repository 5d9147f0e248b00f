"""
Tests for the media store client.
"""
import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from shared.errors import FetchError, StorageError, RetryableError
from modules.media_store import client as client_module
from modules.media_store.client import MediaStore, get_video_path


@pytest.fixture
def mock_transport(monkeypatch):
    """Route MediaStore's httpx calls through a MockTransport handler."""
    real_async_client = httpx.AsyncClient
    handlers = {}

    def _factory(*args, **kwargs):
        return real_async_client(*args, transport=httpx.MockTransport(handlers["handler"]), **kwargs)

    monkeypatch.setattr(client_module.httpx, "AsyncClient", _factory)

    def _install(handler):
        handlers["handler"] = handler

    return _install


def test_get_video_path():
    assert get_video_path("ws-1", "proj-1", "clip-1.mp4") == "ws-1/videos/proj-1/clip-1.mp4"


@pytest.mark.asyncio
async def test_fetch_returns_bytes(mock_transport):
    mock_transport(lambda request: httpx.Response(200, content=b"video-bytes"))

    data = await MediaStore(storage=MagicMock()).fetch("https://cdn.example.com/out.mp4")

    assert data == b"video-bytes"


@pytest.mark.asyncio
async def test_fetch_image_uses_response_content_type(mock_transport):
    mock_transport(lambda request: httpx.Response(
        200, content=b"png-bytes", headers={"content-type": "image/png; charset=binary"}
    ))

    image = await MediaStore(storage=MagicMock()).fetch_image("https://images.example.com/photos/kitchen.png")

    assert image.data == b"png-bytes"
    assert image.content_type == "image/png"
    assert image.file_name == "kitchen.png"


@pytest.mark.asyncio
async def test_fetch_non_2xx_raises_fetch_error(mock_transport):
    mock_transport(lambda request: httpx.Response(404))

    with pytest.raises(FetchError, match="HTTP 404"):
        await MediaStore(storage=MagicMock()).fetch("https://images.example.com/missing.jpg")


@pytest.mark.asyncio
async def test_fetch_transport_error_raises_fetch_error(mock_transport):
    def _refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    mock_transport(_refuse)

    with pytest.raises(FetchError, match="Connection refused"):
        await MediaStore(storage=MagicMock()).fetch("https://images.example.com/a.jpg")


@pytest.mark.asyncio
async def test_upload_persists_to_configured_bucket():
    storage = MagicMock()
    storage.upload_file = AsyncMock(return_value="https://test.supabase.co/storage/v1/object/public/clips/a.mp4")
    media = MediaStore(storage=storage, bucket="clips")

    url = await media.upload(b"mp4", "ws-1/videos/proj-1/a.mp4", "video/mp4")

    assert url.endswith("/clips/a.mp4")
    storage.upload_file.assert_awaited_once_with(
        bucket="clips",
        path="ws-1/videos/proj-1/a.mp4",
        file_data=b"mp4",
        content_type="video/mp4"
    )


@pytest.mark.asyncio
async def test_upload_failure_raises_storage_error():
    storage = MagicMock()
    storage.upload_file = AsyncMock(side_effect=RetryableError("Failed to upload file: 503"))
    media = MediaStore(storage=storage)

    with pytest.raises(StorageError, match="Failed to store ws-1/videos/proj-1/a.mp4"):
        await media.upload(b"mp4", "ws-1/videos/proj-1/a.mp4")
