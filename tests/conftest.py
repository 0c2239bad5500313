import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from clipfetch.config.settings import config
from clipfetch.core.errors import ExtractionFailedError
from clipfetch.main import app
from clipfetch.services.ytdlp import get_extractor_gateway

CAT_VIDEO = {
    "title": "Cat video",
    "thumbnail": "t.jpg",
    "extractor_key": "TikTok",
    "formats": [
        {"ext": "mp4", "url": "https://x/video.mp4", "resolution": "1080x1920"},
        {"ext": "m4a", "url": "https://x/audio.m4a"},
        {"ext": "webp", "url": "https://x/thumb.webp"},
    ],
}


class FakeGateway:
    """In-memory stand-in for yt-dlp"""

    def __init__(self, metadata="{}", payload=b"fake-mp4-bytes", error=None, write=True):
        self.metadata = metadata
        self.payload = payload
        self.error = error
        self.write = write
        self.metadata_calls = []
        self.media_calls = []

    async def fetch_metadata(self, url):
        self.metadata_calls.append(url)
        if self.error:
            raise self.error
        return self.metadata

    async def fetch_media(self, url, format_selector, destination):
        self.media_calls.append((url, format_selector, destination))
        if self.write:
            with open(destination, "wb") as f:
                f.write(self.payload)
        if self.error:
            # yt-dlp leaves partial downloads behind on failure
            with open(destination + ".part", "wb") as f:
                f.write(b"partial")
            raise self.error


@pytest.fixture
def temp_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(config.download, "temp_dir", str(tmp_path))
    return tmp_path


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def silent_gateway():
    """Reports success without writing anything"""
    return FakeGateway(write=False)


@pytest.fixture
def failing_gateway():
    return FakeGateway(error=ExtractionFailedError("ERROR: Unsupported URL", exit_code=1))


@pytest_asyncio.fixture
async def client(gateway):
    app.dependency_overrides[get_extractor_gateway] = lambda: gateway
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def cat_video():
    return {**CAT_VIDEO, "formats": [dict(f) for f in CAT_VIDEO["formats"]]}
