import io
import logging
import os
import uuid
from typing import Optional

import aiofiles
import aiofiles.os

from clipfetch.config.settings import DownloadConfig, config
from clipfetch.core.errors import ArtifactMissingError
from clipfetch.models.internal import DownloadedMedia
from clipfetch.services.ytdlp import ExtractorGateway
from clipfetch.utils.locale import safe_url_for_log
from clipfetch.utils.url import validate_url

logger = logging.getLogger(__name__)

CHUNK_SIZE = 4 * 1024 * 1024


class DownloadOrchestrator:
    """
    Download through the extractor into a private temp file and hand the
    bytes back in memory. The temp file never outlives download().
    """

    def __init__(
        self,
        gateway: ExtractorGateway,
        settings: Optional[DownloadConfig] = None
    ):
        self.gateway = gateway
        self.settings = settings or config.download

    def _temp_stem(self) -> str:
        return f"video_{uuid.uuid4().hex}"

    async def cleanup(self, stem: str) -> None:
        """Remove every file yt-dlp left for stem (.part, .ytdl, streams)"""
        try:
            entries = await aiofiles.os.listdir(self.settings.temp_dir)
        except OSError as e:
            logger.warning(f"Failed to list temp dir {self.settings.temp_dir}: {e}")
            return

        for name in entries:
            if not name.startswith(stem):
                continue
            path = os.path.join(self.settings.temp_dir, name)
            try:
                await aiofiles.os.remove(path)
                logger.debug(f"Temporary file deleted: {path}")
            except OSError as e:
                logger.warning(f"Failed to delete temporary file {path}: {e}")

    async def _read(self, path: str) -> io.BytesIO:
        buffer = io.BytesIO()
        async with aiofiles.open(path, "rb") as f:
            while True:
                chunk = await f.read(CHUNK_SIZE)
                if not chunk:
                    break
                buffer.write(chunk)
        buffer.seek(0)
        return buffer

    async def download(self, url: Optional[str], format_selector: str) -> DownloadedMedia:
        url = validate_url(url)
        stem = self._temp_stem()
        temp_path = os.path.join(
            self.settings.temp_dir,
            f"{stem}.{self.settings.merge_output_format}"
        )
        logger.info(f"Downloading {safe_url_for_log(url)} to {temp_path} with format {format_selector}")

        try:
            await self.gateway.fetch_media(url, format_selector, temp_path)

            if not await aiofiles.os.path.isfile(temp_path):
                logger.error(f"Downloaded file not found at path: {temp_path}")
                raise ArtifactMissingError("yt-dlp finished without writing an output file")

            content = await self._read(temp_path)
        finally:
            await self.cleanup(stem)

        size = content.getbuffer().nbytes
        logger.info(f"Download finished: {size} bytes")
        return DownloadedMedia(
            content=content,
            media_type=self.settings.media_type,
            filename=self.settings.filename,
            size=size
        )
