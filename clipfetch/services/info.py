import json
import logging
from typing import Any, List, Mapping, Optional, Union

from clipfetch.core.errors import MalformedMetadataError
from clipfetch.models.response import DownloadOption, VideoInfo
from clipfetch.services.ytdlp import ExtractorGateway
from clipfetch.utils.locale import safe_url_for_log
from clipfetch.utils.url import validate_url

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Unknown Title"
DEFAULT_PLATFORM = "Unknown"
VIDEO_EXTENSIONS = frozenset({"mp4"})
AUDIO_EXTENSIONS = frozenset({"m4a", "mp3"})

RawMetadata = Union[str, bytes, Mapping[str, Any]]


def _get_str(data: Mapping[str, Any], key: str, default: str) -> str:
    """Read an optional string field; null and non-strings give the default"""
    value = data.get(key)
    if isinstance(value, str):
        return value
    return default


class MetadataNormalizer:
    """Turn yt-dlp --dump-json output into a VideoInfo"""

    @staticmethod
    def parse(raw: RawMetadata) -> Mapping[str, Any]:
        if isinstance(raw, Mapping):
            return raw
        try:
            document = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise MalformedMetadataError(f"Extractor output is not valid JSON: {e}")
        if not isinstance(document, dict):
            raise MalformedMetadataError("Extractor output is not a JSON object")
        return document

    @staticmethod
    def to_option(fmt: Mapping[str, Any]) -> Optional[DownloadOption]:
        """Option for a single format entry, or None if it is filtered out"""
        url = _get_str(fmt, "url", "")
        if not url:
            return None

        ext = _get_str(fmt, "ext", "").lower()
        if ext in VIDEO_EXTENSIONS:
            return DownloadOption(
                quality=_get_str(fmt, "resolution", "Unknown"),
                url=url,
                type="video"
            )
        if ext in AUDIO_EXTENSIONS:
            return DownloadOption(quality="Audio", url=url, type="audio")
        return None

    @staticmethod
    def normalize(raw: RawMetadata, original_url: str = "") -> VideoInfo:
        """
        Build a VideoInfo from raw extractor metadata.

        Missing fields fall back to defaults. Only mp4 video and m4a/mp3
        audio formats with a URL are kept, in extractor order. When none
        survive, a top-level "url" becomes a single "Default" option.
        Raises MalformedMetadataError if raw is not a JSON object.
        """
        document = MetadataNormalizer.parse(raw)

        options: List[DownloadOption] = []
        formats = document.get("formats")
        if isinstance(formats, list):
            for fmt in formats:
                if not isinstance(fmt, Mapping):
                    continue
                option = MetadataNormalizer.to_option(fmt)
                if option is not None:
                    options.append(option)

        if not options:
            direct_url = _get_str(document, "url", "")
            if direct_url:
                options.append(DownloadOption(quality="Default", url=direct_url, type="video"))

        info = VideoInfo(
            title=_get_str(document, "title", DEFAULT_TITLE),
            thumbnail_url=_get_str(document, "thumbnail", ""),
            platform=_get_str(document, "extractor_key", DEFAULT_PLATFORM),
            download_options=tuple(options)
        )
        logger.debug(
            f"Normalized {safe_url_for_log(original_url)}: "
            f"{len(options)} of {len(formats) if isinstance(formats, list) else 0} formats kept"
        )
        return info


class VideoInfoService:
    """Video info fetching service"""

    @staticmethod
    async def fetch(url: Optional[str], gateway: ExtractorGateway) -> VideoInfo:
        """Validate url, ask the extractor for metadata and normalize it"""
        url = validate_url(url)
        raw = await gateway.fetch_metadata(url)
        return MetadataNormalizer.normalize(raw, url)
