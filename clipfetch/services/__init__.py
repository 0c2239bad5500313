from .download import DownloadOrchestrator
from .format import QualityResolver
from .info import MetadataNormalizer, VideoInfoService
from .ytdlp import ExtractorGateway, YtDlpGateway, get_extractor_gateway

__all__ = [
    "DownloadOrchestrator",
    "ExtractorGateway",
    "MetadataNormalizer",
    "QualityResolver",
    "VideoInfoService",
    "YtDlpGateway",
    "get_extractor_gateway",
]
