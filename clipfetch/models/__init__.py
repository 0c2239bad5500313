from .internal import DownloadedMedia
from .request import InfoRequest
from .response import DownloadOption, VideoInfo

__all__ = ["DownloadOption", "DownloadedMedia", "InfoRequest", "VideoInfo"]
