import io
from typing import NamedTuple


class DownloadedMedia(NamedTuple):
    """Downloaded artifact held in memory"""
    content: io.BytesIO
    media_type: str
    filename: str
    size: int
