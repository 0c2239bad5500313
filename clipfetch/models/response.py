from typing import Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DownloadOption(BaseModel):
    """One downloadable media variant"""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    quality: str
    url: str = Field(..., min_length=1)
    type: Literal["video", "audio"]


class VideoInfo(BaseModel):
    """Canonical video metadata returned by POST /api/Info"""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    title: str
    thumbnail_url: str = ""
    platform: str = "Unknown"
    download_options: Tuple[DownloadOption, ...] = ()
