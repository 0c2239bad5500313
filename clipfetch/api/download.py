import functools
from typing import Iterator, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse

from clipfetch.api.errors import error_response
from clipfetch.core.errors import ClipFetchError, InvalidInputError
from clipfetch.core.logging import log_error, log_info, log_warning
from clipfetch.i18n import i18n
from clipfetch.models.internal import DownloadedMedia
from clipfetch.services.download import CHUNK_SIZE, DownloadOrchestrator
from clipfetch.services.format import QualityResolver
from clipfetch.services.ytdlp import ExtractorGateway, get_extractor_gateway
from clipfetch.utils.locale import get_locale, safe_url_for_log

router = APIRouter()


def iter_media(media: DownloadedMedia) -> Iterator[bytes]:
    while True:
        chunk = media.content.read(CHUNK_SIZE)
        if not chunk:
            break
        yield chunk


@router.get("/api/Download")
async def download_video(
    request: Request,
    url: Optional[str] = Query(None, description="Video page URL"),
    quality: Optional[str] = Query(None, description="Quality label, e.g. 1080x1920, 1920p or best"),
    gateway: ExtractorGateway = Depends(get_extractor_gateway)
):
    """Download the video at the requested quality as an attachment"""

    locale = get_locale(request.headers.get("accept-language"))
    _ = functools.partial(i18n.get, locale=locale)

    format_selector = QualityResolver.to_format_selector(quality)
    log_info(
        request,
        _("log.starting_download", url=safe_url_for_log(url or ""), format=format_selector),
        quality=quality
    )

    try:
        media = await DownloadOrchestrator(gateway).download(url, format_selector)
    except InvalidInputError as e:
        log_warning(request, f"Rejected download request: {e.detail}")
        return error_response(400, _(e.message_key))
    except ClipFetchError as e:
        log_error(request, f"Download error: {e}")
        return error_response(e.status_code, _(e.message_key), detail=e.detail or "")
    except Exception as e:
        log_error(request, f"Unexpected download error: {str(e)}", exc_info=True)
        return error_response(500, _("error.download_failed"), detail=str(e))

    log_info(request, _("log.download_finished", size=media.size))

    headers = {
        "Content-Disposition": f'attachment; filename="{media.filename}"',
        "Content-Length": str(media.size),
        "X-Content-Type-Options": "nosniff",
        "Cache-Control": "no-cache",
    }
    return StreamingResponse(iter_media(media), media_type=media.media_type, headers=headers)
