import functools

from fastapi import APIRouter, Depends, Request

from clipfetch.api.errors import error_response
from clipfetch.core.errors import ClipFetchError, InvalidInputError
from clipfetch.core.logging import log_error, log_info, log_warning
from clipfetch.i18n import i18n
from clipfetch.models.request import InfoRequest
from clipfetch.models.response import VideoInfo
from clipfetch.services.info import VideoInfoService
from clipfetch.services.ytdlp import ExtractorGateway, get_extractor_gateway
from clipfetch.utils.locale import get_locale, safe_url_for_log

router = APIRouter()


@router.post("/api/Info", response_model=VideoInfo)
async def get_video_info(
    request: Request,
    video_request: InfoRequest,
    gateway: ExtractorGateway = Depends(get_extractor_gateway)
):
    """Get normalized video information and download options"""

    locale = get_locale(request.headers.get("accept-language"))
    _ = functools.partial(i18n.get, locale=locale)

    log_info(request, _("log.fetching_info", url=safe_url_for_log(video_request.url or "")))

    try:
        video_info = await VideoInfoService.fetch(video_request.url, gateway)
    except InvalidInputError as e:
        log_warning(request, f"Rejected info request: {e.detail}")
        return error_response(400, _(e.message_key))
    except ClipFetchError as e:
        log_error(request, f"Video info error: {e}")
        return error_response(e.status_code, _(e.message_key), details=e.detail or "")
    except Exception as e:
        log_error(request, f"Unexpected video info error: {str(e)}", exc_info=True)
        return error_response(500, _("error.internal"), details=str(e))

    log_info(request, _("log.info_retrieved", title=video_info.title, count=len(video_info.download_options)))
    return video_info
