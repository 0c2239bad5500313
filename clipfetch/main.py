import functools
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from rich.console import Console

from clipfetch.api import download, health, info
from clipfetch.api.errors import error_response
from clipfetch.config.settings import config
from clipfetch.core.logging import log_info, setup_logging
from clipfetch.core.state import state
from clipfetch.i18n import i18n
from clipfetch.services.ytdlp import get_extractor_gateway
from clipfetch.utils.locale import get_locale

console = Console()

app = FastAPI(
    title=config.api.title,
    description=config.api.description,
    version=config.api.version,
    docs_url="/docs" if config.api.debug else None,
    redoc_url=None
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "X-Request-ID"],
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request.state.request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    response = await call_next(request)
    response.headers["X-Request-ID"] = request.state.request_id
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    locale = get_locale(request.headers.get("accept-language"))
    _ = functools.partial(i18n.get, locale=locale)
    log_info(request, f"Invalid request: {exc.errors()}")
    return error_response(400, _("error.invalid_request"))


# Routes
app.include_router(health.router, tags=["Health"])
app.include_router(info.router, tags=["Info"])
app.include_router(download.router, tags=["Download"])


@app.on_event("startup")
async def startup_event():
    setup_logging()

    version = await get_extractor_gateway().version()
    if version:
        state.ytdlp_version = version
        console.print(f"[green]✓ yt-dlp {version} ({config.extractor.binary})[/green]")
    else:
        console.print(f"[yellow]⚠ yt-dlp not available at {config.extractor.binary}[/yellow]")
