import logging
from typing import Any

from fastapi import Request
from rich.logging import RichHandler

from clipfetch.config.settings import config

logger = logging.getLogger("clipfetch")


def setup_logging() -> None:
    """Configure the package logger from config (rich console by default)"""
    if config.logging.enable_rich:
        handler: logging.Handler = RichHandler(rich_tracebacks=True, show_path=False)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(config.logging.format))

    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(config.logging.level)
    logger.propagate = False


def log_with_context(
    request: Request,
    level: int,
    message: str,
    exc_info: bool = False,
    **kwargs: Any
) -> None:
    """
    Log with request context.
    Automatically includes request_id for tracing.
    """
    extra = {
        "request_id": getattr(request.state, "request_id", "unknown"),
        **kwargs
    }
    logger.log(level, message, exc_info=exc_info, extra=extra)


def log_info(request: Request, message: str, **kwargs: Any) -> None:
    log_with_context(request, logging.INFO, message, **kwargs)


def log_error(request: Request, message: str, **kwargs: Any) -> None:
    log_with_context(request, logging.ERROR, message, **kwargs)


def log_warning(request: Request, message: str, **kwargs: Any) -> None:
    log_with_context(request, logging.WARNING, message, **kwargs)
