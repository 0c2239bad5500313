from typing import Any

from fastapi.responses import JSONResponse


def error_response(status_code: int, message: str, **extra: Any) -> JSONResponse:
    """JSON error body: {"message": ..., **extra}"""
    return JSONResponse(status_code=status_code, content={"message": message, **extra})
