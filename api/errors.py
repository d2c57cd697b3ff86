# api/errors.py
"""Map engine errors onto HTTP responses."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from api.schemas import ErrorResponse
from config import settings
from core.domain import (
    DocumentNotFoundError, InvalidLimitError, SearchEngineError
)

logger = logging.getLogger(settings.LOGGER_NAME)


def _status_for(exc: SearchEngineError) -> int:
    if isinstance(exc, DocumentNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, InvalidLimitError):
        return 422
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def search_engine_error_handler(request: Request, exc: SearchEngineError) -> JSONResponse:
    code = _status_for(exc)
    if code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
    body = ErrorResponse(error_code=exc.error_code, detail=exc.message)
    return JSONResponse(status_code=code, content=body.model_dump(mode="json"))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SearchEngineError, search_engine_error_handler)  # type: ignore[arg-type]
