"""Map quest board errors onto the JSON ErrorResponse envelope."""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from questboard.errors.exceptions import PersistenceError, QuestBoardError
from questboard.models.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


def error_response(request: Request, status_code: int, code: str, message: str, details=None) -> JSONResponse:
    envelope = ErrorResponse(
        error=ErrorDetail(
            code=code,
            message=message,
            details=details,
            trace_id=getattr(request.state, "trace_id", "unknown"),
            timestamp=datetime.now(timezone.utc),
        ),
    )
    return JSONResponse(status_code=status_code, content=envelope.model_dump(mode="json", exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(QuestBoardError)
    async def questboard_error_handler(request: Request, exc: QuestBoardError):
        if isinstance(exc, PersistenceError):
            logger.warning("Storage failure on %s %s: %s", request.method, request.url.path, exc.message)
        return error_response(request, exc.status_code, exc.code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return error_response(
            request,
            422,
            "VALIDATION_ERROR",
            "Request body or parameters are invalid",
            jsonable_encoder(exc.errors()),
        )
