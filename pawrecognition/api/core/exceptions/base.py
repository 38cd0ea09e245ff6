"""Relay exceptions and the handlers that render them as ``{"error": ...}``."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pawrecognition.api.core.messages import MessageCode, get_default_message
from pawrecognition.utils.logger import get_logger

logger = get_logger(__name__)


class RelayException(Exception):
    """Raised by relay services and routes; ``message`` is shown to the caller."""

    def __init__(
        self,
        message_code: MessageCode,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        message: str | None = None,
    ):
        self.message_code = message_code
        self.status_code = status_code
        self.message: str = message or get_default_message(message_code)
        super().__init__(self.message)

    def to_response_dict(self) -> dict:
        return {"error": self.message}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""

    @app.exception_handler(RelayException)
    async def relay_exception_handler(
        request: Request, exc: RelayException
    ) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "Relay request failed",
            message_code=exc.message_code.value,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code, content=exc.to_response_dict()
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Unknown routes and wrong methods keep the relay's error body shape."""
        logger.warning(
            "HTTP exception",
            status_code=exc.status_code,
            detail=exc.detail,
            path=request.url.path,
        )
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning(
            "Malformed request body",
            path=request.url.path,
            errors=len(exc.errors()),
        )
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            get_default_message(MessageCode.INVALID_REQUEST_BODY),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception(
            "Unhandled exception",
            path=request.url.path,
            exception_type=type(exc).__name__,
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            get_default_message(MessageCode.INTERNAL_ERROR),
        )
