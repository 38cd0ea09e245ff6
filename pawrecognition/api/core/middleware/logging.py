import time
import uuid

import structlog
from fastapi import Request

from pawrecognition.api.core.constants import REQUEST_ID_HEADER, SKIP_LOGGING_PATHS
from pawrecognition.utils.logger import get_client_ip, get_logger

logger = get_logger(__name__)


async def logging_middleware(request: Request, call_next):
    if request.url.path in SKIP_LOGGING_PATHS:
        return await call_next(request)

    started = time.perf_counter()
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        ip_address=get_client_ip(request),
    )

    response = await call_next(request)

    duration_ms = int((time.perf_counter() - started) * 1000)
    log = logger.warning if response.status_code >= 500 else logger.info
    log("request", status_code=response.status_code, duration=duration_ms)

    response.headers[REQUEST_ID_HEADER] = request_id
    return response
