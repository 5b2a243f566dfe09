# appointment_scheduler/core/middleware.py
"""Request tracing middleware: correlation ids and access logging"""
import uuid
import time
import logging
from starlette.requests import Request

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
QUIET_PATHS = ("/health",)


async def correlation_id_middleware(request: Request, call_next):
    """Attach a correlation id to the request and echo it on the response"""
    correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex
    request.state.correlation_id = correlation_id

    response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


async def request_logging_middleware(request: Request, call_next):
    """Log method, path, status and latency of every non-health request"""
    if request.url.path.startswith(QUIET_PATHS):
        return await call_next(request)

    started = time.perf_counter()
    correlation_id = getattr(request.state, "correlation_id", "unknown")
    client = request.client.host if request.client else "unknown"

    logger.debug(f"--> {request.method} {request.url.path} from {client} [{correlation_id}]")

    response = await call_next(request)

    duration_ms = round((time.perf_counter() - started) * 1000, 2)
    log = logger.warning if response.status_code >= 500 else logger.info
    log(
        f"<-- {request.method} {request.url.path} {response.status_code} in {duration_ms}ms [{correlation_id}]",
        extra={"correlation_id": correlation_id, "status_code": response.status_code, "duration_ms": duration_ms},
    )

    return response
