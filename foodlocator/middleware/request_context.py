from starlette.middleware.base import BaseHTTPMiddleware
import uuid, time, logging

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with an id (reusing the caller's ``X-Request-ID``) and log it.

    Error responses built by the exception handlers carry the header too, so
    requests that fail past this middleware still report their id.
    """

    async def dispatch(self, request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        start = time.time()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.time() - start) * 1000
            logger.error(
                f"{request.method} {request.url.path} raised after {duration_ms:.2f}ms",
                extra={"request_id": request_id, "duration_ms": duration_ms},
            )
            raise
        duration_ms = (time.time() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} {duration_ms:.2f}ms",
            extra={"request_id": request_id, "duration_ms": duration_ms},
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
