import logging
import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from api.errors import internal_error_response
from config.settings import settings

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger("time_tracker.access")

TRACE_ID_HEADER = "X-Trace-Id"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Назначает запросу trace id и пишет строку access-лога"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        trace_id = str(uuid.uuid4())
        request.state.trace_id = trace_id

        try:
            response = await call_next(request)
        except Exception as exc:
            # Иначе 500 отдаёт ServerErrorMiddleware уже без trace id
            response = internal_error_response(request, exc)

        process_time = time.time() - start_time
        client_ip = request.client.host if request.client else "unknown"
        logger.info(
            f"{client_ip} {request.method} {request.url.path} {response.status_code} "
            f"{process_time * 1000:.1f}ms trace_id={trace_id}"
        )

        response.headers[TRACE_ID_HEADER] = trace_id
        response.headers["X-Process-Time"] = str(process_time)
        return response
