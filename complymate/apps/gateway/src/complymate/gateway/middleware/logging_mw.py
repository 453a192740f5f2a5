"""LoggingMiddleware

为每个 HTTP 请求生成 request_id，绑定到 structlog contextvars；
完成日志附带当前登录用户和耗时，便于按操作人追溯任务变更。
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID


def _current_user_id(request: Request) -> str | None:
    session = getattr(request.app.state, "session", None)
    if session is None:
        return None
    return session.state.current_user_id


class LoggingMiddleware(BaseHTTPMiddleware):
    """请求级日志中间件 -- request_id + 操作人 + 耗时"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = str(ULID())
        started = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        log = structlog.get_logger()
        await log.adebug("request_started", user_id=_current_user_id(request))

        response = await call_next(request)

        # 登录/登出请求之后记录的是变更后的操作人
        await log.ainfo(
            "request_completed",
            status_code=response.status_code,
            user_id=_current_user_id(request),
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )

        response.headers["X-Request-ID"] = request_id
        return response
