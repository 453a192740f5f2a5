"""TraceMiddleware

为任务操作绑定 trace_id，同一任务的查询/编辑/完成/附件日志可串联。
trace_id 从 /api/tasks/{task_id}[/...] 路径中的 task_id 生成。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

ULID_LENGTH = 26


def extract_task_id(path: str) -> str | None:
    """从 /api/tasks/{task_id} 路径提取 task_id（仅接受 ULID 长度的段）"""
    parts = path.split("/")
    for i, part in enumerate(parts):
        if part == "tasks" and i + 1 < len(parts):
            candidate = parts[i + 1]
            if len(candidate) == ULID_LENGTH:
                return candidate
    return None


class TraceMiddleware(BaseHTTPMiddleware):
    """任务级追踪中间件 -- 为任务操作绑定 trace_id"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        task_id = extract_task_id(request.url.path)
        if task_id:
            structlog.contextvars.bind_contextvars(trace_id=f"trace-{task_id}")

        return await call_next(request)
