"""健康检查路由

GET /health: Liveness 检查，永远返回 200。
GET /ready: Readiness 检查，包含会话已加载、附件存储可用。
"""

import structlog
from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

log = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "ok"}


@router.get("/ready")
async def ready(request: Request):
    """Readiness 检查 -- 验证会话与附件存储可用

    检查项：
    1. session: 会话已加载，附带任务数
    2. attachment_store: 附件存储可访问，附带已保存附件数
    """
    checks: dict = {}
    all_ok = True

    session = getattr(request.app.state, "session", None)

    # 1. 会话检查
    if session is None:
        checks["session"] = "error: session not loaded"
        all_ok = False
    else:
        checks["session"] = "ok"
        checks["task_count"] = len(session.state.tasks)

    # 2. 附件存储检查
    try:
        if session is None:
            raise RuntimeError("session not loaded")
        checks["attachment_count"] = len(session.attachment_store)
        checks["attachment_store"] = "ok"
    except Exception as e:
        checks["attachment_store"] = f"error: {e}"
        all_ok = False

    if not all_ok:
        log.warning("readiness_check_failed", checks=checks)

    status_code = 200 if all_ok else 503
    status_text = "ready" if all_ok else "not_ready"

    return JSONResponse(
        status_code=status_code,
        content={"status": status_text, "checks": checks},
    )
