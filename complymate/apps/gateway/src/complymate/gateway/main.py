"""FastAPI 应用主文件

app 创建 + lifespan 管理：会话加载（生成任务 -> 推导状态 -> 扫描通知）+ 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from complymate.core.logging_config import setup_logging
from complymate.core.session import create_session
from fastapi import FastAPI

from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import attachments, health, notifications, reports, session, tasks

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时加载会话，关闭时释放"""
    app.state.session = create_session()
    log.info("gateway_started", task_count=len(app.state.session.state.tasks))

    yield

    # 会话不持久化，关闭即丢弃
    app.state.session = None
    log.info("gateway_stopped")


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="ComplyMATE Gateway",
        version="0.1.0",
        description="ComplyMATE 合规任务引擎 API",
        lifespan=lifespan,
    )

    # 注册中间件（顺序：先 Trace 后 Logging）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)

    # 初始化日志
    setup_logging()

    # 注册路由
    app.include_router(session.router, tags=["session"])
    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(notifications.router, tags=["notifications"])
    app.include_router(attachments.router, tags=["attachments"])
    app.include_router(reports.router, tags=["reports"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
