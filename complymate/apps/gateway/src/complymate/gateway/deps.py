"""依赖注入模块 -- 通过 FastAPI Depends 注入 Session 实例

Session 通过 app.state 管理，在 lifespan 中初始化。
"""

from complymate.core.session import Session
from fastapi import Request


def get_session(request: Request) -> Session:
    """从 app.state 获取 Session 实例"""
    return request.app.state.session
