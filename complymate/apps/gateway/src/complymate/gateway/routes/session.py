"""会话路由

GET /api/users: 用户目录（不含口令）。
POST /api/session/login: 登录，Admin 需要口令。
POST /api/session/logout: 登出。
GET /api/session: 当前登录用户（未登录为 null）。
"""

from complymate.core.session import Session
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..deps import get_session
from ..services.responses import error_response, user_to_dict

router = APIRouter()


class LoginRequest(BaseModel):
    """登录请求体"""

    user_id: str = Field(default="", description="用户 id")
    password: str | None = Field(default=None, description="口令（仅 Admin 需要）")


@router.get("/api/users")
async def list_users(session: Session = Depends(get_session)):
    """返回用户目录"""
    return {"users": [user_to_dict(u) for u in session.state.users]}


@router.post("/api/session/login")
async def login(body: LoginRequest, session: Session = Depends(get_session)):
    """登录；失败返回 401 INVALID_CREDENTIALS"""
    # 未知用户在会话层是 no-op，由网关拒绝
    if session.state.get_user(body.user_id) is None:
        return error_response(401, "INVALID_CREDENTIALS", "Please select a user")

    result = session.login(body.user_id, body.password)
    if not result.accepted:
        return error_response(401, "INVALID_CREDENTIALS", result.reason or "Invalid credentials")
    return {"user": user_to_dict(session.state.current_user)}


@router.post("/api/session/logout")
async def logout(session: Session = Depends(get_session)):
    session.logout()
    return {"user": None}


@router.get("/api/session")
async def current_session(session: Session = Depends(get_session)):
    """当前登录用户及其未读通知数"""
    user = session.state.current_user
    return {
        "user": user_to_dict(user),
        "unread_count": session.state.unread_count(user.user_id) if user else 0,
    }
