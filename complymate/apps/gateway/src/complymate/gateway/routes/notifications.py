"""通知路由

GET /api/notifications: 指定用户的通知（默认当前登录用户）。
POST /api/notifications/{notification_id}/read: 标记已读（幂等）。
POST /api/notifications/scan: 重新扫描，新通知追加（不去重）。
"""

from complymate.core.session import Session
from fastapi import APIRouter, Depends, Query

from ..deps import get_session
from ..services.responses import error_response, notification_to_dict

router = APIRouter()


@router.get("/api/notifications")
async def list_notifications(
    user_id: str | None = Query(default=None, description="用户 id，默认当前登录用户"),
    session: Session = Depends(get_session),
):
    """查询通知列表及未读数"""
    state = session.state
    target = user_id or state.current_user_id
    if target is None:
        return error_response(403, "NOT_AUTHENTICATED", "Login or pass user_id to list notifications")

    return {
        "user_id": target,
        "unread_count": state.unread_count(target),
        "notifications": [notification_to_dict(n) for n in state.notifications_for(target)],
    }


@router.post("/api/notifications/{notification_id}/read")
async def mark_read(notification_id: str, session: Session = Depends(get_session)):
    result = session.mark_notification_read(notification_id)
    return {"applied": result.applied}


@router.post("/api/notifications/scan")
async def scan(session: Session = Depends(get_session)):
    """按当前时钟重新扫描全部任务"""
    result = session.run_notification_scan()
    return {
        "created": len(result.notifications),
        "notifications": [notification_to_dict(n) for n in result.notifications],
    }
