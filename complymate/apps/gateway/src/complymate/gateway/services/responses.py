"""响应序列化与错误信封

错误统一为 {"error": {"code": ..., "message": ...}}。
"""

from urllib.parse import quote

from complymate.core.models import AppState, Notification, Task, User
from starlette.responses import JSONResponse


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    """构建错误响应"""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


def content_disposition(filename: str) -> str:
    """下载头：ASCII 回退名 + RFC 5987 filename* 原名（UTF-8 百分号编码）"""
    ascii_name = filename.encode("ascii", "replace").decode("ascii")
    # 引号、反斜杠和控制字符会破坏头部
    fallback = "".join(
        c if c.isprintable() and c not in '"\\' else "_" for c in ascii_name
    )
    encoded = quote(filename, safe="")
    return f"attachment; filename=\"{fallback or 'download'}\"; filename*=UTF-8''{encoded}"


def task_not_found(task_id: str) -> JSONResponse:
    return error_response(404, "TASK_NOT_FOUND", f"Task with id {task_id} does not exist")


def user_to_dict(user: User | None) -> dict | None:
    """用户序列化（不含口令）"""
    if user is None:
        return None
    return user.model_dump(mode="json", exclude={"password"})


def task_to_dict(task: Task, state: AppState) -> dict:
    """任务序列化，附带负责人/完成人名称（悬空引用为 null）"""
    data = task.model_dump(mode="json")
    assignee = state.get_user(task.assigned_person_id)
    completer = state.get_user(task.completed_by_id)
    data["assigned_person_name"] = assignee.name if assignee else None
    data["completed_by_name"] = completer.name if completer else None
    return data


def notification_to_dict(notification: Notification) -> dict:
    return notification.model_dump(mode="json")
