"""任务路由

GET /api/tasks: 任务列表，支持 status / department / q 筛选，按到期日升序。
GET /api/tasks/{task_id}: 任务详情，含关联通知。
POST /api/tasks: 新建任务（给负责人发指派通知）。
PUT /api/tasks/{task_id}: 整体替换（未知 id 为 no-op）。
DELETE /api/tasks/{task_id}: 删除（未知 id 为 no-op）。
POST /api/tasks/{task_id}/complete: 完成任务，需要已登录用户。
POST /api/tasks/{task_id}/attachment: 上传附件（multipart）。
"""

from datetime import datetime

from complymate.core.models import (
    Department,
    FileUpload,
    Task,
    TaskDraft,
    TaskStatus,
)
from complymate.core.reports import filter_tasks
from complymate.core.session import Session
from complymate.core.store import notification_store
from fastapi import APIRouter, Depends, File, Query, UploadFile
from pydantic import Field
from starlette.responses import JSONResponse

from ..deps import get_session
from ..services.responses import (
    error_response,
    notification_to_dict,
    task_not_found,
    task_to_dict,
)

router = APIRouter()


class TaskReplacement(TaskDraft):
    """整体替换请求体；附件只能通过上传接口修改"""

    completed_by_id: str | None = Field(default=None, description="完成人 user_id")
    completed_at: datetime | None = Field(default=None, description="完成时间")


@router.get("/api/tasks")
async def list_tasks(
    status: TaskStatus | None = Query(default=None, description="按状态筛选"),
    department: Department | None = Query(default=None, description="按部门筛选"),
    q: str | None = Query(default=None, description="按名称模糊匹配"),
    session: Session = Depends(get_session),
):
    """查询任务列表"""
    state = session.state
    tasks = filter_tasks(state.tasks, q, department, status)
    return {"tasks": [task_to_dict(t, state) for t in tasks]}


@router.get("/api/tasks/{task_id}")
async def get_task_detail(task_id: str, session: Session = Depends(get_session)):
    """查询任务详情，包含引用该任务的通知"""
    state = session.state
    task = state.get_task(task_id)
    if task is None:
        return task_not_found(task_id)

    return {
        "task": task_to_dict(task, state),
        "notifications": [
            notification_to_dict(n)
            for n in notification_store.for_task(state.notifications, task_id)
        ],
    }


@router.post("/api/tasks", status_code=201)
async def create_task(draft: TaskDraft, session: Session = Depends(get_session)):
    """新建任务"""
    result = session.create_task(draft)
    # 新任务追加在集合末尾
    task = result.state.tasks[-1]
    return {
        "task": task_to_dict(task, result.state),
        "notifications": [notification_to_dict(n) for n in result.notifications],
    }


@router.put("/api/tasks/{task_id}")
async def update_task(
    task_id: str,
    body: TaskReplacement,
    session: Session = Depends(get_session),
):
    """整体替换任务，不做业务校验"""
    existing = session.state.get_task(task_id)
    task = Task(
        task_id=task_id,
        attachment=existing.attachment if existing else None,
        **body.model_dump(),
    )
    result = session.update_task(task)
    return {"applied": result.applied}


@router.delete("/api/tasks/{task_id}")
async def delete_task(task_id: str, session: Session = Depends(get_session)):
    result = session.delete_task(task_id)
    return {"applied": result.applied}


@router.post("/api/tasks/{task_id}/complete")
async def complete_task(task_id: str, session: Session = Depends(get_session)):
    """完成任务；未登录返回 403 NOT_AUTHENTICATED，重复完成为 no-op"""
    result = session.complete_task(task_id)
    if not result.accepted:
        return error_response(403, "NOT_AUTHENTICATED", result.reason or "Not authenticated")

    task = session.state.get_task(task_id)
    return {
        "applied": result.applied,
        "task": task_to_dict(task, session.state) if task else None,
    }


@router.post("/api/tasks/{task_id}/attachment")
async def attach_file(
    task_id: str,
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
):
    """上传附件，替换已有附件"""
    if session.state.get_task(task_id) is None:
        return task_not_found(task_id)

    upload = FileUpload(
        name=file.filename or "attachment",
        media_type=file.content_type or "application/octet-stream",
        content=await file.read(),
    )
    session.attach_file(task_id, upload)
    task = session.state.get_task(task_id)
    return JSONResponse(
        status_code=201,
        content={"task": task_to_dict(task, session.state)},
    )
