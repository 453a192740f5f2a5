"""附件路由

GET /api/attachments/{attachment_id}: 返回附件内容（仅当前会话有效）。
"""

from complymate.core.exceptions import AttachmentNotFoundError
from complymate.core.session import Session
from fastapi import APIRouter, Depends
from starlette.responses import Response

from ..deps import get_session
from ..services.responses import content_disposition, error_response

router = APIRouter()


@router.get("/api/attachments/{attachment_id}")
async def get_attachment(attachment_id: str, session: Session = Depends(get_session)):
    """下载附件；不存在或已被替换返回 404 ATTACHMENT_NOT_FOUND"""
    try:
        attachment, content = session.attachment_store.read_attachment(attachment_id)
    except AttachmentNotFoundError as e:
        return error_response(404, "ATTACHMENT_NOT_FOUND", str(e))

    return Response(
        content=content,
        media_type=attachment.type,
        headers={"Content-Disposition": content_disposition(attachment.name)},
    )
