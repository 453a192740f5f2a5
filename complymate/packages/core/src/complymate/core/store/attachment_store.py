"""AttachmentStore 内存实现

附件内容只保存在进程内，访问路径在会话重启后失效。
"""

import hashlib
from datetime import datetime

import structlog
from ulid import ULID

from ..config import get_attachment_base_url
from ..exceptions import AttachmentNotFoundError
from ..models.task import FileUpload, TaskAttachment

log = structlog.get_logger()


def compute_hash_and_size(content: bytes) -> tuple[str, int]:
    """计算 SHA-256 hash 和内容大小

    Args:
        content: 原始内容字节

    Returns:
        (sha256_hex, size_bytes) 元组
    """
    return hashlib.sha256(content).hexdigest(), len(content)


class InMemoryAttachmentStore:
    """AttachmentStore 的进程内实现"""

    def __init__(self, base_url: str | None = None) -> None:
        self._base_url = (base_url or get_attachment_base_url()).rstrip("/")
        self._meta: dict[str, TaskAttachment] = {}
        self._content: dict[str, bytes] = {}

    def put_attachment(self, upload: FileUpload, uploaded_at: datetime) -> TaskAttachment:
        """保存文件内容，派生会话内访问路径"""
        attachment_id = str(ULID())
        hash_hex, size = compute_hash_and_size(upload.content)
        attachment = TaskAttachment(
            attachment_id=attachment_id,
            name=upload.name,
            url=f"{self._base_url}/{attachment_id}",
            uploaded_at=uploaded_at,
            type=upload.media_type,
            size=size,
            hash=hash_hex,
        )
        self._meta[attachment_id] = attachment
        self._content[attachment_id] = upload.content
        log.debug(
            "attachment_stored",
            attachment_id=attachment_id,
            name=upload.name,
            size=size,
        )
        return attachment

    def get_attachment(self, attachment_id: str) -> TaskAttachment | None:
        """根据 attachment_id 查询附件元数据"""
        return self._meta.get(attachment_id)

    def get_attachment_content(self, attachment_id: str) -> bytes | None:
        """获取附件内容"""
        return self._content.get(attachment_id)

    def read_attachment(self, attachment_id: str) -> tuple[TaskAttachment, bytes]:
        """读取附件元数据和内容

        Raises:
            AttachmentNotFoundError: 附件不存在
        """
        attachment = self._meta.get(attachment_id)
        if attachment is None:
            raise AttachmentNotFoundError(attachment_id)
        return attachment, self._content[attachment_id]

    def discard_attachment(self, attachment_id: str) -> None:
        """释放附件，未知 id 静默忽略"""
        self._meta.pop(attachment_id, None)
        self._content.pop(attachment_id, None)

    def __len__(self) -> int:
        return len(self._meta)
