"""Store Protocol 接口定义

任务与通知集合是 AppState 中的不可变元组，由 task_store / notification_store
中的纯函数做 copy-on-write 更新；附件内容是唯一有生命周期的资源，
通过 AttachmentStore 协议隔离，需要持久化时在此替换实现。
"""

from datetime import datetime
from typing import Protocol

from ..models.task import FileUpload, TaskAttachment


class AttachmentStore(Protocol):
    """附件存储接口"""

    def put_attachment(self, upload: FileUpload, uploaded_at: datetime) -> TaskAttachment:
        """保存文件内容并返回附件元数据（含访问路径）"""
        ...

    def get_attachment(self, attachment_id: str) -> TaskAttachment | None:
        """根据 attachment_id 查询附件元数据"""
        ...

    def get_attachment_content(self, attachment_id: str) -> bytes | None:
        """获取附件内容"""
        ...

    def read_attachment(self, attachment_id: str) -> tuple[TaskAttachment, bytes]:
        """读取附件元数据和内容，不存在时抛出 AttachmentNotFoundError"""
        ...

    def discard_attachment(self, attachment_id: str) -> None:
        """释放附件（被替换或任务删除时调用）"""
        ...

    def __len__(self) -> int:
        """当前保存的附件数（就绪检查使用）"""
        ...
