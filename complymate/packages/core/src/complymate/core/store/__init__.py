"""ComplyMATE Core Store -- 会话内存存储

任务/通知集合的 copy-on-write 操作 + 进程内附件存储。
"""

from . import notification_store, task_store
from .attachment_store import InMemoryAttachmentStore, compute_hash_and_size
from .protocols import AttachmentStore

__all__ = [
    "AttachmentStore",
    "InMemoryAttachmentStore",
    "compute_hash_and_size",
    "notification_store",
    "task_store",
]
