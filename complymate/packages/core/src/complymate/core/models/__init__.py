"""ComplyMATE Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import (
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    Department,
    NotificationType,
    TaskCategory,
    TaskStatus,
    UserRole,
    validate_transition,
)
from .notification import Notification
from .state import AppState, CommandResult
from .task import FileUpload, Task, TaskAttachment, TaskDraft
from .user import User

__all__ = [
    # 枚举
    "UserRole",
    "Department",
    "TaskCategory",
    "TaskStatus",
    "NotificationType",
    # 状态机
    "VALID_TRANSITIONS",
    "TERMINAL_STATES",
    "validate_transition",
    # Task
    "Task",
    "TaskDraft",
    "TaskAttachment",
    "FileUpload",
    # User
    "User",
    # Notification
    "Notification",
    # Session
    "AppState",
    "CommandResult",
]
