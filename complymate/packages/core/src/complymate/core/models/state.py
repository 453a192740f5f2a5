"""AppState / CommandResult -- 会话状态快照与命令返回值

AppState 不可变：每个命令基于旧快照返回新快照（copy-on-write），
读者持有的旧快照不会被修改。
"""

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import CommandRejectedError
from .notification import Notification
from .task import Task
from .user import User


class AppState(BaseModel):
    """会话状态快照"""

    model_config = ConfigDict(frozen=True)

    users: tuple[User, ...] = Field(default=(), description="只读用户目录")
    tasks: tuple[Task, ...] = Field(default=(), description="任务集合")
    notifications: tuple[Notification, ...] = Field(default=(), description="通知集合")
    current_user_id: str | None = Field(default=None, description="当前登录用户")

    def get_task(self, task_id: str) -> Task | None:
        """根据 task_id 查询任务"""
        return next((t for t in self.tasks if t.task_id == task_id), None)

    def get_user(self, user_id: str | None) -> User | None:
        """根据 user_id 查询用户，悬空引用返回 None"""
        if user_id is None:
            return None
        return next((u for u in self.users if u.user_id == user_id), None)

    @property
    def current_user(self) -> User | None:
        return self.get_user(self.current_user_id)

    def notifications_for(self, user_id: str) -> list[Notification]:
        """指定用户的通知（保持集合顺序，最新的指派通知在前）"""
        return [n for n in self.notifications if n.user_id == user_id]

    def unread_count(self, user_id: str) -> int:
        return sum(1 for n in self.notifications_for(user_id) if not n.is_read)


class CommandResult(BaseModel):
    """命令执行结果

    - accepted=False：前置条件不满足，reason 给出可展示的原因，state 为原快照
    - applied=False：命令被接受但无变化（未知 id、已完成任务等静默 no-op）
    """

    model_config = ConfigDict(frozen=True)

    command: str = Field(description="命令名称")
    state: AppState = Field(description="执行后的状态快照")
    accepted: bool = Field(default=True, description="是否通过前置条件检查")
    applied: bool = Field(default=False, description="状态是否发生变化")
    reason: str | None = Field(default=None, description="拒绝原因")
    notifications: tuple[Notification, ...] = Field(
        default=(),
        description="本次命令产生的通知",
    )

    def raise_for_rejection(self) -> "CommandResult":
        """被拒绝时抛出 CommandRejectedError，否则原样返回"""
        if not self.accepted:
            raise CommandRejectedError(self.command, self.reason or "rejected")
        return self
