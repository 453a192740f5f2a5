"""Notification Domain Model

通知只追加不删除；除 is_read（单向 False -> True）外创建后不可变。
task_name 是创建时的快照，任务删除后通知依然可读。
"""

from datetime import datetime

from pydantic import BaseModel, Field

from .enums import NotificationType


class Notification(BaseModel):
    """Notification 数据模型"""

    notification_id: str = Field(description="唯一标识，ULID 格式")
    user_id: str = Field(description="接收人 user_id")
    task_id: str = Field(description="来源任务 ID")
    task_name: str = Field(description="来源任务名称快照")
    message: str = Field(description="通知文本")
    notification_date: datetime = Field(description="创建时间")
    is_read: bool = Field(default=False, description="是否已读")
    type: NotificationType = Field(description="通知类型")
