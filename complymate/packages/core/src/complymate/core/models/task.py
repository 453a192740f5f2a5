"""Task Domain Model -- 合规义务

task_id 使用 ULID 格式，创建后不可变。
status 为 COMPLETED 当且仅当 completed_by_id / completed_at 已设置；
assigned_person_id 允许悬空（展示时解析为 Unknown）。
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from .enums import Department, TaskCategory, TaskStatus


class TaskAttachment(BaseModel):
    """任务附件（单槽位，后写覆盖）

    url 仅在当前会话内有效，不是持久地址。
    """

    attachment_id: str = Field(description="唯一标识，ULID 格式")
    name: str = Field(description="文件名")
    url: str = Field(description="会话内访问路径")
    uploaded_at: datetime = Field(description="上传时间")
    type: str = Field(default="application/octet-stream", description="MIME 类型")
    size: int = Field(default=0, description="内容大小（字节）")
    hash: str = Field(default="", description="SHA-256 哈希")


class TaskDraft(BaseModel):
    """新建任务的输入（不含 id 和完成信息）"""

    task_name: str = Field(description="任务名称")
    department: Department = Field(description="所属部门")
    category: TaskCategory = Field(description="周期类别")
    due_date: date = Field(description="到期日（本地日期）")
    applicable_period: str = Field(default="", description="适用期间，如 July 2024")
    description: str = Field(default="", description="任务说明")
    amount: float | None = Field(
        default=None,
        ge=0,
        description="应付金额；0 或空表示纯申报、无资金负债",
    )
    assigned_person_id: str = Field(description="负责人 user_id")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="当前状态")


class Task(TaskDraft):
    """Task 数据模型"""

    task_id: str = Field(description="唯一标识，ULID 格式")
    completed_by_id: str | None = Field(default=None, description="完成人 user_id")
    completed_at: datetime | None = Field(default=None, description="完成时间")
    attachment: TaskAttachment | None = Field(default=None, description="附件")

    @property
    def liability(self) -> float:
        """资金负债金额（无金额按 0 计）"""
        return self.amount or 0.0

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


class FileUpload(BaseModel):
    """待上传的文件句柄"""

    name: str = Field(description="文件名")
    media_type: str = Field(default="application/octet-stream", description="MIME 类型")
    content: bytes = Field(default=b"", description="文件内容")
