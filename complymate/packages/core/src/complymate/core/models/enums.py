"""枚举定义

包含 UserRole、Department、TaskCategory、TaskStatus、NotificationType 枚举，
以及 VALID_TRANSITIONS 合法流转映射和 TERMINAL_STATES 终态集合。
"""

from enum import StrEnum


class UserRole(StrEnum):
    """用户角色"""

    ADMIN = "Admin"
    USER = "User"


class Department(StrEnum):
    """任务所属部门"""

    FINANCE = "Finance"
    HR = "HR"


class TaskCategory(StrEnum):
    """合规任务周期"""

    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    HALF_YEARLY = "Half-Yearly"
    ANNUAL = "Annual"


class TaskStatus(StrEnum):
    """Task 状态机

    PENDING -> OVERDUE 由状态推导触发（到期日早于今天），
    PENDING/OVERDUE -> COMPLETED 由显式完成命令触发。
    """

    PENDING = "Pending"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"


class NotificationType(StrEnum):
    """通知类型"""

    REMINDER = "REMINDER"
    OVERDUE = "OVERDUE"
    COMPLETED = "COMPLETED"
    ASSIGNMENT = "ASSIGNMENT"


# 合法状态流转
VALID_TRANSITIONS: dict[TaskStatus, set[TaskStatus]] = {
    TaskStatus.PENDING: {TaskStatus.OVERDUE, TaskStatus.COMPLETED},
    TaskStatus.OVERDUE: {TaskStatus.COMPLETED},
    # 终态不可再流转
    TaskStatus.COMPLETED: set(),
}

TERMINAL_STATES: set[TaskStatus] = {
    TaskStatus.COMPLETED,
}


def validate_transition(from_status: TaskStatus, to_status: TaskStatus) -> bool:
    """验证状态流转是否合法

    Args:
        from_status: 当前状态
        to_status: 目标状态

    Returns:
        True 如果流转合法，否则 False
    """
    allowed = VALID_TRANSITIONS.get(from_status, set())
    return to_status in allowed
