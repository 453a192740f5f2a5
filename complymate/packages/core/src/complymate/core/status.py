"""Status Deriver -- 按"今天"重算任务状态

纯函数：返回新的任务元组，不修改输入。
仅在会话加载时调用一次，不做定时重算。
"""

from collections.abc import Iterable
from datetime import date

import structlog

from .models.enums import TaskStatus
from .models.task import Task

log = structlog.get_logger()


def derive_status(task: Task, today: date) -> Task:
    """推导单个任务状态

    非 COMPLETED 且到期日严格早于今天 -> OVERDUE；其余保持不变。
    """
    if task.status == TaskStatus.COMPLETED:
        return task
    if task.due_date < today and task.status != TaskStatus.OVERDUE:
        return task.model_copy(update={"status": TaskStatus.OVERDUE})
    return task


def derive_statuses(tasks: Iterable[Task], today: date) -> tuple[Task, ...]:
    """推导任务集状态（幂等：重复调用结果一致）

    Args:
        tasks: 任务集合
        today: 当前本地日期（仅比较日期，不含时间）

    Returns:
        新的任务元组
    """
    derived = tuple(derive_status(task, today) for task in tasks)
    overdue = sum(1 for t in derived if t.status == TaskStatus.OVERDUE)
    log.debug(
        "task_statuses_derived",
        task_count=len(derived),
        overdue_count=overdue,
        today=today.isoformat(),
    )
    return derived
