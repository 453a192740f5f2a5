"""Notification Engine -- 提醒/逾期/指派通知生成

扫描规则按到期日与今天的整天差值（due - today）取固定点：

| 差值  | 类型     | 文本                               |
|-------|----------|------------------------------------|
| 7, 3  | REMINDER | Reminder: X is due in N days.      |
| 0     | REMINDER | Alert: X is due today!             |
| < 0   | OVERDUE  | Overdue: X was due on YYYY-MM-DD.  |

1、2、4、5、6 天不产生通知。扫描不与已有通知去重，重复扫描会追加重复通知。
"""

from collections.abc import Iterable
from datetime import date, datetime

import structlog
from ulid import ULID

from .dates import day_difference, format_iso
from .models.enums import NotificationType, TaskStatus
from .models.notification import Notification
from .models.task import Task

log = structlog.get_logger()

# 产生提醒的提前天数（固定点，不是滑动窗口）
REMINDER_DAYS: frozenset[int] = frozenset({7, 3})


def build_notification(
    task: Task,
    *,
    user_id: str,
    message: str,
    type: NotificationType,
    now: datetime,
) -> Notification:
    """构建通知，task_name 取当前快照"""
    return Notification(
        notification_id=str(ULID()),
        user_id=user_id,
        task_id=task.task_id,
        task_name=task.task_name,
        message=message,
        notification_date=now,
        is_read=False,
        type=type,
    )


def classify(task: Task, today: date) -> tuple[NotificationType, str] | None:
    """按差值表判定通知类型与文本，不命中返回 None"""
    if task.status == TaskStatus.COMPLETED:
        return None

    diff = day_difference(task.due_date, today)
    if diff in REMINDER_DAYS:
        return NotificationType.REMINDER, (
            f"Reminder: {task.task_name} is due in {diff} days."
        )
    if diff == 0:
        return NotificationType.REMINDER, f"Alert: {task.task_name} is due today!"
    if diff < 0:
        return NotificationType.OVERDUE, (
            f"Overdue: {task.task_name} was due on {format_iso(task.due_date)}."
        )
    return None


def scan_notifications(
    tasks: Iterable[Task],
    today: date,
    now: datetime,
) -> tuple[Notification, ...]:
    """扫描任务集，为每个命中的任务生成一条通知（发给负责人）

    Args:
        tasks: 任务集合
        today: 当前本地日期
        now: 通知时间戳

    Returns:
        新生成的通知元组（按任务顺序）
    """
    created: list[Notification] = []
    for task in tasks:
        hit = classify(task, today)
        if hit is None:
            continue
        notification_type, message = hit
        created.append(
            build_notification(
                task,
                user_id=task.assigned_person_id,
                message=message,
                type=notification_type,
                now=now,
            )
        )

    log.info(
        "notification_scan_completed",
        notification_count=len(created),
        reminder_count=sum(1 for n in created if n.type == NotificationType.REMINDER),
        overdue_count=sum(1 for n in created if n.type == NotificationType.OVERDUE),
        today=today.isoformat(),
    )
    return tuple(created)


def assignment_notification(task: Task, now: datetime) -> Notification:
    """新建任务时发给负责人的指派通知"""
    return build_notification(
        task,
        user_id=task.assigned_person_id,
        message=f"New Assignment: {task.task_name}",
        type=NotificationType.ASSIGNMENT,
        now=now,
    )


def reassignment_notification(task: Task, now: datetime) -> Notification:
    """改派时发给新负责人的通知"""
    return build_notification(
        task,
        user_id=task.assigned_person_id,
        message=f"Task reassigned to you: {task.task_name}",
        type=NotificationType.ASSIGNMENT,
        now=now,
    )
