"""通知集合的 copy-on-write 操作

通知只追加，不更新、不删除；唯一允许的变化是 is_read 单向置为 True。
"""

from ..models.notification import Notification


def append_notifications(
    notifications: tuple[Notification, ...],
    new: tuple[Notification, ...],
) -> tuple[Notification, ...]:
    """扫描产生的通知追加到末尾"""
    return (*notifications, *new)


def prepend_notification(
    notifications: tuple[Notification, ...],
    notification: Notification,
) -> tuple[Notification, ...]:
    """命令产生的通知插入到最前（最新在前）"""
    return (notification, *notifications)


def mark_read(
    notifications: tuple[Notification, ...],
    notification_id: str,
) -> tuple[Notification, ...]:
    """标记已读；已读或未知 id 返回原元组"""
    target = next(
        (n for n in notifications if n.notification_id == notification_id),
        None,
    )
    if target is None or target.is_read:
        return notifications
    return tuple(
        n.model_copy(update={"is_read": True}) if n.notification_id == notification_id else n
        for n in notifications
    )


def for_task(
    notifications: tuple[Notification, ...],
    task_id: str,
) -> list[Notification]:
    """引用指定任务的通知（任务删除后仍然保留）"""
    return [n for n in notifications if n.task_id == task_id]
