"""任务集合的 copy-on-write 操作

所有函数返回新元组，不修改输入；未知 task_id 返回原元组（调用方据此判断 no-op）。
"""

from collections.abc import Callable

from ..models.task import Task


def find_task(tasks: tuple[Task, ...], task_id: str) -> Task | None:
    """根据 task_id 查询任务"""
    return next((t for t in tasks if t.task_id == task_id), None)


def insert_task(tasks: tuple[Task, ...], task: Task) -> tuple[Task, ...]:
    """追加任务到末尾"""
    return (*tasks, task)


def replace_task(tasks: tuple[Task, ...], task: Task) -> tuple[Task, ...]:
    """按 task_id 整体替换任务"""
    if find_task(tasks, task.task_id) is None:
        return tasks
    return tuple(task if t.task_id == task.task_id else t for t in tasks)


def update_task(
    tasks: tuple[Task, ...],
    task_id: str,
    mutate: Callable[[Task], Task],
) -> tuple[Task, ...]:
    """对匹配的任务应用 mutate，返回新元组"""
    if find_task(tasks, task_id) is None:
        return tasks
    return tuple(mutate(t) if t.task_id == task_id else t for t in tasks)


def remove_task(tasks: tuple[Task, ...], task_id: str) -> tuple[Task, ...]:
    """删除任务（无墓碑）"""
    if find_task(tasks, task_id) is None:
        return tasks
    return tuple(t for t in tasks if t.task_id != task_id)
