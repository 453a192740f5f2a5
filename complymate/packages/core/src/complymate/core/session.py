"""会话命令面 -- 任务/通知/登录的全部变更入口

命令均为纯函数：输入旧 AppState，返回携带新 AppState 的 CommandResult。
Session 持有当前快照，每次命令后整体替换引用，读者拿到的快照不会被修改。

会话加载流程：
1. Task Generator 生成初始任务集
2. Status Deriver 按今天推导状态
3. Notification Engine 扫描一次生成初始通知
"""

from collections.abc import Callable, Sequence
from datetime import date, datetime

import structlog
from ulid import ULID

from .dates import local_now, today_from
from .directory import default_directory
from .generator import generate_initial_tasks
from .models.enums import TaskStatus, UserRole, validate_transition
from .models.notification import Notification
from .models.state import AppState, CommandResult
from .models.task import FileUpload, Task, TaskDraft
from .models.user import User
from .notifications import (
    assignment_notification,
    reassignment_notification,
    scan_notifications,
)
from .status import derive_statuses
from .store import notification_store, task_store
from .store.attachment_store import InMemoryAttachmentStore
from .store.protocols import AttachmentStore

log = structlog.get_logger()


def load_initial_state(
    users: Sequence[User],
    today: date,
    now: datetime,
    window_months: int | None = None,
) -> AppState:
    """生成 -> 推导状态 -> 扫描通知，返回会话初始快照"""
    tasks = generate_initial_tasks(users, today, window_months)
    tasks = derive_statuses(tasks, today)
    notifications = scan_notifications(tasks, today, now)
    return AppState(users=tuple(users), tasks=tasks, notifications=notifications)


def _unchanged(command: str, state: AppState) -> CommandResult:
    return CommandResult(command=command, state=state, accepted=True, applied=False)


def _rejected(command: str, state: AppState, reason: str) -> CommandResult:
    log.info("command_rejected", command=command, reason=reason)
    return CommandResult(command=command, state=state, accepted=False, reason=reason)


# ============================================================================
# 登录
# ============================================================================


def login(state: AppState, user_id: str, password: str | None = None) -> CommandResult:
    """登录：Admin 需要口令匹配，User 不需要口令"""
    user = state.get_user(user_id)
    if user is None:
        return _unchanged("login", state)

    if user.role == UserRole.ADMIN:
        if not password:
            return _rejected("login", state, "Password is required for Admin")
        if not user.check_password(password):
            return _rejected("login", state, "Invalid password")

    log.info("user_logged_in", user_id=user.user_id, role=user.role.value)
    return CommandResult(
        command="login",
        state=state.model_copy(update={"current_user_id": user.user_id}),
        applied=state.current_user_id != user.user_id,
    )


def logout(state: AppState) -> CommandResult:
    """登出；未登录时为 no-op"""
    if state.current_user_id is None:
        return _unchanged("logout", state)
    log.info("user_logged_out", user_id=state.current_user_id)
    return CommandResult(
        command="logout",
        state=state.model_copy(update={"current_user_id": None}),
        applied=True,
    )


# ============================================================================
# 任务命令
# ============================================================================


def create_task(state: AppState, draft: TaskDraft, *, now: datetime) -> CommandResult:
    """新建任务：分配 ULID、追加到集合、给负责人发一条指派通知

    输入只做 pydantic 字段校验，不做业务校验。
    """
    task = Task(task_id=str(ULID()), **draft.model_dump())
    notification = assignment_notification(task, now)

    log.info(
        "task_created",
        task_id=task.task_id,
        task_name=task.task_name,
        assigned_person_id=task.assigned_person_id,
    )
    return CommandResult(
        command="create_task",
        state=state.model_copy(
            update={
                "tasks": task_store.insert_task(state.tasks, task),
                "notifications": notification_store.prepend_notification(
                    state.notifications, notification
                ),
            }
        ),
        applied=True,
        notifications=(notification,),
    )


def update_task(state: AppState, task: Task, *, now: datetime) -> CommandResult:
    """按 task_id 整体替换任务；负责人变化时给新负责人发一条改派通知"""
    existing = state.get_task(task.task_id)
    if existing is None:
        return _unchanged("update_task", state)

    update: dict = {"tasks": task_store.replace_task(state.tasks, task)}
    emitted: tuple[Notification, ...] = ()

    if existing.assigned_person_id != task.assigned_person_id:
        notification = reassignment_notification(task, now)
        update["notifications"] = notification_store.prepend_notification(
            state.notifications, notification
        )
        emitted = (notification,)
        log.info(
            "task_reassigned",
            task_id=task.task_id,
            from_user_id=existing.assigned_person_id,
            to_user_id=task.assigned_person_id,
        )
    else:
        log.info("task_updated", task_id=task.task_id)

    return CommandResult(
        command="update_task",
        state=state.model_copy(update=update),
        applied=True,
        notifications=emitted,
    )


def delete_task(
    state: AppState, task_id: str, attachment_store: AttachmentStore
) -> CommandResult:
    """删除任务并释放其附件；引用该任务的通知保留"""
    task = state.get_task(task_id)
    if task is None:
        return _unchanged("delete_task", state)

    if task.attachment is not None:
        attachment_store.discard_attachment(task.attachment.attachment_id)

    log.info("task_deleted", task_id=task_id, had_attachment=task.attachment is not None)
    tasks = task_store.remove_task(state.tasks, task_id)
    return CommandResult(
        command="delete_task",
        state=state.model_copy(update={"tasks": tasks}),
        applied=True,
    )


def complete_task(state: AppState, task_id: str, *, now: datetime) -> CommandResult:
    """完成任务：需要已登录用户；COMPLETED 为终态，重复完成为 no-op"""
    actor = state.current_user_id
    if actor is None:
        return _rejected("complete_task", state, "You must be logged in to complete a task")

    task = state.get_task(task_id)
    if task is None or not validate_transition(task.status, TaskStatus.COMPLETED):
        return _unchanged("complete_task", state)

    def _complete(t: Task) -> Task:
        return t.model_copy(
            update={
                "status": TaskStatus.COMPLETED,
                "completed_by_id": actor,
                "completed_at": now,
            }
        )

    log.info(
        "task_completed",
        task_id=task_id,
        from_status=task.status.value,
        completed_by_id=actor,
    )
    return CommandResult(
        command="complete_task",
        state=state.model_copy(
            update={"tasks": task_store.update_task(state.tasks, task_id, _complete)}
        ),
        applied=True,
    )


def attach_file(
    state: AppState,
    task_id: str,
    upload: FileUpload,
    attachment_store: AttachmentStore,
    *,
    now: datetime,
) -> CommandResult:
    """上传附件：单槽位，后写覆盖旧附件"""
    task = state.get_task(task_id)
    if task is None:
        return _unchanged("attach_file", state)

    attachment = attachment_store.put_attachment(upload, now)
    if task.attachment is not None:
        attachment_store.discard_attachment(task.attachment.attachment_id)

    log.info(
        "attachment_attached",
        task_id=task_id,
        attachment_id=attachment.attachment_id,
        name=attachment.name,
        replaced=task.attachment is not None,
    )
    return CommandResult(
        command="attach_file",
        state=state.model_copy(
            update={
                "tasks": task_store.update_task(
                    state.tasks,
                    task_id,
                    lambda t: t.model_copy(update={"attachment": attachment}),
                )
            }
        ),
        applied=True,
    )


# ============================================================================
# 通知命令
# ============================================================================


def mark_notification_read(state: AppState, notification_id: str) -> CommandResult:
    """标记通知已读（幂等）"""
    notifications = notification_store.mark_read(state.notifications, notification_id)
    if notifications is state.notifications:
        return _unchanged("mark_notification_read", state)
    return CommandResult(
        command="mark_notification_read",
        state=state.model_copy(update={"notifications": notifications}),
        applied=True,
    )


def run_notification_scan(
    state: AppState,
    *,
    today: date,
    now: datetime,
) -> CommandResult:
    """重新扫描并追加通知（不去重）"""
    created = scan_notifications(state.tasks, today, now)
    if not created:
        return _unchanged("run_notification_scan", state)
    return CommandResult(
        command="run_notification_scan",
        state=state.model_copy(
            update={
                "notifications": notification_store.append_notifications(
                    state.notifications, created
                )
            }
        ),
        applied=True,
        notifications=created,
    )


# ============================================================================
# Session 持有者
# ============================================================================


class Session:
    """单会话状态持有者

    持有当前 AppState 快照和附件存储；每次命令后替换快照引用。
    """

    def __init__(
        self,
        state: AppState,
        attachment_store: AttachmentStore,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self._state = state
        self.attachment_store = attachment_store
        self._clock = clock

    @property
    def state(self) -> AppState:
        return self._state

    def now(self) -> datetime:
        return self._clock()

    def today(self) -> date:
        return today_from(self._clock)

    def _apply(self, result: CommandResult) -> CommandResult:
        if result.applied:
            self._state = result.state
        return result

    def login(self, user_id: str, password: str | None = None) -> CommandResult:
        return self._apply(login(self._state, user_id, password))

    def logout(self) -> CommandResult:
        return self._apply(logout(self._state))

    def create_task(self, draft: TaskDraft) -> CommandResult:
        return self._apply(create_task(self._state, draft, now=self.now()))

    def update_task(self, task: Task) -> CommandResult:
        return self._apply(update_task(self._state, task, now=self.now()))

    def delete_task(self, task_id: str) -> CommandResult:
        return self._apply(delete_task(self._state, task_id, self.attachment_store))

    def complete_task(self, task_id: str) -> CommandResult:
        return self._apply(complete_task(self._state, task_id, now=self.now()))

    def attach_file(self, task_id: str, upload: FileUpload) -> CommandResult:
        return self._apply(
            attach_file(self._state, task_id, upload, self.attachment_store, now=self.now())
        )

    def mark_notification_read(self, notification_id: str) -> CommandResult:
        return self._apply(mark_notification_read(self._state, notification_id))

    def run_notification_scan(self) -> CommandResult:
        now = self.now()
        return self._apply(run_notification_scan(self._state, today=now.date(), now=now))


def create_session(
    users: Sequence[User] | None = None,
    *,
    clock: Callable[[], datetime] = local_now,
    attachment_store: AttachmentStore | None = None,
    window_months: int | None = None,
) -> Session:
    """创建会话：用目录生成初始状态

    Args:
        users: 用户目录，默认使用演示目录
        clock: 时钟函数（测试中注入固定时间）
        attachment_store: 附件存储，默认进程内存储
        window_months: 月度滚动窗口

    Returns:
        Session 实例
    """
    directory = tuple(users) if users is not None else default_directory()
    now = clock()
    state = load_initial_state(directory, now.date(), now, window_months)

    log.info(
        "session_loaded",
        user_count=len(directory),
        task_count=len(state.tasks),
        notification_count=len(state.notifications),
        today=now.date().isoformat(),
    )
    return Session(
        state,
        attachment_store if attachment_store is not None else InMemoryAttachmentStore(),
        clock,
    )
