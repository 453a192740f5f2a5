"""Domain Models 单元测试

测试内容：
1. 枚举序列化/反序列化
2. 状态机合法/非法流转
3. Pydantic 模型校验
4. AppState 不可变与查询
"""

import pytest
from complymate.core.exceptions import CommandRejectedError
from complymate.core.models import (
    TERMINAL_STATES,
    AppState,
    CommandResult,
    Department,
    NotificationType,
    TaskCategory,
    TaskStatus,
    User,
    UserRole,
    validate_transition,
)
from pydantic import ValidationError


class TestEnums:
    """枚举值与字符串互转"""

    def test_task_status_values(self):
        assert TaskStatus.PENDING == "Pending"
        assert TaskStatus.COMPLETED == "Completed"
        assert TaskStatus.OVERDUE == "Overdue"

    def test_category_values(self):
        assert TaskCategory("Half-Yearly") == TaskCategory.HALF_YEARLY
        assert TaskCategory.ANNUAL == "Annual"

    def test_department_and_role(self):
        assert Department("HR") == Department.HR
        assert UserRole("Admin") == UserRole.ADMIN

    def test_notification_type_values(self):
        assert NotificationType.REMINDER == "REMINDER"
        assert NotificationType.ASSIGNMENT == "ASSIGNMENT"


class TestStateMachine:
    """任务状态流转"""

    def test_pending_to_overdue(self):
        assert validate_transition(TaskStatus.PENDING, TaskStatus.OVERDUE)

    def test_pending_to_completed(self):
        assert validate_transition(TaskStatus.PENDING, TaskStatus.COMPLETED)

    def test_overdue_to_completed(self):
        assert validate_transition(TaskStatus.OVERDUE, TaskStatus.COMPLETED)

    def test_overdue_cannot_return_to_pending(self):
        assert not validate_transition(TaskStatus.OVERDUE, TaskStatus.PENDING)

    @pytest.mark.parametrize("target", list(TaskStatus))
    def test_completed_is_terminal(self, target):
        """COMPLETED 不可流转到任何状态"""
        assert TaskStatus.COMPLETED in TERMINAL_STATES
        assert not validate_transition(TaskStatus.COMPLETED, target)


class TestTaskModel:
    """Task 字段校验"""

    def test_negative_amount_rejected(self, make_task):
        with pytest.raises(ValidationError):
            make_task(amount=-1)

    def test_liability_defaults_to_zero(self, make_task):
        assert make_task(amount=None).liability == 0.0
        assert make_task(amount=12500).liability == 12500

    def test_invalid_department_rejected(self, make_task):
        with pytest.raises(ValidationError):
            make_task(department="Legal")

    def test_json_dump_uses_iso_dates(self, make_task):
        data = make_task().model_dump(mode="json")
        assert data["due_date"] == "2024-07-15"
        assert data["status"] == "Pending"


class TestUserModel:
    """用户口令校验"""

    def test_admin_password(self, directory):
        alice = directory[0]
        assert alice.check_password("secret")
        assert not alice.check_password("wrong")

    def test_user_without_password(self, directory):
        bob = directory[1]
        assert bob.check_password(None)
        assert not bob.check_password("anything")

    def test_password_not_in_repr(self, directory):
        assert "secret" not in repr(directory[0])


class TestAppState:
    """AppState 快照"""

    def test_frozen(self, directory):
        state = AppState(users=directory)
        with pytest.raises(ValidationError):
            state.current_user_id = "a1"

    def test_lookup(self, directory, make_task):
        task = make_task()
        state = AppState(users=directory, tasks=(task,), current_user_id="b1")
        assert state.get_task(task.task_id) == task
        assert state.get_task("missing") is None
        assert state.current_user.name == "Bob"
        assert state.get_user(None) is None

    def test_dangling_user(self, directory):
        assert AppState(users=directory).get_user("ghost") is None


class TestCommandResult:
    def test_raise_for_rejection(self):
        result = CommandResult(
            command="complete_task",
            state=AppState(),
            accepted=False,
            reason="You must be logged in to complete a task",
        )
        with pytest.raises(CommandRejectedError) as exc_info:
            result.raise_for_rejection()
        assert exc_info.value.reason == "You must be logged in to complete a task"
        assert exc_info.value.recoverable

    def test_accepted_passes_through(self):
        result = CommandResult(command="logout", state=AppState())
        assert result.raise_for_rejection() is result

    def test_user_model_rejects_unknown_role(self):
        with pytest.raises(ValidationError):
            User(user_id="x", name="X", role="Owner", department=Department.FINANCE)
