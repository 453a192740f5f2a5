"""Status Deriver 单元测试"""

from datetime import date, timedelta

from complymate.core.models import TaskStatus
from complymate.core.status import derive_status, derive_statuses


class TestDeriveStatus:
    """按今天推导状态"""

    def test_yesterday_becomes_overdue(self, make_task, today):
        """昨天到期的 Pending 任务推导后为 Overdue"""
        task = make_task(due_date=today - timedelta(days=1))
        assert derive_status(task, today).status == TaskStatus.OVERDUE

    def test_due_today_stays_pending(self, make_task, today):
        task = make_task(due_date=today)
        assert derive_status(task, today).status == TaskStatus.PENDING

    def test_future_stays_pending(self, make_task, today):
        task = make_task(due_date=today + timedelta(days=10))
        assert derive_status(task, today).status == TaskStatus.PENDING

    def test_completed_never_changes(self, make_task, today):
        task = make_task(due_date=date(2020, 1, 1), status=TaskStatus.COMPLETED)
        assert derive_status(task, today) is task

    def test_input_not_mutated(self, make_task, today):
        task = make_task(due_date=today - timedelta(days=5))
        derive_status(task, today)
        assert task.status == TaskStatus.PENDING


class TestDeriveStatuses:
    def test_idempotent(self, make_task, today):
        tasks = [
            make_task(due_date=today - timedelta(days=2)),
            make_task(due_date=today),
            make_task(due_date=today - timedelta(days=1), status=TaskStatus.COMPLETED),
        ]
        once = derive_statuses(tasks, today)
        twice = derive_statuses(once, today)
        assert once == twice
        assert [t.status for t in once] == [
            TaskStatus.OVERDUE,
            TaskStatus.PENDING,
            TaskStatus.COMPLETED,
        ]

    def test_returns_tuple(self, make_task, today):
        assert isinstance(derive_statuses([make_task()], today), tuple)
