"""Notification Engine 单元测试

测试内容：
1. 固定点差值表 {7, 3, 0, <0}
2. 已完成任务不产生通知
3. 通知发给负责人，携带任务名快照
4. 指派 / 改派通知文本
"""

from datetime import timedelta

import pytest
from complymate.core.models import NotificationType, TaskStatus
from complymate.core.notifications import (
    assignment_notification,
    classify,
    reassignment_notification,
    scan_notifications,
)


class TestThresholds:
    """到期差值表"""

    def test_three_days_reminder(self, make_task, today, fixed_now):
        """3 天后到期 -> 一条提及 3 days 的提醒"""
        task = make_task(due_date=today + timedelta(days=3))
        created = scan_notifications([task], today, fixed_now)
        assert len(created) == 1
        assert created[0].type == NotificationType.REMINDER
        assert "3 days" in created[0].message

    def test_four_days_silent(self, make_task, today, fixed_now):
        task = make_task(due_date=today + timedelta(days=4))
        assert scan_notifications([task], today, fixed_now) == ()

    @pytest.mark.parametrize(
        ("diff", "expected_type", "expected_message"),
        [
            (7, NotificationType.REMINDER, "Reminder: GSTR-1 Filing is due in 7 days."),
            (3, NotificationType.REMINDER, "Reminder: GSTR-1 Filing is due in 3 days."),
            (0, NotificationType.REMINDER, "Alert: GSTR-1 Filing is due today!"),
            (-1, NotificationType.OVERDUE, "Overdue: GSTR-1 Filing was due on 2024-07-14."),
            (-30, NotificationType.OVERDUE, "Overdue: GSTR-1 Filing was due on 2024-06-15."),
        ],
    )
    def test_firing_points(self, make_task, today, diff, expected_type, expected_message):
        task = make_task(due_date=today + timedelta(days=diff))
        assert classify(task, today) == (expected_type, expected_message)

    @pytest.mark.parametrize("diff", [1, 2, 4, 5, 6, 8, 30])
    def test_silent_points(self, make_task, today, diff):
        """稀疏表：1、2、4、5、6 天及 7 天以上不提醒"""
        task = make_task(due_date=today + timedelta(days=diff))
        assert classify(task, today) is None

    def test_completed_task_silent(self, make_task, today):
        task = make_task(
            due_date=today - timedelta(days=3),
            status=TaskStatus.COMPLETED,
        )
        assert classify(task, today) is None

    def test_overdue_status_still_notified(self, make_task, today):
        task = make_task(due_date=today - timedelta(days=2), status=TaskStatus.OVERDUE)
        assert classify(task, today)[0] == NotificationType.OVERDUE


class TestScan:
    """扫描生成"""

    def test_addressed_to_assignee(self, make_task, today, fixed_now):
        task = make_task(due_date=today, assigned_person_id="a1")
        (notification,) = scan_notifications([task], today, fixed_now)
        assert notification.user_id == "a1"
        assert notification.task_id == task.task_id
        assert notification.task_name == task.task_name
        assert notification.notification_date == fixed_now
        assert not notification.is_read

    def test_one_per_matching_task_in_order(self, make_task, today, fixed_now):
        tasks = [
            make_task(task_name="A", due_date=today + timedelta(days=7)),
            make_task(task_name="B", due_date=today + timedelta(days=5)),
            make_task(task_name="C", due_date=today - timedelta(days=1)),
        ]
        created = scan_notifications(tasks, today, fixed_now)
        assert [n.task_name for n in created] == ["A", "C"]

    def test_repeat_scan_produces_duplicates(self, make_task, today, fixed_now):
        """扫描不去重，两次扫描得到两条内容相同的通知"""
        task = make_task(due_date=today + timedelta(days=3))
        first = scan_notifications([task], today, fixed_now)
        second = scan_notifications([task], today, fixed_now)
        assert first[0].message == second[0].message
        assert first[0].notification_id != second[0].notification_id


class TestAssignmentMessages:
    def test_assignment(self, make_task, fixed_now):
        task = make_task(task_name="Audit Prep", assigned_person_id="b1")
        notification = assignment_notification(task, fixed_now)
        assert notification.message == "New Assignment: Audit Prep"
        assert notification.type == NotificationType.ASSIGNMENT
        assert notification.user_id == "b1"

    def test_reassignment(self, make_task, fixed_now):
        task = make_task(task_name="Audit Prep", assigned_person_id="a1")
        notification = reassignment_notification(task, fixed_now)
        assert notification.message == "Task reassigned to you: Audit Prep"
        assert notification.user_id == "a1"
