"""报表与资金负债汇总

Dashboard / Reports 页面消费的只读派生数据：
- 运营统计（总数、完成、待办、逾期、完成率）
- 资金统计（总负债、已付、待付、逾期金额及占比）
- 未来 N 个月现金流、部门负债分布、部门合规摘要
- 任务筛选、CSV 导出、打印摘要
"""

import csv
import io
import math
from collections.abc import Iterable, Sequence
from datetime import date

from pydantic import BaseModel, Field

from .config import CASH_FLOW_MONTHS, UPCOMING_TASKS_LIMIT
from .dates import add_months, format_iso, short_month_label
from .directory import resolve_user_name
from .models.enums import Department, TaskStatus
from .models.task import Task
from .models.user import User

TASK_CSV_HEADERS = ["Task Name", "Department", "Category", "Due Date", "Status", "Assigned To"]
FINANCIAL_CSV_HEADERS = [
    "Task Name",
    "Department",
    "Due Date",
    "Status",
    "Amount (INR)",
    "Assigned To",
]


def round_half_up(value: float) -> int:
    """四舍五入到整数（0.5 进位）"""
    return math.floor(value + 0.5)


def _percent(part: float, total: float) -> float:
    return (part / total) * 100 if total else 0.0


class OperationalStats(BaseModel):
    """运营统计"""

    total: int
    completed: int
    pending: int
    overdue: int
    rate: int = Field(description="完成率（整数百分比）")


class FinancialStats(BaseModel):
    """资金统计"""

    total_liability: float
    paid: float
    pending: float
    overdue: float
    paid_pct: float
    pending_pct: float
    overdue_pct: float


class CashFlowPoint(BaseModel):
    """现金流单月数据点"""

    year: int
    month: int
    name: str = Field(description="月份简称")
    amount: float


class DepartmentLiability(BaseModel):
    """部门负债"""

    name: Department
    value: float


class DepartmentSummary(BaseModel):
    """部门合规摘要"""

    dept: Department
    total: int
    completed: int
    overdue: int
    percent: int


def _sum_amount(tasks: Iterable[Task]) -> float:
    return sum(t.liability for t in tasks)


def operational_stats(tasks: Sequence[Task]) -> OperationalStats:
    total = len(tasks)
    completed = sum(1 for t in tasks if t.status == TaskStatus.COMPLETED)
    pending = sum(1 for t in tasks if t.status == TaskStatus.PENDING)
    overdue = sum(1 for t in tasks if t.status == TaskStatus.OVERDUE)
    rate = round_half_up(completed / total * 100) if total else 0
    return OperationalStats(
        total=total,
        completed=completed,
        pending=pending,
        overdue=overdue,
        rate=rate,
    )


def financial_stats(tasks: Sequence[Task]) -> FinancialStats:
    """按状态拆分资金负债；无金额的纯申报任务按 0 计"""
    total = _sum_amount(tasks)
    paid = _sum_amount(t for t in tasks if t.status == TaskStatus.COMPLETED)
    pending = _sum_amount(t for t in tasks if t.status == TaskStatus.PENDING)
    overdue = _sum_amount(t for t in tasks if t.status == TaskStatus.OVERDUE)
    return FinancialStats(
        total_liability=total,
        paid=paid,
        pending=pending,
        overdue=overdue,
        paid_pct=_percent(paid, total),
        pending_pct=_percent(pending, total),
        overdue_pct=_percent(overdue, total),
    )


def cash_flow(
    tasks: Sequence[Task],
    today: date,
    months: int = CASH_FLOW_MONTHS,
) -> list[CashFlowPoint]:
    """未来 N 个日历月（含当月）的负债现金流，包含已付任务"""
    buckets: dict[tuple[int, int], float] = {
        add_months(today.year, today.month, i): 0.0 for i in range(months)
    }
    for task in tasks:
        if not task.amount:
            continue
        key = (task.due_date.year, task.due_date.month)
        if key in buckets:
            buckets[key] += task.amount

    return [
        CashFlowPoint(year=year, month=month, name=short_month_label(month), amount=amount)
        for (year, month), amount in buckets.items()
    ]


def department_liability(tasks: Sequence[Task]) -> list[DepartmentLiability]:
    """部门负债分布，金额为 0 的部门不出现"""
    result = [
        DepartmentLiability(
            name=dept,
            value=_sum_amount(t for t in tasks if t.department == dept),
        )
        for dept in Department
    ]
    return [d for d in result if d.value > 0]


def department_summary(tasks: Sequence[Task]) -> list[DepartmentSummary]:
    """各部门合规摘要"""
    summaries = []
    for dept in Department:
        dept_tasks = [t for t in tasks if t.department == dept]
        total = len(dept_tasks)
        completed = sum(1 for t in dept_tasks if t.status == TaskStatus.COMPLETED)
        overdue = sum(1 for t in dept_tasks if t.status == TaskStatus.OVERDUE)
        summaries.append(
            DepartmentSummary(
                dept=dept,
                total=total,
                completed=completed,
                overdue=overdue,
                percent=round_half_up(completed / total * 100) if total else 0,
            )
        )
    return summaries


def upcoming_tasks(tasks: Sequence[Task], limit: int = UPCOMING_TASKS_LIMIT) -> list[Task]:
    """最近到期的待办任务"""
    pending = [t for t in tasks if t.status == TaskStatus.PENDING]
    return sorted(pending, key=lambda t: t.due_date)[:limit]


def overdue_tasks(tasks: Sequence[Task]) -> list[Task]:
    return [t for t in tasks if t.status == TaskStatus.OVERDUE]


def filter_tasks(
    tasks: Sequence[Task],
    text: str | None = None,
    department: Department | None = None,
    status: TaskStatus | None = None,
) -> list[Task]:
    """任务列表筛选：名称模糊匹配（不区分大小写）+ 部门 + 状态，按到期日升序"""
    needle = (text or "").lower()
    matched = [
        t
        for t in tasks
        if needle in t.task_name.lower()
        and (department is None or t.department == department)
        and (status is None or t.status == status)
    ]
    return sorted(matched, key=lambda t: t.due_date)


def _write_csv(headers: list[str], rows: Iterable[list]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue()


def export_tasks_csv(tasks: Sequence[Task]) -> str:
    """任务 CSV 导出（Assigned To 为 user_id 原值）"""
    return _write_csv(
        TASK_CSV_HEADERS,
        (
            [
                t.task_name,
                t.department.value,
                t.category.value,
                format_iso(t.due_date),
                t.status.value,
                t.assigned_person_id,
            ]
            for t in tasks
        ),
    )


def export_financials_csv(tasks: Sequence[Task]) -> str:
    """资金负债 CSV 导出"""
    return _write_csv(
        FINANCIAL_CSV_HEADERS,
        (
            [
                t.task_name,
                t.department.value,
                format_iso(t.due_date),
                t.status.value,
                f"{t.liability:g}",
                t.assigned_person_id,
            ]
            for t in tasks
        ),
    )


def render_print_summary(tasks: Sequence[Task], users: Sequence[User] = ()) -> str:
    """打印版摘要：部门统计 + 完整任务表"""
    lines = ["Executive Summary", ""]
    for s in department_summary(tasks):
        lines.append(f"{s.dept.value} Department: {s.percent}% Compliant")
        lines.append(f"  Total Tasks: {s.total}")
        lines.append(f"  Completed:   {s.completed}")
        lines.append(f"  Overdue:     {s.overdue}")
    lines += ["", "Full Task List", ""]

    name_width = max([len("Task")] + [len(t.task_name) for t in tasks])
    lines.append(f"{'Task':<{name_width}}  {'Due Date':<10}  {'Status':<9}  Assigned To")
    for t in tasks:
        assignee = resolve_user_name(users, t.assigned_person_id) if users else t.assigned_person_id
        lines.append(
            f"{t.task_name:<{name_width}}  {format_iso(t.due_date):<10}  "
            f"{t.status.value:<9}  {assignee}"
        )
    return "\n".join(lines) + "\n"


def dashboard(tasks: Sequence[Task], today: date) -> dict:
    """Dashboard 汇总（运营 + 资金 + 图表 + 列表）"""
    return {
        "stats": operational_stats(tasks).model_dump(),
        "finance": financial_stats(tasks).model_dump(),
        "charts": {
            "cash_flow": [p.model_dump() for p in cash_flow(tasks, today)],
            "department_liability": [d.model_dump() for d in department_liability(tasks)],
        },
        "upcoming": [t.model_dump(mode="json") for t in upcoming_tasks(tasks)],
        "overdue": [t.model_dump(mode="json") for t in overdue_tasks(tasks)],
    }
