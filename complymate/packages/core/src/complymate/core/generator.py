"""Task Generator -- 周期性合规义务日历生成

会话启动时生成初始任务集：
1. 滚动窗口内（默认 3 个月）每月固定一组月度任务
2. 四个季度的 TDS 申报（Q3/Q4 到期日跨入次年）
3. 当年的年度申报

负责人按任务类型固定规则分配给两个目录角色：
- preparer（经办人）：申报、对账
- approver（审批人）：付款、汇缴、高金额年度申报
"""

from collections.abc import Sequence
from datetime import date
from enum import StrEnum

import structlog
from pydantic import BaseModel, Field
from ulid import ULID

from .config import get_monthly_window
from .dates import add_months, fiscal_year_label, month_label, next_month
from .exceptions import DirectoryEmptyError
from .models.enums import Department, TaskCategory, TaskStatus, UserRole
from .models.task import Task
from .models.user import User

log = structlog.get_logger()


class AssigneeRole(StrEnum):
    """任务负责人角色"""

    PREPARER = "preparer"
    APPROVER = "approver"


class DueAnchor(StrEnum):
    """月度任务到期日锚定的月份"""

    CURRENT_MONTH = "current_month"
    NEXT_MONTH = "next_month"


class MonthlyObligation(BaseModel):
    """月度义务模板：到期日 = 锚定月份的固定日"""

    task_name: str = Field(description="任务名称")
    department: Department = Field(description="所属部门")
    description: str = Field(default="", description="任务说明")
    due_day: int = Field(ge=1, le=28, description="到期日（几号）")
    anchor: DueAnchor = Field(description="锚定当月或次月")
    assignee: AssigneeRole = Field(description="负责人角色")
    base_amount: float = Field(default=0.0, ge=0, description="基础金额")
    amount_step: float = Field(default=0.0, ge=0, description="窗口内每月递增金额")


class FixedObligation(BaseModel):
    """季度/年度义务：到期日为具体日期"""

    task_name: str
    department: Department
    category: TaskCategory
    description: str = ""
    period: str
    due_date: date
    assignee: AssigneeRole
    amount: float = 0.0


MONTHLY_SLATE: list[MonthlyObligation] = [
    MonthlyObligation(
        task_name="GSTR-1 Filing",
        department=Department.FINANCE,
        description="File GSTR-1 for outward supplies.",
        due_day=13,
        anchor=DueAnchor.NEXT_MONTH,
        assignee=AssigneeRole.PREPARER,
    ),
    MonthlyObligation(
        task_name="GST Payment Remittance",
        department=Department.FINANCE,
        description="Remit GST payment to government.",
        due_day=20,
        anchor=DueAnchor.NEXT_MONTH,
        assignee=AssigneeRole.APPROVER,
        base_amount=45000,
        amount_step=2000,
    ),
    MonthlyObligation(
        task_name="TDS Payment",
        department=Department.FINANCE,
        description="Deposit Tax Deducted at Source.",
        due_day=7,
        anchor=DueAnchor.NEXT_MONTH,
        assignee=AssigneeRole.PREPARER,
        base_amount=12500,
    ),
    # 目录中没有 HR 经办人，PF 由审批人负责
    MonthlyObligation(
        task_name="PF Payment",
        department=Department.HR,
        description="Provident Fund monthly payment.",
        due_day=15,
        anchor=DueAnchor.CURRENT_MONTH,
        assignee=AssigneeRole.APPROVER,
        base_amount=85000,
    ),
    MonthlyObligation(
        task_name="Bank Reconciliation (BRS)",
        department=Department.FINANCE,
        description="Complete bank reconciliation for all accounts.",
        due_day=10,
        anchor=DueAnchor.NEXT_MONTH,
        assignee=AssigneeRole.PREPARER,
    ),
]


def quarterly_obligations(year: int) -> list[FixedObligation]:
    """季度 TDS 申报（按日历年锚定，Q3/Q4 到期日在次年）"""
    quarters = [
        ("Q1 (Apr-Jun)", date(year, 7, 31)),
        ("Q2 (Jul-Sep)", date(year, 10, 31)),
        ("Q3 (Oct-Dec)", date(year + 1, 1, 31)),
        ("Q4 (Jan-Mar)", date(year + 1, 5, 31)),
    ]
    return [
        FixedObligation(
            task_name="TDS Return Filing",
            department=Department.FINANCE,
            category=TaskCategory.QUARTERLY,
            description="Quarterly TDS Return filing (24Q/26Q).",
            period=period,
            due_date=due,
            assignee=AssigneeRole.APPROVER,
        )
        for period, due in quarters
    ]


def annual_obligations(year: int) -> list[FixedObligation]:
    """当年年度申报"""
    period = fiscal_year_label(year)
    return [
        FixedObligation(
            task_name="GSTR-9 Annual Return",
            department=Department.FINANCE,
            category=TaskCategory.ANNUAL,
            description="Annual GST Return.",
            period=period,
            due_date=date(year, 12, 31),
            assignee=AssigneeRole.APPROVER,
        ),
        FixedObligation(
            task_name="Income Tax Return (ITR)",
            department=Department.FINANCE,
            category=TaskCategory.ANNUAL,
            description="Corporate Income Tax Return Filing.",
            period=period,
            due_date=date(year, 9, 30),
            assignee=AssigneeRole.APPROVER,
            amount=150000,  # 预估税额
        ),
    ]


class AssigneeResolver:
    """把负责人角色解析为目录中的具体用户

    - approver：第一个 Admin，缺失时取目录第一项
    - preparer：第一个 User，缺失时取目录第二项，再缺失取第一项
    - 部门在目录中无人的 preparer 任务转给 approver
    """

    def __init__(self, users: Sequence[User]) -> None:
        if not users:
            raise DirectoryEmptyError()

        admin = next((u for u in users if u.role == UserRole.ADMIN), None)
        staff = next((u for u in users if u.role == UserRole.USER), None)

        if admin is None:
            log.warning(
                "assignee_role_missing",
                role=UserRole.ADMIN.value,
                fallback_user_id=users[0].user_id,
            )
        if staff is None:
            log.warning(
                "assignee_role_missing",
                role=UserRole.USER.value,
                fallback_user_id=(users[1] if len(users) > 1 else users[0]).user_id,
            )

        self.approver = admin or users[0]
        self.preparer = staff or (users[1] if len(users) > 1 else users[0])
        self._departments = {u.department for u in users}

    def resolve(self, role: AssigneeRole, department: Department) -> str:
        """返回负责人 user_id"""
        if role == AssigneeRole.PREPARER and department in self._departments:
            return self.preparer.user_id
        return self.approver.user_id


def _new_task(
    *,
    task_name: str,
    department: Department,
    category: TaskCategory,
    due_date: date,
    period: str,
    description: str,
    assigned_person_id: str,
    amount: float,
) -> Task:
    return Task(
        task_id=str(ULID()),
        task_name=task_name,
        department=department,
        category=category,
        due_date=due_date,
        applicable_period=period,
        description=description,
        status=TaskStatus.PENDING,
        assigned_person_id=assigned_person_id,
        amount=amount,
    )


def generate_monthly_tasks(
    resolver: AssigneeResolver,
    today: date,
    window_months: int,
) -> list[Task]:
    """生成滚动窗口内的月度任务"""
    tasks: list[Task] = []
    for offset in range(window_months):
        year, month = add_months(today.year, today.month, offset)
        next_year, next_month_index = next_month(year, month)
        period = month_label(year, month)

        for obligation in MONTHLY_SLATE:
            if obligation.anchor == DueAnchor.NEXT_MONTH:
                due = date(next_year, next_month_index, obligation.due_day)
            else:
                due = date(year, month, obligation.due_day)

            tasks.append(
                _new_task(
                    task_name=obligation.task_name,
                    department=obligation.department,
                    category=TaskCategory.MONTHLY,
                    due_date=due,
                    period=period,
                    description=obligation.description,
                    assigned_person_id=resolver.resolve(
                        obligation.assignee, obligation.department
                    ),
                    amount=obligation.base_amount + offset * obligation.amount_step,
                )
            )
    return tasks


def generate_fixed_tasks(
    resolver: AssigneeResolver,
    obligations: list[FixedObligation],
) -> list[Task]:
    """把季度/年度模板实例化为任务"""
    return [
        _new_task(
            task_name=o.task_name,
            department=o.department,
            category=o.category,
            due_date=o.due_date,
            period=o.period,
            description=o.description,
            assigned_person_id=resolver.resolve(o.assignee, o.department),
            amount=o.amount,
        )
        for o in obligations
    ]


def generate_initial_tasks(
    users: Sequence[User],
    today: date,
    window_months: int | None = None,
) -> tuple[Task, ...]:
    """生成会话初始任务集（全部为 PENDING）

    Args:
        users: 用户目录
        today: 当前本地日期，决定滚动窗口起点和年度锚点
        window_months: 月度滚动窗口，默认取 COMPLYMATE_MONTHLY_WINDOW

    Returns:
        任务元组：月度任务 + 季度任务 + 年度任务

    Raises:
        DirectoryEmptyError: 目录为空
    """
    if window_months is None:
        window_months = get_monthly_window()

    resolver = AssigneeResolver(users)

    tasks = generate_monthly_tasks(resolver, today, window_months)
    tasks += generate_fixed_tasks(resolver, quarterly_obligations(today.year))
    tasks += generate_fixed_tasks(resolver, annual_obligations(today.year))

    log.info(
        "task_calendar_generated",
        task_count=len(tasks),
        window_months=window_months,
        approver_id=resolver.approver.user_id,
        preparer_id=resolver.preparer.user_id,
        anchor_date=today.isoformat(),
    )
    return tuple(tasks)
