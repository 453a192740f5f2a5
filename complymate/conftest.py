"""全局 pytest 配置 -- 用户目录、固定时钟与任务构造 fixture"""

from collections.abc import Callable
from datetime import date, datetime

import pytest
from complymate.core.models import (
    Department,
    Task,
    TaskCategory,
    TaskStatus,
    User,
    UserRole,
)
from pydantic import SecretStr
from ulid import ULID

# 2024-07-15：PF Payment 当天到期，其余初始任务均在未来
FIXED_NOW = datetime(2024, 7, 15, 9, 30)

COMPLYMATE_ENV_VARS = [
    "COMPLYMATE_TODAY",
    "COMPLYMATE_MONTHLY_WINDOW",
    "COMPLYMATE_ADMIN_PASSWORD",
    "COMPLYMATE_ATTACHMENT_BASE_URL",
    "COMPLYMATE_LOG_FORMAT",
    "COMPLYMATE_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """清除可能影响结果的环境变量"""
    for key in COMPLYMATE_ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def today(fixed_now: datetime) -> date:
    return fixed_now.date()


@pytest.fixture
def fixed_clock(fixed_now: datetime) -> Callable[[], datetime]:
    """固定时钟，注入 Session"""
    return lambda: fixed_now


@pytest.fixture
def directory() -> tuple[User, ...]:
    """两人目录：Alice（Admin，审批人）+ Bob（User，经办人）"""
    return (
        User(
            user_id="a1",
            name="Alice",
            email="alice@comply.com",
            role=UserRole.ADMIN,
            department=Department.FINANCE,
            password=SecretStr("secret"),
        ),
        User(
            user_id="b1",
            name="Bob",
            email="bob@comply.com",
            role=UserRole.USER,
            department=Department.FINANCE,
        ),
    )


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """任务构造工厂，未指定字段使用默认值"""

    def _make(**overrides) -> Task:
        fields = {
            "task_id": str(ULID()),
            "task_name": "GSTR-1 Filing",
            "department": Department.FINANCE,
            "category": TaskCategory.MONTHLY,
            "due_date": FIXED_NOW.date(),
            "applicable_period": "July 2024",
            "assigned_person_id": "b1",
            "status": TaskStatus.PENDING,
        }
        fields.update(overrides)
        return Task(**fields)

    return _make
