"""演示用户目录

目录是外部协作者拥有的只读数据；此处提供会话启动时的默认种子。
"""

from pydantic import SecretStr

from .config import get_admin_password
from .models.enums import Department, UserRole
from .models.user import User


def default_directory() -> tuple[User, ...]:
    """默认两人目录：一名 Admin（审批人）+ 一名 User（经办人）"""
    return (
        User(
            user_id="u1",
            name="System Admin",
            email="admin@comply.com",
            role=UserRole.ADMIN,
            department=Department.FINANCE,
            password=SecretStr(get_admin_password()),
        ),
        User(
            user_id="u2",
            name="Finance Staff",
            email="staff@comply.com",
            role=UserRole.USER,
            department=Department.FINANCE,
        ),
    )


def resolve_user_name(users: tuple[User, ...] | list[User], user_id: str | None) -> str:
    """展示用：解析负责人名称，悬空引用返回 Unknown"""
    for user in users:
        if user.user_id == user_id:
            return user.name
    return "Unknown"
