"""User Domain Model -- 只读用户目录条目

目录由外部提供，核心从不创建或修改用户。
"""

from pydantic import BaseModel, Field, SecretStr

from .enums import Department, UserRole


class User(BaseModel):
    """用户目录条目"""

    user_id: str = Field(description="用户唯一标识")
    name: str = Field(description="显示名称")
    email: str = Field(default="", description="邮箱")
    role: UserRole = Field(description="角色：Admin / User")
    department: Department = Field(description="所属部门")
    password: SecretStr | None = Field(
        default=None,
        description="登录口令（仅 Admin 需要）",
    )

    def check_password(self, candidate: str | None) -> bool:
        """校验口令；未设置口令的用户只接受空口令"""
        if self.password is None:
            return not candidate
        return candidate == self.password.get_secret_value()
