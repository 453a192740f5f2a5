"""配置常量模块 -- 可通过环境变量覆盖

包含"今天"覆盖、月度任务滚动窗口、管理员口令、附件访问路径、日志输出等可配置常量。
"""

import logging
import os
from datetime import date

import structlog

log = structlog.get_logger()


def get_today_override() -> date | None:
    """获取 COMPLYMATE_TODAY 指定的"今天"（YYYY-MM-DD），未设置时返回 None"""
    raw = os.environ.get("COMPLYMATE_TODAY")
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        log.warning(
            "invalid_today_config",
            env_var="COMPLYMATE_TODAY",
            value=raw,
        )
        return None


def get_monthly_window() -> int:
    """获取月度任务滚动窗口（月数，默认 3）"""
    raw = os.environ.get("COMPLYMATE_MONTHLY_WINDOW", "3")
    try:
        value = int(raw)
    except ValueError:
        log.warning(
            "invalid_monthly_window_config",
            env_var="COMPLYMATE_MONTHLY_WINDOW",
            value=raw,
            fallback=3,
        )
        return 3
    return max(1, value)


def get_admin_password() -> str:
    """获取演示目录中 Admin 用户的口令"""
    return os.environ.get("COMPLYMATE_ADMIN_PASSWORD", "admin")


def get_attachment_base_url() -> str:
    """获取附件访问路径前缀（会话内有效，非持久 URL）"""
    return os.environ.get("COMPLYMATE_ATTACHMENT_BASE_URL", "/api/attachments").rstrip("/")


LOG_FORMATS = ("dev", "json")


def get_log_format() -> str:
    """获取日志渲染模式：dev（默认，可读输出）或 json（结构化输出）"""
    raw = os.environ.get("COMPLYMATE_LOG_FORMAT", "dev").strip().lower()
    if raw not in LOG_FORMATS:
        log.warning(
            "invalid_log_format_config",
            env_var="COMPLYMATE_LOG_FORMAT",
            value=raw,
            fallback="dev",
        )
        return "dev"
    return raw


def get_log_level() -> int:
    """获取日志级别（标准库 logging 级别名，默认 INFO）"""
    raw = os.environ.get("COMPLYMATE_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        log.warning(
            "invalid_log_level_config",
            env_var="COMPLYMATE_LOG_LEVEL",
            value=raw,
            fallback="INFO",
        )
        return logging.INFO
    return level


# Dashboard 即将到期列表长度
UPCOMING_TASKS_LIMIT: int = int(os.environ.get("COMPLYMATE_UPCOMING_TASKS_LIMIT", "5"))

# 现金流预测月数
CASH_FLOW_MONTHS: int = int(os.environ.get("COMPLYMATE_CASH_FLOW_MONTHS", "6"))

# CSV 导出默认文件名
CSV_EXPORT_FILENAME: str = "compliance_report.csv"
FINANCIALS_EXPORT_FILENAME: str = "financial_liabilities.csv"
