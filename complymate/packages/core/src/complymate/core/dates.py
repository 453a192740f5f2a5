"""日期工具 -- 纯日期运算

所有日期均视为本地日历日期（无时区），序列化为 ISO 字符串 YYYY-MM-DD。
月份滚动（12 月 -> 次年 1 月）在此集中处理。
"""

import calendar
from collections.abc import Callable
from datetime import date, datetime

from .config import get_today_override


def format_iso(value: date) -> str:
    """格式化为 YYYY-MM-DD"""
    return value.isoformat()


def parse_iso(value: str) -> date:
    """解析 YYYY-MM-DD（忽略时间部分）"""
    return date.fromisoformat(value[:10])


def add_months(year: int, month: int, offset: int) -> tuple[int, int]:
    """月份偏移，返回 (year, month)

    Args:
        year: 起始年份
        month: 起始月份（1-12）
        offset: 偏移月数，可为负

    Returns:
        偏移后的 (year, month)
    """
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def next_month(year: int, month: int) -> tuple[int, int]:
    """下一个月，12 月滚动到次年 1 月"""
    return add_months(year, month, 1)


def month_label(year: int, month: int) -> str:
    """适用期间标签，如 "July 2024" """
    return f"{calendar.month_name[month]} {year}"


def short_month_label(month: int) -> str:
    """月份简称，如 "Jul" """
    return calendar.month_abbr[month]


def fiscal_year_label(year: int) -> str:
    """财年标签，如 "FY 2023-2024" """
    return f"FY {year - 1}-{year}"


def day_difference(due: date, today: date) -> int:
    """到期日与今天相差的整天数（due - today），已过期为负"""
    return (due - today).days


def local_now() -> datetime:
    """当前本地时间；设置 COMPLYMATE_TODAY 时日期部分被覆盖"""
    now = datetime.now()
    override = get_today_override()
    if override is None:
        return now
    return datetime.combine(override, now.time())


def today_from(clock: Callable[[], datetime]) -> date:
    """从时钟函数取出本地日期"""
    return clock().date()
