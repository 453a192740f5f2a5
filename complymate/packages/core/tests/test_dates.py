"""日期工具单元测试

测试内容：
1. 月份偏移与年末滚动
2. 标签格式
3. 整天差值
4. COMPLYMATE_TODAY 覆盖
"""

from datetime import date, datetime

from complymate.core.dates import (
    add_months,
    day_difference,
    fiscal_year_label,
    format_iso,
    local_now,
    month_label,
    next_month,
    parse_iso,
    short_month_label,
    today_from,
)


class TestMonthArithmetic:
    """月份运算"""

    def test_add_months_within_year(self):
        assert add_months(2024, 7, 2) == (2024, 9)

    def test_add_months_rolls_over_year(self):
        """11 月 + 3 -> 次年 2 月"""
        assert add_months(2024, 11, 3) == (2025, 2)

    def test_add_months_negative(self):
        assert add_months(2024, 1, -1) == (2023, 12)

    def test_next_month_december(self):
        """12 月的下一个月是次年 1 月"""
        assert next_month(2024, 12) == (2025, 1)


class TestLabels:
    """标签格式"""

    def test_month_label(self):
        assert month_label(2024, 7) == "July 2024"

    def test_short_month_label(self):
        assert short_month_label(1) == "Jan"
        assert short_month_label(12) == "Dec"

    def test_fiscal_year_label(self):
        assert fiscal_year_label(2024) == "FY 2023-2024"

    def test_iso_round_trip(self):
        assert format_iso(date(2024, 7, 5)) == "2024-07-05"
        assert parse_iso("2024-07-05") == date(2024, 7, 5)

    def test_parse_iso_ignores_time(self):
        assert parse_iso("2024-07-05T23:59:00") == date(2024, 7, 5)


class TestDayDifference:
    """到期日与今天的整天差值"""

    def test_future(self):
        assert day_difference(date(2024, 7, 18), date(2024, 7, 15)) == 3

    def test_same_day(self):
        assert day_difference(date(2024, 7, 15), date(2024, 7, 15)) == 0

    def test_past(self):
        assert day_difference(date(2024, 7, 14), date(2024, 7, 15)) == -1

    def test_across_year(self):
        assert day_difference(date(2025, 1, 2), date(2024, 12, 30)) == 3


class TestClock:
    """本地时钟与覆盖"""

    def test_today_from_clock(self):
        assert today_from(lambda: datetime(2024, 2, 29, 23, 59)) == date(2024, 2, 29)

    def test_local_now_without_override(self):
        before = datetime.now()
        now = local_now()
        assert now >= before

    def test_local_now_with_override(self, monkeypatch):
        """COMPLYMATE_TODAY 覆盖日期部分"""
        monkeypatch.setenv("COMPLYMATE_TODAY", "2024-12-31")
        assert local_now().date() == date(2024, 12, 31)
