"""
预算测试

测试范围：
- 限额与周期设置的校验
- 每月/每周周期边界（含闰年、跨月、跨年）
- 预算状态判断
"""
from datetime import date, timedelta

import pytest

from expense_tracker.errors import ValidationError
from expense_tracker.models.budget import Budget, BudgetPeriod, BudgetStatus


class TestBudgetSettings:
    """预算设置"""

    def test_defaults(self):
        """BUD-001：默认每月 1000"""
        budget = Budget()
        assert budget.limit == 1000.00
        assert budget.period is BudgetPeriod.MONTHLY

    def test_set_limit(self):
        """BUD-002：限额可设为 0 或正数"""
        budget = Budget()
        budget.limit = 0
        assert budget.limit == 0.0
        budget.limit = 250.5
        assert budget.limit == 250.5

    @pytest.mark.parametrize("value", [-0.01, -100, float("nan"), "100", None])
    def test_invalid_limit_rejected(self, value):
        """BUD-003：负数或非数字限额被拒绝，原值保留"""
        budget = Budget()
        with pytest.raises(ValidationError):
            budget.limit = value
        assert budget.limit == 1000.00

    def test_set_period(self):
        """BUD-004：周期可用枚举或名称设置"""
        budget = Budget()
        budget.period = BudgetPeriod.WEEKLY
        assert budget.period is BudgetPeriod.WEEKLY
        budget.period = "monthly"
        assert budget.period is BudgetPeriod.MONTHLY

    @pytest.mark.parametrize("value", [None, "daily", 7])
    def test_invalid_period_rejected(self, value):
        """BUD-005：空值或无法识别的周期被拒绝"""
        budget = Budget()
        with pytest.raises(ValidationError):
            budget.period = value
        assert budget.period is BudgetPeriod.MONTHLY


class TestBudgetPeriodWindow:
    """预算周期边界"""

    def test_monthly_leap_february(self):
        """WIN-001：闰年二月"""
        budget = Budget(period=BudgetPeriod.MONTHLY)
        assert budget.period_start(date(2024, 2, 15)) == date(2024, 2, 1)
        assert budget.period_end(date(2024, 2, 15)) == date(2024, 2, 29)

    def test_monthly_non_leap_and_december(self):
        """WIN-002：平年二月与十二月"""
        budget = Budget()
        assert budget.period_range(date(2023, 2, 10)) == (date(2023, 2, 1), date(2023, 2, 28))
        assert budget.period_range(date(2023, 12, 31)) == (date(2023, 12, 1), date(2023, 12, 31))

    def test_weekly_wednesday(self):
        """WIN-003：周三所在的周为周一到周日"""
        budget = Budget(period=BudgetPeriod.WEEKLY)
        wednesday = date(2024, 5, 15)
        assert wednesday.weekday() == 2
        assert budget.period_start(wednesday) == date(2024, 5, 13)
        assert budget.period_end(wednesday) == date(2024, 5, 19)

    def test_weekly_on_monday_and_sunday(self):
        """WIN-004：周一和周日自身即为边界"""
        budget = Budget(period="WEEKLY")
        monday, sunday = date(2024, 5, 13), date(2024, 5, 19)
        assert budget.period_range(monday) == (monday, sunday)
        assert budget.period_range(sunday) == (monday, sunday)

    def test_weekly_across_year(self):
        """WIN-005：跨年的周"""
        budget = Budget(period=BudgetPeriod.WEEKLY)
        assert budget.period_range(date(2025, 1, 1)) == (date(2024, 12, 30), date(2025, 1, 5))

    @pytest.mark.parametrize("period", list(BudgetPeriod))
    def test_window_contains_date(self, period):
        """WIN-006：任意日期都落在自身周期内"""
        budget = Budget(period=period)
        day = date(2023, 12, 20)
        for _ in range(120):
            start, end = budget.period_range(day)
            assert start <= day <= end
            if period is BudgetPeriod.WEEKLY:
                assert start.weekday() == 0 and end.weekday() == 6
                assert (end - start).days == 6
            else:
                assert start.day == 1
                assert (end + timedelta(days=1)).day == 1
            day += timedelta(days=1)


class TestBudgetStatus:
    """预算状态"""

    @pytest.mark.parametrize("spent, expected", [
        (0, BudgetStatus.OK),
        (799.99, BudgetStatus.OK),
        (800, BudgetStatus.APPROACHING),
        (999.99, BudgetStatus.APPROACHING),
        (1000, BudgetStatus.OVERSPENT),
        (1500, BudgetStatus.OVERSPENT),
    ])
    def test_status_thresholds(self, spent, expected):
        """STA-001：80% 提示，达到限额即超支"""
        assert Budget(limit=1000).status_for(spent) is expected

    def test_zero_limit_is_overspent(self):
        """STA-002：限额为 0 时视为已超支"""
        assert Budget(limit=0).status_for(0) is BudgetStatus.OVERSPENT
