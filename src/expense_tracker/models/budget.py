"""预算数据模型"""
import math
from calendar import monthrange
from datetime import date, timedelta
from enum import Enum
from typing import Any, Tuple

from expense_tracker.errors import ValidationError
from expense_tracker.settings import (
    BUDGET_WARNING_RATIO, DEFAULT_BUDGET_LIMIT, DEFAULT_BUDGET_PERIOD
)


class BudgetPeriod(str, Enum):
    """预算周期"""
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"

    @classmethod
    def coerce(cls, value: Any) -> "BudgetPeriod":
        """将枚举或字符串（不区分大小写）转换为预算周期"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.strip().upper() in cls.__members__:
            return cls[value.strip().upper()]
        raise ValidationError(f"无效的预算周期: {value!r}")

    @property
    def display(self) -> str:
        return "每周" if self is BudgetPeriod.WEEKLY else "每月"


class BudgetStatus(str, Enum):
    """预算执行状态"""
    OK = "OK"
    APPROACHING = "APPROACHING LIMIT"
    OVERSPENT = "OVERSPENT"


class Budget:
    """预算设置：限额 + 周期（每周/每月）"""

    def __init__(self, limit: Any = DEFAULT_BUDGET_LIMIT, period: Any = DEFAULT_BUDGET_PERIOD):
        self._limit = self._validate_limit(limit)
        self._period = BudgetPeriod.coerce(period)

    @staticmethod
    def _validate_limit(value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError("预算限额必须为数字")
        limit = float(value)
        if not math.isfinite(limit) or limit < 0:
            raise ValidationError("预算限额不能为负数")
        return limit

    @property
    def limit(self) -> float:
        return self._limit

    @limit.setter
    def limit(self, value: Any) -> None:
        self._limit = self._validate_limit(value)

    @property
    def period(self) -> BudgetPeriod:
        return self._period

    @period.setter
    def period(self, value: Any) -> None:
        if value is None:
            raise ValidationError("预算周期不能为空")
        self._period = BudgetPeriod.coerce(value)

    def period_start(self, day: date) -> date:
        """获取包含该日期的预算周期的第一天（每周从周一开始）"""
        if self._period is BudgetPeriod.MONTHLY:
            return day.replace(day=1)
        return day - timedelta(days=day.weekday())

    def period_end(self, day: date) -> date:
        """获取包含该日期的预算周期的最后一天（每周到周日结束）"""
        if self._period is BudgetPeriod.MONTHLY:
            _, last_day = monthrange(day.year, day.month)
            return day.replace(day=last_day)
        return day + timedelta(days=6 - day.weekday())

    def period_range(self, day: date) -> Tuple[date, date]:
        """获取包含该日期的预算周期（闭区间）"""
        return self.period_start(day), self.period_end(day)

    def status_for(self, spent: float) -> BudgetStatus:
        """
        根据周期内支出判断预算状态

        规则：
        - 支出 >= 限额：超支
        - 支出 >= 限额 * 80%：接近上限
        - 其他：正常
        """
        if spent >= self._limit:
            return BudgetStatus.OVERSPENT
        if spent >= self._limit * BUDGET_WARNING_RATIO:
            return BudgetStatus.APPROACHING
        return BudgetStatus.OK

    def __repr__(self) -> str:
        return f"Budget(limit={self._limit!r}, period={self._period.value!r})"
