"""汇总统计服务模块"""
from calendar import monthrange
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from expense_tracker.models.budget import BudgetPeriod, BudgetStatus
from expense_tracker.models.ledger import Ledger
from expense_tracker.models.transaction import TransactionType


@dataclass
class PeriodSummary:
    """期间汇总数据"""
    income: float = 0.0
    expense: float = 0.0

    @property
    def balance(self) -> float:
        """结余金额"""
        return self.income - self.expense


@dataclass
class BudgetReport:
    """预算周期执行情况"""
    period: BudgetPeriod
    start: date
    end: date
    limit: float
    spent: float
    status: BudgetStatus

    @property
    def remaining(self) -> float:
        """剩余额度（不小于 0）"""
        return max(0.0, self.limit - self.spent)

    @property
    def usage_ratio(self) -> float:
        """已用比例，限额为 0 时返回 0"""
        return self.spent / self.limit if self.limit > 0 else 0.0


class SummaryService:
    """汇总统计服务层（只读，查询账本）"""

    def __init__(self, ledger: Ledger):
        self.ledger = ledger

    @staticmethod
    def get_month_range(year: int, month: int) -> Tuple[date, date]:
        """获取某月的日期范围"""
        _, last_day = monthrange(year, month)
        return date(year, month, 1), date(year, month, last_day)

    @staticmethod
    def get_year_range(year: int) -> Tuple[date, date]:
        """获取某年的日期范围"""
        return date(year, 1, 1), date(year, 12, 31)

    def get_period_summary(self, start: date, end: date) -> PeriodSummary:
        """获取期间收支汇总（含两端）"""
        return PeriodSummary(
            income=self.ledger.total(TransactionType.INCOME, start, end),
            expense=self.ledger.total(TransactionType.EXPENSE, start, end)
        )

    def get_current_month_summary(self, today: Optional[date] = None) -> PeriodSummary:
        """获取本月收支汇总"""
        today = today or date.today()
        return self.get_period_summary(*self.get_month_range(today.year, today.month))

    def get_current_year_summary(self, today: Optional[date] = None) -> PeriodSummary:
        """获取本年收支汇总"""
        today = today or date.today()
        return self.get_period_summary(*self.get_year_range(today.year))

    def get_overall_summary(self) -> PeriodSummary:
        """获取全部交易的收支汇总"""
        return self.get_period_summary(date.min, date.max)

    def get_category_breakdown(
        self, start: date, end: date, tx_type: Any = TransactionType.EXPENSE
    ) -> List[Dict[str, Any]]:
        """获取分类明细（含占比），按金额从高到低"""
        summary = self.ledger.category_summary(tx_type, start, end)
        total = sum(summary.values())
        return [{
            "category": category,
            "amount": amount,
            "percentage": (amount / total * 100) if total > 0 else 0
        } for category, amount in summary.items()]

    def get_monthly_expense_breakdown(self, today: Optional[date] = None) -> List[Dict[str, Any]]:
        """获取本月支出分类明细"""
        today = today or date.today()
        return self.get_category_breakdown(*self.get_month_range(today.year, today.month))

    def get_budget_report(self, today: Optional[date] = None) -> BudgetReport:
        """获取当前预算周期的执行情况"""
        today = today or date.today()
        budget = self.ledger.budget
        start, end = budget.period_range(today)
        spent = self.ledger.total(TransactionType.EXPENSE, start, end)
        return BudgetReport(
            period=budget.period,
            start=start,
            end=end,
            limit=budget.limit,
            spent=spent,
            status=budget.status_for(spent)
        )
