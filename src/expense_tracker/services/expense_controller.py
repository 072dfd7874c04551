"""控制器：将用户输入转换为账本操作，并负责输入校验"""
import logging
from datetime import date
from typing import Any, List, Optional, Final

from expense_tracker.db.database import Database
from expense_tracker.errors import ValidationError
from expense_tracker.models.budget import BudgetPeriod
from expense_tracker.models.ledger import Ledger
from expense_tracker.models.transaction import (
    Transaction, validate_amount, validate_text
)
from expense_tracker.models.transaction_id import TransactionID
from expense_tracker.services.input_parser import parse_date, parse_transaction_input

logger: Final = logging.getLogger(__name__)


class ExpenseController:
    """
    记账控制器

    所有修改操作在真正改动账本之前完成全部校验，
    校验失败时抛出 ValidationError，账本保持不变。
    """

    def __init__(self, ledger: Ledger, database: Optional[Database] = None):
        self.ledger = ledger
        self.database = database

    def save_state(self) -> None:
        """保存账本到持久化存储"""
        if self.database is None:
            logger.warning("未配置数据库，跳过保存")
            return
        self.database.save_ledger(self.ledger)

    # ==================== 新增 ====================

    def add_transaction(
        self,
        description: str,
        amount: Any,
        category: str,
        date_text: Optional[str],
        tx_type: Any,
        today: Optional[date] = None
    ) -> Transaction:
        """根据表单字段新增交易"""
        if tx_type is None:
            raise ValidationError("交易类型不能为空")
        tx = Transaction(
            type=tx_type,
            amount=amount,
            date=parse_date(date_text, today),
            category=category,
            description=description
        )
        self.ledger.add(tx)
        logger.info(f"已新增交易 {tx.id.short()}")
        return tx

    def add_transaction_from_input(
        self,
        text: str,
        tx_type: Any,
        default_category: str,
        today: Optional[date] = None
    ) -> Transaction:
        """根据自由文本新增交易"""
        if tx_type is None:
            raise ValidationError("交易类型不能为空")
        parsed = parse_transaction_input(text, default_category, today)
        tx = Transaction(
            type=tx_type,
            amount=parsed.amount,
            date=parsed.date,
            category=parsed.category,
            description=parsed.description
        )
        self.ledger.add(tx)
        logger.info(f"已通过文本输入新增交易 {tx.id.short()}")
        return tx

    # ==================== 删除 / 编辑 ====================

    def _matching_ids(self, prefix: str) -> List[TransactionID]:
        return [tx.id for tx in self.ledger.all_sorted() if tx.id.value.startswith(prefix)]

    def resolve_reference(self, reference: Optional[str]) -> TransactionID:
        """
        将用户输入的完整ID或ID前缀解析为交易ID

        先按完整ID精确查找，再按唯一前缀查找；
        找不到或前缀不唯一时抛出 ValidationError 并说明原因。
        """
        if reference is None or not reference.strip():
            raise ValidationError("请输入交易ID")
        value = reference.strip()

        exact = TransactionID.from_string(value)
        if exact in self.ledger:
            return exact

        resolved = self.ledger.resolve_by_prefix(value)
        if resolved is not None:
            return resolved

        # 账本对“不存在”和“不唯一”返回相同结果，这里自行区分以便提示用户
        if self._matching_ids(value):
            raise ValidationError(f"ID前缀 '{value}' 匹配多笔交易，请输入更长的前缀")
        raise ValidationError(f"未找到ID为 '{value}' 的交易")

    def delete_transaction(self, reference: str) -> TransactionID:
        """根据完整ID或唯一前缀删除交易"""
        tx_id = self.resolve_reference(reference)
        self.ledger.delete(tx_id)
        logger.info(f"已删除交易 {tx_id.short()}")
        return tx_id

    def edit_transaction(
        self,
        reference: str,
        description: Optional[str] = None,
        amount: Optional[Any] = None,
        category: Optional[str] = None,
        date_text: Optional[str] = None,
        today: Optional[date] = None
    ) -> Transaction:
        """
        修改交易字段（为 None 或空白的字段保持不变）

        交易类型不可修改，如需更改类型请删除后重新添加。
        """
        tx_id = self.resolve_reference(reference)
        tx = self.ledger.get_by_id(tx_id)

        # 先校验全部新值，避免只修改了一部分
        new_description = validate_text(description, "描述") if _provided(description) else None
        new_category = validate_text(category, "分类") if _provided(category) else None
        new_amount = validate_amount(amount) if amount is not None else None
        new_date = parse_date(date_text, today) if _provided(date_text) else None

        if new_description is not None:
            tx.description = new_description
        if new_amount is not None:
            tx.amount = new_amount
        if new_category is not None:
            tx.category = new_category
        if new_date is not None:
            tx.date = new_date

        self.ledger.update(tx)
        logger.info(f"已更新交易 {tx_id.short()}")
        return tx

    # ==================== 预算 ====================

    def set_budget(self, limit: Any, period: Any) -> None:
        """
        更新预算限额和周期

        预算修改不会触发账本观察者，调用方需要自行刷新界面。
        """
        if period is None:
            raise ValidationError("预算周期不能为空")
        new_period = BudgetPeriod.coerce(period)
        budget = self.ledger.budget
        budget.limit = limit
        budget.period = new_period
        logger.info(f"预算已更新: {budget.limit:.2f} / {new_period.value}")


def _provided(value: Optional[str]) -> bool:
    return value is not None and bool(str(value).strip())

