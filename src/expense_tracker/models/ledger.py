"""账本模块：全部交易记录与预算的唯一持有者"""
import logging
from calendar import monthrange
from collections import defaultdict
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional, Final

from expense_tracker.errors import DuplicateTransactionError, LedgerInvariantError
from expense_tracker.models.budget import Budget
from expense_tracker.models.transaction import Transaction, TransactionType
from expense_tracker.models.transaction_id import TransactionID

logger: Final = logging.getLogger(__name__)

Observer = Callable[[], Any]


class Ledger:
    """
    账本：按 TransactionID 保存交易，持有唯一的 Budget，负责排序、筛选和汇总

    一致性规则（每次修改后检查）：
    - 字典中不存在空键或空值
    - 每个键等于对应交易的 id
    - 每笔交易金额严格大于 0

    每次成功修改后，按注册顺序同步调用所有观察者（无参数），
    观察者需要重新查询账本获取最新数据。在观察者回调中再次修改账本不受支持。
    """

    def __init__(self, budget: Optional[Budget] = None):
        self._transactions: Dict[TransactionID, Transaction] = {}
        self._observers: List[Observer] = []
        self._budget = budget if budget is not None else Budget()
        self._check_rep()

    @classmethod
    def restore(cls, transactions: Iterable[Transaction], budget: Optional[Budget] = None) -> "Ledger":
        """从已保存的数据重建账本（只做一次一致性检查，不通知观察者）"""
        ledger = cls(budget)
        for tx in transactions:
            if not isinstance(tx, Transaction):
                raise TypeError(f"需要 Transaction 对象，实际为 {type(tx).__name__}")
            if tx.id in ledger._transactions:
                raise DuplicateTransactionError(f"交易ID重复: {tx.id}")
            ledger._transactions[tx.id] = tx
        ledger._check_rep()
        return ledger

    def _check_rep(self) -> None:
        """检查内部一致性，违反即为程序缺陷"""
        if self._transactions is None or self._budget is None:
            raise LedgerInvariantError("账本内部状态缺失")
        for tx_id, tx in self._transactions.items():
            if tx_id is None or tx is None:
                raise LedgerInvariantError("交易字典中存在空键或空值")
            if tx_id != tx.id:
                raise LedgerInvariantError(f"键 {tx_id} 与交易ID {tx.id} 不一致")
            if not tx.amount > 0:
                raise LedgerInvariantError(f"交易 {tx_id} 的金额不是正数: {tx.amount}")

    # ==================== 修改操作 ====================

    def add(self, transaction: Transaction) -> None:
        """新增交易"""
        self._require_transaction(transaction)
        if transaction.id in self._transactions:
            raise DuplicateTransactionError(f"交易ID已存在: {transaction.id}")
        self._transactions[transaction.id] = transaction
        logger.debug(f"新增交易: {transaction!r}")
        self._check_rep()
        self._notify_observers()

    def delete(self, transaction_id: TransactionID) -> bool:
        """删除交易，返回是否确实删除；ID 不存在时不做任何事"""
        if self._transactions.pop(transaction_id, None) is None:
            return False
        logger.debug(f"删除交易: {transaction_id}")
        self._check_rep()
        self._notify_observers()
        return True

    def update(self, transaction: Transaction) -> bool:
        """用（已修改的）交易对象替换同ID的记录，ID 不存在时返回 False"""
        self._require_transaction(transaction)
        if transaction.id not in self._transactions:
            return False
        self._transactions[transaction.id] = transaction
        logger.debug(f"更新交易: {transaction!r}")
        self._check_rep()
        self._notify_observers()
        return True

    @staticmethod
    def _require_transaction(transaction: Any) -> None:
        if not isinstance(transaction, Transaction):
            raise TypeError(f"需要 Transaction 对象，实际为 {type(transaction).__name__}")

    # ==================== 查询操作 ====================

    def resolve_by_prefix(self, prefix: str) -> Optional[TransactionID]:
        """
        根据ID前缀查找交易ID

        只有恰好一个ID以该前缀开头时才返回；没有匹配或匹配多个时都返回 None，
        调用方无法据此区分“不存在”和“不唯一”。
        """
        if not prefix:
            return None
        matches = [tx_id for tx_id in self._transactions if tx_id.value.startswith(prefix)]
        return matches[0] if len(matches) == 1 else None

    def get_by_id(self, transaction_id: TransactionID) -> Optional[Transaction]:
        """根据ID获取交易"""
        return self._transactions.get(transaction_id)

    def get_by_prefix(self, prefix: str) -> Optional[Transaction]:
        """根据唯一的ID前缀获取交易"""
        resolved = self.resolve_by_prefix(prefix)
        if resolved is None:
            return None
        return self._transactions.get(resolved)

    def all_sorted(self) -> List[Transaction]:
        """获取所有交易的副本，按日期倒序（同一天的先后顺序不保证）"""
        return sorted(self._transactions.values(), key=lambda tx: tx.date, reverse=True)

    def _matching(self, tx_type: Any, start: date, end: date) -> Iterable[Transaction]:
        tx_type = TransactionType.coerce(tx_type)
        return (
            tx for tx in self._transactions.values()
            if tx.type is tx_type and start <= tx.date <= end
        )

    def total(self, tx_type: Any, start: date, end: date) -> float:
        """某类型在 [start, end]（含两端）内的金额合计"""
        return sum((tx.amount for tx in self._matching(tx_type, start, end)), 0.0)

    def category_summary(self, tx_type: Any, start: date, end: date) -> Dict[str, float]:
        """某类型在 [start, end]（含两端）内按分类汇总，按金额从高到低排列"""
        totals: Dict[str, float] = defaultdict(float)
        for tx in self._matching(tx_type, start, end):
            totals[tx.category] += tx.amount
        return dict(sorted(totals.items(), key=lambda item: item[1], reverse=True))

    def monthly_expense_summary(self, day: date) -> Dict[str, float]:
        """该日期所在自然月的支出分类汇总"""
        _, last_day = monthrange(day.year, day.month)
        return self.category_summary(
            TransactionType.EXPENSE, day.replace(day=1), day.replace(day=last_day)
        )

    # ==================== 预算 ====================

    @property
    def budget(self) -> Budget:
        """账本持有的预算（共享引用，直接修改预算不会通知观察者）"""
        return self._budget

    def get_budget(self) -> Budget:
        return self._budget

    # ==================== 观察者 ====================

    def add_observer(self, observer: Observer) -> None:
        """注册观察者回调（无参数）"""
        self._observers.append(observer)

    def remove_observer(self, observer: Observer) -> None:
        """注销观察者回调，未注册时忽略"""
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify_observers(self) -> None:
        for observer in list(self._observers):
            observer()

    def __len__(self) -> int:
        return len(self._transactions)

    def __contains__(self, transaction_id: object) -> bool:
        return transaction_id in self._transactions
