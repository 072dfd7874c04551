"""测试公共夹具"""
import os
from datetime import date

import pytest

# 界面模型测试不需要真实显示器
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from expense_tracker.models.ledger import Ledger
from expense_tracker.models.transaction import Transaction, TransactionType
from expense_tracker.models.transaction_id import TransactionID


@pytest.fixture
def ledger() -> Ledger:
    return Ledger()


def make_tx(
    amount: float = 10.0,
    tx_date: date = date(2024, 2, 15),
    category: str = "餐饮",
    description: str = "午饭",
    tx_type: TransactionType = TransactionType.EXPENSE,
    tx_id: str = None
) -> Transaction:
    """创建测试交易，可指定ID"""
    return Transaction(
        tx_type, amount, tx_date, category, description,
        id=TransactionID.from_string(tx_id) if tx_id else None
    )


@pytest.fixture
def add_expense(ledger):
    """向账本添加支出"""
    def _add(amount: float, tx_date: date, category: str = "餐饮", **kwargs) -> Transaction:
        tx = make_tx(amount, tx_date, category, tx_type=TransactionType.EXPENSE, **kwargs)
        ledger.add(tx)
        return tx
    return _add


@pytest.fixture
def add_income(ledger):
    """向账本添加收入"""
    def _add(amount: float, tx_date: date, category: str = "工资", **kwargs) -> Transaction:
        tx = make_tx(amount, tx_date, category, tx_type=TransactionType.INCOME, **kwargs)
        ledger.add(tx)
        return tx
    return _add
