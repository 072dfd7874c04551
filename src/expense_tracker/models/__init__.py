"""数据模型模块"""
from expense_tracker.models.transaction_id import TransactionID
from expense_tracker.models.transaction import Transaction, TransactionType
from expense_tracker.models.budget import Budget, BudgetPeriod, BudgetStatus
from expense_tracker.models.ledger import Ledger

__all__ = [
    "TransactionID",
    "Transaction",
    "TransactionType",
    "Budget",
    "BudgetPeriod",
    "BudgetStatus",
    "Ledger",
]
