"""
Expense Tracker - 本地收支记账与预算提醒
"""
from expense_tracker.errors import (
    LedgerError, ValidationError, DuplicateTransactionError, LedgerInvariantError
)
from expense_tracker.models.transaction_id import TransactionID
from expense_tracker.models.transaction import Transaction, TransactionType
from expense_tracker.models.budget import Budget, BudgetPeriod, BudgetStatus
from expense_tracker.models.ledger import Ledger
from expense_tracker.db.database import Database
from expense_tracker.services.summary_service import SummaryService, PeriodSummary, BudgetReport
from expense_tracker.services.expense_controller import ExpenseController
from expense_tracker.services.input_parser import (
    ParsedTransaction, parse_date, parse_transaction_input
)
from expense_tracker.settings import (
    VERSION, APP_NAME, CURRENCY_SYMBOL, CURRENCY_CODE, format_money
)

__all__ = [
    # 异常
    "LedgerError",
    "ValidationError",
    "DuplicateTransactionError",
    "LedgerInvariantError",
    # 数据模型
    "TransactionID",
    "Transaction",
    "TransactionType",
    "Budget",
    "BudgetPeriod",
    "BudgetStatus",
    "Ledger",
    # 数据库
    "Database",
    # 服务
    "SummaryService",
    "PeriodSummary",
    "BudgetReport",
    "ExpenseController",
    "ParsedTransaction",
    "parse_date",
    "parse_transaction_input",
    # 配置
    "VERSION",
    "APP_NAME",
    "CURRENCY_SYMBOL",
    "CURRENCY_CODE",
    # 工具函数
    "format_money",
]
__version__ = VERSION
