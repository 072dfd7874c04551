"""用户界面模块"""
from expense_tracker.ui.main_window import MainWindow
from expense_tracker.ui.transaction_dialog import TransactionDialog, TransactionForm
from expense_tracker.ui.transaction_model import TransactionTableModel
from expense_tracker.ui.summary_widget import SummaryWidget, SummaryCard
from expense_tracker.ui.theme import (
    COLOR_INCOME, COLOR_EXPENSE, COLOR_WARNING,
    get_text_color_str, get_secondary_text_color,
    get_card_style, get_balance_color, get_budget_status_color
)

__all__ = [
    # 窗口和组件
    "MainWindow",
    "TransactionDialog",
    "TransactionForm",
    "TransactionTableModel",
    "SummaryWidget",
    "SummaryCard",
    # 主题常量和函数
    "COLOR_INCOME",
    "COLOR_EXPENSE",
    "COLOR_WARNING",
    "get_text_color_str",
    "get_secondary_text_color",
    "get_card_style",
    "get_balance_color",
    "get_budget_status_color",
]
