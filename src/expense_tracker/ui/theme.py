"""UI 主题工具模块 - 提供主题适配的颜色和样式"""
from typing import Final, Dict

from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QPalette

from expense_tracker.models.budget import BudgetStatus


# 语义颜色常量（收入绿色、支出红色、预警橙色）
COLOR_INCOME: Final = "#2e7d32"
COLOR_EXPENSE: Final = "#c62828"
COLOR_WARNING: Final = "#ef6c00"

BUDGET_STATUS_COLORS: Final[Dict[BudgetStatus, str]] = {
    BudgetStatus.OK: COLOR_INCOME,
    BudgetStatus.APPROACHING: COLOR_WARNING,
    BudgetStatus.OVERSPENT: COLOR_EXPENSE,
}


def get_text_color_str() -> str:
    """根据系统主题获取文字颜色字符串"""
    return QApplication.palette().color(QPalette.WindowText).name()


def get_secondary_text_color() -> str:
    """获取次要文字颜色（透明度较低）"""
    text_color = QApplication.palette().color(QPalette.WindowText)
    text_color.setAlpha(180)
    return text_color.name()


def get_card_style() -> str:
    """获取卡片样式（适配系统主题）"""
    palette = QApplication.palette()
    bg_color = palette.color(QPalette.Base)
    border_color = palette.color(QPalette.Mid)
    return f"""
        SummaryCard {{
            background-color: {bg_color.name()};
            border: 1px solid {border_color.name()};
            border-radius: 8px;
            padding: 12px;
        }}
    """


def get_balance_color(balance: float) -> str:
    """根据余额正负返回对应颜色"""
    return COLOR_INCOME if balance >= 0 else COLOR_EXPENSE


def get_budget_status_color(status: BudgetStatus) -> str:
    """根据预算状态返回对应颜色"""
    return BUDGET_STATUS_COLORS[status]
