"""汇总与预算组件模块"""
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QFrame,
    QLineEdit, QComboBox, QPushButton, QTableWidget, QTableWidgetItem,
    QHeaderView, QMessageBox
)

from expense_tracker.errors import ValidationError
from expense_tracker.models.budget import BudgetPeriod
from expense_tracker.models.transaction import TransactionType
from expense_tracker.services.expense_controller import ExpenseController
from expense_tracker.services.input_parser import parse_date_range
from expense_tracker.services.summary_service import SummaryService
from expense_tracker.settings import format_money
from expense_tracker.ui.theme import (
    COLOR_INCOME, COLOR_EXPENSE,
    get_text_color_str, get_secondary_text_color, get_card_style,
    get_balance_color, get_budget_status_color
)


class SummaryCard(QFrame):
    """数据卡片组件"""

    def __init__(self, title: str, parent=None):
        super().__init__(parent)
        self.setFrameStyle(QFrame.StyledPanel | QFrame.Raised)
        self.setStyleSheet(get_card_style())

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(8)

        self.title_label = QLabel(title)
        self.title_label.setStyleSheet(f"color: {get_secondary_text_color()}; font-size: 13px;")
        layout.addWidget(self.title_label)

        self.value_label = QLabel(format_money(0))
        self._update_value_style()
        layout.addWidget(self.value_label)

        self.sub_label = QLabel("")
        self._update_sub_style()
        layout.addWidget(self.sub_label)

    def _update_value_style(self, color: str = None) -> None:
        if color is None:
            color = get_text_color_str()
        self.value_label.setStyleSheet(f"color: {color}; font-size: 28px; font-weight: bold;")

    def _update_sub_style(self, color: str = None) -> None:
        if color is None:
            color = get_secondary_text_color()
        self.sub_label.setStyleSheet(f"color: {color}; font-size: 12px;")

    def set_value(self, value: float, color: str = None) -> None:
        """设置主数值"""
        self.value_label.setText(format_money(value))
        self._update_value_style(color)

    def set_sub_text(self, text: str, color: str = None) -> None:
        """设置副信息"""
        self.sub_label.setText(text)
        self._update_sub_style(color)


class SummaryWidget(QWidget):
    """本月收支、分类明细与预算状态"""

    def __init__(
        self,
        summary_service: SummaryService,
        controller: ExpenseController,
        on_budget_changed: Optional[Callable[[], None]] = None,
        parent=None
    ):
        super().__init__(parent)
        self.summary_service = summary_service
        self.controller = controller
        self.on_budget_changed = on_budget_changed

        # 区间汇总默认为本月
        today = date.today()
        self.range_start, self.range_end = SummaryService.get_month_range(today.year, today.month)
        self._init_ui()

    def _init_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(20)

        self.title_label = QLabel()
        self.title_label.setStyleSheet(
            f"font-size: 20px; font-weight: bold; color: {get_text_color_str()};"
        )
        layout.addWidget(self.title_label)

        cards_layout = QHBoxLayout()
        cards_layout.setSpacing(16)
        self.expense_card = SummaryCard("本月支出")
        self.income_card = SummaryCard("本月收入")
        self.balance_card = SummaryCard("本月结余")
        self.budget_card = SummaryCard("预算剩余")
        for card in (self.expense_card, self.income_card, self.balance_card, self.budget_card):
            cards_layout.addWidget(card)
        layout.addLayout(cards_layout)

        # 预算设置
        budget_layout = QHBoxLayout()
        budget_layout.addWidget(QLabel("预算限额:"))
        self.limit_input = QLineEdit()
        budget_layout.addWidget(self.limit_input)
        self.period_combo = QComboBox()
        for period in BudgetPeriod:
            self.period_combo.addItem(period.display, period.value)
        budget_layout.addWidget(self.period_combo)
        set_budget_btn = QPushButton("设置预算")
        set_budget_btn.clicked.connect(self._on_set_budget)
        budget_layout.addWidget(set_budget_btn)
        budget_layout.addStretch()
        layout.addLayout(budget_layout)

        # 本月支出分类明细
        layout.addWidget(QLabel("本月支出分类"))
        self.category_table = self._create_category_table()
        layout.addWidget(self.category_table)

        # 按日期区间的分类汇总（支出与收入）
        range_layout = QHBoxLayout()
        range_layout.addWidget(QLabel("开始日期:"))
        self.start_input = QLineEdit(self.range_start.isoformat())
        self.start_input.setPlaceholderText("YYYY-MM-DD")
        range_layout.addWidget(self.start_input)
        range_layout.addWidget(QLabel("结束日期:"))
        self.end_input = QLineEdit(self.range_end.isoformat())
        self.end_input.setPlaceholderText("YYYY-MM-DD")
        range_layout.addWidget(self.end_input)
        range_btn = QPushButton("刷新区间汇总")
        range_btn.clicked.connect(self._on_refresh_range)
        range_layout.addWidget(range_btn)
        range_layout.addStretch()
        layout.addLayout(range_layout)

        tables_layout = QHBoxLayout()
        expense_layout = QVBoxLayout()
        expense_layout.addWidget(QLabel("区间支出分类"))
        self.range_expense_table = self._create_category_table()
        expense_layout.addWidget(self.range_expense_table)
        tables_layout.addLayout(expense_layout)
        income_layout = QVBoxLayout()
        income_layout.addWidget(QLabel("区间收入分类"))
        self.range_income_table = self._create_category_table()
        income_layout.addWidget(self.range_income_table)
        tables_layout.addLayout(income_layout)
        layout.addLayout(tables_layout)

    @staticmethod
    def _create_category_table() -> QTableWidget:
        table = QTableWidget(0, 3)
        table.setHorizontalHeaderLabels(["分类", "金额", "占比"])
        table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        table.setEditTriggers(QTableWidget.NoEditTriggers)
        return table

    @staticmethod
    def _fill_category_table(table: QTableWidget, breakdown: List[Dict[str, Any]]) -> None:
        table.setRowCount(len(breakdown))
        for row, item in enumerate(breakdown):
            table.setItem(row, 0, QTableWidgetItem(item["category"]))
            table.setItem(row, 1, QTableWidgetItem(format_money(item["amount"])))
            table.setItem(row, 2, QTableWidgetItem(f"{item['percentage']:.1f}%"))

    def refresh(self) -> None:
        """重新查询账本并刷新显示"""
        today = date.today()
        self.title_label.setText(f"📊 {today.year}年{today.month}月 财务概览")

        month = self.summary_service.get_current_month_summary(today)
        self.expense_card.set_value(month.expense, COLOR_EXPENSE)
        self.income_card.set_value(month.income, COLOR_INCOME)
        self.balance_card.set_value(month.balance, get_balance_color(month.balance))

        overall = self.summary_service.get_overall_summary()
        self.balance_card.set_sub_text(f"累计结余 {format_money(overall.balance)}")

        report = self.summary_service.get_budget_report(today)
        status_color = get_budget_status_color(report.status)
        self.budget_card.set_value(report.remaining, status_color)
        self.budget_card.set_sub_text(
            f"{report.status.value}：{report.period.display} {report.start} ~ {report.end}，"
            f"已用 {format_money(report.spent)} / {format_money(report.limit)}",
            status_color
        )

        if not self.limit_input.hasFocus():
            self.limit_input.setText(f"{report.limit:.2f}")
            self.period_combo.setCurrentIndex(self.period_combo.findData(report.period.value))

        self._fill_category_table(
            self.category_table, self.summary_service.get_monthly_expense_breakdown(today)
        )
        self._refresh_range_tables()

    def _refresh_range_tables(self) -> None:
        """按当前起止日期刷新区间分类汇总"""
        self._fill_category_table(
            self.range_expense_table,
            self.summary_service.get_category_breakdown(
                self.range_start, self.range_end, TransactionType.EXPENSE
            )
        )
        self._fill_category_table(
            self.range_income_table,
            self.summary_service.get_category_breakdown(
                self.range_start, self.range_end, TransactionType.INCOME
            )
        )

    def _on_refresh_range(self) -> None:
        """校验起止日期并刷新区间汇总"""
        try:
            start, end = parse_date_range(self.start_input.text(), self.end_input.text())
        except ValidationError as e:
            QMessageBox.warning(self, "输入错误", str(e))
            return
        self.range_start, self.range_end = start, end
        self._refresh_range_tables()

    def _on_set_budget(self) -> None:
        """设置预算"""
        try:
            try:
                limit = float(self.limit_input.text().strip())
            except ValueError:
                raise ValidationError("预算限额格式不正确")
            self.controller.set_budget(limit, self.period_combo.currentData())
        except ValidationError as e:
            QMessageBox.warning(self, "输入错误", str(e))
            return

        # 预算修改不会通知账本观察者，需要手动刷新
        self.refresh()
        if self.on_budget_changed is not None:
            self.on_budget_changed()
