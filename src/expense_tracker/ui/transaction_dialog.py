"""交易编辑对话框模块"""
from dataclasses import dataclass
from datetime import date
from typing import Optional, List

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLineEdit, QComboBox, QDateEdit,
    QPushButton, QMessageBox
)
from PySide6.QtCore import QDate

from expense_tracker.models.transaction import Transaction, TransactionType
from expense_tracker.settings import MAX_AMOUNT, format_money, CURRENCY_SYMBOL


@dataclass
class TransactionForm:
    """对话框提交的表单数据"""
    type: TransactionType
    amount: float
    date: date
    category: str
    description: str


class TransactionDialog(QDialog):
    """交易编辑对话框（新增/编辑）

    编辑模式下交易类型不可修改。
    """

    def __init__(
        self,
        parent=None,
        transaction: Optional[Transaction] = None,
        categories: Optional[List[str]] = None,
        last_category: str = ""
    ):
        super().__init__(parent)
        self.transaction = transaction
        self.categories = categories or []
        self.last_category = last_category
        self.result_form: Optional[TransactionForm] = None

        self._is_edit_mode = transaction is not None
        self._init_ui()

        if self._is_edit_mode:
            self._load_transaction_data()

    def _init_ui(self) -> None:
        title = "编辑交易" if self._is_edit_mode else "新增交易"
        self.setWindowTitle(title)
        self.setMinimumWidth(400)

        layout = QVBoxLayout(self)
        form_layout = QFormLayout()
        form_layout.setSpacing(12)

        # 类型
        self.type_combo = QComboBox()
        for tx_type in TransactionType:
            self.type_combo.addItem(tx_type.display, tx_type.value)
        self.type_combo.setEnabled(not self._is_edit_mode)
        form_layout.addRow("类型:", self.type_combo)

        # 金额
        self.amount_input = QLineEdit()
        self.amount_input.setPlaceholderText(f"请输入金额 ({CURRENCY_SYMBOL})")
        form_layout.addRow(f"金额 ({CURRENCY_SYMBOL}):", self.amount_input)

        # 日期
        self.date_input = QDateEdit()
        self.date_input.setCalendarPopup(True)
        self.date_input.setDisplayFormat("yyyy-MM-dd")
        self.date_input.setDate(QDate.currentDate())
        form_layout.addRow("日期:", self.date_input)

        # 分类（下拉框，可编辑）
        self.category_combo = QComboBox()
        self.category_combo.setEditable(True)
        self.category_combo.setInsertPolicy(QComboBox.NoInsert)
        self.category_combo.addItem("")
        self.category_combo.addItems(self.categories)
        form_layout.addRow("分类:", self.category_combo)

        # 描述
        self.description_input = QLineEdit()
        form_layout.addRow("描述:", self.description_input)

        layout.addLayout(form_layout)

        # 按钮
        btn_layout = QHBoxLayout()
        btn_layout.addStretch()

        cancel_btn = QPushButton("取消")
        cancel_btn.clicked.connect(self.reject)
        btn_layout.addWidget(cancel_btn)

        save_btn = QPushButton("保存")
        save_btn.setDefault(True)
        save_btn.clicked.connect(self._on_save)
        btn_layout.addWidget(save_btn)

        layout.addLayout(btn_layout)

        if not self._is_edit_mode and self.last_category:
            self.category_combo.setCurrentText(self.last_category)

    def _load_transaction_data(self) -> None:
        """加载交易数据到表单"""
        tx = self.transaction
        idx = self.type_combo.findData(tx.type.value)
        if idx >= 0:
            self.type_combo.setCurrentIndex(idx)
        self.amount_input.setText(f"{tx.amount:.2f}")
        self.date_input.setDate(QDate(tx.date.year, tx.date.month, tx.date.day))
        self.category_combo.setCurrentText(tx.category)
        self.description_input.setText(tx.description)

    def _on_save(self) -> None:
        """保存按钮点击"""
        try:
            amount_str = self.amount_input.text().strip().lstrip(CURRENCY_SYMBOL)
            if not amount_str:
                raise ValueError("请输入金额")

            try:
                amount = float(amount_str)
            except ValueError:
                raise ValueError("金额格式不正确")

            if amount <= 0:
                raise ValueError("金额必须为正数")
            if amount > MAX_AMOUNT:
                raise ValueError(f"金额过大（上限：{format_money(MAX_AMOUNT)}）")

            category = self.category_combo.currentText().strip()
            if not category:
                raise ValueError("请输入分类")

            description = self.description_input.text().strip()
            if not description:
                raise ValueError("请输入描述")

            qdate = self.date_input.date()
            self.result_form = TransactionForm(
                type=TransactionType.coerce(self.type_combo.currentData()),
                amount=amount,
                date=date(qdate.year(), qdate.month(), qdate.day()),
                category=category,
                description=description
            )
            self.accept()

        except ValueError as e:
            QMessageBox.warning(self, "输入错误", str(e))

    def get_result(self) -> Optional[TransactionForm]:
        """获取编辑结果"""
        return self.result_form
