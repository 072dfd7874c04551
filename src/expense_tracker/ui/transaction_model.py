"""交易表格数据模型模块"""
from typing import List, Optional, Any, Final
from enum import IntEnum

from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from PySide6.QtGui import QColor

from expense_tracker.models.transaction import Transaction
from expense_tracker.settings import format_money
from expense_tracker.ui.theme import COLOR_INCOME, COLOR_EXPENSE


class TransactionColumn(IntEnum):
    """交易表格列定义"""
    ID = 0
    DATE = 1
    TYPE = 2
    AMOUNT = 3
    CATEGORY = 4
    DESCRIPTION = 5


COLUMN_HEADERS: Final = ["ID", "日期", "类型", "金额", "分类", "描述"]


class TransactionTableModel(QAbstractTableModel):
    """交易表格数据模型（Model/View架构）"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._transactions: List[Transaction] = []

    def set_transactions(self, transactions: List[Transaction]) -> None:
        """设置交易数据"""
        self.beginResetModel()
        self._transactions = list(transactions)
        self.endResetModel()

    def get_transaction(self, row: int) -> Optional[Transaction]:
        """根据行号获取交易对象"""
        if 0 <= row < len(self._transactions):
            return self._transactions[row]
        return None

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._transactions)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(TransactionColumn)

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole) -> Any:
        if not index.isValid() or not (0 <= index.row() < len(self._transactions)):
            return None

        tx = self._transactions[index.row()]
        col = index.column()

        if role == Qt.DisplayRole:
            if col == TransactionColumn.ID:
                return tx.id.short()
            elif col == TransactionColumn.DATE:
                return tx.date.isoformat()
            elif col == TransactionColumn.TYPE:
                return tx.type.display
            elif col == TransactionColumn.AMOUNT:
                return format_money(tx.amount)
            elif col == TransactionColumn.CATEGORY:
                return tx.category
            elif col == TransactionColumn.DESCRIPTION:
                return tx.description

        elif role == Qt.ToolTipRole and col == TransactionColumn.ID:
            return str(tx.id)

        elif role == Qt.TextAlignmentRole:
            return Qt.AlignCenter

        elif role == Qt.ForegroundRole:
            if col in (TransactionColumn.TYPE, TransactionColumn.AMOUNT):
                return QColor(COLOR_EXPENSE if tx.is_expense else COLOR_INCOME)

        elif role == Qt.UserRole:
            # 返回原始Transaction对象，用于编辑
            return tx

        return None

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.DisplayRole) -> Any:
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            if 0 <= section < len(COLUMN_HEADERS):
                return COLUMN_HEADERS[section]
        return None

    def flags(self, index: QModelIndex) -> Qt.ItemFlags:
        return Qt.ItemIsEnabled | Qt.ItemIsSelectable
