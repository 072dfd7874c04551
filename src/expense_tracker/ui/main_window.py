import logging
import sqlite3
from typing import Optional, Final

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QTableView, QHeaderView, QLineEdit, QComboBox,
    QMessageBox, QTabWidget, QStatusBar, QInputDialog
)
from PySide6.QtGui import QCloseEvent, QAction, QKeySequence, QShortcut

from expense_tracker.errors import ValidationError
from expense_tracker.models.transaction import Transaction, TransactionType
from expense_tracker.services.expense_controller import ExpenseController
from expense_tracker.services.summary_service import SummaryService
from expense_tracker.settings import APP_NAME, DEFAULT_CATEGORY, format_money
from expense_tracker.ui.transaction_model import TransactionTableModel
from expense_tracker.ui.transaction_dialog import TransactionDialog
from expense_tracker.ui.summary_widget import SummaryWidget

logger: Final = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """主窗口（作为账本观察者，账本变化后重新查询并刷新）"""

    def __init__(self, controller: ExpenseController):
        super().__init__()
        self.controller = controller
        self.ledger = controller.ledger
        self.summary_service = SummaryService(self.ledger)

        # 记忆上一次使用的分类
        self._last_category = ""

        self.setWindowTitle(f"{APP_NAME} - 本地记账软件")
        self.resize(1000, 700)

        self._init_menu()
        self._init_ui()
        self._init_shortcuts()
        self._init_statusbar()

        self.ledger.add_observer(self._refresh_all)
        self._refresh_all()

    def _init_menu(self) -> None:
        """初始化菜单栏"""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("文件")

        new_action = QAction("新增交易", self)
        new_action.setShortcut(QKeySequence.New)
        new_action.triggered.connect(self._on_new_transaction)
        file_menu.addAction(new_action)

        save_action = QAction("保存", self)
        save_action.setShortcut(QKeySequence.Save)
        save_action.triggered.connect(self._on_save)
        file_menu.addAction(save_action)

        file_menu.addSeparator()

        exit_action = QAction("退出", self)
        exit_action.setShortcut(QKeySequence.Quit)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        edit_menu = menubar.addMenu("编辑")

        edit_action = QAction("编辑交易", self)
        edit_action.triggered.connect(self._on_edit_transaction)
        edit_menu.addAction(edit_action)

        delete_action = QAction("删除交易", self)
        delete_action.triggered.connect(self._on_delete_transaction)
        edit_menu.addAction(delete_action)

        delete_by_id_action = QAction("按ID删除...", self)
        delete_by_id_action.triggered.connect(self._on_delete_by_id)
        edit_menu.addAction(delete_by_id_action)

    def _init_ui(self) -> None:
        """初始化界面"""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)
        layout.setContentsMargins(0, 0, 0, 0)

        self.tab_widget = QTabWidget()

        # Tab 1: 交易记录
        transactions_widget = QWidget()
        transactions_layout = QVBoxLayout(transactions_widget)
        transactions_layout.setContentsMargins(10, 10, 10, 10)

        # 快速录入：coffee $5.50 category:food on:yesterday
        quick_layout = QHBoxLayout()
        self.quick_type_combo = QComboBox()
        for tx_type in TransactionType:
            self.quick_type_combo.addItem(tx_type.display, tx_type.value)
        quick_layout.addWidget(self.quick_type_combo)

        self.quick_input = QLineEdit()
        self.quick_input.setPlaceholderText("coffee $5.50 category:food on:yesterday")
        self.quick_input.returnPressed.connect(self._on_quick_add)
        quick_layout.addWidget(self.quick_input)

        quick_btn = QPushButton("快速添加")
        quick_btn.clicked.connect(self._on_quick_add)
        quick_layout.addWidget(quick_btn)
        transactions_layout.addLayout(quick_layout)

        # 工具栏
        toolbar_layout = QHBoxLayout()

        new_btn = QPushButton("➕ 新增交易")
        new_btn.clicked.connect(self._on_new_transaction)
        toolbar_layout.addWidget(new_btn)

        edit_btn = QPushButton("✏️ 编辑")
        edit_btn.clicked.connect(self._on_edit_transaction)
        toolbar_layout.addWidget(edit_btn)

        delete_btn = QPushButton("🗑️ 删除")
        delete_btn.clicked.connect(self._on_delete_transaction)
        toolbar_layout.addWidget(delete_btn)

        toolbar_layout.addStretch()
        transactions_layout.addLayout(toolbar_layout)

        # 交易列表（使用Model/View架构）
        self.transaction_model = TransactionTableModel()
        self.transaction_view = QTableView()
        self.transaction_view.setModel(self.transaction_model)
        self.transaction_view.setSelectionBehavior(QTableView.SelectRows)
        self.transaction_view.setSelectionMode(QTableView.SingleSelection)
        self.transaction_view.setAlternatingRowColors(True)
        self.transaction_view.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.transaction_view.doubleClicked.connect(self._on_edit_transaction)
        transactions_layout.addWidget(self.transaction_view)

        self.tab_widget.addTab(transactions_widget, "📝 交易记录")

        # Tab 2: 汇总与预算
        self.summary = SummaryWidget(
            self.summary_service,
            self.controller,
            on_budget_changed=lambda: self.statusbar.showMessage("预算已更新", 3000)
        )
        self.tab_widget.addTab(self.summary, "📊 汇总与预算")

        layout.addWidget(self.tab_widget)

    def _init_shortcuts(self) -> None:
        """初始化键盘快捷键"""
        delete_shortcut = QShortcut(QKeySequence.Delete, self.transaction_view)
        delete_shortcut.activated.connect(self._on_delete_transaction)

        enter_shortcut = QShortcut(QKeySequence("Return"), self.transaction_view)
        enter_shortcut.activated.connect(self._on_edit_transaction)

    def _init_statusbar(self) -> None:
        """初始化状态栏"""
        self.statusbar = QStatusBar()
        self.setStatusBar(self.statusbar)
        self.statusbar.showMessage("就绪")

    def _refresh_all(self) -> None:
        """重新查询账本并刷新所有视图"""
        transactions = self.ledger.all_sorted()
        self.transaction_model.set_transactions(transactions)
        self.summary.refresh()
        self.statusbar.showMessage(f"共 {len(transactions)} 条交易记录", 3000)

    def _known_categories(self):
        return sorted({tx.category for tx in self.ledger.all_sorted()})

    def _get_selected_transaction(self) -> Optional[Transaction]:
        """获取当前选中的交易"""
        indexes = self.transaction_view.selectedIndexes()
        if not indexes:
            return None
        return self.transaction_model.get_transaction(indexes[0].row())

    def _on_quick_add(self) -> None:
        """解析快速录入的文本并新增交易"""
        try:
            tx = self.controller.add_transaction_from_input(
                self.quick_input.text(),
                self.quick_type_combo.currentData(),
                self._last_category or DEFAULT_CATEGORY
            )
        except ValidationError as e:
            QMessageBox.warning(self, "输入错误", str(e))
            return
        self.quick_input.clear()
        self.statusbar.showMessage(f"已添加: {tx.description} {format_money(tx.amount)}", 3000)

    def _on_new_transaction(self) -> None:
        """新增交易"""
        dialog = TransactionDialog(
            self,
            categories=self._known_categories(),
            last_category=self._last_category
        )
        if dialog.exec() != TransactionDialog.Accepted:
            return
        form = dialog.get_result()
        if not form:
            return
        try:
            self.controller.add_transaction(
                form.description, form.amount, form.category,
                form.date.isoformat(), form.type
            )
        except ValidationError as e:
            QMessageBox.warning(self, "保存失败", str(e))
            return
        self._last_category = form.category
        self.statusbar.showMessage("交易已保存", 3000)

    def _on_edit_transaction(self) -> None:
        """编辑交易（类型不可修改）"""
        tx = self._get_selected_transaction()
        if not tx:
            QMessageBox.information(self, "提示", "请先选择要编辑的交易")
            return

        dialog = TransactionDialog(self, transaction=tx, categories=self._known_categories())
        if dialog.exec() != TransactionDialog.Accepted:
            return
        form = dialog.get_result()
        if not form:
            return
        try:
            self.controller.edit_transaction(
                str(tx.id),
                description=form.description,
                amount=form.amount,
                category=form.category,
                date_text=form.date.isoformat()
            )
        except ValidationError as e:
            QMessageBox.warning(self, "更新失败", str(e))
            return
        self.statusbar.showMessage("交易已更新", 3000)

    def _on_delete_transaction(self) -> None:
        """删除选中的交易"""
        tx = self._get_selected_transaction()
        if not tx:
            QMessageBox.information(self, "提示", "请先选择要删除的交易")
            return

        reply = QMessageBox.question(
            self,
            "确认删除",
            f"确定要删除这笔交易吗？\n\n"
            f"ID: {tx.id.short()}\n"
            f"日期: {tx.date.isoformat()}\n"
            f"类型: {tx.type.display}\n"
            f"金额: {format_money(tx.amount)}\n"
            f"描述: {tx.description}\n\n"
            f"此操作无法撤销！",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No
        )
        if reply == QMessageBox.Yes:
            self._delete_by_reference(str(tx.id))

    def _on_delete_by_id(self) -> None:
        """按完整ID或ID前缀删除交易"""
        reference, ok = QInputDialog.getText(self, "按ID删除", "交易ID或前缀:")
        if ok:
            self._delete_by_reference(reference)

    def _delete_by_reference(self, reference: str) -> None:
        try:
            self.controller.delete_transaction(reference)
        except ValidationError as e:
            QMessageBox.warning(self, "删除失败", str(e))
            return
        self.statusbar.showMessage("交易已删除", 3000)

    def _on_save(self) -> None:
        """保存账本"""
        try:
            self.controller.save_state()
        except sqlite3.Error as e:
            logger.exception("保存账本失败")
            QMessageBox.critical(self, "保存失败", f"数据库错误: {e}")
            return
        self.statusbar.showMessage("已保存", 3000)

    def closeEvent(self, event: QCloseEvent) -> None:
        """窗口关闭事件：保存账本并注销观察者"""
        self.ledger.remove_observer(self._refresh_all)
        try:
            self.controller.save_state()
        except sqlite3.Error:
            logger.exception("退出时保存账本失败")
        event.accept()
