"""
Expense Tracker 主入口
"""
import logging
import sys
from pathlib import Path

# 将 src 目录添加到 Python 路径（仅在直接运行时需要）
_src_dir = Path(__file__).resolve().parent.parent
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from PySide6.QtWidgets import QApplication

from expense_tracker.db.database import Database
from expense_tracker.services.expense_controller import ExpenseController
from expense_tracker.ui.main_window import MainWindow


def main() -> int:
    """应用程序主入口"""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    app = QApplication(sys.argv)

    with Database() as db:
        ledger = db.load_ledger()
        controller = ExpenseController(ledger, db)

        window = MainWindow(controller)
        window.show()

        return app.exec()


if __name__ == "__main__":
    sys.exit(main())
