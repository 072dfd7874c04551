import logging
import sqlite3
from pathlib import Path
from typing import Optional, Union, Final

from expense_tracker.errors import LedgerError
from expense_tracker.settings import DB_PATH, DB_SCHEMA_VERSION
from expense_tracker.models.budget import Budget
from expense_tracker.models.ledger import Ledger
from expense_tracker.models.transaction import Transaction

logger: Final = logging.getLogger(__name__)


class Database:
    """账本持久化层，整体保存/加载账本，支持上下文管理器使用方式"""

    def __init__(self, db_path: Optional[Union[str, Path]] = None):
        self._db_path = Path(db_path) if db_path is not None else DB_PATH
        self.conn: Optional[sqlite3.Connection] = None
        try:
            self._connect()
            self._init_db()
        except sqlite3.DatabaseError:
            if not self._db_path.is_file():
                raise
            logger.exception(f"数据库文件无法打开: {self._db_path}")
            self._move_aside_corrupt_file()
            self._connect()
            self._init_db()

    def _connect(self) -> None:
        """建立数据库连接（必要时创建数据目录）"""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(str(self._db_path))

    def _move_aside_corrupt_file(self) -> None:
        """将损坏的数据库文件重命名为 *.corrupt，以便重新创建空数据库"""
        self.close()
        backup = self._db_path.with_name(self._db_path.name + ".corrupt")
        self._db_path.replace(backup)
        logger.warning(f"已将损坏的数据库文件移至 {backup}，使用新账本")

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _init_db(self) -> None:
        """初始化数据库schema，支持迁移"""
        cursor = self.conn.cursor()

        # 检查schema版本
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY
            )
        """)
        cursor.execute("SELECT version FROM schema_version")
        row = cursor.fetchone()
        current_version = row[0] if row else 0

        if current_version < 1:
            self._migrate_v1(cursor)

        if current_version < DB_SCHEMA_VERSION:
            cursor.execute("DELETE FROM schema_version")
            cursor.execute("INSERT INTO schema_version (version) VALUES (?)", (DB_SCHEMA_VERSION,))

        self.conn.commit()

    def _migrate_v1(self, cursor: sqlite3.Cursor) -> None:
        """V1: transactions表和单行budget表"""
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS transactions (
                id TEXT PRIMARY KEY,
                type TEXT NOT NULL,
                amount REAL NOT NULL,
                date TEXT NOT NULL,
                category TEXT NOT NULL,
                description TEXT NOT NULL
            )
        """)
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_transactions_date
            ON transactions(date DESC)
        """)
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS budget (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                limit_amount REAL NOT NULL,
                period TEXT NOT NULL
            )
        """)

    # ==================== 保存 / 加载 ====================

    def save_ledger(self, ledger: Ledger) -> None:
        """保存整个账本（交易 + 预算），在同一个事务中完成，失败时不留下部分数据"""
        rows = [tx.to_row() for tx in ledger.all_sorted()]
        budget = ledger.budget
        with self.conn:
            self.conn.execute("DELETE FROM transactions")
            self.conn.executemany("""
                INSERT INTO transactions (id, type, amount, date, category, description)
                VALUES (?, ?, ?, ?, ?, ?)
            """, rows)
            self.conn.execute("""
                INSERT OR REPLACE INTO budget (id, limit_amount, period)
                VALUES (1, ?, ?)
            """, (budget.limit, budget.period.value))
        logger.info(f"账本已保存: {len(rows)} 条交易")

    def load_ledger(self) -> Ledger:
        """加载账本；没有已保存的数据或加载失败时返回空账本（默认预算）"""
        try:
            cursor = self.conn.cursor()
            cursor.execute("SELECT limit_amount, period FROM budget WHERE id = 1")
            budget_row = cursor.fetchone()
            cursor.execute("""
                SELECT id, type, amount, date, category, description
                FROM transactions
                ORDER BY date DESC
            """)
            rows = cursor.fetchall()

            if budget_row is None and not rows:
                logger.info("未找到已保存的数据，使用新账本")
                return Ledger()

            budget = Budget(*budget_row) if budget_row else Budget()
            ledger = Ledger.restore((Transaction.from_row(row) for row in rows), budget)
        except (sqlite3.Error, LedgerError, TypeError):
            logger.exception("加载账本失败，使用新账本")
            return Ledger()

        logger.info(f"账本已加载: {len(ledger)} 条交易")
        return ledger

    def close(self) -> None:
        """关闭数据库连接"""
        if self.conn is not None:
            self.conn.close()
            self.conn = None
