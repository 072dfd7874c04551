"""应用程序配置模块"""
import os
from pathlib import Path
from typing import Dict, Final

# ==================== 路径配置 ====================
DATA_DIR: Final = Path(
    os.environ.get("EXPENSE_TRACKER_DATA_DIR", Path.home() / ".expense_tracker")
)
DB_PATH: Final = DATA_DIR / "expense_tracker.db"

# ==================== 应用信息 ====================
APP_NAME: Final = "Expense Tracker"
VERSION: Final = "1.0.0"

# ==================== 数据库配置 ====================
DB_SCHEMA_VERSION: Final = 1

# ==================== 货币设置 ====================
CURRENCY_SYMBOL: Final = "$"
CURRENCY_CODE: Final = "USD"

# ==================== 业务规则 ====================
MAX_AMOUNT: Final = 1_000_000.00  # 金额上限：一百万
DEFAULT_BUDGET_LIMIT: Final = 1000.00
DEFAULT_BUDGET_PERIOD: Final = "MONTHLY"
BUDGET_WARNING_RATIO: Final = 0.8  # 支出达到预算的 80% 时提示

# ==================== 交易ID ====================
SHORT_ID_LENGTH: Final = 8  # 列表中显示的ID前缀长度

# ==================== 输入解析 ====================
DEFAULT_CATEGORY: Final = "未分类"
# 日期关键字及其相对今天的天数偏移
DATE_KEYWORDS: Final[Dict[str, int]] = {"today": 0, "yesterday": -1, "tomorrow": 1}


# ==================== 工具函数 ====================
def format_money(amount: float) -> str:
    """统一的金额格式化函数，返回货币格式（如 $1,234.56）"""
    return f"{CURRENCY_SYMBOL}{amount:,.2f}"
