"""异常类型定义

可恢复的错误都继承自 LedgerError，界面层按类型捕获并提示用户；
LedgerInvariantError 表示程序缺陷，不属于该体系，也不应被捕获。
"""


class LedgerError(Exception):
    """账本相关可恢复错误的基类"""


class ValidationError(LedgerError, ValueError):
    """输入校验失败（金额、日期、文本字段、预算设置、ID 引用等）"""


class DuplicateTransactionError(ValidationError):
    """账本中已存在相同ID的交易"""


class LedgerInvariantError(AssertionError):
    """账本内部一致性检查失败"""
