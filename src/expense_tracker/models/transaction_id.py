"""交易ID数据模型"""
import uuid
from dataclasses import dataclass

from expense_tracker.errors import ValidationError
from expense_tracker.settings import SHORT_ID_LENGTH


@dataclass(frozen=True)
class TransactionID:
    """交易的唯一标识（不可变，可作为字典键）

    相等性与哈希值完全由内部字符串决定。
    """
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value:
            raise ValidationError("交易ID不能为空")

    @classmethod
    def new(cls) -> "TransactionID":
        """生成新的随机ID（UUID4）"""
        return cls(str(uuid.uuid4()))

    @classmethod
    def from_string(cls, value: str) -> "TransactionID":
        """从已保存的字符串原样重建ID"""
        return cls(value)

    def short(self, length: int = SHORT_ID_LENGTH) -> str:
        """获取用于显示的ID前缀"""
        return self.value[:length]

    def __str__(self) -> str:
        return self.value
