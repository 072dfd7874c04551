import math
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, Tuple

from expense_tracker.errors import ValidationError
from expense_tracker.models.transaction_id import TransactionID


class TransactionType(str, Enum):
    """交易类型"""
    EXPENSE = "expense"
    INCOME = "income"

    @classmethod
    def coerce(cls, value: Any) -> "TransactionType":
        """将枚举或字符串（不区分大小写）转换为交易类型"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
        raise ValidationError(f"无效的交易类型: {value!r}")

    @property
    def display(self) -> str:
        return "收入" if self is TransactionType.INCOME else "支出"


def validate_amount(value: Any) -> float:
    """校验金额：必须为有限正数"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError("金额必须为数字")
    amount = float(value)
    if not math.isfinite(amount) or amount <= 0:
        raise ValidationError("金额必须为正数")
    return amount


def validate_date(value: Any) -> date:
    """校验日期：必须为 date 对象（datetime 取其日期部分）"""
    if isinstance(value, datetime):
        return value.date()
    if not isinstance(value, date):
        raise ValidationError("日期不能为空")
    return value


def validate_text(value: Any, field_name: str) -> str:
    """校验文本字段：去除首尾空白后不能为空"""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name}不能为空")
    return value.strip()


class Transaction:
    """记账交易数据模型

    ID 和类型在创建后不可修改；金额、日期、分类、描述可通过属性修改，
    每次赋值只校验被修改的字段。
    """

    __slots__ = ("_id", "_type", "_amount", "_date", "_category", "_description")

    def __init__(
        self,
        type: Any,
        amount: Any,
        date: Any,
        category: Any,
        description: Any,
        *,
        id: Optional[TransactionID] = None
    ):
        if id is not None and not isinstance(id, TransactionID):
            raise ValidationError("交易ID类型不正确")
        if type is None:
            raise ValidationError("交易类型不能为空")
        self._type = TransactionType.coerce(type)
        self._amount = validate_amount(amount)
        self._date = validate_date(date)
        self._category = validate_text(category, "分类")
        self._description = validate_text(description, "描述")
        self._id = id if id is not None else TransactionID.new()

    @property
    def id(self) -> TransactionID:
        return self._id

    @property
    def type(self) -> TransactionType:
        return self._type

    @property
    def amount(self) -> float:
        return self._amount

    @amount.setter
    def amount(self, value: Any) -> None:
        self._amount = validate_amount(value)

    @property
    def date(self) -> date:
        return self._date

    @date.setter
    def date(self, value: Any) -> None:
        self._date = validate_date(value)

    @property
    def category(self) -> str:
        return self._category

    @category.setter
    def category(self, value: Any) -> None:
        self._category = validate_text(value, "分类")

    @property
    def description(self) -> str:
        return self._description

    @description.setter
    def description(self, value: Any) -> None:
        self._description = validate_text(value, "描述")

    @property
    def is_expense(self) -> bool:
        return self._type is TransactionType.EXPENSE

    @classmethod
    def from_row(cls, row: Tuple) -> "Transaction":
        """从数据库行创建Transaction对象（保留原有ID）"""
        try:
            tx_date = date.fromisoformat(row[3])
        except (TypeError, ValueError):
            raise ValidationError(f"日期格式不正确: {row[3]!r}")
        return cls(
            type=row[1],
            amount=row[2],
            date=tx_date,
            category=row[4],
            description=row[5],
            id=TransactionID.from_string(row[0])
        )

    def to_row(self) -> Tuple[str, str, float, str, str, str]:
        """转换为数据库行"""
        return (
            str(self._id),
            self._type.value,
            self._amount,
            self._date.isoformat(),
            self._category,
            self._description
        )

    def __repr__(self) -> str:
        return (
            f"Transaction(id={self._id.short()!r}, type={self._type.value!r}, "
            f"amount={self._amount!r}, date={self._date.isoformat()!r}, "
            f"category={self._category!r}, description={self._description!r})"
        )
