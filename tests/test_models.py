"""
交易ID与交易模型测试

测试范围：
- TransactionID 生成、重建、相等性与哈希
- Transaction 构造校验与字段修改校验
"""
import math
from datetime import date, datetime

import pytest

from expense_tracker.errors import ValidationError
from expense_tracker.models.transaction import Transaction, TransactionType
from expense_tracker.models.transaction_id import TransactionID


class TestTransactionID:
    """交易ID"""

    def test_new_ids_are_unique(self):
        """ID-001：新生成的ID互不相同，且为 UUID 字符串"""
        ids = {TransactionID.new() for _ in range(200)}
        assert len(ids) == 200
        assert all(len(str(tx_id)) == 36 for tx_id in ids)

    def test_equality_follows_string(self):
        """ID-002：字符串相同则相等，且哈希一致"""
        a = TransactionID.from_string("abc123")
        b = TransactionID.from_string("abc123")
        assert a == b
        assert hash(a) == hash(b)
        assert {a: 1}[b] == 1
        assert a != TransactionID.from_string("abc124")

    def test_from_string_keeps_value_verbatim(self):
        """ID-003：从字符串重建时原样保留"""
        assert str(TransactionID.from_string(" x ")) == " x "

    @pytest.mark.parametrize("value", ["", None, 123])
    def test_from_string_rejects_invalid(self, value):
        """ID-004：空字符串或非字符串被拒绝"""
        with pytest.raises(ValidationError):
            TransactionID.from_string(value)

    def test_short_prefix(self):
        """ID-005：短ID为前 8 位"""
        tx_id = TransactionID.from_string("0123456789abcdef")
        assert tx_id.short() == "01234567"
        assert tx_id.short(4) == "0123"


class TestTransaction:
    """交易模型"""

    def test_valid_construction(self):
        """TX-001：合法构造，分配新ID"""
        tx = Transaction(TransactionType.EXPENSE, 12.5, date(2024, 1, 1), "餐饮", "午饭")
        assert tx.type is TransactionType.EXPENSE
        assert tx.amount == 12.5
        assert tx.date == date(2024, 1, 1)
        assert tx.category == "餐饮"
        assert tx.description == "午饭"
        assert isinstance(tx.id, TransactionID)

    def test_type_accepts_string(self):
        """TX-002：类型可用字符串指定（不区分大小写）"""
        assert Transaction("income", 1, date(2024, 1, 1), "a", "b").type is TransactionType.INCOME
        assert Transaction("EXPENSE", 1, date(2024, 1, 1), "a", "b").type is TransactionType.EXPENSE

    def test_text_fields_trimmed(self):
        """TX-003：分类和描述去除首尾空白"""
        tx = Transaction("expense", 1, date(2024, 1, 1), "  food ", " lunch ")
        assert tx.category == "food"
        assert tx.description == "lunch"

    def test_datetime_is_reduced_to_date(self):
        """TX-004：传入 datetime 时只保留日期"""
        tx = Transaction("expense", 1, datetime(2024, 1, 1, 12, 30), "a", "b")
        assert tx.date == date(2024, 1, 1)
        assert type(tx.date) is date

    @pytest.mark.parametrize("kwargs", [
        {"amount": 0},
        {"amount": -5},
        {"amount": math.nan},
        {"amount": math.inf},
        {"amount": "10"},
        {"amount": True},
        {"date": None},
        {"date": "2024-01-01"},
        {"type": None},
        {"type": "transfer"},
        {"category": None},
        {"category": "   "},
        {"description": None},
        {"description": ""},
    ])
    def test_invalid_construction(self, kwargs):
        """TX-005：任何非法字段都会导致构造失败"""
        fields = {
            "type": TransactionType.EXPENSE,
            "amount": 10.0,
            "date": date(2024, 1, 1),
            "category": "餐饮",
            "description": "午饭",
        }
        fields.update(kwargs)
        with pytest.raises(ValidationError):
            Transaction(**fields)

    def test_setters_validate_single_field(self):
        """TX-006：修改字段时校验新值，失败时原值不变"""
        tx = Transaction("expense", 10, date(2024, 1, 1), "餐饮", "午饭")

        tx.amount = 20
        tx.date = date(2024, 3, 3)
        tx.category = "交通"
        tx.description = "地铁"
        assert (tx.amount, tx.date, tx.category, tx.description) == (20.0, date(2024, 3, 3), "交通", "地铁")

        with pytest.raises(ValidationError):
            tx.amount = 0
        with pytest.raises(ValidationError):
            tx.date = None
        with pytest.raises(ValidationError):
            tx.category = " "
        with pytest.raises(ValidationError):
            tx.description = ""
        assert (tx.amount, tx.date, tx.category, tx.description) == (20.0, date(2024, 3, 3), "交通", "地铁")

    def test_id_and_type_are_read_only(self):
        """TX-007：ID和类型不可修改"""
        tx = Transaction("expense", 10, date(2024, 1, 1), "餐饮", "午饭")
        with pytest.raises(AttributeError):
            tx.type = TransactionType.INCOME
        with pytest.raises(AttributeError):
            tx.id = TransactionID.new()

    def test_row_round_trip_keeps_id(self):
        """TX-008：数据库行转换保留原ID和全部字段"""
        tx = Transaction("income", 3000, date(2024, 2, 29), "工资", "二月工资")
        restored = Transaction.from_row(tx.to_row())
        assert restored.id == tx.id
        assert restored.to_row() == tx.to_row()

    def test_from_row_rejects_bad_date(self):
        """TX-009：数据库中日期格式错误时抛出校验错误"""
        with pytest.raises(ValidationError):
            Transaction.from_row(("id-1", "expense", 1.0, "2024/01/01", "a", "b"))
