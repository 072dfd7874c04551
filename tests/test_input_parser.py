"""
文本输入解析测试

测试范围：
- 日期关键字与 ISO 日期
- 汇总起止日期
- 自由文本交易解析
"""
from datetime import date

import pytest

from expense_tracker.errors import ValidationError
from expense_tracker.services.input_parser import (
    parse_date, parse_date_range, parse_transaction_input
)
from expense_tracker.settings import DATE_KEYWORDS

TODAY = date(2024, 3, 1)


class TestParseDate:
    """日期解析"""

    @pytest.mark.parametrize("text, expected", [
        (None, TODAY),
        ("", TODAY),
        ("  ", TODAY),
        ("today", TODAY),
        ("Yesterday", date(2024, 2, 29)),
        (" TOMORROW ", date(2024, 3, 2)),
        ("2023-12-31", date(2023, 12, 31)),
    ])
    def test_valid(self, text, expected):
        """DATE-001：关键字与 YYYY-MM-DD"""
        assert parse_date(text, TODAY) == expected

    @pytest.mark.parametrize("text", ["2024/01/01", "next week", "2024-02-30", "01-01-2024"])
    def test_invalid(self, text):
        """DATE-002：无法识别的日期"""
        with pytest.raises(ValidationError):
            parse_date(text, TODAY)

    @pytest.mark.parametrize("keyword, offset", sorted(DATE_KEYWORDS.items()))
    def test_configured_keywords(self, keyword, offset):
        """DATE-003：配置中的每个日期关键字在单独输入和 on: 标记中都能识别"""
        expected = date.fromordinal(TODAY.toordinal() + offset)
        assert parse_date(keyword, TODAY) == expected
        assert parse_transaction_input(f"taxi 12 on:{keyword}", "交通", TODAY).date == expected


class TestParseDateRange:
    """汇总起止日期"""

    def test_valid_range(self):
        """RANGE-001：起止日期可以相同"""
        assert parse_date_range("2024-01-01", " 2024-01-31 ") == (date(2024, 1, 1), date(2024, 1, 31))
        assert parse_date_range("2024-02-29", "2024-02-29") == (date(2024, 2, 29), date(2024, 2, 29))
        assert parse_date_range("yesterday", "today", TODAY) == (date(2024, 2, 29), TODAY)

    @pytest.mark.parametrize("start, end", [
        ("", "2024-01-31"),
        ("2024-01-01", None),
        ("2024-01-01", "2024-02-30"),
        ("01/01/2024", "2024-01-31"),
    ])
    def test_invalid_dates(self, start, end):
        """RANGE-002：缺少或无法识别的日期"""
        with pytest.raises(ValidationError):
            parse_date_range(start, end, TODAY)

    def test_start_after_end(self):
        """RANGE-003：开始日期晚于结束日期"""
        with pytest.raises(ValidationError, match="不能晚于"):
            parse_date_range("2024-02-01", "2024-01-31", TODAY)


class TestParseTransactionInput:
    """自由文本解析"""

    def test_full_input(self):
        """PARSE-001：描述、金额、分类、日期齐全"""
        parsed = parse_transaction_input("coffee $5.50 category:food on:2024-01-01", "General", TODAY)
        assert parsed.description == "coffee"
        assert parsed.amount == 5.5
        assert parsed.category == "food"
        assert parsed.date == date(2024, 1, 1)

    def test_defaults(self):
        """PARSE-002：未指定分类和日期时使用默认分类和今天"""
        parsed = parse_transaction_input("monthly salary 3000", "Income", TODAY)
        assert parsed.description == "monthly salary"
        assert parsed.amount == 3000.0
        assert parsed.category == "Income"
        assert parsed.date == TODAY

    def test_date_keyword(self):
        """PARSE-003：日期关键字（不区分大小写）"""
        parsed = parse_transaction_input("taxi 12 on:Yesterday", "General", TODAY)
        assert parsed.date == date(2024, 2, 29)
        assert parsed.category == "General"

    def test_description_with_numbers(self):
        """PARSE-004：描述中含数字时以行尾的金额为准"""
        parsed = parse_transaction_input("lunch for 2 people 24.80", "General", TODAY)
        assert parsed.description == "lunch for 2 people"
        assert parsed.amount == pytest.approx(24.8)

    @pytest.mark.parametrize("text", [
        None,
        "",
        "   ",
        "no amount here",
        "$5.50",
        "free 0",
        "coffee 5 on:2024-13-01",
    ])
    def test_invalid_input(self, text):
        """PARSE-005：空输入、缺金额、缺描述、金额为 0、日期非法"""
        with pytest.raises(ValidationError):
            parse_transaction_input(text, "General", TODAY)

    def test_blank_default_category(self):
        """PARSE-006：未指定分类且默认分类为空"""
        with pytest.raises(ValidationError):
            parse_transaction_input("coffee 5", "", TODAY)
