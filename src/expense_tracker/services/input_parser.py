"""自由文本输入解析模块

示例输入：``coffee $5.50 category:food on:yesterday``
"""
import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Tuple, Final

from expense_tracker.errors import ValidationError
from expense_tracker.models.transaction import validate_amount, validate_text
from expense_tracker.settings import DATE_KEYWORDS

DATE_FORMAT_HINT: Final = "日期格式不正确，请使用 YYYY-MM-DD、today、yesterday 或 tomorrow"

# 分组：描述（惰性匹配到金额为止）、金额、可选分类、可选日期
TRANSACTION_PATTERN: Final = re.compile(
    r"^\s*"
    r"(?P<description>.*?)"
    r"\s*\$?(?P<amount>\d+(?:\.\d{1,2})?)"
    r"(?:.*?\bcategory:(?P<category>\w+))?"
    r"(?:.*?\bon:(?P<date>\d{4}-\d{2}-\d{2}|" + "|".join(DATE_KEYWORDS) + r"))?"
    r"\s*$",
    re.IGNORECASE
)


@dataclass(frozen=True)
class ParsedTransaction:
    """解析后的交易字段（均已校验）"""
    description: str
    amount: float
    category: str
    date: date


def parse_date(text: Optional[str], today: Optional[date] = None) -> date:
    """解析日期：空白表示今天，支持 today/yesterday/tomorrow 及 YYYY-MM-DD"""
    today = today or date.today()
    if text is None or not text.strip():
        return today

    value = text.strip().lower()
    if value in DATE_KEYWORDS:
        return today + timedelta(days=DATE_KEYWORDS[value])
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(DATE_FORMAT_HINT)


def parse_date_range(
    start_text: Optional[str], end_text: Optional[str], today: Optional[date] = None
) -> Tuple[date, date]:
    """解析汇总用的起止日期（均为必填，开始日期不能晚于结束日期）"""
    if start_text is None or not start_text.strip() or end_text is None or not end_text.strip():
        raise ValidationError("请输入开始日期和结束日期")
    start = parse_date(start_text, today)
    end = parse_date(end_text, today)
    if start > end:
        raise ValidationError(f"开始日期 {start} 不能晚于结束日期 {end}")
    return start, end


def parse_transaction_input(
    text: Optional[str], default_category: str, today: Optional[date] = None
) -> ParsedTransaction:
    """解析一行自由文本为交易字段"""
    if text is None or not text.strip():
        raise ValidationError("输入不能为空")

    match = TRANSACTION_PATTERN.match(text)
    if not match:
        raise ValidationError(
            "输入必须包含描述和金额，例如 'coffee $5.50 category:food on:2024-01-01'"
        )

    amount = validate_amount(float(match.group("amount")))
    tx_date = parse_date(match.group("date"), today)
    description = validate_text(match.group("description") or "", "描述")
    category = validate_text(match.group("category") or default_category, "分类")

    return ParsedTransaction(
        description=description,
        amount=amount,
        category=category,
        date=tx_date
    )
