"""
Value coercion for imported spreadsheet cells.

Every function here is total: bad input degrades to a default
(None for amounts, today for dates, OTHER for payment methods), never raises.
"""

from datetime import date, datetime
from decimal import Decimal
import math
import re
from typing import Any, Optional

import pandas as pd

from models.records import PaymentMethod
from utils.text_utils import strip_accents

_CURRENCY_AND_SPACE = re.compile(r"[$€£¥\s ]")
_NUMBER = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)")


# ===================
# AMOUNTS
# ===================

def parse_amount(value: Any) -> Optional[float]:
    """
    Parse a cell into a number, or None if it is not numeric.

    Strips currency symbols and whitespace, then resolves separators:
    - "$1,234.56" -> 1234.56   (comma is thousands, dot is decimal)
    - "1.234,56"  -> 1234.56   (dot is thousands, comma is decimal)
    - "1,500"     -> 1500.0    (lone comma + 3 digits is thousands)
    - "12,5"      -> 12.5      (lone comma otherwise is decimal)
    - "2025-03-15" -> None     (the whole string must be a number)
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float, Decimal)):
        number = float(value)
        return number if math.isfinite(number) else None

    text = _CURRENCY_AND_SPACE.sub("", str(value))
    if not text:
        return None

    text = _resolve_separators(text)
    if not _NUMBER.fullmatch(text):
        return None

    number = float(text)
    return number if math.isfinite(number) else None


def _resolve_separators(text: str) -> str:
    """Drop thousands separators and turn the decimal separator into '.'."""
    has_comma = "," in text
    has_dot = "." in text

    if has_comma and has_dot:
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")

    if has_comma:
        if text.count(",") > 1:
            return text.replace(",", "")
        whole, fraction = text.split(",")
        if len(fraction) == 3 and whole.lstrip("+-"):
            return whole + fraction
        return f"{whole}.{fraction}"

    if has_dot and text.count(".") > 1:
        return text.replace(".", "")

    return text


def is_numeric_cell(value: Any) -> bool:
    """True if the cell parses as a number under parse_amount rules."""
    return parse_amount(value) is not None


# ===================
# DATES
# ===================

_ISO_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})")
_SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})\b")
_DASH_DATE = re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})\b")
_SHORT_SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2})$")


def coerce_date(value: Any, today: Optional[date] = None) -> date:
    """
    Coerce a loosely formatted cell into a calendar date.

    Patterns are tried in order; ambiguous day/month order is resolved as:
    - "MM/DD/YYYY" (slash): month first, unless the first part exceeds 12
    - "DD-MM-YYYY" (dash): day first, unless the second part exceeds 12
    - "D/M/YY": same as slash, two-digit years follow strptime's %y pivot

    Anything else goes through pandas' generic parser; if that fails too
    the result is today.
    """
    today = today or date.today()

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None:
        return today

    text = str(value).strip()
    if not text:
        return today

    parsed = _match_patterns(text)
    if parsed is not None:
        return parsed

    try:
        timestamp = pd.to_datetime(text, dayfirst=False)
    except (ValueError, TypeError, OverflowError):
        return today
    if pd.isna(timestamp):
        return today
    return timestamp.date()


def _match_patterns(text: str) -> Optional[date]:
    match = _ISO_DATE.match(text)
    if match:
        year, month, day = (int(g) for g in match.groups())
        return _safe_date(year, month, day)

    match = _SLASH_DATE.match(text)
    if match:
        first, second, year = (int(g) for g in match.groups())
        return _month_first(year, first, second)

    match = _DASH_DATE.match(text)
    if match:
        first, second, year = (int(g) for g in match.groups())
        if second > 12:
            return _safe_date(year, first, second)
        return _safe_date(year, second, first)

    match = _SHORT_SLASH_DATE.match(text)
    if match:
        first, second, short_year = match.groups()
        year = datetime.strptime(short_year, "%y").year
        return _month_first(year, int(first), int(second))

    return None


def _month_first(year: int, first: int, second: int) -> Optional[date]:
    if first > 12:
        return _safe_date(year, second, first)
    return _safe_date(year, first, second)


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


# ===================
# PAYMENT METHODS
# ===================

PAYMENT_METHOD_SYNONYMS: dict[str, PaymentMethod] = {
    "cash": PaymentMethod.CASH,
    "efectivo": PaymentMethod.CASH,
    "contado": PaymentMethod.CASH,
    "transfer": PaymentMethod.TRANSFER,
    "transferencia": PaymentMethod.TRANSFER,
    "wire": PaymentMethod.TRANSFER,
    "card": PaymentMethod.CARD,
    "tarjeta": PaymentMethod.CARD,
    "credit": PaymentMethod.CARD,
    "credito": PaymentMethod.CARD,
    "debit": PaymentMethod.CARD,
    "debito": PaymentMethod.CARD,
    "check": PaymentMethod.CHECK,
    "cheque": PaymentMethod.CHECK,
}


def coerce_payment_method(value: Any) -> PaymentMethod:
    """Map a free-text payment label ("Crédito", "efectivo") to PaymentMethod."""
    if value is None:
        return PaymentMethod.OTHER
    key = strip_accents(str(value)).strip().lower()
    return PAYMENT_METHOD_SYNONYMS.get(key, PaymentMethod.OTHER)
