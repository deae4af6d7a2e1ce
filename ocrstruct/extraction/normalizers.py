"""Normalization of loosely formatted amounts and dates.

OCR output carries currency symbols, grouping separators, and mixed date
separators. These helpers turn such tokens into floats and ISO dates and
return ``None`` instead of raising when a token cannot be interpreted.
"""

import re

from ocrstruct.utils.logger import get_logger

logger = get_logger(__name__)

_NON_NUMERIC_RE = re.compile(r"[^0-9.,\-]")
_GROUPING_COMMA_RE = re.compile(r",(?=\d{3}(?:\D|$))")
_FLOAT_PREFIX_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)")
_DATE_PARTS_RE = re.compile(r"(\d{1,4})/(\d{1,2})/(\d{1,4})")


def normalize_amount(value: object) -> float | None:
    """Parse a money-like string into a float.

    Grouping commas (a comma followed by exactly three digits) are dropped
    and any remaining comma is read as a decimal point. When more than one
    decimal point survives, all but the last are treated as grouping, so
    ``"1.234,56"`` reads as ``1234.56``. Formats that group with dots and
    carry no decimals (``"1.234"``) remain ambiguous and read as ``1.234``.

    Args:
        value: Raw token, e.g. ``"$1,234.56"``. ``None`` is accepted.

    Returns:
        Parsed amount, or ``None`` if no number could be read.
    """
    if value is None:
        return None

    cleaned = _NON_NUMERIC_RE.sub("", str(value))
    cleaned = _GROUPING_COMMA_RE.sub("", cleaned)
    cleaned = cleaned.replace(",", ".")
    if cleaned.count(".") > 1:
        head, _, tail = cleaned.rpartition(".")
        cleaned = head.replace(".", "") + "." + tail

    match = _FLOAT_PREFIX_RE.match(cleaned)
    if not match:
        return None
    return float(match.group(0))


def normalize_date(value: object) -> str | None:
    """Normalize a numeric date string to ``YYYY-MM-DD``.

    Separators ``.``, ``-`` and ``/`` are accepted. A four-digit first part
    is read as year-month-day; otherwise the date is read month-first, so
    ``"10/01/25"`` becomes ``"2025-10-01"``. Day-first dates whose day is
    12 or less cannot be told apart from month-first ones and are read
    month-first.

    Args:
        value: Raw date token. ``None`` and empty strings are accepted.

    Returns:
        Zero-padded ISO date, or ``None`` if no three-part date is found.
    """
    if not value:
        return None

    text = str(value).strip().replace(".", "/").replace("-", "/")
    match = _DATE_PARTS_RE.search(text)
    if not match:
        return None

    month, day, year = match.groups()
    if len(month) == 4:
        month, day, year = day, year, month
    if len(year) == 2:
        year = "20" + year

    normalized = f"{year.zfill(4)}-{month.zfill(2)}-{day.zfill(2)}"
    logger.debug("Normalized date %r -> %s", value, normalized)
    return normalized
