"""Compiled pattern constants shared by the extraction heuristics.

All patterns are compiled once at import time and only used through
``search``/``finditer``/``findall``, which keep no state between calls.
"""

import re

# Money-like token with optional currency symbol, e.g. "$1,234.56" or " 40.00".
MONEY_RE = re.compile(r"([€$₹])?\s?\d{1,3}(?:,\d{3})*(?:\.\d{2})?")

# Any three-part numeric date, used by the builders.
DATE_ANY_RE = re.compile(r"\b\d{1,4}[/\-]\d{1,2}[/\-]\d{1,4}\b")

# Day/month-first or year-first dates, used by loose-line inference.
DATE_RE = re.compile(
    r"(\b\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4}\b|\b\d{4}[/\-]\d{1,2}[/\-]\d{1,2}\b)"
)

AMOUNT_RE = re.compile(r"\$?\s?\d{1,3}(?:,\d{3})*(?:\.\d{2})?")

INVOICE_REF_RE = re.compile(r"(invoice\s*#?\s*\w+|#\s*\d{3,})", re.IGNORECASE)

# Year or year range, optionally parenthesised. Matched anywhere in a token.
YEAR_RE = re.compile(r"\(?\d{4}(?:[-–]\d{4})?\)?")
YEAR_VALUE_RE = re.compile(r"\d{4}(?:[-–]\d{4})?")
YEAR_OR_PAREN_LINE_RE = re.compile(r"^\(?\d{4}(?:[-–]\d{4})?\)?$|^\(.*\d{4}.*\)$")
PAREN_YEAR_RE = re.compile(r"\(.*\d{4}.*\)")

# Single digit with optional decimals, e.g. "8" or "8.75".
CGPA_RE = re.compile(r"^\d(?:\.\d+)?$")
CGPA_IN_TEXT_RE = re.compile(r"\b(\d(?:\.\d+)?)\b")

NUMERIC_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")

COLUMN_SPLIT_RE = re.compile(r"\s{2,}")
WHITESPACE_RE = re.compile(r"\s+")
LINE_SPLIT_RE = re.compile(r"\r?\n")
BLOCK_SPLIT_RE = re.compile(r"\n\s*\n")


def split_lines(text: str) -> list[str]:
    """Split text into trimmed, non-empty lines."""
    return [line.strip() for line in LINE_SPLIT_RE.split(text or "") if line.strip()]


def is_numeric(token: str) -> bool:
    """Return True if the token is a plain decimal number."""
    return bool(NUMERIC_RE.match(token.strip()))
