"""Narrow invoice structure builder.

Older consumers only understand a flat invoice shape: vendor, dates,
invoice number, totals, and line items read from a
``description / qty / rate / amount`` table. New callers should prefer
:func:`ocrstruct.builders.universal.build_universal_structured`.
"""

import re

from ocrstruct.extraction.normalizers import normalize_amount, normalize_date
from ocrstruct.extraction.patterns import COLUMN_SPLIT_RE, DATE_ANY_RE, MONEY_RE, split_lines
from ocrstruct.utils.config import ParsingConfig
from ocrstruct.utils.logger import get_logger

from .models import InvoiceLineItem, InvoiceStructured

logger = get_logger(__name__)

_VENDOR_ANCHOR_RE = re.compile(r"\b(?:invoice|bill)\b", re.IGNORECASE)
_INVOICE_DATE_RE = re.compile(r"invoice\s*date", re.IGNORECASE)
_DUE_DATE_RE = re.compile(r"due\s*date", re.IGNORECASE)
_INVOICE_NO_RE = re.compile(
    r"invoice\s*(?:number|no\.?|#)?\s*[:\-]?\s*(?!date\b)([A-Za-z0-9\-]+)", re.IGNORECASE
)
_HASH_REF_RE = re.compile(r"#\s*([A-Za-z0-9\-]{4,})")
_SUBTOTAL_RE = re.compile(r"sub\s*total", re.IGNORECASE)
_TAX_RE = re.compile(r"\b(?:tax|gst|vat)\b", re.IGNORECASE)
_TOTAL_RE = re.compile(r"\btotal\b", re.IGNORECASE)
_QTY_RE = re.compile(r"(?:qty|quantity)\b", re.IGNORECASE)
_ITEM_RE = re.compile(r"(?:item|description)\b", re.IGNORECASE)
_RATE_RE = re.compile(r"(?:rate|price)\b", re.IGNORECASE)
_SEPARATOR_RE = re.compile(r"^[-_\s]*$")

_MAX_VENDOR_LENGTH = 80


def _first_date(lines: list[str], label: re.Pattern[str] | None = None) -> str | None:
    for line in lines:
        if label is not None and not label.search(line):
            continue
        match = DATE_ANY_RE.search(line)
        if match:
            return normalize_date(match.group(0))
    return None


def _invoice_number(lines: list[str]) -> str | None:
    for line in lines:
        match = _INVOICE_NO_RE.search(line) or _HASH_REF_RE.search(line)
        if match:
            return match.group(1)
    return None


def _line_item(cells: list[str]) -> InvoiceLineItem:
    numbers = [normalize_amount(cell) for cell in cells]
    numeric_idx = [i for i, value in enumerate(numbers) if value is not None]
    if not numeric_idx:
        return InvoiceLineItem(description=" ".join(cells))

    quantity = numbers[numeric_idx[0]] if len(numeric_idx) >= 2 else None
    rate = numbers[numeric_idx[1]] if len(numeric_idx) >= 3 else None
    return InvoiceLineItem(
        description=" ".join(c for i, c in enumerate(cells) if i not in numeric_idx),
        quantity=quantity,
        rate=rate,
        amount=numbers[numeric_idx[-1]],
    )


def _line_items(lines: list[str], max_rows: int) -> list[InvoiceLineItem]:
    header_idx = next(
        (
            i
            for i, line in enumerate(lines)
            if _QTY_RE.search(line) and _ITEM_RE.search(line) and _RATE_RE.search(line)
        ),
        None,
    )
    if header_idx is None:
        return []

    comma_separated = "," in lines[header_idx]
    items: list[InvoiceLineItem] = []
    for row in lines[header_idx + 1 :]:
        if _SEPARATOR_RE.match(row) or len(items) >= max_rows:
            break
        if comma_separated:
            cells = [c.strip() for c in row.split(",") if c.strip()]
        else:
            cells = [c.strip() for c in COLUMN_SPLIT_RE.split(row) if c.strip()]
        if len(cells) >= 2:
            items.append(_line_item(cells))
    return items


def build_invoice_structured(
    text: str, config: ParsingConfig | None = None
) -> InvoiceStructured:
    """Build the narrow invoice structure from raw text.

    Args:
        text: Complete document text.
        config: Parsing limits. Defaults are used when ``None``.

    Returns:
        The invoice fields; an empty structure for blank or non-string text.
    """
    if not isinstance(text, str) or not text.strip():
        return InvoiceStructured()
    config = config or ParsingConfig()
    lines = split_lines(text)

    anchor = next((i for i, l in enumerate(lines) if _VENDOR_ANCHOR_RE.search(l)), -1)
    if anchor > 0:
        vendor = lines[anchor - 1]
    else:
        vendor = lines[0] if len(lines[0]) <= _MAX_VENDOR_LENGTH else None

    subtotal = tax = total = None
    for line in lines:
        amounts = [m.group(0) for m in MONEY_RE.finditer(line)]
        if not amounts:
            continue
        if subtotal is None and _SUBTOTAL_RE.search(line):
            subtotal = normalize_amount(amounts[-1])
        if tax is None and _TAX_RE.search(line):
            tax = normalize_amount(amounts[-1])
        if total is None and _TOTAL_RE.search(line):
            total = normalize_amount(amounts[-1])

    if total is None:
        values = [
            v
            for v in (normalize_amount(m.group(0)) for m in MONEY_RE.finditer(text))
            if v is not None
        ]
        total = max(values) if values else None

    invoice = InvoiceStructured(
        vendor_name=vendor,
        invoice_date=_first_date(lines, _INVOICE_DATE_RE) or _first_date(lines),
        due_date=_first_date(lines, _DUE_DATE_RE),
        invoice_number=_invoice_number(lines),
        subtotal=subtotal,
        tax=tax,
        total=total,
        items=_line_items(lines, config.max_table_rows),
        raw_text=text,
    )
    logger.info(
        "Invoice structure: number=%s, total=%s, %d items",
        invoice.invoice_number,
        invoice.total,
        len(invoice.items),
    )
    return invoice
