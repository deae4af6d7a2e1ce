"""Universal structured builder.

Runs every extraction stage over one document text and merges the
results into a single :class:`UniversalStructured` record: header
metadata, line items, table summaries, totals, commercial terms,
key/value pairs, table diagnostics, and validation warnings.
"""

import re
from collections.abc import Mapping
from typing import Any

from ocrstruct.extraction.classifier import detect_document_type, document_type_slug
from ocrstruct.extraction.key_values import extract_key_values, infer_loose_values
from ocrstruct.extraction.normalizers import normalize_amount, normalize_date
from ocrstruct.extraction.patterns import MONEY_RE, split_lines
from ocrstruct.tables.extractor import Table, extract_tables
from ocrstruct.tables.summary_parser import parse_table_summary
from ocrstruct.utils.config import ParsingConfig, ValidationConfig
from ocrstruct.utils.logger import get_logger
from ocrstruct.validation.validator import validate_structured

from .items import items_from_lines, items_from_table
from .models import (
    ColumnRoleSuggestion,
    DocumentMeta,
    KeyValuePair,
    Metadata,
    OtherDetails,
    ParsingOptions,
    Summary,
    TableSummary,
    UniversalStructured,
)

logger = get_logger(__name__)

_DOCUMENT_WORD_RE = re.compile(
    r"\b(?:invoice|bill|statement|receipt|purchase order|po|order)\b", re.IGNORECASE
)
_BILL_TO_RE = re.compile(r"bill to", re.IGNORECASE)
_SHIP_TO_RE = re.compile(r"ship to", re.IGNORECASE)
_INLINE_VALUE_RE = re.compile(r"(?:bill|ship) to\s*[:\-]\s*(.+)$", re.IGNORECASE)
_SUBTOTAL_RE = re.compile(r"subtotal", re.IGNORECASE)
_TAX_RE = re.compile(r"tax|gst|vat", re.IGNORECASE)
_TOTAL_RE = re.compile(r"total|amount due|grand total", re.IGNORECASE)
_KEY_CLEAN_RE = re.compile(r"[^a-z0-9 ]+")
_LAYOUT_SPACE_RE = re.compile(r"[\u00a0\t]+")

# Ordered (pattern, canonical key) pairs; the first match names the key.
KEY_ALIASES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"phone|mobile|contact"), "phone"),
    (re.compile(r"email"), "email"),
    (re.compile(r"date of birth|dob"), "date_of_birth"),
    (re.compile(r"nationality"), "nationality"),
    (re.compile(r"address"), "address"),
    (re.compile(r"qualification|degree|course"), "qualification"),
    (re.compile(r"school|college|university"), "school"),
    (re.compile(r"cgpa|gpa|grade"), "cgpa"),
    (re.compile(r"languages|language"), "languages"),
    (re.compile(r"father|parent"), "father_name"),
)


class FieldLookup:
    """Label lookup over explicit fields first, then inferred ones.

    Exact labels win; otherwise the first case-insensitive match is used.
    """

    def __init__(self, fields: Mapping[str, str], inferred: Mapping[str, str]) -> None:
        self._sources = (fields, inferred)

    def __call__(self, *labels: str) -> str | None:
        for label in labels:
            for source in self._sources:
                if source.get(label):
                    return source[label]
            wanted = label.lower()
            for source in self._sources:
                for key, value in source.items():
                    if key.lower() == wanted and value:
                        return value
        return None


def normalize_key(key: str) -> str:
    """Map a free-form label to a canonical key, or return it unchanged."""
    cleaned = _KEY_CLEAN_RE.sub("", str(key or "").lower()).strip()
    for pattern, canonical in KEY_ALIASES:
        if pattern.search(cleaned):
            return canonical
    return key


def _clean_value(value: object) -> str:
    text = "" if value is None else str(value)
    return _LAYOUT_SPACE_RE.sub(" ", text.replace("\x00", "")).strip()


def normalize_key_values(pairs: list[KeyValuePair]) -> list[KeyValuePair]:
    """Canonicalize keys and collect values of colliding keys into lists."""
    collected: dict[str, str | list[str]] = {}
    for pair in pairs:
        key = normalize_key(pair.key)
        value = _clean_value(pair.value)
        if key not in collected:
            collected[key] = value
        elif isinstance(collected[key], list):
            collected[key] = [*collected[key], value]
        else:
            collected[key] = [collected[key], value]
    return [KeyValuePair(key=k, value=v) for k, v in collected.items()]


def _line_after(lines: list[str], pattern: re.Pattern[str]) -> str | None:
    for i, line in enumerate(lines):
        if not pattern.search(line):
            continue
        inline = _INLINE_VALUE_RE.search(line)
        if inline and inline.group(1).strip():
            return inline.group(1).strip()
        return lines[i + 1] if i + 1 < len(lines) else None
    return None


def build_metadata(
    text: str,
    lines: list[str],
    pick: FieldLookup,
    meta: DocumentMeta,
    config: ParsingConfig,
) -> Metadata:
    """Derive header metadata from fields and line positions.

    The vendor is the first of the top lines that is not a document-type
    word; the customer is the line after a "Bill To" (else "Ship To") line.
    """
    vendor = next(
        (
            line
            for line in lines[: config.vendor_scan_lines]
            if not _DOCUMENT_WORD_RE.search(line) and len(line) > 2
        ),
        None,
    )
    customer = _line_after(lines, _BILL_TO_RE) or _line_after(lines, _SHIP_TO_RE)

    currency_re = re.compile(
        r"\b(" + "|".join(re.escape(code) for code in config.currency_codes) + r")\b"
    )
    currency = currency_re.search(text)

    return Metadata(
        vendor_name=vendor,
        customer_name=customer,
        invoice_number=pick("Invoice", "Invoice No", "Invoice #", "Invoice Number"),
        order_number=pick("Order", "Order No", "PO", "PO #", "PO Number", "PO-Number"),
        invoice_date=normalize_date(pick("Invoice Date", "Date", "Created")),
        due_date=normalize_date(pick("Due Date")),
        ship_date=normalize_date(pick("Ship Date", "Shipping Date")),
        address=pick("Address"),
        country=pick("Country"),
        currency=currency.group(1) if currency else None,
        page_count=meta.page_count,
    )


def build_summary(text: str, lines: list[str], document_type: str) -> Summary:
    """Read subtotal, tax and total from keyword lines.

    Each qualifying line contributes its last money token and later lines
    override earlier ones. An invoice without a total line falls back to
    the largest money token in the whole text.
    """
    subtotal = tax = total = None
    for line in lines:
        amounts = [m.group(0) for m in MONEY_RE.finditer(line)]
        if not amounts:
            continue
        if _SUBTOTAL_RE.search(line):
            subtotal = normalize_amount(amounts[-1])
        elif _TAX_RE.search(line):
            tax = normalize_amount(amounts[-1])
        elif _TOTAL_RE.search(line):
            total = normalize_amount(amounts[-1])

    if total is None and document_type == "invoice":
        values = [
            v
            for v in (normalize_amount(m.group(0)) for m in MONEY_RE.finditer(text))
            if v is not None
        ]
        if values:
            total = max(values)

    return Summary(subtotal=subtotal, tax=tax, total=total)


def summarize_tables(tables: list[Table], preview_rows: int) -> list[TableSummary]:
    summaries: list[TableSummary] = []
    for position, table in enumerate(tables, 1):
        headers = table.headers or (list(table.rows[0]) if table.rows else [])
        row_count = table.row_count if table.row_count is not None else len(table.rows)
        column_count = (
            table.column_count
            if table.column_count is not None
            else len(headers) or (len(table.rows[0]) if table.rows else 0)
        )
        summaries.append(
            TableSummary(
                table_id=table.table_id or position,
                page=table.page,
                dimensions=f"{row_count} rows x {column_count} columns",
                row_count=row_count,
                column_count=column_count,
                headers=headers,
                rows_preview=[dict(row) for row in table.rows[:preview_rows]],
                dropped_rows=table.dropped_rows,
            )
        )
    return summaries


def build_universal_structured(
    text: str,
    meta: DocumentMeta | Mapping[str, Any] | None = None,
    config: ParsingConfig | None = None,
    validation_config: ValidationConfig | None = None,
) -> UniversalStructured:
    """Build the canonical structured record for one document.

    Args:
        text: Complete document text from the OCR or PDF layer.
        meta: Optional page count, info mapping, and preview.
        config: Parsing thresholds. Defaults are used when ``None``.
        validation_config: Validator thresholds.

    Returns:
        A fresh record with ``validation`` attached. Never raises on odd
        input; non-string text is treated as empty.
    """
    config = config or ParsingConfig()
    raw_text = text if isinstance(text, str) else ""
    document_meta = DocumentMeta.coerce(meta)
    lines = split_lines(raw_text)

    kv = extract_key_values(raw_text)
    inferred = infer_loose_values(kv.loose, kv.fields)
    pick = FieldLookup(kv.fields, inferred)

    metadata = build_metadata(raw_text, lines, pick, document_meta, config)

    tables = parse_table_summary(raw_text) or extract_tables(raw_text, config)
    parsing_options = ParsingOptions()
    if tables:
        best = tables[0]
        for table in tables[1:]:
            if len(table.rows) > len(best.rows):
                best = table
        table_items = items_from_table(best)
        items = table_items.items
        parsing_options = ParsingOptions(
            detected_table_type=table_items.table_type,
            header_index=best.header_index,
            suggestions=[ColumnRoleSuggestion(column_roles=table_items.roles)],
        )
    else:
        items = items_from_lines(lines)

    document_type = document_type_slug(detect_document_type(raw_text))
    summary = build_summary(raw_text, lines, document_type)

    other_details = OtherDetails(
        terms=pick("Terms", "Payment Terms"),
        payment_method=pick("Payment Method"),
        freight_terms=pick("Freight", "Freight Terms"),
        carrier=pick("Carrier"),
        shipping_notes=pick("Shipping Notes"),
    )

    raw_pairs = [
        KeyValuePair(key=k, value=v)
        for source in (kv.fields, inferred)
        for k, v in source.items()
    ]

    structured = UniversalStructured(
        document_type=document_type,
        metadata=metadata,
        items=items,
        tables=summarize_tables(tables, config.table_preview_rows),
        summary=summary,
        other_details=other_details,
        key_value_pairs=normalize_key_values(raw_pairs),
        raw_key_value_pairs=raw_pairs,
        parsing_options=parsing_options,
    )
    validation = validate_structured(structured, validation_config)

    logger.info(
        "Structured %s: %d items, %d tables, %d warnings",
        document_type,
        len(items),
        len(tables),
        len(validation.warnings),
    )
    return structured.model_copy(update={"validation": validation})
