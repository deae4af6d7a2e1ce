"""Line-item synthesis from detected tables or from single text lines."""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from ocrstruct.extraction.normalizers import normalize_amount
from ocrstruct.extraction.patterns import (
    CGPA_IN_TEXT_RE,
    CGPA_RE,
    YEAR_VALUE_RE,
    is_numeric,
)
from ocrstruct.tables.alignment import align_row, is_education_table
from ocrstruct.tables.column_roles import column_roles, vote_column_roles
from ocrstruct.tables.extractor import Table
from ocrstruct.utils.logger import get_logger

from .models import EducationItem, LineItem

logger = get_logger(__name__)

_ITEM_LINE_RE = re.compile(
    r"(.+)\s+(\d+(?:\.\d+)?)\s+[$€£]?\s*(\d{1,3}(?:[.,]\d{3})*(?:\.\d{2})?)"
)
_QTY_HEADER_RE = re.compile(r"\b(?:qty|quantity|units?)\b", re.IGNORECASE)
_PRICE_HEADER_RE = re.compile(r"price|rate|unit cost", re.IGNORECASE)
_AMOUNT_HEADER_RE = re.compile(r"amount|total", re.IGNORECASE)


@dataclass(frozen=True)
class TableItems:
    """Items read from one table plus the diagnostics behind them."""

    items: list[LineItem | EducationItem]
    table_type: str
    roles: list[str]


def _to_quantity(value: str) -> float | None:
    cleaned = value.replace(",", "").strip()
    return float(cleaned) if cleaned and is_numeric(cleaned) else None


def _join(cells: Sequence[str]) -> str | None:
    return " ".join(c for c in cells if c) or None


def _find_header(headers: Sequence[str], pattern: re.Pattern[str]) -> int | None:
    for i, header in enumerate(headers):
        if pattern.search(header):
            return i
    return None


def _priced(
    item_no: int,
    description: str | None,
    quantity: float | None,
    unit_price: float | None,
    stated_amount: float | None = None,
) -> LineItem:
    if quantity is not None and unit_price is not None:
        amount = unit_price * quantity
    else:
        amount = stated_amount
    return LineItem(
        item_no=item_no,
        description=description,
        quantity=quantity,
        unit_price=unit_price,
        amount=amount,
    )


def generic_item(item_no: int, aligned: Sequence[str], headers: Sequence[str]) -> LineItem:
    """Build a priced item from an aligned generic row.

    Quantity and unit price come from the columns whose headers name them
    when the row carries a number for each of those columns. Otherwise the
    last two cells are read as quantity and unit price.
    """
    qty_idx = _find_header(headers, _QTY_HEADER_RE)
    price_idx = _find_header(headers, _PRICE_HEADER_RE)
    amount_idx = _find_header(headers, _AMOUNT_HEADER_RE)
    if amount_idx in (qty_idx, price_idx):
        amount_idx = None

    role_slots = {i for i in (qty_idx, price_idx, amount_idx) if i is not None}
    if (
        qty_idx is not None
        and price_idx is not None
        and qty_idx != price_idx
        and max(role_slots) < len(aligned)
        and all(aligned[i] for i in role_slots)
    ):
        return _priced(
            item_no,
            _join([c for i, c in enumerate(aligned) if i not in role_slots]),
            _to_quantity(aligned[qty_idx]),
            normalize_amount(aligned[price_idx]),
            normalize_amount(aligned[amount_idx]) if amount_idx is not None else None,
        )

    quantity = _to_quantity(aligned[-2]) if len(aligned) >= 2 else None
    unit_price = normalize_amount(aligned[-1]) if aligned[-1] else None
    return _priced(
        item_no, _join(aligned[: max(1, len(aligned) - 2)]), quantity, unit_price
    )


def education_item(
    item_no: int, aligned: Sequence[str], roles: Sequence[str]
) -> EducationItem:
    """Build an education record from an aligned row.

    The CGPA is read from the column voted ``cgpa`` when that cell holds a
    CGPA-like value, otherwise from the first single-digit decimal in the row.
    """
    qualification = aligned[0] or None
    if len(aligned) > 1 and aligned[1]:
        school = aligned[1]
    else:
        school = _join(aligned[1:-1])

    year_match = YEAR_VALUE_RE.search(aligned[-1])

    cgpa: float | None = None
    for index, role in enumerate(roles):
        if role != "cgpa" or index >= len(aligned):
            continue
        value = aligned[index].replace("(", "").replace(")", "")
        if CGPA_RE.match(value):
            cgpa = float(value)
    if cgpa is None:
        match = CGPA_IN_TEXT_RE.search(" ".join(aligned))
        if match:
            cgpa = float(match.group(1))

    return EducationItem(
        item_no=item_no,
        qualification=qualification,
        school=school,
        cgpa=cgpa,
        year=year_match.group(0) if year_match else None,
    )


def items_from_table(table: Table) -> TableItems:
    """Vote column roles, align every row, and build items for one table.

    Args:
        table: The table chosen as the item source.

    Returns:
        The items, the detected table type, and the per-column roles.
    """
    headers = table.headers
    token_rows = [
        [str(v or "").replace("\x00", "").strip() for v in row.values()]
        for row in table.rows
    ]
    first_row = token_rows[0] if token_rows else []
    table_type = "education" if is_education_table(headers, first_row) else "generic"
    roles = column_roles(vote_column_roles(token_rows, len(headers)))

    items: list[LineItem | EducationItem] = []
    for item_no, tokens in enumerate(token_rows, 1):
        aligned = align_row(tokens, headers, table_type)
        if table_type == "education":
            items.append(education_item(item_no, aligned, roles))
        else:
            items.append(generic_item(item_no, aligned, headers))

    logger.debug("Built %d %s items from table", len(items), table_type)
    return TableItems(items=items, table_type=table_type, roles=roles)


def items_from_lines(lines: Sequence[str]) -> list[LineItem]:
    """Read ``<description> <qty> <price>`` lines as items.

    Used when no table was detected at all.
    """
    items: list[LineItem] = []
    for line in lines:
        match = _ITEM_LINE_RE.search(line)
        if not match:
            continue
        items.append(
            _priced(
                len(items) + 1,
                match.group(1).strip(),
                float(match.group(2)),
                normalize_amount(match.group(3)),
            )
        )
    return items
