"""Parser for textual table summaries written by upstream PDF tools.

Some extraction tools append a plain-text report such as::

    Table 1:
    Page: 2
    Dimensions: 3 rows x 2 columns
    Headers: Item, Price
    Row 1: {'Item': 'Pen', 'Price': '2.50'}

When such a report is present it describes the tables more reliably than
layout heuristics, so it is parsed first.
"""

import json
import re

from ocrstruct.utils.logger import get_logger

from .extractor import Table

logger = get_logger(__name__)

_TABLE_SPLIT_RE = re.compile(r"(?:^|\n)(?=Table\s+\d+\s*:)", re.IGNORECASE | re.MULTILINE)
_TABLE_ID_RE = re.compile(r"Table\s*(\d+)\s*:", re.IGNORECASE)
_PAGE_RE = re.compile(r"Page\s*:\s*(\d+)", re.IGNORECASE)
_DIMENSIONS_RE = re.compile(
    r"Dimensions\s*:\s*([0-9]+)\s*rows\s*x\s*([0-9]+)\s*columns", re.IGNORECASE
)
_HEADERS_RE = re.compile(r"Headers\s*:\s*([^\n]+)", re.IGNORECASE)
_ROW_RE = re.compile(r"Row\s*\d+\s*:\s*(\{[\s\S]*?\})(?=\n|$)", re.IGNORECASE)
_QUOTED_PAIR_RE = re.compile(r"'([^']+)'\s*:\s*'([^']*)'")


def parse_row_object(raw: str) -> dict[str, str] | None:
    """Parse one ``{'key': 'value', ...}`` row object.

    The object is first read as JSON after swapping single quotes for
    double quotes. If that fails, quoted ``'key': 'value'`` pairs are
    scraped individually.

    Args:
        raw: The brace-delimited row text.

    Returns:
        The row, or ``None`` if neither strategy recovered a pair.
    """
    try:
        parsed = json.loads(raw.replace("'", '"'))
    except json.JSONDecodeError:
        parsed = None

    if isinstance(parsed, dict):
        return {str(k): "" if v is None else str(v) for k, v in parsed.items()}

    scraped = dict(_QUOTED_PAIR_RE.findall(raw))
    return scraped or None


def parse_table_summary(text: str) -> list[Table]:
    """Extract tables from ``Table N:`` summary sections.

    Headers come from the ``Headers:`` line, else from the first row's keys.
    Row and column counts come from ``Dimensions:``, else from the parsed
    data. Rows that cannot be read at all are dropped and counted in
    ``Table.dropped_rows``.

    Args:
        text: Full document text.

    Returns:
        One table per summary section; empty when the text has none.
    """
    if not isinstance(text, str) or not text:
        return []

    tables: list[Table] = []
    for part in _TABLE_SPLIT_RE.split(text):
        id_match = _TABLE_ID_RE.search(part)
        if not id_match:
            continue

        rows: list[dict[str, str]] = []
        dropped = 0
        for row_match in _ROW_RE.finditer(part):
            row = parse_row_object(row_match.group(1))
            if row is None:
                dropped += 1
            else:
                rows.append(row)

        table_id = int(id_match.group(1))
        if dropped:
            logger.warning("Table %d: dropped %d unreadable rows", table_id, dropped)

        headers_match = _HEADERS_RE.search(part)
        if headers_match:
            headers = [h.strip() for h in headers_match.group(1).split(",")]
        else:
            headers = list(rows[0]) if rows else []

        dims = _DIMENSIONS_RE.search(part)
        page = _PAGE_RE.search(part)
        tables.append(
            Table(
                headers=headers,
                rows=rows,
                page=int(page.group(1)) if page else None,
                row_count=int(dims.group(1)) if dims else len(rows),
                column_count=(
                    int(dims.group(2))
                    if dims
                    else len(headers) or (len(rows[0]) if rows else 0)
                ),
                table_id=table_id,
                dropped_rows=dropped,
                source="summary",
            )
        )

    logger.debug("Parsed %d summary tables", len(tables))
    return tables
