"""Heuristic table detection over blank-line separated text blocks.

Each block is read either as CSV (every line has a comma) or as a
whitespace-aligned grid where runs of two or more spaces separate
columns. For grids the header row is chosen by keyword, then by column
count, and rows that OCR wrapped onto a second line are merged back.
"""

import math
from dataclasses import dataclass

from ocrstruct.extraction.patterns import (
    BLOCK_SPLIT_RE,
    CGPA_RE,
    COLUMN_SPLIT_RE,
    LINE_SPLIT_RE,
    PAREN_YEAR_RE,
    WHITESPACE_RE,
    YEAR_OR_PAREN_LINE_RE,
    YEAR_RE,
)
from ocrstruct.utils.config import ParsingConfig
from ocrstruct.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Table:
    """A detected table: ordered headers and header-keyed row objects.

    ``page``, ``row_count``, ``column_count`` and ``table_id`` are only
    known for tables parsed from a textual table summary.
    """

    headers: list[str]
    rows: list[dict[str, str]]
    header_index: int = 0
    page: int | None = None
    row_count: int | None = None
    column_count: int | None = None
    table_id: int | None = None
    dropped_rows: int = 0
    source: str = "text"


def _split_columns(line: str) -> list[str]:
    return [part.strip() for part in COLUMN_SPLIT_RE.split(line) if part.strip()]


def _split_words(line: str) -> list[str]:
    return [part for part in WHITESPACE_RE.split(line.strip()) if part]


def _to_row(cells: list[str], headers: list[str]) -> dict[str, str]:
    row = {header or f"col_{i + 1}": "" for i, header in enumerate(headers)}
    for i, value in enumerate(cells):
        key = headers[i] if i < len(headers) and headers[i] else f"col_{i + 1}"
        row[key] = value
    return row


def _find_header_index(
    lines: list[str], column_counts: list[int], max_cols: int, keywords: list[str]
) -> int:
    for i, line in enumerate(lines):
        lowered = line.lower()
        if any(keyword in lowered for keyword in keywords):
            return i
    for i, count in enumerate(column_counts):
        if count == max_cols:
            return i
    return 0


def _looks_reserved(token: str) -> bool:
    return bool(
        YEAR_RE.search(token) or CGPA_RE.match(token) or PAREN_YEAR_RE.search(token)
    )


def split_run_on_header(raw_header: str, max_cols: int) -> list[str]:
    """Build ``max_cols`` headers from a header line that did not split.

    Trailing year-like and CGPA-like tokens are reserved for the rightmost
    columns; the remaining words are divided evenly across the other
    slots. Empty or missing slots get synthetic ``col_N`` names.

    Args:
        raw_header: The untrimmed header line.
        max_cols: Column count observed in the block.

    Returns:
        Header names, at least ``max_cols`` long.
    """
    tokens = _split_words(raw_header)
    reserved: list[str] = []
    while tokens and len(reserved) < max_cols and _looks_reserved(tokens[-1]):
        reserved.insert(0, tokens.pop().replace("(", "").replace(")", ""))

    remaining_slots = max(0, max_cols - len(reserved))
    left: list[str] = []
    if remaining_slots <= 1:
        left.append(" ".join(tokens))
    else:
        chunk = math.ceil(len(tokens) / remaining_slots)
        for _ in range(remaining_slots):
            left.append(" ".join(tokens[:chunk]))
            tokens = tokens[chunk:]

    headers = [name or f"col_{i + 1}" for i, name in enumerate(left + reserved)]
    while len(headers) < max_cols:
        headers.append(f"col_{len(headers) + 1}")
    return headers


def merge_continuation_rows(
    token_rows: list[list[str]], header_count: int
) -> list[list[str]]:
    """Merge rows that OCR wrapped onto following lines.

    While a row is shorter than the header, a following row that is a bare
    year/parenthetical or has at most two tokens is appended to the last
    cell; otherwise the following row's tokens are concatenated if that
    reaches the header width. Merging stops at the first row that fits
    neither case.

    Args:
        token_rows: Tokenized data rows in document order.
        header_count: Number of table headers.

    Returns:
        Merged rows.
    """
    merged: list[list[str]] = []
    i = 0
    while i < len(token_rows):
        row = list(token_rows[i])
        while len(row) < header_count and i + 1 < len(token_rows):
            following = token_rows[i + 1]
            joined = " ".join(following)
            if YEAR_OR_PAREN_LINE_RE.match(joined) or len(following) <= 2:
                row[-1] = f"{row[-1]} {joined}"
                i += 1
            elif len(row) + len(following) >= header_count:
                row = row + list(following)
                i += 1
            else:
                break
        merged.append(row)
        i += 1
    return merged


def _csv_table(lines: list[str], max_rows: int) -> Table:
    headers = [cell.strip() for cell in lines[0].split(",")]
    rows = [
        _to_row([cell.strip() for cell in line.split(",")], headers)
        for line in lines[1:][:max_rows]
    ]
    return Table(headers=headers, rows=rows, source="csv")


def _aligned_table(
    raw_lines: list[str], lines: list[str], config: ParsingConfig
) -> Table | None:
    split_lines = [_split_columns(line) for line in lines]
    column_counts = [len(parts) for parts in split_lines]
    max_cols = max(column_counts, default=0)
    multi_column = sum(1 for count in column_counts if count >= 2)
    required = max(1, math.floor(len(lines) * config.min_tabular_ratio))

    if max_cols < 2 or multi_column < required:
        return None

    header_index = _find_header_index(
        lines, column_counts, max_cols, config.header_keywords
    )
    if len(split_lines[header_index]) >= 2:
        headers = list(split_lines[header_index])
    else:
        headers = split_run_on_header(raw_lines[header_index], max_cols)

    token_rows: list[list[str]] = []
    for line in lines[header_index + 1 :]:
        parts = _split_columns(line)
        if len(parts) < 2:
            parts = _split_words(line)
        token_rows.append(parts)

    merged = merge_continuation_rows(token_rows, len(headers))
    rows = [_to_row(cells, headers) for cells in merged[: config.max_table_rows]]
    return Table(headers=headers, rows=rows, header_index=header_index)


def extract_tables(text: str, config: ParsingConfig | None = None) -> list[Table]:
    """Detect tables in every blank-line separated block of the text.

    Non-breaking spaces count as spaces and a tab counts as a column gap.
    Blocks with fewer than two non-empty lines are skipped.

    Args:
        text: Full document text.
        config: Parsing thresholds. Defaults are used when ``None``.

    Returns:
        Tables in document order; empty when nothing looks tabular.
    """
    if not isinstance(text, str):
        return []
    config = config or ParsingConfig()

    tables: list[Table] = []
    for block_number, block in enumerate(BLOCK_SPLIT_RE.split(text), 1):
        raw_lines = [
            line.replace("\u00a0", " ").replace("\t", "  ")
            for line in LINE_SPLIT_RE.split(block)
        ]
        raw_lines = [line for line in raw_lines if line.strip()]
        lines = [line.strip() for line in raw_lines]
        if len(lines) < 2:
            continue

        if all("," in line for line in lines):
            table = _csv_table(lines, config.max_table_rows)
        else:
            table = _aligned_table(raw_lines, lines, config)

        if table is None:
            logger.debug("Block %d is not tabular", block_number)
            continue
        logger.debug(
            "Block %d: %s table with %d columns, %d rows",
            block_number,
            table.source,
            len(table.headers),
            len(table.rows),
        )
        tables.append(table)

    return tables
