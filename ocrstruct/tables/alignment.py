"""Alignment of variable-width token rows onto fixed-width schemas.

OCR often splits or joins cells, so a row's tokens rarely line up with
its headers. Two strategies re-seat the tokens: one for education
records (qualification, school, CGPA, year) and one for generic line
items, where text goes left and numbers go right.
"""

import re
from collections.abc import Sequence

from ocrstruct.extraction.patterns import CGPA_RE, YEAR_RE, is_numeric

EDUCATION_HINT_RE = re.compile(r"qualification|school|college|cgpa|year|passing")


def _clean(tokens: Sequence[object]) -> list[str]:
    cleaned = [str(t or "").replace("\x00", "").strip() for t in tokens]
    return [t for t in cleaned if t]


def _pop_rightmost(tokens: list[str], predicate) -> str | None:
    for i in range(len(tokens) - 1, -1, -1):
        if predicate(tokens[i]):
            return tokens.pop(i)
    return None


def is_education_table(headers: Sequence[str], first_row: Sequence[str]) -> bool:
    """Return True if the header or first row reads like an education record."""
    header_text = " ".join(headers).lower()
    row_text = " ".join(first_row).lower()
    return bool(EDUCATION_HINT_RE.search(header_text) or EDUCATION_HINT_RE.search(row_text))


def align_education_row(tokens: Sequence[object], expected_cols: int) -> list[str]:
    """Seat tokens as ``[qualification, school, ..., cgpa, year]``.

    The rightmost year-like token and then the rightmost CGPA-like token are
    pulled out first. Of the rest, the first token is the qualification and
    the others are joined into the school. CGPA and year take the last two
    slots when there are at least three and four columns respectively.

    Args:
        tokens: Cell values of one row.
        expected_cols: Output width, normally the header count.

    Returns:
        ``expected_cols`` cells, empty strings where nothing was found.
    """
    expected_cols = max(expected_cols, 1)
    remaining = _clean(tokens)
    out = [""] * expected_cols

    year = _pop_rightmost(remaining, lambda t: bool(YEAR_RE.search(t)))
    cgpa = _pop_rightmost(
        remaining, lambda t: bool(CGPA_RE.match(t.replace("(", "").replace(")", "")))
    )

    out[0] = remaining[0] if remaining else ""
    if expected_cols >= 2:
        out[1] = " ".join(remaining[1:])
    if expected_cols >= 3 and cgpa is not None:
        out[expected_cols - 2] = cgpa.replace("(", "").replace(")", "")
    if expected_cols >= 4 and year is not None:
        out[expected_cols - 1] = year.replace("(", "").replace(")", "")
    return out


def _is_numeric_like(token: str) -> bool:
    stripped = token.replace(",", "").replace("(", "").replace(")", "")
    return is_numeric(stripped) or bool(YEAR_RE.search(token) or CGPA_RE.match(stripped))


def align_generic_row(tokens: Sequence[object], expected_cols: int) -> list[str]:
    """Seat text tokens left-to-right and numeric tokens right-to-left.

    Args:
        tokens: Cell values of one row.
        expected_cols: Output width, normally the header count.

    Returns:
        ``expected_cols`` cells. When there are more tokens than slots,
        numeric tokens win the overlapping slots.
    """
    expected_cols = max(expected_cols, 1)
    cleaned = _clean(tokens)
    out = [""] * expected_cols

    text_tokens = [t for t in cleaned if not _is_numeric_like(t)]
    numbers = [t for t in cleaned if _is_numeric_like(t)]

    for i, token in enumerate(text_tokens[:expected_cols]):
        out[i] = token
    for offset, token in enumerate(reversed(numbers[-expected_cols:])):
        out[expected_cols - 1 - offset] = token
    return out


def align_row(
    tokens: Sequence[object], headers: Sequence[str], table_type: str = "generic"
) -> list[str]:
    """Align a row to the header width using the given table strategy."""
    expected = max(len(headers), 1)
    if table_type == "education":
        return align_education_row(tokens, expected)
    return align_generic_row(tokens, expected)
