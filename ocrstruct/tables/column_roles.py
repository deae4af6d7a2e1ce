"""Per-column role voting over tokenized table rows."""

from collections.abc import Sequence
from dataclasses import dataclass

from ocrstruct.extraction.patterns import CGPA_RE, YEAR_RE, is_numeric

# Declaration order breaks ties between equal tallies.
ROLES: tuple[str, ...] = ("year", "numeric", "cgpa", "text")


@dataclass
class ColumnVote:
    """Tally of role votes for one column index."""

    year: int = 0
    numeric: int = 0
    cgpa: int = 0
    text: int = 0

    @property
    def role(self) -> str:
        return max(ROLES, key=lambda name: getattr(self, name))


def classify_cell(value: str) -> str:
    """Return the role a single cell votes for.

    Checks run in a fixed order: empty cells vote ``text``, then a year
    pattern, then a CGPA-like single digit, then a plain number.
    """
    value = value.replace("\x00", "").strip()
    if not value:
        return "text"
    if YEAR_RE.search(value):
        return "year"
    if CGPA_RE.match(value.replace("(", "").replace(")", "")):
        return "cgpa"
    if is_numeric(value.replace(",", "").replace("(", "").replace(")", "")):
        return "numeric"
    return "text"


def vote_column_roles(
    rows: Sequence[Sequence[str]], header_count: int = 0
) -> list[ColumnVote]:
    """Tally role votes per column index across all rows.

    Args:
        rows: Positional cell values per data row.
        header_count: Header width; the column count is the larger of this
            and the widest row.

    Returns:
        One vote per column index. Missing cells vote ``text``.
    """
    column_count = max([header_count, *(len(row) for row in rows)])
    votes = [ColumnVote() for _ in range(column_count)]
    for row in rows:
        for index, vote in enumerate(votes):
            cell = row[index] if index < len(row) else ""
            role = classify_cell(cell or "")
            setattr(vote, role, getattr(vote, role) + 1)
    return votes


def column_roles(votes: Sequence[ColumnVote]) -> list[str]:
    """Return the winning role name for each column."""
    return [vote.role for vote in votes]
