"""Line-oriented key/value extraction and loose-line inference.

Explicit ``key: value`` and ``key - value`` lines become a field map.
Every other line is kept as a loose line, which an ordered rule table
then mines for due dates, dates, totals, and invoice references.
"""

import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from ocrstruct.utils.logger import get_logger

from .patterns import AMOUNT_RE, DATE_RE, INVOICE_REF_RE, LINE_SPLIT_RE

logger = get_logger(__name__)

_COLON_KV_RE = re.compile(r"^(?P<key>[A-Za-z0-9 _#/\-.]+)\s*:\s*(?P<val>.+)$")
# Dash separators apply only to lines without a colon, spaced dash first.
_DASH_KV_RES = (
    re.compile(r"^(?P<key>[A-Za-z0-9 _#/\-.]+?)\s+-\s+(?P<val>.+)$"),
    re.compile(r"^(?P<key>[A-Za-z0-9 _#/.]+?)\s*-\s*(?P<val>.+)$"),
)
_DUE_DATE_RE = re.compile(r"due date", re.IGNORECASE)
_TOTAL_RE = re.compile(r"total", re.IGNORECASE)


@dataclass(frozen=True)
class KeyValueResult:
    """Partition of a document's lines into explicit fields and loose lines."""

    fields: dict[str, str]
    loose: list[str]


@dataclass(frozen=True)
class InferenceRule:
    """A loose-line rule that claims ``label`` the first time it matches."""

    label: str
    matches: Callable[[str], bool]
    extract: Callable[[str], str]


def _first_group(pattern: re.Pattern[str], group: int = 1) -> Callable[[str], str]:
    def extract(line: str) -> str:
        match = pattern.search(line)
        return match.group(group).strip() if match else line

    return extract


def _match_key_value(line: str) -> re.Match[str] | None:
    if ":" in line:
        return _COLON_KV_RE.match(line)
    for pattern in _DASH_KV_RES:
        match = pattern.match(line)
        if match:
            return match
    return None


INFERENCE_RULES: tuple[InferenceRule, ...] = (
    InferenceRule(
        "Due Date",
        lambda line: bool(_DUE_DATE_RE.search(line) and DATE_RE.search(line)),
        _first_group(DATE_RE),
    ),
    InferenceRule(
        "Date",
        lambda line: bool(DATE_RE.search(line)),
        _first_group(DATE_RE),
    ),
    InferenceRule(
        "Total",
        lambda line: bool(_TOTAL_RE.search(line) and AMOUNT_RE.search(line)),
        _first_group(AMOUNT_RE, 0),
    ),
    InferenceRule(
        "Invoice No",
        lambda line: bool(INVOICE_REF_RE.search(line)),
        _first_group(INVOICE_REF_RE),
    ),
)


def extract_key_values(text: str) -> KeyValueResult:
    """Split text into explicit key/value fields and loose lines.

    Repeated keys are kept under ``key_2``, ``key_3``, ... so no value is
    overwritten. Every non-empty line lands in exactly one of ``fields``
    or ``loose``.

    Args:
        text: Full document text.

    Returns:
        The field map (in first-seen order) and the loose lines.
    """
    if not isinstance(text, str):
        return KeyValueResult(fields={}, loose=[])

    fields: dict[str, str] = {}
    loose: list[str] = []

    for raw_line in LINE_SPLIT_RE.split(text):
        line = raw_line.strip()
        if not line:
            continue
        match = _match_key_value(line)
        if not match:
            loose.append(line)
            continue

        key = match.group("key").strip()
        value = match.group("val").strip()
        if key in fields:
            suffix = 2
            while f"{key}_{suffix}" in fields:
                suffix += 1
            key = f"{key}_{suffix}"
        fields[key] = value

    logger.debug("Key/value pass: %d fields, %d loose lines", len(fields), len(loose))
    return KeyValueResult(fields=fields, loose=loose)


def infer_loose_values(
    loose: Sequence[str], fields: Mapping[str, str] | None = None
) -> dict[str, str]:
    """Recover typed fields from lines without an explicit label.

    Rules in :data:`INFERENCE_RULES` are tried in order and the first match
    wins. A rule is skipped when its label already exists in ``fields`` or
    was claimed by an earlier line. Lines no rule accepts are stored as
    ``label_1``, ``label_2``, ... in order of appearance.

    Args:
        loose: Loose lines from :func:`extract_key_values`.
        fields: Explicit fields; their labels are never re-inferred.

    Returns:
        Inferred label/value pairs.
    """
    fields = fields or {}
    inferred: dict[str, str] = {}
    label_index = 1

    for raw_line in loose or []:
        line = str(raw_line).strip()
        for rule in INFERENCE_RULES:
            if rule.label in fields or rule.label in inferred:
                continue
            if rule.matches(line):
                inferred[rule.label] = rule.extract(line)
                logger.debug("Inferred %s from %r", rule.label, line)
                break
        else:
            inferred[f"label_{label_index}"] = line
            label_index += 1

    return inferred
