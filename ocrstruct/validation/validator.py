"""Shallow structural validation of universal structured output.

The checks only catch shapes a consumer is likely to trip over: a
missing item list, items without a description, non-numeric quantities,
implausible CGPA values, and summary tables with unreadable rows. Every
finding is a warning; nothing here raises or modifies the input.
"""

from collections.abc import Mapping
from numbers import Real
from typing import Any

from pydantic import BaseModel

from ocrstruct.builders.models import ValidationResult
from ocrstruct.utils.config import ValidationConfig
from ocrstruct.utils.logger import get_logger

logger = get_logger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _check_item(index: int, item: Any, config: ValidationConfig) -> list[str]:
    if not isinstance(item, Mapping):
        return [f"item[{index}] is not an object"]

    warnings: list[str] = []
    if not item.get("description") and not item.get("qualification"):
        warnings.append(f"item[{index}] missing description/qualification")

    for name in ("quantity", "unit_price"):
        value = item.get(name)
        if value is not None and not _is_number(value):
            warnings.append(f"item[{index}].{name} is not a number")

    cgpa = item.get("cgpa")
    if cgpa is not None:
        grade = _as_float(cgpa)
        if grade is None or not config.cgpa_min <= grade <= config.cgpa_max:
            warnings.append(f"item[{index}].cgpa looks suspicious: {cgpa}")
    return warnings


def validate_structured(
    structured: Any, config: ValidationConfig | None = None
) -> ValidationResult:
    """Run structural checks over a universal structured record.

    Accepts either the pydantic model or its ``model_dump()`` form, so a
    consumer can re-validate a copy it has edited.

    Args:
        structured: The record to check.
        config: Validation thresholds. Defaults are used when ``None``.

    Returns:
        ``valid`` is True exactly when ``warnings`` is empty.
    """
    config = config or ValidationConfig()
    if isinstance(structured, BaseModel):
        structured = structured.model_dump()
    if not isinstance(structured, Mapping):
        return ValidationResult(valid=False, warnings=["result is not an object"])

    warnings: list[str] = []
    items = structured.get("items")
    if not isinstance(items, list):
        warnings.append("items should be an array")
        items = []
    if not isinstance(structured.get("summary"), Mapping):
        warnings.append("summary missing or invalid")

    for index, item in enumerate(items):
        warnings.extend(_check_item(index, item, config))

    tables = structured.get("tables")
    for table in tables if isinstance(tables, list) else []:
        if isinstance(table, Mapping) and table.get("dropped_rows"):
            warnings.append(
                f"table {table.get('table_id')} dropped "
                f"{table['dropped_rows']} unreadable rows"
            )

    logger.info(
        "Validation %s (%d warnings)", "PASSED" if not warnings else "FAILED", len(warnings)
    )
    return ValidationResult(valid=not warnings, warnings=warnings)
