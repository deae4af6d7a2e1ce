"""Pydantic models for the structured outputs of the builders.

Every model is frozen: a builder assembles its values locally and returns
a finished snapshot. ``model_dump(mode="json")`` gives the JSON shape that
downstream consumers receive, with ``None`` for unknown values.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from ocrstruct.utils.logger import get_logger

logger = get_logger(__name__)


class FrozenModel(BaseModel):
    """Base class for immutable output records."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class DocumentMeta(FrozenModel):
    """Metadata handed over by the OCR/PDF layer together with the text."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    page_count: int | None = Field(
        default=None,
        validation_alias=AliasChoices("page_count", "pageCount", "numpages"),
    )
    info: dict[str, Any] | None = None
    preview: str | None = Field(
        default=None, validation_alias=AliasChoices("preview", "text_preview")
    )

    @classmethod
    def coerce(cls, meta: Any) -> "DocumentMeta":
        """Accept an instance, a plain mapping, or ``None``."""
        if isinstance(meta, cls):
            return meta
        if isinstance(meta, Mapping):
            try:
                return cls.model_validate(dict(meta))
            except ValidationError as exc:
                logger.warning("Ignoring malformed document meta: %s", exc)
        return cls()


class Metadata(FrozenModel):
    """Document-level header fields."""

    vendor_name: str | None = None
    customer_name: str | None = None
    invoice_number: str | None = None
    order_number: str | None = None
    invoice_date: str | None = None
    due_date: str | None = None
    ship_date: str | None = None
    address: str | None = None
    country: str | None = None
    currency: str | None = None
    page_count: int | None = None


class LineItem(FrozenModel):
    """A generic priced line item."""

    item_no: int
    item_code: str | None = None
    upc: str | None = None
    description: str | None = None
    quantity: float | None = None
    unit_price: float | None = None
    amount: float | None = None


class EducationItem(FrozenModel):
    """One row of an education or qualification record."""

    item_no: int
    qualification: str | None = None
    school: str | None = None
    cgpa: float | None = None
    year: str | None = None


class TableSummary(FrozenModel):
    """Compact description of a detected table."""

    table_id: int
    page: int | None = None
    dimensions: str
    row_count: int
    column_count: int
    headers: list[str]
    rows_preview: list[dict[str, str]]
    dropped_rows: int = 0


class Summary(FrozenModel):
    """Document totals."""

    subtotal: float | None = None
    tax: float | None = None
    total: float | None = None


class OtherDetails(FrozenModel):
    """Commercial terms that do not belong to the header or the totals."""

    terms: str | None = None
    payment_method: str | None = None
    freight_terms: str | None = None
    carrier: str | None = None
    shipping_notes: str | None = None


class KeyValuePair(FrozenModel):
    """A labelled value; normalized keys may collect several values."""

    key: str
    value: str | list[str]


class ColumnRoleSuggestion(FrozenModel):
    column_roles: list[str]


class ParsingOptions(FrozenModel):
    """Diagnostics that let a reviewer remap table columns."""

    detected_table_type: str | None = None
    header_index: int | None = None
    suggestions: list[ColumnRoleSuggestion] = Field(default_factory=list)


class ValidationResult(FrozenModel):
    """Outcome of the shallow structural checks."""

    valid: bool
    warnings: list[str] = Field(default_factory=list)


class UniversalStructured(FrozenModel):
    """Canonical structured record for any supported document."""

    document_type: str = "unknown"
    metadata: Metadata = Field(default_factory=Metadata)
    items: list[LineItem | EducationItem] = Field(default_factory=list)
    tables: list[TableSummary] = Field(default_factory=list)
    summary: Summary = Field(default_factory=Summary)
    other_details: OtherDetails = Field(default_factory=OtherDetails)
    key_value_pairs: list[KeyValuePair] = Field(default_factory=list)
    raw_key_value_pairs: list[KeyValuePair] = Field(default_factory=list)
    parsing_options: ParsingOptions = Field(default_factory=ParsingOptions)
    validation: ValidationResult | None = None


class InvoiceLineItem(FrozenModel):
    description: str | None = None
    quantity: float | None = None
    rate: float | None = None
    amount: float | None = None


class InvoiceStructured(FrozenModel):
    """Narrow invoice-only structure."""

    vendor_name: str | None = None
    invoice_date: str | None = None
    due_date: str | None = None
    invoice_number: str | None = None
    subtotal: float | None = None
    tax: float | None = None
    total: float | None = None
    items: list[InvoiceLineItem] = Field(default_factory=list)
    raw_text: str = ""


class TextPreviewer(FrozenModel):
    fields: dict[str, str]
    tables: list[dict[str, Any]]


class TextPreview(FrozenModel):
    """Light-weight structured preview of an extracted text."""

    document_type: str
    pages: int | None = None
    info: dict[str, Any] | None = None
    text_preview: str
    text_previewer: TextPreviewer
