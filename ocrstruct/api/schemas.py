"""Pydantic request/response schemas for the FastAPI endpoints."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from ocrstruct.builders.models import InvoiceStructured, UniversalStructured


class OutputFormat(StrEnum):
    """Supported structured output shapes."""

    UNIVERSAL = "universal"
    INVOICE = "invoice"


class DocumentRequest(BaseModel):
    """Extracted document text plus optional extraction metadata."""

    text: str
    meta: dict[str, Any] | None = None
    filename: str | None = None


class BatchRequest(BaseModel):
    """Several documents to structure in one call."""

    documents: list[DocumentRequest] = Field(min_length=1)
    output_format: OutputFormat = OutputFormat.UNIVERSAL


class BatchItemResponse(BaseModel):
    """Response schema for a single document in a batch."""

    filename: str
    result: UniversalStructured | InvoiceStructured | None = None
    error: str | None = None


class BatchResponse(BaseModel):
    """Response schema for batch structuring of multiple documents."""

    success: bool
    total_documents: int
    successful: int
    failed: int
    results: list[BatchItemResponse]


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
