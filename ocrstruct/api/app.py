"""FastAPI application exposing the text structuring engine.

Provides REST endpoints that turn already-extracted document text into
universal or invoice structured JSON, one document or a batch at a time.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ocrstruct import __version__
from ocrstruct.builders.invoice import build_invoice_structured
from ocrstruct.builders.models import InvoiceStructured, UniversalStructured
from ocrstruct.builders.universal import build_universal_structured
from ocrstruct.utils.config import AppConfig, load_config
from ocrstruct.utils.logger import get_logger

from .schemas import (
    BatchItemResponse,
    BatchRequest,
    BatchResponse,
    DocumentRequest,
    HealthResponse,
    OutputFormat,
)

logger = get_logger(__name__)

app = FastAPI(
    title="OCR Text Structuring API",
    description="Turn OCR/PDF text into structured invoice, order, and record JSON",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_config() -> AppConfig:
    """Load the application configuration for a request."""
    return load_config()


def _structure(
    request: DocumentRequest, output_format: OutputFormat, config: AppConfig
) -> UniversalStructured | InvoiceStructured:
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Document text is empty")
    if output_format == OutputFormat.INVOICE:
        return build_invoice_structured(request.text, config.parsing)
    return build_universal_structured(
        request.text, request.meta, config.parsing, config.validation
    )


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return service health status."""
    return HealthResponse(status="healthy", version=__version__)


@app.post("/extract", response_model=UniversalStructured)
async def extract_document(request: DocumentRequest) -> UniversalStructured:
    """Build the universal structured record for one document.

    Args:
        request: Document text and optional metadata.

    Returns:
        Universal structured output with validation warnings attached.
    """
    try:
        return _structure(request, OutputFormat.UNIVERSAL, _get_config())
    except HTTPException:
        raise
    except Exception as exc:
        logger.error("Structuring failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.post("/extract/invoice", response_model=InvoiceStructured)
async def extract_invoice(request: DocumentRequest) -> InvoiceStructured:
    """Build the narrow invoice structure for one document."""
    try:
        return _structure(request, OutputFormat.INVOICE, _get_config())
    except HTTPException:
        raise
    except Exception as exc:
        logger.error("Invoice structuring failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.post("/extract/batch", response_model=BatchResponse)
async def extract_batch(request: BatchRequest) -> BatchResponse:
    """Structure several documents, reporting failures per document.

    Args:
        request: Documents and the requested output format.

    Returns:
        Per-document results or error messages.
    """
    config = _get_config()
    results: list[BatchItemResponse] = []
    successful = 0

    for index, document in enumerate(request.documents, 1):
        filename = document.filename or f"document_{index}"
        try:
            result = _structure(document, request.output_format, config)
            results.append(BatchItemResponse(filename=filename, result=result))
            successful += 1
        except HTTPException as exc:
            results.append(BatchItemResponse(filename=filename, error=exc.detail))
        except Exception as exc:
            logger.error("Failed to structure %s: %s", filename, exc)
            results.append(BatchItemResponse(filename=filename, error=str(exc)))

    return BatchResponse(
        success=successful > 0,
        total_documents=len(request.documents),
        successful=successful,
        failed=len(request.documents) - successful,
        results=results,
    )
