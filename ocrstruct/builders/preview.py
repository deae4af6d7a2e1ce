"""Quick structured preview of an extracted text.

The preview is what an upload pipeline shows right after text
extraction: detected category, page info, the first characters of the
text, and every field and table found, before any item alignment.
"""

from collections.abc import Mapping
from typing import Any

from ocrstruct.extraction.classifier import UNKNOWN_TYPE, detect_document_type
from ocrstruct.extraction.key_values import extract_key_values, infer_loose_values
from ocrstruct.tables.extractor import extract_tables
from ocrstruct.utils.config import ParsingConfig

from .models import DocumentMeta, TextPreview, TextPreviewer


def build_text_preview(
    text: str,
    meta: DocumentMeta | Mapping[str, Any] | None = None,
    config: ParsingConfig | None = None,
) -> TextPreview:
    """Build a preview with raw fields and tables.

    Args:
        text: Complete document text.
        meta: Optional page count and info from the extraction layer.
        config: Parsing thresholds. Defaults are used when ``None``.

    Returns:
        The preview. ``document_type`` is ``"unknown"`` for empty text.
    """
    config = config or ParsingConfig()
    raw_text = text if isinstance(text, str) else ""
    meta = DocumentMeta.coerce(meta)

    kv = extract_key_values(raw_text)
    inferred = infer_loose_values(kv.loose, kv.fields)
    tables = [
        {"headers": t.headers, "rows": t.rows} for t in extract_tables(raw_text, config)
    ]

    return TextPreview(
        document_type=detect_document_type(raw_text) if raw_text else UNKNOWN_TYPE,
        pages=meta.page_count,
        info=meta.info,
        text_preview=raw_text[: config.text_preview_chars],
        text_previewer=TextPreviewer(fields={**kv.fields, **inferred}, tables=tables),
    )
