"""Keyword-scored document type classification."""

import re
from dataclasses import dataclass

from ocrstruct.utils.logger import get_logger

logger = get_logger(__name__)

UNKNOWN_TYPE = "unknown"


@dataclass(frozen=True)
class DocumentCategory:
    """A document category and the keywords that vote for it."""

    name: str
    slug: str
    keywords: tuple[str, ...]


# Declaration order breaks ties.
DOCUMENT_CATEGORIES: tuple[DocumentCategory, ...] = (
    DocumentCategory("Invoice", "invoice", ("invoice",)),
    DocumentCategory("Bill", "bill", ("bill", "billing statement")),
    DocumentCategory(
        "Order",
        "purchase_order",
        ("purchase order", "sales order", "order #", "po #"),
    ),
    DocumentCategory("Receipt", "receipt", ("receipt", "paid")),
    DocumentCategory("Statement", "statement", ("statement",)),
)

_SLUGS = {category.name: category.slug for category in DOCUMENT_CATEGORIES}


def score_document_types(text: str) -> dict[str, int]:
    """Count keyword occurrences per category.

    Args:
        text: Full document text.

    Returns:
        Mapping of category name to total keyword hits, in declaration order.
    """
    lowered = text.lower() if isinstance(text, str) else ""
    return {
        category.name: sum(
            len(re.findall(re.escape(keyword), lowered))
            for keyword in category.keywords
        )
        for category in DOCUMENT_CATEGORIES
    }


def detect_document_type(text: str) -> str:
    """Return the best-scoring document category.

    Args:
        text: Full document text.

    Returns:
        One of ``Invoice``, ``Bill``, ``Order``, ``Receipt``, ``Statement``,
        or ``"unknown"`` when no keyword occurs.
    """
    best = UNKNOWN_TYPE
    best_score = 0
    for name, score in score_document_types(text).items():
        if score > best_score:
            best, best_score = name, score

    logger.debug("Detected document type %s (score=%d)", best, best_score)
    return best


def document_type_slug(category: str) -> str:
    """Map a category name to its output slug, e.g. ``Order`` -> ``purchase_order``."""
    return _SLUGS.get(category, UNKNOWN_TYPE)
