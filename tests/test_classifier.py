"""Tests for keyword document classification."""

from ocrstruct.extraction.classifier import (
    UNKNOWN_TYPE,
    detect_document_type,
    document_type_slug,
    score_document_types,
)


class TestScoreDocumentTypes:
    """Tests for score_document_types."""

    def test_counts_every_occurrence(self) -> None:
        scores = score_document_types("Invoice\nInvoice No: 1\nBill To:")
        assert scores["Invoice"] == 2
        assert scores["Bill"] == 1
        assert scores["Order"] == 0

    def test_non_string_scores_zero(self) -> None:
        scores = score_document_types(None)  # type: ignore[arg-type]
        assert set(scores.values()) == {0}


class TestDetectDocumentType:
    """Tests for detect_document_type."""

    def test_tie_goes_to_first_category(self) -> None:
        assert detect_document_type("INVOICE\nBill to") == "Invoice"

    def test_purchase_order(self) -> None:
        text = "Purchase Order\nPO # 4411\nbill"
        assert detect_document_type(text) == "Order"

    def test_receipt(self) -> None:
        assert detect_document_type("Payment receipt - PAID") == "Receipt"

    def test_billing_statement_counts_as_bill(self) -> None:
        assert detect_document_type("Billing Statement") == "Bill"

    def test_no_keywords(self) -> None:
        assert detect_document_type("hello world") == UNKNOWN_TYPE
        assert detect_document_type("") == UNKNOWN_TYPE


class TestDocumentTypeSlug:
    """Tests for document_type_slug."""

    def test_known_categories(self) -> None:
        assert document_type_slug("Invoice") == "invoice"
        assert document_type_slug("Order") == "purchase_order"
        assert document_type_slug("Statement") == "statement"

    def test_unknown(self) -> None:
        assert document_type_slug("unknown") == "unknown"
        assert document_type_slug("Memo") == "unknown"
