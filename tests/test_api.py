"""Tests for the FastAPI REST endpoints."""

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from ocrstruct import __version__
from ocrstruct.api.app import app
from ocrstruct.utils.config import AppConfig


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Create a FastAPI test client with default configuration."""
    with patch("ocrstruct.api.app._get_config", return_value=AppConfig()):
        yield TestClient(app)


class TestHealthEndpoint:
    """Tests for the /health endpoint."""

    def test_health_returns_ok(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}


class TestExtractEndpoint:
    """Tests for the /extract endpoint."""

    def test_extract_success(self, client: TestClient, invoice_text: str) -> None:
        response = client.post(
            "/extract", json={"text": invoice_text, "meta": {"numpages": 1}}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["document_type"] == "invoice"
        assert data["metadata"]["page_count"] == 1
        assert data["metadata"]["invoice_number"] == "INV-1001"
        assert [item["description"] for item in data["items"]] == ["Item A", "Item B"]
        assert data["validation"] == {"valid": True, "warnings": []}

    def test_extract_education_items(self, client: TestClient, education_text: str) -> None:
        response = client.post("/extract", json={"text": education_text})
        assert response.status_code == 200
        item = response.json()["items"][0]
        assert item["qualification"] == "B.Tech"
        assert item["cgpa"] == 8.5
        assert "description" not in item

    def test_extract_empty_text(self, client: TestClient) -> None:
        response = client.post("/extract", json={"text": "  \n "})
        assert response.status_code == 400

    def test_extract_missing_text(self, client: TestClient) -> None:
        response = client.post("/extract", json={})
        assert response.status_code == 422

    @patch("ocrstruct.api.app.build_universal_structured")
    def test_extract_processing_error(
        self, mock_build: MagicMock, client: TestClient
    ) -> None:
        mock_build.side_effect = RuntimeError("boom")
        response = client.post("/extract", json={"text": "Invoice"})
        assert response.status_code == 500
        assert response.json()["detail"] == "boom"


class TestExtractInvoiceEndpoint:
    """Tests for the /extract/invoice endpoint."""

    def test_invoice_success(self, client: TestClient, invoice_text: str) -> None:
        response = client.post("/extract/invoice", json={"text": invoice_text})
        assert response.status_code == 200
        data = response.json()
        assert data["invoice_number"] == "INV-1001"
        assert data["total"] == 44.0
        assert data["items"] == []


class TestBatchEndpoint:
    """Tests for the /extract/batch endpoint."""

    def test_batch_reports_each_document(
        self, client: TestClient, invoice_text: str
    ) -> None:
        response = client.post(
            "/extract/batch",
            json={"documents": [{"text": invoice_text, "filename": "a.txt"}, {"text": " "}]},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["total_documents"] == 2
        assert data["successful"] == 1
        assert data["failed"] == 1
        first, second = data["results"]
        assert first["filename"] == "a.txt"
        assert first["result"]["document_type"] == "invoice"
        assert first["error"] is None
        assert second["filename"] == "document_2"
        assert second["result"] is None
        assert second["error"] == "Document text is empty"

    def test_batch_invoice_format(self, client: TestClient, invoice_text: str) -> None:
        response = client.post(
            "/extract/batch",
            json={"documents": [{"text": invoice_text}], "output_format": "invoice"},
        )
        assert response.status_code == 200
        result = response.json()["results"][0]["result"]
        assert result["invoice_number"] == "INV-1001"
        assert result["vendor_name"] == "123 Main St"

    def test_batch_requires_documents(self, client: TestClient) -> None:
        response = client.post("/extract/batch", json={"documents": []})
        assert response.status_code == 422
