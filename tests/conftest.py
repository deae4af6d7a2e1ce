"""Shared test fixtures for the text structuring test suite."""

from pathlib import Path

import pytest

INVOICE_TEXT = """ACME Corporation
123 Main St
Invoice
Invoice No: INV-1001
Date: 2025-10-01
Bill To:
Contoso Ltd
1 Infinite Loop

Item A 2 10.00
Item B 1 20.00

Subtotal 40.00
Tax 4.00
Total 44.00
"""

EDUCATION_TEXT = """Qualification  School  CGPA  Year
B.Tech  IIT Delhi  8.5  2020
HSC  DPS School  9.1  2016
"""

SUMMARY_TABLE_TEXT = """Order Summary

Table 1:
Page: 2
Dimensions: 2 rows x 3 columns
Headers: Item, Qty, Price
Row 1: {'Item': 'Pen', 'Qty': '2', 'Price': '1.50'}
Row 2: {'Item': 'Notebook', 'Qty': '3', 'Price': '4.00'}
"""


@pytest.fixture
def invoice_text() -> str:
    """Plain invoice with header lines, two item lines, and totals."""
    return INVOICE_TEXT


@pytest.fixture
def education_text() -> str:
    """Space-aligned qualification table."""
    return EDUCATION_TEXT


@pytest.fixture
def summary_table_text() -> str:
    """Text carrying a textual table summary section."""
    return SUMMARY_TABLE_TEXT


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def config_dir(project_root: Path) -> Path:
    """Return the configs directory path."""
    return project_root / "configs"
