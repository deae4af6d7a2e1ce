"""Tests for amount and date normalization."""

import pytest

from ocrstruct.extraction.normalizers import normalize_amount, normalize_date


class TestNormalizeAmount:
    """Tests for normalize_amount."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("$1,234.56", 1234.56),
            ("1.234,56", 1234.56),
            ("12,5", 12.5),
            ("1,234,567", 1234567.0),
            ("USD 44.00", 44.0),
            ("-40.00", -40.0),
            ("€ 7", 7.0),
        ],
    )
    def test_parses_money_tokens(self, raw: str, expected: float) -> None:
        assert normalize_amount(raw) == pytest.approx(expected)

    def test_none_returns_none(self) -> None:
        assert normalize_amount(None) is None

    def test_text_without_digits_returns_none(self) -> None:
        assert normalize_amount("abc") is None
        assert normalize_amount("") is None

    def test_accepts_numbers(self) -> None:
        assert normalize_amount(12) == 12.0


class TestNormalizeDate:
    """Tests for normalize_date."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("2025-10-01", "2025-10-01"),
            ("2024/1/5", "2024-01-05"),
            ("10/01/25", "2025-10-01"),
            ("1.2.2024", "2024-01-02"),
            ("Due 3-7-2024 ok", "2024-03-07"),
        ],
    )
    def test_normalizes_numeric_dates(self, raw: str, expected: str) -> None:
        assert normalize_date(raw) == expected

    def test_ambiguous_day_month_reads_month_first(self) -> None:
        assert normalize_date("05/06/2024") == "2024-05-06"

    def test_empty_values_return_none(self) -> None:
        assert normalize_date(None) is None
        assert normalize_date("") is None

    def test_text_without_date_returns_none(self) -> None:
        assert normalize_date("no date here") is None
