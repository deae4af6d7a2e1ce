"""Tests for table detection and textual table summaries."""

from ocrstruct.tables.extractor import (
    extract_tables,
    merge_continuation_rows,
    split_run_on_header,
)
from ocrstruct.tables.summary_parser import parse_row_object, parse_table_summary
from ocrstruct.utils.config import ParsingConfig


class TestExtractTables:
    """Tests for extract_tables."""

    def test_space_aligned_table(self, education_text: str) -> None:
        tables = extract_tables(education_text)
        assert len(tables) == 1
        table = tables[0]
        assert table.headers == ["Qualification", "School", "CGPA", "Year"]
        assert table.header_index == 0
        assert table.source == "text"
        assert table.rows[0] == {
            "Qualification": "B.Tech",
            "School": "IIT Delhi",
            "CGPA": "8.5",
            "Year": "2020",
        }
        assert len(table.rows) == 2

    def test_csv_block(self) -> None:
        tables = extract_tables("Item,Qty,Price\nPen,2,1.50\nInk,1")
        assert len(tables) == 1
        assert tables[0].source == "csv"
        assert tables[0].headers == ["Item", "Qty", "Price"]
        assert tables[0].rows == [
            {"Item": "Pen", "Qty": "2", "Price": "1.50"},
            {"Item": "Ink", "Qty": "1", "Price": ""},
        ]

    def test_tab_counts_as_column_gap(self) -> None:
        tables = extract_tables("Item\tQty\nPen\t2")
        assert tables[0].headers == ["Item", "Qty"]
        assert tables[0].rows == [{"Item": "Pen", "Qty": "2"}]

    def test_nbsp_counts_as_layout_space(self) -> None:
        tables = extract_tables("Item\u00a0\u00a0Qty\nPen\u00a0\u00a02")
        assert tables[0].headers == ["Item", "Qty"]
        assert tables[0].rows == [{"Item": "Pen", "Qty": "2"}]

    def test_header_found_by_keyword(self) -> None:
        text = "Student Record\nName  Qualification  Year\nAsha  B.Sc  2019"
        table = extract_tables(text)[0]
        assert table.header_index == 1
        assert table.headers == ["Name", "Qualification", "Year"]
        assert table.rows == [{"Name": "Asha", "Qualification": "B.Sc", "Year": "2019"}]

    def test_run_on_header_is_split(self) -> None:
        text = "Qualification School Year\nB.Tech  IIT Delhi  2020\nM.Tech  IISc  2022"
        table = extract_tables(text)[0]
        assert table.headers == ["Qualification", "School", "Year"]
        assert table.rows[1] == {"Qualification": "M.Tech", "School": "IISc", "Year": "2022"}

    def test_prose_is_not_tabular(self) -> None:
        text = "Thanks for your order.\nWe hope to see you again.\nKind regards"
        assert extract_tables(text) == []

    def test_single_line_blocks_are_skipped(self) -> None:
        assert extract_tables("Item  Qty\n\nPen  2") == []

    def test_tabular_ratio_threshold(self) -> None:
        text = "a  b\nc\nd\ne\nf"
        assert extract_tables(text) == []
        loose = ParsingConfig(min_tabular_ratio=0.2)
        assert len(extract_tables(text, loose)) == 1

    def test_row_cap(self, education_text: str) -> None:
        tables = extract_tables(education_text, ParsingConfig(max_table_rows=1))
        assert len(tables[0].rows) == 1

    def test_non_string_input(self) -> None:
        assert extract_tables(None) == []  # type: ignore[arg-type]


class TestSplitRunOnHeader:
    """Tests for split_run_on_header."""

    def test_one_word_per_slot(self) -> None:
        headers = split_run_on_header("Qualification School CGPA Year", 4)
        assert headers == ["Qualification", "School", "CGPA", "Year"]

    def test_reserves_trailing_year_and_cgpa(self) -> None:
        headers = split_run_on_header("Degree Institute 2019 8.2", 4)
        assert headers == ["Degree", "Institute", "2019", "8.2"]

    def test_pads_with_synthetic_names(self) -> None:
        assert split_run_on_header("Name Age", 4) == ["Name", "Age", "col_3", "col_4"]

    def test_parentheses_are_stripped(self) -> None:
        assert split_run_on_header("(2019)", 2) == ["col_1", "2019"]


class TestMergeContinuationRows:
    """Tests for merge_continuation_rows."""

    def test_year_line_joins_last_cell(self) -> None:
        merged = merge_continuation_rows([["B.Tech", "IIT"], ["(2018-2022)"]], 3)
        assert merged == [["B.Tech", "IIT (2018-2022)"]]

    def test_concatenates_when_width_is_reached(self) -> None:
        merged = merge_continuation_rows([["A", "B"], ["C", "D", "E"]], 4)
        assert merged == [["A", "B", "C", "D", "E"]]

    def test_stops_when_merge_is_not_enough(self) -> None:
        rows = [["A"], ["B", "C", "D"], ["E", "F", "G"]]
        merged = merge_continuation_rows(rows, 5)
        assert merged == [["A"], ["B", "C", "D", "E", "F", "G"]]

    def test_full_rows_untouched(self) -> None:
        rows = [["a", "b"], ["c", "d"]]
        assert merge_continuation_rows(rows, 2) == rows


class TestParseRowObject:
    """Tests for parse_row_object."""

    def test_single_quoted_object(self) -> None:
        assert parse_row_object("{'a': 'x', 'b': 'y'}") == {"a": "x", "b": "y"}

    def test_values_become_strings(self) -> None:
        assert parse_row_object("{'qty': 2, 'note': null}") == {"qty": "2", "note": ""}

    def test_falls_back_to_pair_scraping(self) -> None:
        row = parse_row_object("{'name': 'O'Brien', 'city': 'Cork'}")
        assert row is not None
        assert row["city"] == "Cork"

    def test_unreadable_row(self) -> None:
        assert parse_row_object("{broken}") is None


class TestParseTableSummary:
    """Tests for parse_table_summary."""

    def test_parses_summary_section(self, summary_table_text: str) -> None:
        tables = parse_table_summary(summary_table_text)
        assert len(tables) == 1
        table = tables[0]
        assert table.table_id == 1
        assert table.page == 2
        assert table.row_count == 2
        assert table.column_count == 3
        assert table.headers == ["Item", "Qty", "Price"]
        assert table.rows[1] == {"Item": "Notebook", "Qty": "3", "Price": "4.00"}
        assert table.source == "summary"
        assert table.dropped_rows == 0

    def test_counts_dropped_rows(self) -> None:
        text = "Table 2:\nRow 1: {'Item': 'Pen'}\nRow 2: {broken}\n"
        table = parse_table_summary(text)[0]
        assert table.table_id == 2
        assert table.rows == [{"Item": "Pen"}]
        assert table.dropped_rows == 1
        assert table.headers == ["Item"]
        assert table.row_count == 1
        assert table.column_count == 1

    def test_text_without_summary(self) -> None:
        assert parse_table_summary("Invoice\nTotal 10.00") == []
        assert parse_table_summary("") == []
