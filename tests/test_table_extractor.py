"""Tests for table extraction."""

import random

import pytest

from src.ocr.table_extractor import TableExtractor, extract_table


class TestDelimitedTables:
    """Pipe and tab separated tables."""

    def test_pipe_table(self):
        table = extract_table("Name | Role | Team\nAlice | Engineer | Core\nBob | Designer | Web")
        assert table.headers == ("Name", "Role", "Team")
        assert table.rows == (("Alice", "Engineer", "Core"), ("Bob", "Designer", "Web"))
        assert table.row_count == 2
        assert table.column_count == 3

    def test_markdown_table(self):
        """Edge pipes are ignored and separator rows skipped."""
        text = "| Metric | Q1 | Q2 |\n|---|:---:|---|\n| Revenue | 10 | 12 |\n| Users | 300 | 450 |"
        table = extract_table(text)
        assert table.headers == ("Metric", "Q1", "Q2")
        assert table.rows == (("Revenue", "10", "12"), ("Users", "300", "450"))

    def test_dash_only_data_row_kept(self):
        """A dash-only row after the first data row is data, not a separator."""
        table = extract_table("| Owner | Status |\n| Alice | - |\n| - | - |")
        assert table.rows == (("Alice", "-"), ("-", "-"))

    def test_separator_only_under_header(self):
        """A separator-shaped row further down the table is kept as data."""
        table = extract_table("| Task | Owner |\n|---|---|\n| Deploy | Alice |\n|---|---|")
        assert table.rows == (("Deploy", "Alice"), ("---", "---"))

    def test_short_dash_row_under_header_is_data(self):
        """A real separator needs at least three dashes per cell."""
        table = extract_table("Item | Count\n- | -\nBugs | 0")
        assert table.rows == (("-", "-"), ("Bugs", "0"))

    def test_tab_table(self):
        table = extract_table("Task\tOwner\nDeploy\tAlice\nReview\tBob")
        assert table.headers == ("Task", "Owner")
        assert table.rows == (("Deploy", "Alice"), ("Review", "Bob"))

    def test_zero_cell_kept(self):
        """A literal 0 cell is a value, not an empty cell."""
        table = extract_table("Item | Count\nBugs | 0")
        assert table.rows == (("Bugs", "0"),)

    def test_ragged_rows_rejected(self):
        """All rows must have the header's column count."""
        assert extract_table("A | B | C\n1 | 2 | 3\n4 | 5") is None

    def test_header_only_rejected(self):
        assert extract_table("A | B\n---|---") is None

    def test_cells_normalized(self):
        """Cells go through the text normalizer."""
        table = extract_table("Total  | Year\n1O5 |  2O24 ")
        assert table.rows == (("105", "2024"),)

    @pytest.mark.parametrize("seed", range(10))
    def test_random_pipe_tables(self, seed):
        """Any M x N pipe table with M >= 2, N >= 1 is recovered exactly."""
        rng = random.Random(seed)
        words = ["alpha", "beta", "gamma", "delta", "Revenue", "Users", "Q3", "team", "42", "7"]
        n_cols = rng.randint(1, 5)
        n_rows = rng.randint(2, 6)
        grid = [[rng.choice(words) for _ in range(n_cols)] for _ in range(n_rows)]
        edges = rng.choice([True, False])
        lines = []
        for row in grid:
            line = " | ".join(row)
            lines.append(f"| {line} |" if edges else line)
        if n_cols == 1 and not edges:
            # A single column needs at least one pipe to be a delimiter table
            lines = [f"{line} |" for line in lines]

        table = extract_table("\n".join(lines))
        assert table is not None
        assert table.headers == tuple(grid[0])
        assert table.rows == tuple(tuple(row) for row in grid[1:])


class TestAlignedTables:
    """Whitespace-aligned columns."""

    def test_aligned_columns(self):
        text = "Name     Role       Team\nAlice    Engineer   Core\nBob      Designer   Web"
        table = extract_table(text)
        assert table.headers == ("Name", "Role", "Team")
        assert table.rows == (("Alice", "Engineer", "Core"), ("Bob", "Designer", "Web"))

    def test_inconsistent_columns_rejected(self):
        assert extract_table("Name     Role\nAlice    Engineer    Core") is None

    def test_single_column_rejected(self):
        assert extract_table("Just one sentence\nAnd another sentence") is None


class TestNoTable:
    """Text that is not a table."""

    def test_key_value_block(self):
        assert extract_table("Name: Alice\nRole: Engineer") is None

    def test_single_line(self):
        assert extract_table("A | B | C") is None

    def test_empty(self):
        assert extract_table("") is None
        assert extract_table("\n  \n") is None

    def test_min_lines_configurable(self):
        extractor = TableExtractor(min_lines=3)
        assert extractor.extract("A | B\n1 | 2") is None
