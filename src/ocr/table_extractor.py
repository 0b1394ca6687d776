"""
Table extraction from OCR'd screen text.

Two layouts are recognised:
- delimiter tables (pipe or tab separated, markdown included)
- whitespace-aligned columns (cells separated by 2+ spaces)

Extraction is all-or-nothing: a table is returned only when every row has the
header's column count.
"""

import logging
import re
from typing import List, Optional

from .text_normalizer import TextNormalizer
from .types import TablePayload

logger = logging.getLogger(__name__)


class TableExtractor:
    """Detect and extract a single table from a block of text."""

    DELIMITERS = ('|', '\t')
    ALIGNED_COLUMN_SPLIT = re.compile(r' {2,}')
    SEPARATOR_CELL = re.compile(r'^:?-{3,}:?$')

    def __init__(self, normalizer: Optional[TextNormalizer] = None, min_lines: int = 2):
        """
        Args:
            normalizer: TextNormalizer applied to each cell
            min_lines: Minimum number of non-blank lines (header + data)
        """
        self.normalizer = normalizer or TextNormalizer()
        self.min_lines = min_lines

    def extract(self, text: str) -> Optional[TablePayload]:
        """
        Extract a table from text.

        Returns:
            TablePayload(headers, rows) or None if no table is detected
        """
        if not text:
            return None

        lines = [line for line in text.splitlines() if line.strip()]
        if len(lines) < self.min_lines:
            return None

        if any(d in line for line in lines for d in self.DELIMITERS):
            delimiter = self._pick_delimiter(lines)
            return self._extract_delimited(lines, delimiter)

        return self._extract_aligned(lines)

    def _pick_delimiter(self, lines: List[str]) -> str:
        """Earliest delimiter on the first line; otherwise the first line that has one."""
        for line in lines:
            positions = [(line.find(d), d) for d in self.DELIMITERS if d in line]
            if positions:
                return min(positions)[1]
        return self.DELIMITERS[0]

    def _split_cells(self, line: str, delimiter: str) -> List[str]:
        cells = (self.normalizer.normalize_line(cell) for cell in line.split(delimiter))
        return [cell for cell in cells if cell]

    def _is_separator_row(self, cells: List[str]) -> bool:
        """Markdown header separator: every cell like ---, :---, ---: or :---:"""
        return bool(cells) and all(self.SEPARATOR_CELL.match(cell) for cell in cells)

    def _extract_delimited(self, lines: List[str], delimiter: str) -> Optional[TablePayload]:
        headers = self._split_cells(lines[0], delimiter)
        if not headers:
            return None

        rows = [self._split_cells(line, delimiter) for line in lines[1:]]
        # Only the line right under the header can be a separator
        if rows and self._is_separator_row(rows[0]):
            rows = rows[1:]

        if not rows:
            return None
        if any(len(row) != len(headers) for row in rows):
            logger.debug("Rejected %r-delimited table with ragged rows", delimiter)
            return None

        return TablePayload(headers=tuple(headers), rows=tuple(tuple(r) for r in rows))

    def _extract_aligned(self, lines: List[str]) -> Optional[TablePayload]:
        split_rows = [
            [self.normalizer.normalize_line(cell) for cell in self.ALIGNED_COLUMN_SPLIT.split(line.strip())]
            for line in lines
        ]
        column_counts = {len(row) for row in split_rows}

        if len(column_counts) != 1 or column_counts == {1}:
            return None

        return TablePayload(
            headers=tuple(split_rows[0]),
            rows=tuple(tuple(row) for row in split_rows[1:]),
        )


_default_extractor = TableExtractor()


def extract_table(text: str) -> Optional[TablePayload]:
    """Extract a table from text with the default TableExtractor."""
    return _default_extractor.extract(text)
