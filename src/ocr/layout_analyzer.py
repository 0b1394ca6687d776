"""
Layout analysis of OCR'd screen text.
Includes:
- Line typing: heading / bullet / key-value / paragraph
- Key:value pattern statistics for a block of lines
"""

import re
from collections import Counter
from typing import Dict, Iterable, Iterator, List, Optional

import numpy as np

from src.utils.constant import (
    BULLET_CONFIDENCE,
    HEADING_CONFIDENCE,
    KEY_VALUE_CONFIDENCE,
    PARAGRAPH_CONFIDENCE,
)
from .text_normalizer import TextNormalizer
from .types import ClassifiedLine, LineType


class LayoutClassifier:
    """Assign a semantic line type to every non-blank line of a text block."""

    BULLET_GLYPHS = ('•', '-', '*')
    NUMBERED_PATTERN = re.compile(r'^\d+\.')
    KEY_VALUE_PATTERN = re.compile(r'^([^:]+):\s*(.+)$')

    def __init__(
        self,
        normalizer: Optional[TextNormalizer] = None,
        heading_confidence: float = HEADING_CONFIDENCE,
        bullet_confidence: float = BULLET_CONFIDENCE,
        key_value_confidence: float = KEY_VALUE_CONFIDENCE,
        paragraph_confidence: float = PARAGRAPH_CONFIDENCE
    ):
        """
        Args:
            normalizer: TextNormalizer used on each line (default settings if None)
            heading_confidence: Confidence for HEADING lines
            bullet_confidence: Confidence for BULLET lines
            key_value_confidence: Confidence for KEY_VALUE lines
            paragraph_confidence: Confidence for PARAGRAPH lines
        """
        self.normalizer = normalizer or TextNormalizer()
        self.confidences = {
            LineType.HEADING: heading_confidence,
            LineType.BULLET: bullet_confidence,
            LineType.KEY_VALUE: key_value_confidence,
            LineType.PARAGRAPH: paragraph_confidence,
        }

    def classify_line(self, line: str) -> LineType:
        """
        Classify one trimmed, non-blank line. First matching rule wins:
        heading, bullet, key-value, paragraph.
        """
        # Fully uppercase or trailing colon
        if line == line.upper() or line.endswith(':'):
            return LineType.HEADING

        if line.startswith(self.BULLET_GLYPHS) or self.NUMBERED_PATTERN.match(line):
            return LineType.BULLET

        if self.KEY_VALUE_PATTERN.match(line):
            return LineType.KEY_VALUE

        return LineType.PARAGRAPH

    def classify_lines(self, text: str) -> Iterator[ClassifiedLine]:
        """
        Lazily yield a ClassifiedLine per non-blank line of text.

        Pure function of the input: calling it again restarts the sequence.
        """
        for line in self.normalizer.normalize_lines(text):
            line_type = self.classify_line(line)
            yield ClassifiedLine(
                line_type=line_type,
                content=line,
                confidence=self.confidences[line_type],
            )

    @staticmethod
    def summarize(lines: Iterable[ClassifiedLine]) -> Dict[str, int]:
        """Count classified lines per line type."""
        counts = Counter(line.line_type.value for line in lines)
        return {t.value: counts.get(t.value, 0) for t in LineType}

    @staticmethod
    def detect_keyvalue_pattern(lines: List[ClassifiedLine]) -> Dict:
        """
        Detect a "key: value" block (form-like screen) from classified lines.

        Returns:
            {
                'has_pattern': bool,
                'keyvalue_ratio': float,  # share of lines typed KEY_VALUE
                'avg_key_length': float,
                'keyvalue_lines': List[str]
            }
        """
        if not lines:
            return {'has_pattern': False, 'keyvalue_ratio': 0.0,
                    'avg_key_length': 0.0, 'keyvalue_lines': []}

        keyvalue_lines = [l.content for l in lines if l.line_type == LineType.KEY_VALUE]
        key_lengths = [len(l.split(':', 1)[0].strip()) for l in keyvalue_lines]

        keyvalue_ratio = len(keyvalue_lines) / len(lines)
        avg_key_length = float(np.mean(key_lengths)) if key_lengths else 0.0

        # Pattern if >= 40% of lines are key:value and there are at least 2
        has_pattern = keyvalue_ratio >= 0.4 and len(keyvalue_lines) >= 2

        return {
            'has_pattern': has_pattern,
            'keyvalue_ratio': keyvalue_ratio,
            'avg_key_length': avg_key_length,
            'keyvalue_lines': keyvalue_lines
        }


_default_classifier = LayoutClassifier()


def classify_lines(text: str) -> Iterator[ClassifiedLine]:
    """Classify lines of text with the default LayoutClassifier."""
    return _default_classifier.classify_lines(text)
