"""
Token Classifier: lexical signals used by the content-type detector.

- Language keyword classes (JS/TS, Python, Java/C#, SQL) for code detection
- Chart and diagram vocabularies for visual-element detection
"""

import re
from collections import Counter
from typing import Dict, List


class TokenClassifier:
    """Count lexical hits of OCR text against fixed keyword vocabularies."""

    def __init__(self):
        # Language keyword classes
        self.code_patterns: Dict[str, re.Pattern] = {
            'javascript': re.compile(
                r'\b(function|class|const|let|var|if|for|while|return|import|export|from|public|private)\b'
            ),
            'python': re.compile(
                r'\b(def|class|import|from|return|if|elif|else|for|while|try|except|with)\b'
            ),
            'java': re.compile(
                r'\b(public|private|class|interface|void|int|string|boolean)\b'
            ),
            'sql': re.compile(
                r'\b(SELECT|FROM|WHERE|JOIN|GROUP BY|ORDER BY|INSERT|UPDATE|DELETE)\b',
                re.IGNORECASE
            ),
        }

        # Lines that end like statements or blocks
        self.code_line_ending = re.compile(r'[;{}]\s*$')
        self.indentation = re.compile(r'^(\s+)')

        # Visual element vocabularies (substring match, lowercase)
        self.chart_keywords: List[str] = [
            'chart', 'graph', 'plot', 'bar', 'pie', 'line', 'axis', 'trend',
            'histogram', 'scatter', 'series', 'legend', 'data visualization'
        ]
        self.diagram_keywords: List[str] = [
            'diagram', 'flowchart', 'process', 'workflow', 'architecture',
            'sequence', 'entity', 'relationship', 'uml', 'box', 'arrow'
        ]

    def count_keyword_classes(self, text: str) -> Dict[str, int]:
        """
        Count keyword matches per language class.

        Returns:
            Dict language -> number of matches
        """
        if not text:
            return {name: 0 for name in self.code_patterns}
        return {
            name: len(pattern.findall(text))
            for name, pattern in self.code_patterns.items()
        }

    def guess_language(self, text: str) -> str:
        """Language class with the most keyword matches, or 'unknown'."""
        counts = Counter(self.count_keyword_classes(text))
        if not counts:
            return 'unknown'
        language, hits = counts.most_common(1)[0]
        return language if hits > 0 else 'unknown'

    def indentation_widths(self, lines: List[str]) -> List[int]:
        """Leading-whitespace width of every indented line."""
        widths = []
        for line in lines:
            match = self.indentation.match(line)
            if match and line.strip():
                widths.append(len(match.group(1)))
        return widths

    def count_code_line_endings(self, lines: List[str]) -> int:
        return sum(1 for line in lines if self.code_line_ending.search(line.strip()))

    def count_visual_keywords(self, text: str) -> Dict[str, int]:
        """
        Count chart and diagram vocabulary hits (case-insensitive substrings).

        Returns:
            {'chart': int, 'diagram': int}
        """
        lower_text = (text or '').lower()
        return {
            'chart': sum(1 for kw in self.chart_keywords if kw in lower_text),
            'diagram': sum(1 for kw in self.diagram_keywords if kw in lower_text),
        }
